import re
from typing import List

from sectioncsv.core.errors import OfferImportError
from sectioncsv.core.models import OfferImportItem
from sectioncsv.core.tokenizer import split_delimited_text

NO_DATA_MESSAGE = "No valid data found in CSV. Expected columns: SKU, Quantity."

_HEADER_HINTS = ("sku", "variant", "offered", "qty", "product")
_SKU_HINTS = ("sku", "variant id")
_QTY_HINTS = ("offered", "qty", "quantity")
_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")


def _find_column(cells: List[str], hints: tuple, default: int) -> int:
    for idx, cell in enumerate(cells):
        if any(h in cell for h in hints):
            return idx
    return default


def _leading_int(s: str):
    m = _LEADING_INT_RE.match(s)
    return int(m.group(1)) if m else None


def parse_offer_import(text: str, delimiter: str = ",") -> List[OfferImportItem]:
    """
    Extract (sku, qty) pairs from a simple offer import file.
    A first row mentioning sku/variant/offered/qty/product is treated as a
    header and used to locate the columns; otherwise column 0 is the SKU and
    column 1 the quantity. A missing quantity counts as 1.
    """
    rows = split_delimited_text(text, delimiter)
    if not rows:
        return []

    start = 0
    sku_idx, qty_idx = 0, 1

    first = [c.lower().strip() for c in rows[0]]
    if any(h in c for c in first for h in _HEADER_HINTS):
        start = 1
        sku_idx = _find_column(first, _SKU_HINTS, sku_idx)
        qty_idx = _find_column(first, _QTY_HINTS, qty_idx)

    items: List[OfferImportItem] = []
    for row in rows[start:]:
        sku = row[sku_idx].strip() if sku_idx < len(row) else ""
        qty_text = row[qty_idx].strip() if qty_idx < len(row) else ""
        qty = _leading_int(qty_text or "1")
        if sku and qty is not None:
            items.append(OfferImportItem(sku=sku, qty=qty))

    if not items:
        raise OfferImportError(NO_DATA_MESSAGE)
    return items
