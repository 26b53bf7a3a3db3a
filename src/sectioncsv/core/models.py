import json
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Sequence, Tuple


class Record(Dict[str, str]):
    """
    One keyed row of a section.
    Keys come from the section's working headers; positions without a header
    get the synthetic name `col_<index>`.
    """

    RAW_KEY = "_raw"

    @classmethod
    def build(cls, headers: Sequence[str], values: Sequence[str], include_raw: bool = False) -> "Record":
        record = cls()
        for i in range(max(len(headers), len(values))):
            key = headers[i] if i < len(headers) and headers[i] else f"col_{i}"
            record[key] = values[i] if i < len(values) and values[i] else ""

        if include_raw:
            record[cls.RAW_KEY] = json.dumps(list(values), ensure_ascii=False, separators=(",", ":"))
        return record

    @property
    def raw_values(self) -> Optional[List[str]]:
        raw = self.get(self.RAW_KEY)
        if raw is None:
            return None
        return json.loads(raw)

    def data_keys(self) -> List[str]:
        return [k for k in self if k != self.RAW_KEY]


@dataclass(frozen=True)
class Section:
    # First Header row seen for the section; later Header rows don't change it
    headers: Tuple[str, ...] = ()
    rows: Tuple[Record, ...] = ()
    totals: Tuple[Record, ...] = ()
    sub_totals: Tuple[Record, ...] = ()
    notes: Tuple[str, ...] = ()


@dataclass(frozen=True)
class ParsedDocument:
    """
    Sections recovered from one multi-section file, plus the rows that fit nowhere.
    Read-only snapshot: `sections` is a mapping proxy and every sequence is a tuple.
    """
    sections: Mapping[str, Section] = field(default_factory=lambda: MappingProxyType({}))
    unparsed_rows: Tuple[Tuple[str, ...], ...] = ()

    def get_section(self, name: str) -> Optional[Section]:
        return self.sections.get(name)

    def section_names(self) -> List[str]:
        return list(self.sections.keys())

    def has_section(self, name: str) -> bool:
        return name in self.sections

    def __contains__(self, name: object) -> bool:
        return name in self.sections


@dataclass(frozen=True)
class OfferImportItem:
    sku: str
    qty: int
