"""PDF reader plugin – recovers delimited rows from text-based PDFs."""

import re
from typing import Any, Dict, List, Optional

import pdfplumber

from sectioncsv.core.errors import UnreadableFileError
from sectioncsv.core.tokenizer import detect_delimiter, split_delimited_text
from sectioncsv.plugins.registry import InputReader, PluginRegistry

_WS_RE = re.compile(r"[ \t]+")


def _clean_cell(s: Optional[str]) -> str:
    """Collapse whitespace and join wrapped lines of a table cell."""
    if not s:
        return ""
    s = s.replace("\r\n", "\n").replace("\r", "\n")
    lines = [_WS_RE.sub(" ", line).strip() for line in s.split("\n")]
    return " ".join(line for line in lines if line)


class PdfReader(InputReader):
    """
    Read text-based PDFs into raw rows.

    Each page's text is tokenized line by line. With ``include_tables`` the
    tables pdfplumber detects on a page replace that page's text.
    """

    @classmethod
    def get_supported_extensions(cls) -> list[str]:
        return [".pdf"]

    def read(self, file_path: str, options: Dict[str, Any]) -> List[List[str]]:
        include_tables = options.get("include_tables", False)
        delimiter: Optional[str] = options.get("delimiter")

        try:
            pdf = pdfplumber.open(file_path)
        except Exception as exc:
            raise UnreadableFileError(
                f"Cannot open PDF '{file_path}'. "
                "If the file is encrypted or scanned, note that scanned PDFs "
                "require OCR which is not supported."
            ) from exc

        rows: List[List[str]] = []
        with pdf:
            for page in pdf.pages:
                if include_tables:
                    table_rows = self._table_rows(page)
                    if table_rows:
                        rows.extend(table_rows)
                        continue

                raw_text = page.extract_text()
                if not raw_text:
                    continue
                text = raw_text.replace("\r\n", "\n").replace("\r", "\n")
                if not delimiter:
                    delimiter = detect_delimiter(text.lstrip())
                rows.extend(split_delimited_text(text, delimiter))

        return rows

    def _table_rows(self, page) -> List[List[str]]:
        try:
            tables = page.extract_tables()
        except Exception:
            tables = []

        rows: List[List[str]] = []
        for table in tables or []:
            for row in table:
                cells = [_clean_cell(cell) for cell in row]
                if any(cells):
                    rows.append(cells)
        return rows


PluginRegistry.register_reader(PdfReader)
