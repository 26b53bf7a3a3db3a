import re
from typing import Dict, Any, Iterable, List, Optional
from zipfile import BadZipFile

from docx import Document
from docx.document import Document as _Document
from docx.table import Table
from docx.text.paragraph import Paragraph
from docx.oxml.text.paragraph import CT_P
from docx.oxml.table import CT_Tbl
from docx.opc.exceptions import PackageNotFoundError

from sectioncsv.core.errors import UnreadableFileError
from sectioncsv.core.tokenizer import detect_delimiter, split_delimited_text
from sectioncsv.plugins.registry import InputReader, PluginRegistry

_WS_RE = re.compile(r"[ \t]+")

def _clean_cell(s: str) -> str:
    s = s.replace("\r\n", "\n").replace("\r", "\n")
    lines = [_WS_RE.sub(" ", line).strip() for line in s.split("\n")]
    return " ".join(line for line in lines if line)

def iter_block_items(doc: _Document) -> Iterable[object]:
    body = doc.element.body
    for child in body.iterchildren():
        if isinstance(child, CT_P):
            yield Paragraph(child, doc)
        elif isinstance(child, CT_Tbl):
            yield Table(child, doc)

class DocxReader(InputReader):
    """
    Paragraphs are tokenized as delimited lines; tables give one row per
    table row, so a statement pasted either way assembles the same.
    """

    @classmethod
    def get_supported_extensions(cls) -> list[str]:
        return [".docx"]

    def read(self, file_path: str, options: Dict[str, Any]) -> List[List[str]]:
        delimiter: Optional[str] = options.get("delimiter")

        try:
            doc = Document(file_path)
        except (PackageNotFoundError, BadZipFile, ValueError, KeyError) as exc:
            raise UnreadableFileError(f"Cannot open DOCX '{file_path}'") from exc

        rows: List[List[str]] = []
        for block in iter_block_items(doc):
            if isinstance(block, Paragraph):
                text = block.text.strip()
                if not text:
                    continue
                if not delimiter:
                    delimiter = detect_delimiter(text)
                rows.extend(split_delimited_text(text, delimiter))
            elif isinstance(block, Table):
                rows.extend(self._parse_table(block))

        return rows

    def _parse_table(self, table: Table) -> List[List[str]]:
        rows = []
        for row in table.rows:
            cells_text = [_clean_cell(cell.text) for cell in row.cells]

            # Record effective cols if grid_cols_before/after are present
            before = int(getattr(row, "grid_cols_before", 0) or 0)
            padded = ([""] * before) + cells_text

            if any(padded):
                rows.append(padded)
        return rows

PluginRegistry.register_reader(DocxReader)
