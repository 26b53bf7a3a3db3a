from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from sectioncsv.core.models import ParsedDocument, Record, Section
from sectioncsv.core.tokenizer import DEFAULT_DELIMITER, join_delimited_rows
from sectioncsv.plugins.registry import OutputWriter, PluginRegistry


def header_cells(keys: Sequence[str]) -> List[str]:
    """Header names that rebuild `keys`; synthetic `col_<i>` keys become blank."""
    return ["" if key == f"col_{i}" else key for i, key in enumerate(keys)]


def section_rows(name: str, section: Section) -> List[List[str]]:
    """
    Lay a section back out as Header/Data/SubTotal/Total/Notes rows.
    The section's own headers come first so they survive a re-parse; another
    Header row is written whenever the current one would key a record differently.
    """
    out: List[List[str]] = []
    current: Optional[List[str]] = None
    if section.headers:
        current = list(section.headers)
        out.append([name, "Header"] + current)

    for row_type, records in (("Data", section.rows), ("SubTotal", section.sub_totals), ("Total", section.totals)):
        for rec in records:
            keys = rec.data_keys()
            values = [rec[k] for k in keys]
            if current is None or Record.build(current, values).data_keys() != keys:
                current = header_cells(keys)
                out.append([name, "Header"] + current)
            out.append([name, row_type] + values)

    for note in section.notes:
        out.append([name, "Notes", note])
    return out


class CsvWriter(OutputWriter):
    @classmethod
    def get_supported_extensions(cls) -> list[str]:
        return [".csv"]

    def write(self, document: ParsedDocument, output_path: str, options: Dict[str, Any]) -> None:
        delimiter = options.get("delimiter") or DEFAULT_DELIMITER
        encoding = "utf-8-sig" if options.get("utf8_bom", False) else "utf-8"

        rows: List[List[str]] = []
        for name, section in document.sections.items():
            rows.extend(section_rows(name, section))
        rows.extend(document.unparsed_rows)

        out_p = Path(output_path)
        out_p.parent.mkdir(parents=True, exist_ok=True)
        out_p.write_text(join_delimited_rows(rows, delimiter) + "\n", encoding=encoding, newline="\n")

PluginRegistry.register_writer(CsvWriter)
