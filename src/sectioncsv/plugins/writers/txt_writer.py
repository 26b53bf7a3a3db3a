from pathlib import Path
from typing import Dict, Any, List, Sequence

from sectioncsv.core.models import ParsedDocument, Record
from sectioncsv.plugins.registry import OutputWriter, PluginRegistry
from sectioncsv.i18n.i18n import i18n

def records_table(records: Sequence[Record]) -> List[List[str]]:
    """Header row (union of record keys, first-seen order) followed by one row per record."""
    keys: List[str] = []
    for rec in records:
        for k in rec.data_keys():
            if k not in keys:
                keys.append(k)
    return [keys] + [[rec.get(k, "") for k in keys] for rec in records]

class TxtWriter(OutputWriter):
    @classmethod
    def get_supported_extensions(cls) -> list[str]:
        return [".txt"]

    def write(self, document: ParsedDocument, output_path: str, options: Dict[str, Any]) -> None:
        table_format = options.get("table_format", "tsv")
        normalize_tables = options.get("normalize_tables", True)
        utf8_bom = options.get("utf8_bom", False)

        out_lines = []

        for name, section in document.sections.items():
            out_lines.append(f"{i18n.t('section_marker')} {name}")
            if section.headers:
                out_lines.append(i18n.t("headers_marker"))
                out_lines.extend(self._format_table([section.headers], table_format, False))

            for marker, records in (
                ("rows_marker", section.rows),
                ("sub_totals_marker", section.sub_totals),
                ("totals_marker", section.totals),
            ):
                if records:
                    out_lines.append(i18n.t(marker))
                    out_lines.extend(self._format_table(records_table(records), table_format, normalize_tables))

            for note in section.notes:
                out_lines.append(f"{i18n.t('note_marker')} {note}".replace("\n", "\\n"))
            out_lines.append("")

        if document.unparsed_rows:
            out_lines.append(i18n.t("unparsed_marker"))
            out_lines.extend(self._format_table(document.unparsed_rows, table_format, normalize_tables))

        text = "\n".join(out_lines).rstrip() + "\n"
        encoding = "utf-8-sig" if utf8_bom else "utf-8"

        out_p = Path(output_path)
        out_p.parent.mkdir(parents=True, exist_ok=True)
        out_p.write_text(text, encoding=encoding, newline="\n")

    def _format_table(self, rows: Sequence[Sequence[str]], fmt: str, normalize: bool) -> List[str]:
        target_cols = 0
        if normalize:
            for row in rows:
                target_cols = max(target_cols, len(row))

        lines = []
        for row in rows:
            cells = list(row)
            if normalize and target_cols > 0 and len(cells) < target_cols:
                cells += [""] * (target_cols - len(cells))

            safe_cells = [c.replace("\n", "\\n") for c in cells]
            if fmt == "tsv":
                lines.append("\t".join(safe_cells).rstrip())
            else:
                lines.append("| " + " | ".join(safe_cells) + " |")

        return lines

PluginRegistry.register_writer(TxtWriter)
