import json
from pathlib import Path
from typing import Any, Dict

from sectioncsv.core.models import ParsedDocument, Section
from sectioncsv.plugins.registry import OutputWriter, PluginRegistry


def section_to_dict(section: Section) -> Dict[str, Any]:
    return {
        "headers": list(section.headers),
        "rows": [dict(r) for r in section.rows],
        "totals": [dict(r) for r in section.totals],
        "sub_totals": [dict(r) for r in section.sub_totals],
        "notes": list(section.notes),
    }


def document_to_dict(document: ParsedDocument) -> Dict[str, Any]:
    return {
        "sections": {name: section_to_dict(s) for name, s in document.sections.items()},
        "unparsed_rows": [list(row) for row in document.unparsed_rows],
    }


class JsonWriter(OutputWriter):
    @classmethod
    def get_supported_extensions(cls) -> list[str]:
        return [".json"]

    def write(self, document: ParsedDocument, output_path: str, options: Dict[str, Any]) -> None:
        indent = options.get("indent", 2)
        encoding = "utf-8-sig" if options.get("utf8_bom", False) else "utf-8"

        text = json.dumps(document_to_dict(document), ensure_ascii=False, indent=indent)

        out_p = Path(output_path)
        out_p.parent.mkdir(parents=True, exist_ok=True)
        out_p.write_text(text + "\n", encoding=encoding, newline="\n")

PluginRegistry.register_writer(JsonWriter)
