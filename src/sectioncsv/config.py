import json
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Optional, Union


CONFIG_PATH = Path.home() / ".sectioncsv.json"

@dataclass
class AppConfig:
    """CLI defaults, persisted as JSON. Command line flags take precedence."""
    lang: str = "en-US"
    section_col_index: int = 0
    row_type_col_index: int = 1
    include_raw: bool = False
    delimiter: str = ""
    out_type: str = ".json"
    table_format: str = "tsv"
    utf8_bom: bool = False

    def save(self, path: Optional[Union[str, Path]] = None) -> None:
        target = Path(path) if path else CONFIG_PATH
        target.write_text(json.dumps(asdict(self), ensure_ascii=False, indent=2), encoding="utf-8")

    @staticmethod
    def load(path: Optional[Union[str, Path]] = None) -> "AppConfig":
        source = Path(path) if path else CONFIG_PATH
        try:
            data = json.loads(source.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            return AppConfig()
        if not isinstance(data, dict):
            return AppConfig()

        known = {f.name for f in fields(AppConfig)}
        return AppConfig(**{k: v for k, v in data.items() if k in known})
