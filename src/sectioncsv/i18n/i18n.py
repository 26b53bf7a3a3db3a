import json
import sys
from pathlib import Path
from typing import Dict

DEFAULT_LOCALE = "en-US"
LOCALES_DIR = Path(__file__).parent.parent / "locales"


class I18nManager:
    """CLI messages and writer markers, one JSON file per locale under ``locales/``."""
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance.locale = DEFAULT_LOCALE
            cls._instance.strings = cls._load_locales(LOCALES_DIR)
        return cls._instance

    @staticmethod
    def _load_locales(locales_dir: Path) -> Dict[str, Dict[str, str]]:
        strings: Dict[str, Dict[str, str]] = {}
        for file in sorted(locales_dir.glob("*.json")):
            try:
                strings[file.stem] = json.loads(file.read_text(encoding="utf-8"))
            except (OSError, ValueError) as e:
                print(f"Failed to load locale {file}: {e}", file=sys.stderr)
        return strings

    def set_locale(self, locale: str) -> None:
        self.locale = locale

    def t(self, key: str) -> str:
        """Message for `key` in the current locale, else en-US, else the key itself."""
        for locale in (self.locale, DEFAULT_LOCALE):
            if key in self.strings.get(locale, {}):
                return self.strings[locale][key]
        return key

    def format(self, key: str, **fields: object) -> str:
        return self.t(key).format(**fields)


i18n = I18nManager()
