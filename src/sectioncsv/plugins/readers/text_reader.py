from pathlib import Path
from typing import Any, Dict, List

from sectioncsv.core.errors import UnreadableFileError
from sectioncsv.core.tokenizer import split_delimited_text
from sectioncsv.plugins.registry import InputReader, PluginRegistry

# Extensions whose delimiter is fixed unless the caller overrides it
_DEFAULT_DELIMITERS = {".tsv": "\t"}


class TextReader(InputReader):
    @classmethod
    def get_supported_extensions(cls) -> list[str]:
        return [".csv", ".tsv", ".txt"]

    def read(self, file_path: str, options: Dict[str, Any]) -> List[List[str]]:
        encoding = options.get("encoding", "utf-8-sig")
        path = Path(file_path)
        delimiter = options.get("delimiter") or _DEFAULT_DELIMITERS.get(path.suffix.lower())

        try:
            text = path.read_text(encoding=encoding)
        except (OSError, UnicodeDecodeError) as exc:
            raise UnreadableFileError(f"Cannot read '{file_path}' as {encoding} text") from exc

        return split_delimited_text(text, delimiter)

PluginRegistry.register_reader(TextReader)
