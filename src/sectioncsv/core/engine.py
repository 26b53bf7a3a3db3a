from typing import Any, Dict
from pathlib import Path

from sectioncsv.core.assembler import assemble_sections
from sectioncsv.core.errors import UnsupportedExtensionError, ConversionFailedError
from sectioncsv.core.models import ParsedDocument
from sectioncsv.plugins.registry import PluginRegistry


class CoreEngine:
    """
    Routes an input file to a reader, assembles its rows into sections and
    routes the result to a writer.
    Does not know about tokenizing or writing logic, only routing.
    """

    @staticmethod
    def parse(input_path: str, read_options: Dict[str, Any]) -> ParsedDocument:
        """
        Read `input_path` and assemble its sections.
        Besides reader toggles, read_options may carry section_col_index,
        row_type_col_index and include_raw for the assembler.
        """
        in_ext = Path(input_path).suffix.lower()

        ReaderCls = PluginRegistry.get_reader(in_ext)
        if not ReaderCls:
            raise UnsupportedExtensionError(f"No reader found for extension '{in_ext}'")

        try:
            rows = ReaderCls().read(input_path, read_options)
            return assemble_sections(
                rows,
                section_col_index=read_options.get("section_col_index", 0),
                row_type_col_index=read_options.get("row_type_col_index", 1),
                include_raw=read_options.get("include_raw", False),
            )
        except Exception as e:
            raise ConversionFailedError(f"Parsing failed: {e}") from e

    @staticmethod
    def convert(input_path: str, output_path: str, read_options: Dict[str, Any], write_options: Dict[str, Any]) -> None:
        """
        Convert file at `input_path` to `output_path`.
        write_options allow passing format-specific toggles (e.g. utf8_bom, table_format).
        """
        out_ext = Path(output_path).suffix.lower()

        WriterCls = PluginRegistry.get_writer(out_ext)
        if not WriterCls:
            raise UnsupportedExtensionError(f"No writer found for extension '{out_ext}'")

        document = CoreEngine.parse(input_path, read_options)

        try:
            WriterCls().write(document, output_path, write_options)
        except Exception as e:
            raise ConversionFailedError(f"Conversion failed: {e}") from e
