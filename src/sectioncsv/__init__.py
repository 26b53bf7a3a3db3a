from sectioncsv.core.assembler import (
    assemble_sections,
    build_record,
    get_section,
    get_section_names,
    has_section,
    parse_multi_section_csv,
)
from sectioncsv.core.models import OfferImportItem, ParsedDocument, Record, Section
from sectioncsv.core.offer_import import parse_offer_import
from sectioncsv.core.tokenizer import detect_delimiter, join_delimited_rows, split_delimited_text

__all__ = [
    "assemble_sections",
    "build_record",
    "detect_delimiter",
    "get_section",
    "get_section_names",
    "has_section",
    "join_delimited_rows",
    "OfferImportItem",
    "ParsedDocument",
    "parse_multi_section_csv",
    "parse_offer_import",
    "Record",
    "Section",
    "split_delimited_text",
]
