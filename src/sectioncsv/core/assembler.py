"""
Multi-section CSV assembler for broker-style exports (e.g. IB activity statements).

Each row carries its section name and row type in leading columns:

    Statement,Header,Field Name,Field Value
    Statement,Data,BrokerName,Interactive Brokers LLC
    Trades,Header,Category,Currency,Symbol
    Trades,Data,Stocks,USD,BIDU
    Trades,Total,Stocks,USD,

A section may repeat its Header row when its column layout changes; every
later Data/Total/SubTotal row is keyed by the most recent one.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Iterable, List, Optional, Sequence

from sectioncsv.core.models import ParsedDocument, Record, Section
from sectioncsv.core.tokenizer import split_delimited_text

ROW_HEADER = "header"
ROW_DATA = "data"
ROW_TOTAL = "total"
ROW_SUBTOTAL = "subtotal"
ROW_NOTES = "notes"


def build_record(headers: Sequence[str], values: Sequence[str], include_raw: bool = False) -> Record:
    return Record.build(headers, values, include_raw)


@dataclass
class _SectionBuilder:
    headers: List[str] = field(default_factory=list)
    rows: List[Record] = field(default_factory=list)
    totals: List[Record] = field(default_factory=list)
    sub_totals: List[Record] = field(default_factory=list)
    notes: List[str] = field(default_factory=list)

    def freeze(self) -> Section:
        return Section(
            headers=tuple(self.headers),
            rows=tuple(self.rows),
            totals=tuple(self.totals),
            sub_totals=tuple(self.sub_totals),
            notes=tuple(self.notes),
        )


@dataclass
class _Accumulator:
    include_raw: bool
    sections: Dict[str, _SectionBuilder] = field(default_factory=dict)
    working_headers: Dict[str, List[str]] = field(default_factory=dict)
    unparsed: List[List[str]] = field(default_factory=list)

    def section(self, name: str) -> _SectionBuilder:
        if name not in self.sections:
            self.sections[name] = _SectionBuilder()
        return self.sections[name]

    def record(self, name: str, values: List[str]) -> Record:
        return build_record(self.working_headers.get(name, []), values, self.include_raw)

    def add(self, name: str, row_type: str, values: List[str], row: List[str]) -> None:
        if row_type == ROW_HEADER:
            self.working_headers[name] = values
            section = self.section(name)
            if not section.headers:
                section.headers = list(values)
        elif row_type == ROW_DATA:
            self.section(name).rows.append(self.record(name, values))
        elif row_type == ROW_TOTAL:
            self.section(name).totals.append(self.record(name, values))
        elif row_type == ROW_SUBTOTAL:
            self.section(name).sub_totals.append(self.record(name, values))
        elif row_type == ROW_NOTES:
            # Notes are free text that the tokenizer may have split on commas
            note = ",".join(values).strip()
            section = self.section(name)
            if note:
                section.notes.append(note)
        else:
            self.section(name)
            self.unparsed.append(row)

    def snapshot(self) -> ParsedDocument:
        return ParsedDocument(
            sections=MappingProxyType({name: b.freeze() for name, b in self.sections.items()}),
            unparsed_rows=tuple(tuple(row) for row in self.unparsed),
        )


def _cell(row: List[str], index: int) -> str:
    return row[index].strip() if index < len(row) else ""


def assemble_sections(
    rows: Iterable[List[str]],
    section_col_index: int = 0,
    row_type_col_index: int = 1,
    include_raw: bool = False,
) -> ParsedDocument:
    """
    Fold tokenized rows into sections.
    Never raises for malformed rows: anything that cannot be attributed to a
    section and a known row type ends up in `unparsed_rows`.
    """
    if section_col_index < 0 or row_type_col_index < 0:
        raise ValueError("Column indices must be zero or positive")

    acc = _Accumulator(include_raw=include_raw)
    data_start = max(section_col_index, row_type_col_index) + 1

    for row in rows:
        row = list(row)
        if len(row) < 2:
            acc.unparsed.append(row)
            continue

        section_name = _cell(row, section_col_index)
        row_type = _cell(row, row_type_col_index)
        if not section_name or not row_type:
            acc.unparsed.append(row)
            continue

        acc.add(section_name, row_type.lower(), row[data_start:], row)

    return acc.snapshot()


def parse_multi_section_csv(
    text: str,
    section_col_index: int = 0,
    row_type_col_index: int = 1,
    include_raw: bool = False,
    delimiter: Optional[str] = None,
) -> ParsedDocument:
    """Tokenize `text` and assemble its sections in one pass."""
    return assemble_sections(
        split_delimited_text(text, delimiter),
        section_col_index=section_col_index,
        row_type_col_index=row_type_col_index,
        include_raw=include_raw,
    )


def get_section(document: ParsedDocument, name: str) -> Optional[Section]:
    return document.get_section(name)


def get_section_names(document: ParsedDocument) -> List[str]:
    return document.section_names()


def has_section(document: ParsedDocument, name: str) -> bool:
    return document.has_section(name)
