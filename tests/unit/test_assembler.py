import json

import pytest

from sectioncsv.core.assembler import (
    assemble_sections,
    build_record,
    get_section,
    get_section_names,
    has_section,
    parse_multi_section_csv,
)
from sectioncsv.core.models import Record, Section


def test_statement_scenario(statement_text):
    doc = parse_multi_section_csv(statement_text)

    assert doc.section_names() == ["Statement", "Trades"]
    assert doc.unparsed_rows == ()

    statement = doc.get_section("Statement")
    assert statement.headers == ("Field Name", "Field Value")
    assert statement.rows == ({"Field Name": "BrokerName", "Field Value": "Interactive Brokers LLC"},)

    trades = doc.get_section("Trades")
    assert trades.rows == ({"Category": "Stocks", "Currency": "USD", "Symbol": "BIDU"},)
    assert trades.totals == ({"Category": "Stocks", "Currency": "USD", "Symbol": ""},)
    assert trades.sub_totals == ()
    assert trades.notes == ()


def test_header_rollover_keeps_visible_headers():
    doc = parse_multi_section_csv(
        "Trades,Header,A,B\n"
        "Trades,Data,1,2\n"
        "Trades,Header,X,Y,Z\n"
        "Trades,Data,7,8,9\n"
    )
    trades = doc.get_section("Trades")
    assert trades.headers == ("A", "B")
    assert trades.rows == ({"A": "1", "B": "2"}, {"X": "7", "Y": "8", "Z": "9"})
    assert list(trades.rows[1].keys()) == ["X", "Y", "Z"]


def test_row_types_are_case_insensitive():
    doc = parse_multi_section_csv(
        "Trades,HEADER,A\n"
        "Trades,data,1\n"
        "Trades,SubTotal,2\n"
        "Trades,TOTAL,3\n"
    )
    trades = doc.get_section("Trades")
    assert trades.rows == ({"A": "1"},)
    assert trades.sub_totals == ({"A": "2"},)
    assert trades.totals == ({"A": "3"},)


class TestUnparsedRouting:
    def test_single_column_row(self):
        doc = parse_multi_section_csv("Trades,Header,A\nlonely\nTrades,Data,1")
        assert doc.unparsed_rows == (("lonely",),)
        assert doc.get_section("Trades").rows == ({"A": "1"},)

    def test_blank_section_or_row_type(self):
        doc = parse_multi_section_csv(",Data,1,2\nTrades,,1,2\n")
        assert doc.unparsed_rows == (("", "Data", "1", "2"), ("Trades", "", "1", "2"))
        assert not doc.sections

    def test_unknown_row_type(self):
        doc = parse_multi_section_csv("Trades,Foo,1,2")
        assert doc.unparsed_rows == (("Trades", "Foo", "1", "2"),)
        assert doc.get_section("Trades").rows == ()

    def test_missing_row_type_column(self):
        doc = parse_multi_section_csv("Trades,Data", row_type_col_index=3)
        assert doc.unparsed_rows == (("Trades", "Data"),)

    def test_malformed_input_never_raises(self):
        doc = parse_multi_section_csv('"unterminated,quote\n\\\n,,,\nx')
        assert not doc.sections
        assert len(doc.unparsed_rows) == 1


class TestNotes:
    def test_notes_are_joined_with_commas(self):
        # cells are trimmed before joining
        doc = parse_multi_section_csv("Statement,Notes,Some, note, text")
        assert doc.get_section("Statement").notes == ("Some,note,text",)

    def test_quoted_note_keeps_its_spacing(self):
        doc = parse_multi_section_csv('Statement,Notes,"Some, note, text"')
        assert doc.get_section("Statement").notes == ("Some, note, text",)

    def test_notes_accumulate(self):
        doc = parse_multi_section_csv("Statement,Notes,first\nStatement,Notes,second")
        assert doc.get_section("Statement").notes == ("first", "second")

    def test_blank_notes_are_skipped_but_create_section(self):
        doc = parse_multi_section_csv("Statement,Notes, ")
        assert doc.get_section("Statement").notes == ()
        assert doc.has_section("Statement")


class TestRecordConstruction:
    def test_overflow_values_get_synthetic_keys(self):
        doc = parse_multi_section_csv("Trades,Header,A\nTrades,Data,1,2,3")
        assert doc.get_section("Trades").rows == ({"A": "1", "col_1": "2", "col_2": "3"},)

    def test_missing_values_are_empty(self):
        assert build_record(["A", "B", "C"], ["1"]) == {"A": "1", "B": "", "C": ""}

    def test_data_without_header(self):
        doc = parse_multi_section_csv("Trades,Data,1,2")
        trades = doc.get_section("Trades")
        assert trades.headers == ()
        assert trades.rows == ({"col_0": "1", "col_1": "2"},)

    def test_empty_header_name_uses_position(self):
        assert build_record(["A", "", "C"], ["1", "2", "3"]) == {"A": "1", "col_1": "2", "C": "3"}

    def test_include_raw(self):
        doc = parse_multi_section_csv("Trades,Header,A\nTrades,Data,1,ü", include_raw=True)
        record = doc.get_section("Trades").rows[0]
        assert record[Record.RAW_KEY] == '["1","ü"]'
        assert record.raw_values == ["1", "ü"]
        assert record.data_keys() == ["A", "col_1"]
        assert json.loads(record["_raw"]) == ["1", "ü"]

    def test_raw_values_absent_by_default(self):
        assert build_record(["A"], ["1"]).raw_values is None


class TestColumnIndices:
    def test_custom_columns(self):
        rows = [
            ["x", "Header", "Trades", "A", "B"],
            ["x", "Data", "Trades", "1", "2"],
        ]
        doc = assemble_sections(rows, section_col_index=2, row_type_col_index=1)
        assert doc.get_section("Trades").rows == ({"A": "1", "B": "2"},)

    def test_negative_index_rejected(self):
        with pytest.raises(ValueError):
            assemble_sections([], section_col_index=-1)

    def test_explicit_delimiter(self):
        doc = parse_multi_section_csv("Trades|Header|A\nTrades|Data|1,5", delimiter="|")
        assert doc.get_section("Trades").rows == ({"A": "1,5"},)


class TestQueryHelpers:
    def test_helpers(self, statement_text):
        doc = parse_multi_section_csv(statement_text)
        assert isinstance(get_section(doc, "Trades"), Section)
        assert get_section(doc, "Missing") is None
        assert get_section_names(doc) == ["Statement", "Trades"]
        assert has_section(doc, "Statement")
        assert not has_section(doc, "Missing")
        assert "Trades" in doc

    def test_first_insertion_order(self):
        doc = parse_multi_section_csv("B,Data,1\nA,Data,1\nB,Data,2")
        assert doc.section_names() == ["B", "A"]

    def test_document_is_frozen(self, statement_text):
        doc = parse_multi_section_csv(statement_text)
        with pytest.raises(AttributeError):
            doc.sections = {}

    def test_sections_and_sequences_are_read_only(self, statement_text):
        doc = parse_multi_section_csv(statement_text + "stray\n")
        with pytest.raises(TypeError):
            doc.sections["Other"] = Section()
        with pytest.raises(AttributeError):
            doc.get_section("Trades").rows.append({"Category": "Bonds"})
        with pytest.raises(AttributeError):
            doc.get_section("Trades").headers = ()
        with pytest.raises(AttributeError):
            doc.unparsed_rows.append(("x",))
        assert isinstance(doc.unparsed_rows[0], tuple)
