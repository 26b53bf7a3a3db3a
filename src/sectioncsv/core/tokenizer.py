"""Delimited text tokenizer used by every text based reader.

The format is not RFC 4180: a backslash escapes the next character
(delimiter, quote and newline included) and quotes are toggles, never doubled.
"""

from typing import Iterable, List, Optional, Sequence

DEFAULT_DELIMITER = ","
_CANDIDATES = ("\t", ",", "|")
_RESERVED = ('"', "\\", "\n")


def detect_delimiter(text: str) -> str:
    """Return the first tab, comma or pipe found outside quotes on the first line."""
    first_line = text.split("\n", 1)[0]
    in_quotes = False
    for char in first_line:
        if char == '"':
            in_quotes = not in_quotes
            continue
        if not in_quotes and char in _CANDIDATES:
            return char
    return DEFAULT_DELIMITER


def _check_delimiter(delimiter: str) -> None:
    if len(delimiter) != 1 or delimiter in _RESERVED:
        raise ValueError(f"Invalid delimiter {delimiter!r}: expected a single character other than quote, backslash or newline")


def split_delimited_text(text: str, delimiter: Optional[str] = None) -> List[List[str]]:
    """
    Split `text` into rows of trimmed cells.
    The delimiter is auto-detected from the first line when not given.
    Rows whose cells are all blank are dropped.
    """
    if not text:
        return []

    if delimiter:
        _check_delimiter(delimiter)
    else:
        delimiter = detect_delimiter(text)

    rows: List[List[str]] = []
    row: List[str] = []
    col: List[str] = []
    in_quotes = False
    preserve_next_newline = False

    def close_row() -> None:
        if any(row):
            rows.append(row)

    i = 0
    n = len(text)
    while i < n:
        char = text[i]

        if char == "\\":
            i += 1
            if i < n:
                col.append(text[i])
            i += 1
            continue

        if char == '"':
            in_quotes = not in_quotes
            if in_quotes and i > 0 and text[i - 1] == "\n":
                preserve_next_newline = True
            i += 1
            continue

        if not in_quotes and char == delimiter:
            row.append("".join(col).strip())
            col = []
            i += 1
            continue

        if char == "\n":
            if in_quotes:
                if preserve_next_newline:
                    col.append("\n")
                    preserve_next_newline = False
                else:
                    col.append(" ")
            else:
                row.append("".join(col).strip())
                close_row()
                row = []
                col = []
            i += 1
            continue

        col.append(char)
        i += 1

    if col or row:
        row.append("".join(col).strip())
        close_row()

    return rows


def _escape_cell(cell: str, delimiter: str) -> str:
    return "".join("\\" + c if c == delimiter or c in _RESERVED else c for c in cell)


def join_delimited_rows(rows: Iterable[Sequence[str]], delimiter: str = DEFAULT_DELIMITER) -> str:
    """Serialize rows so that `split_delimited_text` reads the same cells back."""
    _check_delimiter(delimiter)
    return "\n".join(
        delimiter.join(_escape_cell(cell, delimiter) for cell in row)
        for row in rows
    )
