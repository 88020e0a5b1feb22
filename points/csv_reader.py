"""
Purpose: Turn raw CSV text into rows of strings.
What it does:
- splits on commas, honours double quotes and "" as an escaped quote
- ignores CR, treats LF as the row terminator
- keeps a trailing row that has no final LF

Builds the header-name -> column index mapping used by the normalizer.

Rule: No typing or validation of values here, only tokenizing.
"""

from __future__ import annotations

from typing import List, Sequence

from .models import ColumnIndex


def parse_csv(text: str) -> List[List[str]]:
    """
    Parse CSV text into a list of rows.

    Quoted fields may contain commas and newlines. Malformed quoting never
    raises: an unterminated quote simply runs to the end of the text.
    """
    rows: List[List[str]] = []
    current: List[str] = []
    value: List[str] = []
    in_quotes = False

    i = 0
    length = len(text)
    while i < length:
        char = text[i]

        if in_quotes:
            if char == '"':
                if i + 1 < length and text[i + 1] == '"':
                    value.append('"')
                    i += 1
                else:
                    in_quotes = False
            else:
                value.append(char)
        elif char == '"':
            in_quotes = True
        elif char == ",":
            current.append("".join(value))
            value = []
        elif char == "\n":
            current.append("".join(value))
            value = []
            rows.append(current)
            current = []
        elif char == "\r":
            pass
        else:
            value.append(char)
        i += 1

    if value or current:
        current.append("".join(value))
        rows.append(current)

    return rows


def build_column_index(header: Sequence[str]) -> ColumnIndex:
    """
    Map stripped header names to their positions.
    Later duplicates win, same as building a dict from the pairs.
    """
    return {name.strip(): index for index, name in enumerate(header)}


def split_header(rows: List[List[str]]) -> tuple:
    """
    Split parsed rows into (column_index, data_rows).
    An empty input gives an empty index and no rows.
    """
    if not rows:
        return {}, []
    return build_column_index(rows[0]), rows[1:]
