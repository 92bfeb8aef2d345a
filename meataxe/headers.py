"""Header lines of MeatAxe text format files

A header describes the kind of object stored in a file (permutation, matrix over a finite field, or
matrix over the integers), the size of the field, and the dimensions of the object.  Headers come
in three dialects:
- "numeric": four integers "mode size rows cols", separated by blanks,
- "numeric (fixed)": the same four integers, right-justified in fields of width 6, and
- "textual": keyword tokens, e.g. "matrix field=7 rows=5 cols=6".

Copyright 2023 The meataxe Authors and Infleqtion Inc.

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at

    http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Sequence
from typing import Literal

from meataxe.errors import CorruptHeaderError, UnsupportedHeaderError

HeaderFormat = Literal["numeric", "numeric (fixed)", "textual"]
HEADER_FORMATS: tuple[HeaderFormat, ...] = ("numeric", "numeric (fixed)", "textual")

PERMUTATION_MODE = 12
INTEGER_MODE = 8
COMPACT_MODE = 1
FREE_MODE = 6

# fields with fewer elements are written in the compact mode, one digit per entry
COMPACT_FIELD_BOUND = 10

FIXED_WIDTH = 6


@dataclasses.dataclass(frozen=True)
class Header:
    """Information in the header line of a MeatAxe text format file.

    The size is the order of the field (or the number of permutations, for mode 12), and is None for
    matrices over the integers.
    """

    mode: int
    size: int | None
    rows: int
    cols: int

    @property
    def is_permutation(self) -> bool:
        """Does this header describe a permutation?"""
        return self.mode == PERMUTATION_MODE

    @staticmethod
    def for_permutation(degree: int) -> Header:
        """Header of a permutation with the given degree."""
        return Header(PERMUTATION_MODE, 1, degree, 1)

    @staticmethod
    def for_matrix(size: int | None, rows: int, cols: int) -> Header:
        """Header of a matrix over the field with the given size, or over the integers."""
        if size is None:
            return Header(INTEGER_MODE, None, rows, cols)
        mode = COMPACT_MODE if size < COMPACT_FIELD_BOUND else FREE_MODE
        return Header(mode, size, rows, cols)


def parse_header(line: str) -> Header:
    """Parse the header line of a MeatAxe text format file."""
    tokens = line.split()
    if "=" not in line:
        header = _parse_numeric_header(line, tokens)
    else:
        header = _parse_textual_header(line, tokens)
    if header.rows < 1 or header.cols < 1:
        raise CorruptHeaderError(f"Dimensions in header of MeatAxe file must be positive: {line!r}")
    return header


def _parse_numeric_header(line: str, tokens: list[str]) -> Header:
    """Parse a header of four integers: mode, size, rows, and cols."""
    if len(tokens) == 3 and tokens[0] == str(PERMUTATION_MODE) and tokens[1].startswith("1"):
        # Permutations of degree >= 100000 written in fixed-width fields, as in
        # '12     1100000     1', run the size and the degree together.
        tokens = [tokens[0], "1", tokens[1][1:], tokens[2]]
    if len(tokens) != 4:
        raise CorruptHeaderError(f"Corrupted header of MeatAxe file: {line!r}")

    mode, size, rows, cols = _parse_integers(line, tokens)
    if mode == INTEGER_MODE:
        return Header(mode, None, rows, cols)
    return Header(mode, size, rows, cols)


def _parse_textual_header(line: str, tokens: list[str]) -> Header:
    """Parse a header of keyword tokens."""
    if len(tokens) == 2 and tokens[0] == "permutation":
        (degree,) = _parse_keywords(line, tokens[1:], "degree")
        return Header.for_permutation(degree)

    if len(tokens) == 4 and tokens[0] == "matrix":
        size, rows, cols = _parse_keywords(line, tokens[1:], "field", "rows", "cols")
        return Header.for_matrix(size, rows, cols)

    if len(tokens) == 4 and tokens[:2] == ["integer", "matrix"]:
        rows, cols = _parse_keywords(line, tokens[2:], "rows", "cols")
        return Header.for_matrix(None, rows, cols)

    if len(tokens) == 3 and tokens[0] == "integer-matrix":
        rows, cols = _parse_keywords(line, tokens[1:], "rows", "cols")
        return Header.for_matrix(None, rows, cols)

    raise UnsupportedHeaderError(f"Unsupported header of MeatAxe file: {line!r}")


def _parse_keywords(line: str, tokens: Sequence[str], *keywords: str) -> list[int]:
    """Parse tokens of the form 'keyword=value' with the given keywords, in order."""
    values = []
    for token, keyword in zip(tokens, keywords):
        prefix = keyword + "="
        if not token.startswith(prefix):
            raise UnsupportedHeaderError(f"Unsupported header of MeatAxe file: {line!r}")
        values.append(token[len(prefix) :])
    return _parse_integers(line, values)


def _parse_integers(line: str, tokens: Sequence[str]) -> list[int]:
    try:
        return [int(token) for token in tokens]
    except ValueError:
        raise CorruptHeaderError(f"Corrupted header of MeatAxe file: {line!r}")


def format_header(header: Header, header_format: HeaderFormat = "numeric") -> str:
    """Write the header line (including its line break) of a MeatAxe text format file."""
    if header_format not in HEADER_FORMATS:
        raise UnsupportedHeaderError(
            f"Header format must be one of {HEADER_FORMATS} (provided: {header_format!r})"
        )

    size = 1 if header.size is None else header.size

    if header_format == "numeric":
        return f"{header.mode} {size} {header.rows} {header.cols}\n"

    if header_format == "numeric (fixed)":
        if header.is_permutation:
            # legacy layout, including the trailing blank
            degree = str(header.rows).rjust(FIXED_WIDTH)
            return f"{'12':>{FIXED_WIDTH}}{'1':>{FIXED_WIDTH}}{degree}{'1':>{FIXED_WIDTH}} \n"
        values = (header.mode, size, header.rows, header.cols)
        return "".join(_fixed_width_field(value) for value in values) + "\n"

    # header_format == "textual"
    if header.is_permutation:
        return f"permutation degree={header.rows}\n"
    if header.size is None:
        return f"integer-matrix rows={header.rows} cols={header.cols}\n"
    return f"matrix field={header.size} rows={header.rows} cols={header.cols}\n"


def _fixed_width_field(value: int) -> str:
    """Right-justify an integer in a fixed-width field, keeping it apart from its neighbors."""
    text = str(value)
    if len(text) >= FIXED_WIDTH:
        return " " + text
    return text.rjust(FIXED_WIDTH)
