"""Encode permutations and matrices as MeatAxe text format strings

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

from collections.abc import Sequence
from typing import Any

import galois
import numpy as np
import sympy.combinatorics as comb

from meataxe import fields
from meataxe.decoding import largest_moved_point
from meataxe.errors import CorruptDataError, DegreeTooSmallError, EmptyMatrixError
from meataxe.headers import COMPACT_MODE, Header, HeaderFormat, format_header
from meataxe.math import prime_power

# maximum number of characters per line in the body of a compact (mode 1) matrix
LINE_WIDTH = 80


def encode(
    obj: comb.Permutation | Any,
    *,
    degree: int = 0,
    field: object = None,
    header_format: HeaderFormat = "numeric",
) -> str:
    """Encode a permutation or a matrix as a MeatAxe text format string."""
    if isinstance(obj, comb.Permutation):
        return encode_permutation(obj, degree, header_format)
    return encode_matrix(obj, field, header_format)


def encode_permutation(
    perm: comb.Permutation, degree: int = 0, header_format: HeaderFormat = "numeric"
) -> str:
    """Encode a permutation as a MeatAxe text format string.

    The permutation is written as a permutation on the points 1, 2, ..., degree, where the default
    degree is the size of the SymPy permutation.
    """
    images = [image + 1 for image in perm.array_form]
    if not degree:
        degree = len(images)
    elif degree < (moved := largest_moved_point(images)):
        raise DegreeTooSmallError(
            f"The largest moved point of the permutation is {moved}, so degree {degree} is"
            " not valid"
        )
    images = images[:degree] + list(range(len(images) + 1, degree + 1))

    header = format_header(Header.for_permutation(degree), header_format)
    return header + "".join(f"{image}\n" for image in images)


def encode_matrix(
    matrix: galois.FieldArray | Sequence[Sequence[Any]],
    field: object = None,
    header_format: HeaderFormat = "numeric",
) -> str:
    """Encode a matrix as a MeatAxe text format string.

    Matrices over galois fields carry their field.  Matrices over SymPy residue class rings must be
    accompanied by their ring.  Any other matrix with field=None is treated as a matrix of integers.
    """
    if isinstance(matrix, galois.FieldArray):
        field = type(matrix)
    else:
        matrix = np.array(matrix, dtype=object)
    if matrix.ndim != 2:
        raise ValueError(f"MeatAxe matrices must be two-dimensional (shape: {matrix.shape})")

    rows, cols = matrix.shape
    if rows == 0 or cols == 0:
        raise EmptyMatrixError(
            f"MeatAxe matrices must have at least one row and column (shape: {matrix.shape})"
        )

    if field is None:
        header = Header.for_matrix(None, rows, cols)
        lines = [str(int(entry)) for entry in matrix.ravel()]
        return format_header(header, header_format) + "".join(f"{line}\n" for line in lines)

    order = fields.field_order(field)
    header = Header.for_matrix(order, rows, cols)
    code_rows = _get_codes(matrix, field, order)

    if header.mode == COMPACT_MODE:
        lines = []
        for codes in code_rows:
            digits = "".join(map(str, codes))
            starts = range(0, len(digits), LINE_WIDTH)
            lines.extend(digits[start : start + LINE_WIDTH] for start in starts)
    else:
        lines = [str(code) for codes in code_rows for code in codes]

    return format_header(header, header_format) + "".join(f"{line}\n" for line in lines)


def _get_codes(matrix: Any, field: object, order: int) -> list[list[int]]:
    """Replace matrix entries by their positions in the canonical list of field elements."""
    characteristic, degree = prime_power(order)
    codes = fields.element_codes(field, characteristic, degree)
    try:
        return [[codes[fields.element_key(field, entry)] for entry in row] for row in matrix]
    except KeyError as error:
        raise CorruptDataError(f"Matrix entry {error} is not an element of {field}")
