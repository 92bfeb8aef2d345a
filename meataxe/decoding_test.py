"""Unit tests for decoding.py

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

import galois
import numpy as np
import pytest
import sympy
import sympy.combinatorics as comb

from meataxe import decoding, errors, fields

# data files of the ATLAS of Group Representations
PERMUTATION_TEXT = "12     1    11     1\n1\n10\n3\n11\n7\n6\n5\n9\n8\n2\n4\n"
PERMUTATION_IMAGES = [1, 10, 3, 11, 7, 6, 5, 9, 8, 2, 4]
COMPACT_MATRIX_TEXT = " 1     4     2     2\n10\n21\n"
FREE_MATRIX_TEXT = "6 11 3 3\n10\n0\n0\n0\n10\n0\n9\n9\n1\n"
FREE_MATRIX_ENTRIES = [[10, 0, 0], [0, 10, 0], [9, 9, 1]]


def to_permutation(images: list[int]) -> comb.Permutation:
    """Build a SymPy permutation from 1-indexed images."""
    return comb.Permutation([image - 1 for image in images])


def test_split_text() -> None:
    """Separate headers from data."""
    header, lines = decoding.split_text("1 2 1 2\n\n01\n  \n")
    assert header == decoding.Header(1, 2, 1, 2)
    assert lines == ["01"]

    with pytest.raises(errors.CorruptHeaderError, match="empty"):
        decoding.split_text("\n\n")


def test_permutation() -> None:
    """Decode permutations."""
    perm = to_permutation(PERMUTATION_IMAGES)
    assert decoding.decode_permutation(PERMUTATION_TEXT) == perm
    assert decoding.decode_permutation(PERMUTATION_TEXT, 11) == perm
    assert decoding.decode(PERMUTATION_TEXT) == perm

    # extend by fixed points
    extended = decoding.decode_permutation(PERMUTATION_TEXT, 12)
    assert extended == to_permutation(PERMUTATION_IMAGES + [12])
    assert extended.size == 12

    # strip fixed points
    text = "permutation degree=5\n2\n1\n3\n4\n5\n"
    assert decoding.decode_permutation(text).size == 5
    assert decoding.decode_permutation(text, 3) == comb.Permutation([1, 0, 2])
    assert decoding.decode_permutation(text, 3).size == 3

    with pytest.raises(errors.DegreeTooSmallError, match="largest moved point .* is 11"):
        decoding.decode_permutation(PERMUTATION_TEXT, 10)
    with pytest.raises(errors.DegreeTooSmallError, match="largest moved point .* is 2"):
        decoding.decode_permutation(text, 1)

    assert decoding.largest_moved_point(PERMUTATION_IMAGES) == 11
    assert decoding.largest_moved_point([1, 2, 3]) == 0


def test_permutation_errors() -> None:
    """Invalid permutation data."""
    with pytest.raises(errors.UnsupportedModeError, match="does not contain a permutation"):
        decoding.decode_permutation(FREE_MATRIX_TEXT)
    with pytest.raises(errors.CorruptHeaderError, match="contains 2 permutations"):
        decoding.decode_permutation("12 2 2 1\n1\n2\n")
    with pytest.raises(errors.CorruptDataError, match="must be integers"):
        decoding.decode_permutation("12 1 2 1\n1\ntwo\n")
    with pytest.raises(errors.CorruptDataError, match="do not define a permutation"):
        decoding.decode_permutation("12 1 3 1\n1\n1\n2\n")
    with pytest.raises(errors.CorruptDataError, match="do not define a permutation"):
        decoding.decode_permutation("12 1 3 1\n1\n2\n")

    with pytest.warns(UserWarning, match="Ignoring column number 2"):
        assert decoding.decode_permutation("12 1 2 2\n2\n1\n") == comb.Permutation([1, 0])


def test_compact_matrix() -> None:
    """Decode matrices over fields with fewer than 10 elements, one digit per entry."""
    digits = [[(row + 2 * col) % 7 for col in range(6)] for row in range(5)]
    text = "1 7 5 6\n" + "".join("".join(map(str, row)) + "\n" for row in digits)

    field = galois.GF(7)
    elements = fields.field_elements(field, 7, 1)
    matrix = decoding.decode_matrix(text, field)
    assert type(matrix) is field
    assert matrix.shape == (5, 6)
    assert all(matrix[rr, cc] == elements[digits[rr][cc]] for rr in range(5) for cc in range(6))
    assert np.array_equal(decoding.decode_matrix(text), matrix)

    ring = sympy.GF(7)
    elements = fields.field_elements(ring, 7, 1)
    matrix = decoding.decode_matrix(text, ring)
    assert matrix.tolist() == [[elements[digit] for digit in row] for row in digits]

    # extension fields and their subfields
    field = galois.GF(4)
    assert np.array_equal(decoding.decode_matrix(COMPACT_MATRIX_TEXT), field([[1, 0], [2, 1]]))
    field = galois.GF(16)
    matrix = decoding.decode_matrix(COMPACT_MATRIX_TEXT, field)
    assert np.array_equal(matrix, field([[1, 0], [0b110, 1]]))

    # line breaks and blanks carry no meaning
    assert np.array_equal(
        decoding.decode_matrix("1 2 2 3\n101\n010\n"),
        decoding.decode_matrix("1 2 2 3\n10\n1 0 1\n0\n"),
    )

    with pytest.raises(errors.UnsupportedModeError, match="fewer than 10 elements"):
        decoding.decode_matrix("1 11 1 1\n0\n")
    with pytest.raises(errors.CorruptDataError, match="Invalid character"):
        decoding.decode_matrix("1 5 1 2\n0-\n")
    with pytest.raises(errors.CorruptDataError, match=r"indices must be in \[0, 5\)"):
        decoding.decode_matrix("1 5 1 1\n7\n")


def test_free_matrix() -> None:
    """Decode matrices whose entries index field elements, separated by whitespace."""
    field = galois.GF(11)
    expected = field(FREE_MATRIX_ENTRIES)
    for mode in [3, 4, 6]:
        text = f"{mode}" + FREE_MATRIX_TEXT[1:]
        assert np.array_equal(decoding.decode_matrix(text), expected)
        assert np.array_equal(decoding.decode_matrix(text, field), expected)

    ring = sympy.GF(11)
    matrix = decoding.decode_matrix(FREE_MATRIX_TEXT, ring)
    assert matrix.tolist() == [[ring(entry) for entry in row] for row in FREE_MATRIX_ENTRIES]
    assert matrix.dtype == object
    with pytest.raises(ValueError):
        matrix[0, 0] = ring(1)

    # many entries per line
    assert np.array_equal(decoding.decode_matrix("6 11 3 3\n10 0 0 0 10\n0 9 9 1\n"), expected)

    # elements of an extension field
    assert np.array_equal(decoding.decode_matrix("6 9 1 3\n3\n4\n8\n"), galois.GF(9)([[3, 4, 8]]))


def test_reduced_matrix() -> None:
    """Decode matrices of integers that are reduced modulo the characteristic."""
    text = "5 7 2 2\n8 9\n-1 14\n"
    assert np.array_equal(decoding.decode_matrix(text), galois.GF(7)([[1, 2], [6, 0]]))
    assert np.array_equal(decoding.decode_matrix(text, galois.GF(49)), [[1, 2], [6, 0]])

    ring = sympy.GF(7)
    matrix = decoding.decode_matrix(text, ring)
    assert matrix.tolist() == [[ring(1), ring(2)], [ring(6), ring(0)]]


def test_integer_matrix() -> None:
    """Decode matrices over the integers."""
    text = "integer-matrix rows=2 cols=2\n1 -2\n30000000000000000000000 4\n"
    matrix = decoding.decode_matrix(text)
    assert matrix.tolist() == [[1, -2], [30000000000000000000000, 4]]
    assert decoding.decode(text).tolist() == matrix.tolist()

    matrix = decoding.decode_matrix(text, sympy.QQ)
    assert matrix.tolist() == [[1, -2], [30000000000000000000000, 4]]

    matrix = decoding.decode_matrix(text, galois.GF(5))
    assert np.array_equal(matrix, galois.GF(5)([[1, 3], [0, 4]]))

    with pytest.raises(errors.UnsupportedFieldError):
        decoding.decode_matrix(text, "integers")


def test_matrix_errors() -> None:
    """Invalid matrix data, or fields that do not fit the data."""
    with pytest.raises(errors.UnsupportedModeError, match="contains a permutation"):
        decoding.decode_matrix(PERMUTATION_TEXT)
    with pytest.raises(errors.UnsupportedModeError, match="Unsupported mode .* 2"):
        decoding.decode_matrix("2 7 2 2\n1\n2\n")
    with pytest.raises(errors.NotPrimePowerError, match="Size 12 is not a prime power"):
        decoding.decode_matrix("6 12 1 1\n0\n")
    with pytest.raises(errors.CorruptDataError, match="Expected 3 x 3 = 9 matrix entries"):
        decoding.decode_matrix(FREE_MATRIX_TEXT + "1\n")
    with pytest.raises(errors.CorruptDataError, match="Invalid entry"):
        decoding.decode_matrix("6 11 1 1\nten\n")

    for text, field in [
        (FREE_MATRIX_TEXT, galois.GF(7)),
        (COMPACT_MATRIX_TEXT, galois.GF(8)),
        ("6 49 1 1\n0\n", sympy.GF(7)),
    ]:
        with pytest.raises(errors.FieldMismatchError, match="inconsistent"):
            decoding.decode_matrix(text, field)

    # the field of order 121 contains the field of order 11
    matrix = decoding.decode_matrix(FREE_MATRIX_TEXT, galois.GF(121))
    assert np.array_equal(matrix, FREE_MATRIX_ENTRIES)
