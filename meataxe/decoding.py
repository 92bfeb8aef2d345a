"""Decode permutations and matrices from MeatAxe text format strings

The body of a MeatAxe text format file is interpreted according to the mode in its header:
- mode 12: one image per line, defining a permutation,
- mode 1: one decimal digit per matrix entry, indexing the elements of a field with < 10 elements,
- mode 5: integers to be reduced modulo the characteristic of a field,
- modes 3, 4, and 6: integers indexing the elements of a field, and
- mode 8: integers, for matrices over the integers.
Field elements are indexed by their position in the list returned by meataxe.fields.field_elements.

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

import warnings
from collections.abc import Sequence
from typing import Any, Union

import galois
import numpy as np
import numpy.typing as npt
import sympy.combinatorics as comb
from sympy.polys.domains import Domain

from meataxe import fields
from meataxe.errors import (
    CorruptDataError,
    CorruptHeaderError,
    DegreeTooSmallError,
    FieldMismatchError,
    UnsupportedModeError,
)
from meataxe.headers import COMPACT_FIELD_BOUND, COMPACT_MODE, INTEGER_MODE, Header, parse_header
from meataxe.math import prime_power

Matrix = Union[galois.FieldArray, npt.NDArray[np.object_]]

INDEX_MODES = (3, 4, 6)
REDUCTION_MODE = 5


def split_text(text: str) -> tuple[Header, list[str]]:
    """Split the contents of a MeatAxe text format file into its header and body lines.

    Blank lines carry no information, and are dropped.
    """
    lines = [line for line in text.splitlines() if line.strip()]
    if not lines:
        raise CorruptHeaderError("MeatAxe file is empty")
    return parse_header(lines[0]), lines[1:]


def decode(text: str, field: object = None, degree: int = 0) -> comb.Permutation | Matrix:
    """Decode the permutation or matrix in a MeatAxe text format string."""
    header, lines = split_text(text)
    if header.is_permutation:
        return _decode_permutation(header, lines, degree)
    return _decode_matrix(header, lines, field)


def decode_permutation(text: str, degree: int = 0) -> comb.Permutation:
    """Decode the permutation in a MeatAxe text format string.

    If a degree is provided, the permutation is extended by fixed points (or stripped of trailing
    fixed points) to act on that many points.
    """
    header, lines = split_text(text)
    return _decode_permutation(header, lines, degree)


def decode_matrix(text: str, field: object = None) -> Matrix:
    """Decode the matrix in a MeatAxe text format string.

    Matrices over finite fields are returned as galois.FieldArray objects, unless a SymPy residue
    class ring is provided as the field.  If no field is provided, we construct the field of the
    size given by the header.  Matrices over residue class rings or over the integers are returned
    as (read-only) numpy arrays of objects.  Integer matrices may be mapped into a ring by providing
    a galois field or a SymPy domain.
    """
    header, lines = split_text(text)
    return _decode_matrix(header, lines, field)


################################################################################
# permutations


def _decode_permutation(header: Header, lines: Sequence[str], degree: int) -> comb.Permutation:
    """Decode the body of a MeatAxe text format file for a permutation."""
    if not header.is_permutation:
        raise UnsupportedModeError(
            f"MeatAxe data with mode {header.mode} does not contain a permutation"
        )
    if header.size != 1:
        raise CorruptHeaderError(
            f"MeatAxe data contains {header.size} permutations, but only one is supported"
        )
    if header.cols != 1:
        warnings.warn(f"Ignoring column number {header.cols} in the header of a permutation")

    try:
        images = [int(line) for line in lines]
    except ValueError:
        raise CorruptDataError(f"Permutation images must be integers: {lines}")
    if sorted(images) != list(range(1, header.rows + 1)):
        raise CorruptDataError(
            f"Images do not define a permutation of degree {header.rows}: {images}"
        )

    if degree:
        if degree < (moved := largest_moved_point(images)):
            raise DegreeTooSmallError(
                f"The largest moved point of the permutation is {moved}, so degree {degree} is"
                " not valid"
            )
        images = images[:degree] + list(range(len(images) + 1, degree + 1))

    return comb.Permutation([image - 1 for image in images], size=len(images))


def largest_moved_point(images: Sequence[int]) -> int:
    """Largest point moved by a permutation of 1, 2, ..., n, given by its images, or 0 if none."""
    return max((point for point, image in enumerate(images, 1) if point != image), default=0)


################################################################################
# matrices


def _decode_matrix(header: Header, lines: Sequence[str], field: object) -> Matrix:
    """Decode the body of a MeatAxe text format file for a matrix."""
    if header.is_permutation:
        raise UnsupportedModeError("MeatAxe data with mode 12 contains a permutation, not a matrix")
    shape = (header.rows, header.cols)

    if header.mode == INTEGER_MODE:
        values = _parse_integers(lines)
        _check_num_entries(header, len(values))
        return _integers_to_matrix(values, shape, field)

    if header.mode not in (COMPACT_MODE, REDUCTION_MODE, *INDEX_MODES):
        raise UnsupportedModeError(f"Unsupported mode of MeatAxe data: {header.mode}")

    assert header.size is not None
    characteristic, degree = prime_power(header.size)
    if field is None:
        field = fields.default_field(header.size)
    else:
        _check_field(field, header.size, characteristic, degree)

    if header.mode == REDUCTION_MODE:
        values = _parse_integers(lines)
        _check_num_entries(header, len(values))
        entries = fields.lift_integers(field, values)
        return _to_matrix(field, entries, shape)

    if header.mode == COMPACT_MODE:
        if header.size >= COMPACT_FIELD_BOUND:
            raise UnsupportedModeError(
                f"Mode 1 requires a field with fewer than {COMPACT_FIELD_BOUND} elements"
                f" (field size: {header.size})"
            )
        codes = _parse_digits(lines)
    else:
        codes = _parse_integers(lines)

    _check_num_entries(header, len(codes))
    if any(not 0 <= code < header.size for code in codes):
        raise CorruptDataError(f"Field element indices must be in [0, {header.size})")

    elements = fields.field_elements(field, characteristic, degree)
    if isinstance(elements, galois.FieldArray):
        return elements[np.array(codes, dtype=int)].reshape(shape)
    return _to_matrix(field, [elements[code] for code in codes], shape)


def _check_field(field: object, size: int, characteristic: int, degree: int) -> None:
    """Check that a field can hold the entries of a matrix over the field of the given size."""
    order = fields.field_order(field)
    if fields.get_field_kind(field) is fields.FieldKind.RESIDUE_RING:
        consistent = order == size
    else:
        consistent = (
            fields.field_characteristic(field) == characteristic
            and prime_power(order)[1] % degree == 0
        )
    if not consistent:
        raise FieldMismatchError(
            f"Field of size {order} is inconsistent with MeatAxe data over the field of size {size}"
        )


def _check_num_entries(header: Header, num_entries: int) -> None:
    if num_entries != header.rows * header.cols:
        raise CorruptDataError(
            f"Expected {header.rows} x {header.cols} = {header.rows * header.cols} matrix entries,"
            f" but found {num_entries}"
        )


def _parse_integers(lines: Sequence[str]) -> list[int]:
    """Parse whitespace-separated integers."""
    try:
        return [int(token) for line in lines for token in line.split()]
    except ValueError as error:
        raise CorruptDataError(f"Invalid entry in MeatAxe data: {error}")


def _parse_digits(lines: Sequence[str]) -> list[int]:
    """Parse a stream of decimal digits, in which line breaks and blanks carry no meaning."""
    codes = []
    for line in lines:
        for char in line:
            if char.isspace():
                continue
            if char not in "0123456789":
                raise CorruptDataError(f"Invalid character in MeatAxe data: {char!r}")
            codes.append(int(char))
    return codes


def _to_matrix(field: Any, entries: Sequence[Any], shape: tuple[int, int]) -> Matrix:
    """Arrange field elements into a matrix."""
    if isinstance(entries, galois.FieldArray):
        return entries.reshape(shape)
    return _object_matrix(entries, shape)


def _integers_to_matrix(values: Sequence[int], shape: tuple[int, int], ring: object) -> Matrix:
    """Arrange integers into a matrix over the integers, or over the given ring."""
    if ring is None:
        return _object_matrix(values, shape)
    if isinstance(ring, Domain):
        return _object_matrix([ring.convert(value) for value in values], shape)
    return _to_matrix(ring, fields.lift_integers(ring, values), shape)


def _object_matrix(entries: Sequence[Any], shape: tuple[int, int]) -> npt.NDArray[np.object_]:
    """Build a read-only numpy array of objects with the given shape."""
    matrix = np.empty(len(entries), dtype=object)
    matrix[:] = list(entries)
    matrix = matrix.reshape(shape)
    matrix.setflags(write=False)
    return matrix
