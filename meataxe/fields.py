"""Canonical enumeration of the elements of finite fields

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

import enum
from collections.abc import Hashable, Iterable, Sequence
from typing import Any, Union

import galois
import numpy as np
from sympy.polys.domains import FiniteField

import meataxe.cache
from meataxe.errors import FieldSizeMismatchError, UnsupportedFieldError
from meataxe.math import CartesianTuples, prime_power, smallest_primitive_root

Field = Union[type[galois.FieldArray], FiniteField]
ElementList = Union[galois.FieldArray, tuple[Any, ...]]

ELEMENT_LISTS = meataxe.cache.IdentityCache()


class FieldKind(enum.Enum):
    """The kinds of finite fields (and rings) whose elements we know how to enumerate.

    RESIDUE_RING: a SymPy residue class ring Z/nZ, which has no notion of a generator.
    PRIME_FIELD: a galois field of prime order, whose generator we choose ourselves.
    EXTENSION_FIELD: a galois field of prime power order, defined by a Conway polynomial, whose
        canonical generator is the residue class of the indeterminate.
    """

    RESIDUE_RING = "residue class ring"
    PRIME_FIELD = "prime field"
    EXTENSION_FIELD = "extension field"


def get_field_kind(field: object) -> FieldKind:
    """Identify the kind of a finite field."""
    if isinstance(field, FiniteField):
        return FieldKind.RESIDUE_RING
    if isinstance(field, type) and issubclass(field, galois.FieldArray):
        return FieldKind.PRIME_FIELD if field.degree == 1 else FieldKind.EXTENSION_FIELD
    raise UnsupportedFieldError(
        f"Unsupported field: {field}\n"
        "Fields must be SymPy residue class rings (sympy.GF) or galois fields (galois.GF)"
    )


def field_order(field: Field) -> int:
    """Number of elements in a finite field."""
    if get_field_kind(field) is FieldKind.RESIDUE_RING:
        return int(field.mod)
    return int(field.order)


def field_characteristic(field: Field) -> int:
    """Characteristic of a finite field (or the modulus of a residue class ring)."""
    if get_field_kind(field) is FieldKind.RESIDUE_RING:
        return int(field.mod)
    return int(field.characteristic)


def default_field(size: int) -> type[galois.FieldArray]:
    """Construct the field of a given order.

    By default, galois defines extension fields by Conway polynomials, which is what the MeatAxe
    assumes when it numbers field elements.
    """
    prime_power(size)
    return galois.GF(size)


def get_generator(field: Field, characteristic: int, degree: int) -> Any:
    """Get the element z of a field whose powers define the canonical ordering of a subfield.

    Raises FieldSizeMismatchError if the field does not contain a subfield of order
    characteristic**degree.
    """
    size = characteristic**degree
    order = field_order(field)
    kind = get_field_kind(field)

    if kind is FieldKind.RESIDUE_RING:
        if order != size:
            raise FieldSizeMismatchError(
                f"Cannot regard a matrix over the field with {size} elements as a matrix over the"
                f" residue class ring with {order} elements"
            )
        return field(smallest_primitive_root(order))

    if (
        degree < 1
        or field.characteristic != characteristic
        or order % size != 0
        or field.degree % degree != 0
    ):
        raise FieldSizeMismatchError(
            f"Field of size {order} does not contain a subfield of size {size}"
        )

    if kind is FieldKind.PRIME_FIELD:
        return field(smallest_primitive_root(order))

    # the indeterminate x has the integer representation p in galois
    root = field(field.characteristic)
    if order != size:
        # generator of the subfield
        root = root ** ((order - 1) // (size - 1))
    return root


def field_elements(field: Field, characteristic: int, degree: int) -> ElementList:
    """List the elements of the subfield of order q = p**d in a finite field F.

    Element number i = sum_j c_j p**j, with c_j in {0, 1, ..., p-1}, is the field element
    sum_j c_j z**j, where z is the generator returned by get_generator.  For fields defined by a
    Conway polynomial, this is the ordering of field elements used by the C-MeatAxe.

    Element lists are computed once per (field, q) and cached for the lifetime of the process.  For
    galois fields, the list is a read-only FieldArray.
    """
    size = characteristic**degree
    return ELEMENT_LISTS.get_or_compute(
        field, size, lambda: _build_element_list(field, characteristic, degree)
    )


def _build_element_list(field: Field, characteristic: int, degree: int) -> ElementList:
    """Compute the list of elements returned by field_elements."""
    root = get_generator(field, characteristic, degree)

    powers = [field(1)]
    for _ in range(degree - 1):
        powers.append(powers[-1] * root)
    powers.reverse()

    elements = []
    for digits in CartesianTuples(range(characteristic), degree):
        element = field(0)
        for digit, power in zip(digits, powers):
            element = element + field(digit) * power
        elements.append(element)

    if get_field_kind(field) is FieldKind.RESIDUE_RING:
        return tuple(elements)
    array = field([int(element) for element in elements])
    array.setflags(write=False)
    return array


def element_key(field: Field, element: Any) -> Hashable:
    """Hashable stand-in for a field element, used for reverse lookups in element lists."""
    if get_field_kind(field) is FieldKind.RESIDUE_RING:
        # plain integers compare equal to ring elements, but hash differently
        if isinstance(element, (int, np.integer)):
            return field(int(element))
        return element
    return int(element)


def element_codes(field: Field, characteristic: int, degree: int) -> dict[Hashable, int]:
    """Map (keys of) field elements to their positions in the canonical element list."""
    return {
        element_key(field, element): code
        for code, element in enumerate(field_elements(field, characteristic, degree))
    }


def lift_integers(field: Field, values: Iterable[int]) -> Sequence[Any] | galois.FieldArray:
    """Map integers into a field by multiplying them with the unit element."""
    if get_field_kind(field) is FieldKind.RESIDUE_RING:
        return [field(value) for value in values]
    characteristic = int(field.characteristic)
    return field(np.array([value % characteristic for value in values], dtype=int))
