"""Matrices over the integers and number fields, stored in JSON format

A JSON data file contains a dictionary with the keys
- "ringinfo": a list whose first entry is the kind of ring, such as "CyclotomicField",
- "polynomial": the coefficients (constant term first) of the polynomial that defines the field,
- "dimensions": the number of rows and columns of each matrix,
- "generators": a list of matrices, each given by a flat, row-major list of entries, and
- "denominator": a common denominator of all matrix entries.
An entry is either an integer or the list of coefficients of the entry in the basis z^0, z^1, ...,
z^(N-1) of the field, where z is a root of the polynomial and N is its degree.

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

import json
from collections.abc import Sequence
from typing import Any

import sympy

from meataxe.errors import CorruptDataError, UnsupportedFieldError

RING_KINDS = ("IntegerRing", "CyclotomicField", "QuadraticField", "AbelianNumberField")


def load_data(text: str) -> dict[str, Any]:
    """Load the dictionary in a JSON data file, and check that it describes a supported ring."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as error:
        raise CorruptDataError(f"Invalid JSON data: {error}")

    missing_keys = {"ringinfo", "polynomial", "dimensions", "generators", "denominator"} - set(data)
    if missing_keys:
        raise CorruptDataError(f"JSON data is missing the keys {sorted(missing_keys)}")
    if data["ringinfo"][0] not in RING_KINDS:
        raise UnsupportedFieldError(f"Unknown ring in JSON data: {data['ringinfo']}")
    return data


def defining_polynomial(text: str, symbol: sympy.Symbol | None = None) -> sympy.Poly:
    """The polynomial that defines the field of the matrices in a JSON data file."""
    data = load_data(text)
    symbol = symbol if symbol is not None else sympy.Symbol("x")
    return sympy.Poly(list(reversed(data["polynomial"])), symbol, domain=sympy.QQ)


def matrices_from_json(
    text: str, generator: sympy.Expr | None = None
) -> list[sympy.ImmutableMatrix]:
    """Decode the matrices in a JSON data file.

    Entries of the matrices are written in terms of the given generator, which should be a root of
    the defining polynomial.  If no generator is provided, matrices over the integers are returned
    as such, and for other rings the generator is the symbol z.
    """
    data = load_data(text)
    if generator is None:
        if data["ringinfo"][0] == "IntegerRing":
            generator = sympy.Integer(1)
        else:
            generator = sympy.Symbol("z")

    degree = len(data["polynomial"]) - 1
    basis = [generator**power for power in range(degree)]
    rows, cols = data["dimensions"]
    denominator = int(data["denominator"])

    matrices = []
    for entries in data["generators"]:
        if len(entries) != rows * cols:
            raise CorruptDataError(
                f"Expected {rows} x {cols} = {rows * cols} matrix entries, but found {len(entries)}"
            )
        values = [_get_entry(entry, basis, denominator) for entry in entries]
        matrices.append(sympy.ImmutableMatrix(rows, cols, values))
    return matrices


def _get_entry(entry: int | Sequence[int], basis: Sequence[sympy.Expr], denominator: int) -> Any:
    """Convert an integer or a list of coefficients into a matrix entry."""
    if isinstance(entry, int):
        return sympy.Rational(entry, denominator)
    if len(entry) != len(basis):
        raise CorruptDataError(
            f"Matrix entry {entry} does not have one coefficient per basis element {basis}"
        )
    terms = [
        sympy.Rational(coefficient, denominator) * element
        for coefficient, element in zip(entry, basis)
    ]
    return sympy.Add(*terms)
