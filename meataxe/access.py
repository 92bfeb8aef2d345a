"""Read permutations and matrices from data files

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

import sympy
import sympy.combinatorics as comb

from meataxe import charzero, decoding
from meataxe.external import sources


def permutation_from_file(filename: str, degree: int = 0) -> comb.Permutation:
    """Read the permutation in a MeatAxe text format file, given by its path or URL."""
    return decoding.decode_permutation(sources.get_text(filename), degree)


def matrix_from_file(filename: str, field: object = None) -> decoding.Matrix:
    """Read the matrix in a MeatAxe text format file, given by its path or URL."""
    return decoding.decode_matrix(sources.get_text(filename), field)


def matrices_from_json_file(
    filename: str, generator: sympy.Expr | None = None
) -> list[sympy.ImmutableMatrix]:
    """Read the matrices in a JSON data file, given by its path or URL."""
    return charzero.matrices_from_json(sources.get_text(filename), generator)
