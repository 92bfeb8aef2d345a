"""Miscellaneous number-theoretic and combinatorial methods

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

import functools
import math
from collections.abc import Iterator, Sequence
from typing import Generic, TypeVar

import sympy

from meataxe.errors import NotPrimeError, NotPrimePowerError

Item = TypeVar("Item")


def multiplicative_order(value: int, modulus: int) -> int:
    """Multiplicative order of an integer modulo another, or 0 if the two are not coprime."""
    if math.gcd(value, modulus) != 1:
        return 0
    order = 1
    power = value % modulus
    while power != 1 % modulus:
        power = power * value % modulus
        order += 1
    return order


@functools.cache
def smallest_primitive_root(prime: int) -> int:
    """Smallest integer whose multiplicative order modulo the given prime is prime - 1.

    The primes that occur in MeatAxe data files are small, so we simply try all candidates.
    """
    if prime == 2:
        return 1
    for root in range(2, prime):
        if multiplicative_order(root, prime) == prime - 1:
            return root
    raise NotPrimeError(f"{prime} is not a prime")


def prime_power(size: int) -> tuple[int, int]:
    """Factor an integer as (prime, exponent), or fail if it is not a prime power."""
    factors = sympy.factorint(size) if size > 1 else {}
    if len(factors) != 1:
        raise NotPrimePowerError(f"Size {size} is not a prime power")
    ((prime, exponent),) = factors.items()
    return int(prime), int(exponent)


################################################################################
# lexicographic enumeration of tuples


def next_tuple(state: tuple[int, ...], base: int) -> tuple[tuple[int, ...], bool]:
    """Advance a tuple of digits in {0, ..., base - 1} to its lexicographic successor.

    Returns the successor and a flag that is True if the given state was the last one, in which case
    the returned "successor" wraps around to all zeros.
    """
    digits = list(state)
    for position in reversed(range(len(digits))):
        if digits[position] < base - 1:
            digits[position] += 1
            return tuple(digits), False
        digits[position] = 0
    return tuple(digits), True


class CartesianTuples(Generic[Item]):
    """All tuples of a fixed length with entries in a sequence, in lexicographic order.

    The order is induced by the order of the source sequence, and the right-most entry of a tuple
    varies fastest.  Every call to iter() starts over from the first tuple.
    """

    def __init__(self, source: Sequence[Item], length: int) -> None:
        if length < 0:
            raise ValueError(f"Tuple length must be nonnegative (provided length: {length})")
        self.source = tuple(source)
        self.length = length

    def __len__(self) -> int:
        return len(self.source) ** self.length

    def __iter__(self) -> Iterator[tuple[Item, ...]]:
        if not self.source and self.length:
            return
        state = (0,) * self.length
        exhausted = False
        while not exhausted:
            yield tuple(self.source[index] for index in state)
            state, exhausted = next_tuple(state, len(self.source))
