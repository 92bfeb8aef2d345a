"""Errors raised when reading or writing MeatAxe text format data

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


class MeatAxeError(ValueError):
    """Base class for all errors raised by this package."""


class CorruptHeaderError(MeatAxeError):
    """A header line could not be interpreted."""


class UnsupportedHeaderError(MeatAxeError):
    """A textual header (or a requested header format) is not one we know."""


class UnsupportedModeError(MeatAxeError):
    """The mode of a file is not supported, or does not fit the requested object."""


class CorruptDataError(MeatAxeError):
    """The body of a file does not match its header."""


class NotPrimeError(MeatAxeError):
    """An integer that should be prime is not."""


class NotPrimePowerError(MeatAxeError):
    """A field size that should be a prime power is not."""


class FieldMismatchError(MeatAxeError):
    """A user-provided field cannot hold the data of a file."""


class FieldSizeMismatchError(MeatAxeError):
    """A field does not contain a subfield of the requested size."""


class UnsupportedFieldError(MeatAxeError):
    """A field or ring of a kind that we cannot enumerate."""


class DegreeTooSmallError(MeatAxeError):
    """A permutation degree is smaller than the largest moved point."""


class EmptyMatrixError(MeatAxeError):
    """MeatAxe matrices must have at least one row and one column."""


class SourceUnavailableError(MeatAxeError):
    """The text of a file could not be retrieved."""
