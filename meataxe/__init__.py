import importlib.metadata

from . import access, cache, charzero, decoding, encoding, errors, external, fields, headers, math
from .decoding import decode, decode_matrix, decode_permutation
from .encoding import encode, encode_matrix, encode_permutation
from .fields import field_elements
from .headers import Header, format_header, parse_header

__version__ = importlib.metadata.version("meataxe")

__all__ = [
    "__version__",
    "access",
    "cache",
    "charzero",
    "decode",
    "decode_matrix",
    "decode_permutation",
    "decoding",
    "encode",
    "encode_matrix",
    "encode_permutation",
    "encoding",
    "errors",
    "external",
    "field_elements",
    "fields",
    "format_header",
    "Header",
    "headers",
    "math",
    "parse_header",
]
