"""SQL 토크나이저 모듈."""

from .keywords import KEYWORDS, STANDARD_TYPES, VENDOR_FUNCTIONS, VENDOR_TYPES, is_keyword
from .service import tokenize

__all__ = [
    "KEYWORDS",
    "STANDARD_TYPES",
    "VENDOR_FUNCTIONS",
    "VENDOR_TYPES",
    "is_keyword",
    "tokenize",
]
