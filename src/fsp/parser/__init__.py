"""FSP Parser module - Grammar and Lark parser for clause expressions."""

from fsp.parser.parser import FSPParser, FSPTransformer, parse

__all__ = [
    "FSPParser",
    "FSPTransformer",
    "parse",
]
