"""Max mini app support: launch parameter verification."""

from .verifier import MiniApp, build_check_string, parse_query

__all__ = [
    "MiniApp",
    "build_check_string",
    "parse_query",
]
