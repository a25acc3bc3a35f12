"""Errors raised while turning SDL sources into a type graph."""

from typing import Optional


class TypeGraphError(Exception):
    """Base class for fatal pipeline errors."""


class SchemaParseError(TypeGraphError):
    """Source text is not valid SDL."""

    def __init__(self, message: str, filepath: Optional[str] = None, line: int = 0, column: int = 0):
        self.filepath = filepath
        self.line = line
        self.column = column
        where = f"{filepath}:{line}:{column}: " if filepath else ""
        super().__init__(f"{where}{message}")


class SchemaBuildError(TypeGraphError):
    """Parsed document does not form a usable schema (e.g. no query root)."""


class UnresolvedReferenceError(TypeGraphError):
    """A type reference names a type that is not in the graph."""

    def __init__(self, type_name: str, referrer: Optional[str] = None):
        self.type_name = type_name
        self.referrer = referrer
        msg = f"Unknown type '{type_name}'"
        if referrer:
            msg += f" referenced from '{referrer}'"
        super().__init__(msg)
