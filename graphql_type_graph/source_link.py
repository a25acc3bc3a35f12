"""Source locations and hyperlinks for schema definitions."""

from typing import Callable, Optional

from graphql import Node, Token, TokenKind

from .model import SourceLocation

LinkCreator = Callable[[str, int, int], str]


def _first_code_token(ast_node: Node) -> Optional[Token]:
    loc = ast_node.loc
    if loc is None:
        return None

    description = getattr(ast_node, "description", None)
    if description is None or description.loc is None:
        return loc.start_token

    # Skip the description string and any comments after it
    token = description.loc.end_token.next
    while token is not None and token.kind == TokenKind.COMMENT:
        token = token.next
    return token or loc.start_token


def definition_location(ast_node: Optional[Node]) -> Optional[SourceLocation]:
    """
    Get the position of a definition's first code token.

    Args:
        ast_node: Type, field, argument or input value definition node

    Returns:
        SourceLocation, or None for nodes without location data
        (e.g. builtin scalars that were never declared)
    """
    if ast_node is None:
        return None

    token = _first_code_token(ast_node)
    if token is None:
        return None

    return SourceLocation(filepath=ast_node.loc.source.name, line=token.line, column=token.column)


def template_link_creator(template: str) -> LinkCreator:
    """
    Build a link creator from a format template.

    The template may use ``{filepath}``, ``{line}`` and ``{column}``, e.g.
    ``vscode://file/{filepath}:{line}:{column}``.
    """

    def create(filepath: str, line: int, column: int) -> str:
        return template.format(filepath=filepath, line=line, column=column)

    return create


def make_source_link(location: Optional[SourceLocation], creator: Optional[LinkCreator]) -> Optional[str]:
    """Create a hyperlink for a location, or None when either is missing."""
    if location is None or creator is None:
        return None
    return creator(location.filepath, location.line, location.column)
