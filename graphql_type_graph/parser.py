"""SDL parsing and schema building."""

import logging
from typing import Iterable, NamedTuple

from graphql import (
    DocumentNode,
    GraphQLSchema,
    GraphQLSyntaxError,
    Source,
    build_ast_schema,
    concat_ast,
    is_object_type,
    lexicographic_sort_schema,
    parse,
)

from .errors import SchemaBuildError, SchemaParseError

logger = logging.getLogger(__name__)


class SourceFragment(NamedTuple):
    """One SDL fragment and the file it came from."""

    filepath: str
    content: str


def load_document(sources: Iterable[tuple[str, str]]) -> DocumentNode:
    """
    Parse SDL fragments and merge them into one document.

    Args:
        sources: Ordered (filepath, content) pairs

    Returns:
        DocumentNode holding the definitions of every fragment, in order

    Raises:
        SchemaParseError: If any fragment is syntactically invalid
    """
    docs = []
    for filepath, content in sources:
        try:
            docs.append(parse(Source(content, filepath)))
        except GraphQLSyntaxError as e:
            line, column = (e.locations[0].line, e.locations[0].column) if e.locations else (0, 0)
            raise SchemaParseError(e.message, filepath, line, column) from e

    logger.debug("Parsed %d source fragment(s)", len(docs))
    return concat_ast(docs)


def build_schema(document: DocumentNode, sort_by_alphabet: bool = False) -> GraphQLSchema:
    """
    Build a type system from a merged SDL document.

    Args:
        document: Merged SDL document
        sort_by_alphabet: Reorder types, fields and values lexicographically

    Returns:
        GraphQLSchema object

    Raises:
        SchemaBuildError: If the document does not describe a usable schema
    """
    try:
        schema = build_ast_schema(document)
    except (TypeError, GraphQLSyntaxError) as e:
        # graphql-core reports SDL validation failures as TypeError
        raise SchemaBuildError(str(e)) from e

    if schema.query_type is None:
        raise SchemaBuildError("Schema has no query root type")
    if not is_object_type(schema.query_type):
        raise SchemaBuildError(f"Query root type {schema.query_type.name} is not an object type")

    if sort_by_alphabet:
        schema = lexicographic_sort_schema(schema)

    return schema
