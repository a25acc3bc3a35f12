"""SDL sources to linked type graph."""

import logging
from typing import Iterable, Optional

from . import deprecation, linker, parser, relay, simplifier
from .config import DisplayOptions
from .model import TypeGraph

logger = logging.getLogger(__name__)


def get_schema(
    sources: Optional[Iterable[tuple[str, str]]],
    options: Optional[DisplayOptions] = None,
) -> Optional[TypeGraph]:
    """
    Run the full pipeline over SDL sources.

    Args:
        sources: Ordered (filepath, content) pairs
        options: Display options; defaults when None

    Returns:
        Linked TypeGraph, or None when there are no sources

    Raises:
        SchemaParseError: On malformed SDL
        SchemaBuildError: On a structurally unusable schema
        UnresolvedReferenceError: On a reference that cannot be linked
    """
    sources = list(sources or [])
    if not sources:
        return None
    options = options or DisplayOptions()

    document = parser.load_document(sources)
    schema = parser.build_schema(document, sort_by_alphabet=options.sort_by_alphabet)
    graph = linker.link_schema(simplifier.simplify_schema(schema))

    if options.skip_relay:
        graph = relay.normalize_relay(graph, root_field_names=options.relay_root_fields)
    if options.skip_deprecated:
        graph = deprecation.remove_deprecated(graph)

    logger.info("Built type graph with %d types from %d source(s)", len(graph.types), len(sources))
    return graph
