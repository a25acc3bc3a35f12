"""Deprecated field removal."""

import copy
import logging

from .model import TypeGraph

logger = logging.getLogger(__name__)


def remove_deprecated(graph: TypeGraph) -> TypeGraph:
    """
    Drop deprecated fields from every type.

    Types left without fields stay in the graph: non-deprecated fields
    elsewhere may still point at them.

    Args:
        graph: Linked type graph (left unchanged)

    Returns:
        New TypeGraph without deprecated fields
    """
    graph = copy.deepcopy(graph)
    removed = 0
    for node in graph.types.values():
        kept = {name: fld for name, fld in node.fields.items() if not fld.is_deprecated}
        removed += len(node.fields) - len(kept)
        node.fields = kept

    logger.debug("Removed %d deprecated field(s)", removed)
    return graph
