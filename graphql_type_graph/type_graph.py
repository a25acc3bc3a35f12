"""Rooted view of a type graph for rendering."""

from dataclasses import dataclass
from typing import Optional

from graphql import TypeKind

from . import ids
from .errors import UnresolvedReferenceError
from .model import TypeGraph, TypeNode

# Kinds drawn as boxes; the rest show up only as field types
_NON_NODE_KINDS = (TypeKind.SCALAR, TypeKind.ENUM, TypeKind.INPUT_OBJECT)


@dataclass
class TypeGraphView:
    """Types reachable from the root, keyed by id."""

    root_id: str
    nodes: dict[str, TypeNode]


def is_graph_node(node: TypeNode) -> bool:
    return node.kind not in _NON_NODE_KINDS and not node.is_relay_type


def edge_targets(node: TypeNode) -> list[TypeNode]:
    """Types a node points to: field types, then derived and possible types."""
    targets = [fld.type.target for fld in node.fields.values()]
    targets += [ref.target for ref in node.derived_types]
    targets += [ref.target for ref in node.possible_types]
    return [t for t in targets if is_graph_node(t)]


def get_type_graph(graph: TypeGraph, root_type: Optional[str] = None, hide_root: bool = False) -> TypeGraphView:
    """
    Collect the types reachable from the root type.

    Args:
        graph: Linked type graph
        root_type: Name of the root type; the query type when None
        hide_root: Leave the root node out of ``nodes`` (``root_id`` is kept)

    Returns:
        TypeGraphView in breadth-first order

    Raises:
        UnresolvedReferenceError: If ``root_type`` names no type
    """
    root_id = ids.type_id(root_type) if root_type else graph.query_type.type_id
    if root_id not in graph.types:
        raise UnresolvedReferenceError(root_type, "display.root_type")

    nodes: dict[str, TypeNode] = {}
    queue = [graph.types[root_id]]
    while queue:
        node = queue.pop(0)
        if node.id in nodes:
            continue
        nodes[node.id] = node
        queue.extend(t for t in edge_targets(node) if t.id not in nodes)

    if hide_root:
        del nodes[root_id]

    return TypeGraphView(root_id=root_id, nodes=nodes)
