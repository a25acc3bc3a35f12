"""Relay connection collapsing."""

import copy
import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from graphql import TypeKind

from .model import LIST, FieldNode, TypeGraph, TypeNode, TypeRef

logger = logging.getLogger(__name__)

CONNECTION_SUFFIX = "Connection"
RELAY_ARG_NAMES = frozenset({"first", "last", "before", "after"})
DEFAULT_ROOT_FIELDS = ("node", "nodes")

# Relay server plumbing types
NODE_INTERFACE = "Node"
PAGE_INFO = "PageInfo"


@dataclass
class ConnectionMatch:
    """A field that returns a Connection type."""

    owner_id: str
    field_name: str
    connection_id: str
    edge_id: str
    node_ref: TypeRef


def is_connection_name(type_name: str) -> bool:
    """True for ``<Something>Connection``; a bare ``Connection`` does not count."""
    return len(type_name) > len(CONNECTION_SUFFIX) and type_name.endswith(CONNECTION_SUFFIX)


def match_connection(owner: TypeNode, fld: FieldNode) -> Optional[ConnectionMatch]:
    """
    Check whether a field follows the Connection/Edge/Node pattern.

    Args:
        owner: Type declaring the field
        fld: Field to check

    Returns:
        ConnectionMatch, or None if the field's type is not a connection
    """
    connection = fld.type.target
    if connection.kind != TypeKind.OBJECT or not is_connection_name(connection.name):
        return None

    edges = connection.fields.get("edges")
    if edges is None:
        return None

    edge = edges.type.target
    if edge.kind != TypeKind.OBJECT or "node" not in edge.fields:
        return None

    return ConnectionMatch(
        owner_id=owner.id,
        field_name=fld.name,
        connection_id=connection.id,
        edge_id=edge.id,
        node_ref=edge.fields["node"].type,
    )


def _type_ref(ref: TypeRef, graph: TypeGraph) -> TypeRef:
    return TypeRef(id=ref.type_id, type_id=ref.type_id, store=graph.types)


def _collapse(fld: FieldNode, node_ref: TypeRef) -> None:
    fld.relay_type = fld.type
    fld.relay_type_wrappers = fld.type_wrappers
    fld.type = node_ref
    fld.type_wrappers = [LIST]
    fld.relay_args = {name: arg for name, arg in fld.args.items() if name in RELAY_ARG_NAMES}
    fld.args = {name: arg for name, arg in fld.args.items() if name not in RELAY_ARG_NAMES}


def _mark_plumbing(graph: TypeGraph) -> None:
    for name in (NODE_INTERFACE, PAGE_INFO):
        node = graph.by_name(name)
        if node is not None:
            node.is_relay_type = True

    for node in graph.types.values():
        node.interfaces = [ref for ref in node.interfaces if ref.target.name != NODE_INTERFACE]


def _suppress_root_fields(graph: TypeGraph, root_field_names: Iterable[str]) -> None:
    query = graph.query_type.target
    for name in root_field_names:
        fld = query.fields.get(name)
        if fld is not None and fld.type.target.is_relay_type:
            del query.fields[name]

    # Namespacing fields that return the root again, e.g. `relay: Query`
    for name, fld in list(query.fields.items()):
        if fld.type.type_id == query.id:
            del query.fields[name]


def normalize_relay(graph: TypeGraph, root_field_names: Iterable[str] = DEFAULT_ROOT_FIELDS) -> TypeGraph:
    """
    Collapse Relay connections into direct list edges.

    Every field returning ``XConnection { edges: [XEdge] }`` with
    ``XEdge { node: X }`` is retyped to ``[X]``; the connection type and the
    pagination arguments move to ``relay_type`` and ``relay_args``.

    Args:
        graph: Linked type graph (left unchanged)
        root_field_names: Query root fields removed when they return a relay type

    Returns:
        New TypeGraph with connections collapsed
    """
    graph = copy.deepcopy(graph)

    # Detect against the graph as linked, before anything is rewritten
    matches = [m for m in (match_connection(owner, fld) for owner, fld in graph.iter_fields()) if m]

    edge_nodes: dict[str, TypeRef] = {}
    for match in matches:
        graph.types[match.connection_id].is_relay_type = True
        graph.types[match.edge_id].is_relay_type = True
        edge_nodes[match.edge_id] = match.node_ref

    for match in matches:
        fld = graph.types[match.owner_id].fields[match.field_name]
        _collapse(fld, _type_ref(match.node_ref, graph))

    # Edge types exposed without their connection
    for _, fld in graph.iter_fields():
        node_ref = edge_nodes.get(fld.type.type_id)
        if node_ref is None:
            continue
        fld.relay_type = fld.type
        fld.relay_type_wrappers = list(fld.type_wrappers)
        fld.type = _type_ref(node_ref, graph)

    _mark_plumbing(graph)
    _suppress_root_fields(graph, root_field_names)

    logger.debug("Collapsed %d relay connection field(s)", len(matches))
    return graph
