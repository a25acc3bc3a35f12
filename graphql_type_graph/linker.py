"""Id assignment and reference resolution."""

import logging
from typing import Optional

from . import ids
from .errors import UnresolvedReferenceError
from .model import ArgumentNode, FieldNode, TypeGraph, TypeNode, TypeRef
from .simplifier import SimplifiedArg, SimplifiedSchema, SimplifiedType

logger = logging.getLogger(__name__)


class _Resolver:
    """Binds bare type names to handles on one graph store."""

    def __init__(self, store: dict[str, TypeNode], names: dict[str, str]):
        self.store = store
        self.names = names

    def ref(self, type_name: str, referrer: str, ref_id: Optional[str] = None) -> TypeRef:
        type_id = self.names.get(type_name)
        if type_id is None or type_id not in self.store:
            raise UnresolvedReferenceError(type_name, referrer)
        return TypeRef(id=ref_id or type_id, type_id=type_id, store=self.store)

    def relations(self, tag: str, owner: str, names: list[str]) -> list[TypeRef]:
        return [self.ref(name, ids.type_id(owner), ids.relation_id(tag, owner, name)) for name in names]


def _new_arg(arg: SimplifiedArg, arg_id: str) -> ArgumentNode:
    return ArgumentNode(
        id=arg_id,
        name=arg.name,
        description=arg.description,
        default_value=arg.default_value,
        type=None,
        type_wrappers=list(arg.type_wrappers),
        location=arg.location,
    )


def _new_type(simple: SimplifiedType) -> TypeNode:
    """Phase one: a node with ids on everything and no references."""
    node = TypeNode(
        id=ids.type_id(simple.name),
        name=simple.name,
        kind=simple.kind,
        description=simple.description,
        location=simple.location,
        enum_values=list(simple.enum_values),
    )

    for name, fld in simple.fields.items():
        node.fields[name] = FieldNode(
            id=ids.field_id(simple.name, name),
            name=name,
            description=fld.description,
            type=None,
            type_wrappers=list(fld.type_wrappers),
            is_deprecated=fld.is_deprecated,
            deprecation_reason=fld.deprecation_reason,
            args={
                arg_name: _new_arg(arg, ids.argument_id(simple.name, name, arg_name))
                for arg_name, arg in fld.args.items()
            },
            location=fld.location,
        )

    for name, fld in simple.input_fields.items():
        node.input_fields[name] = _new_arg(fld, ids.field_id(simple.name, name))

    return node


def _resolve_type(node: TypeNode, simple: SimplifiedType, resolver: _Resolver) -> None:
    """Phase two: bind every reference site of one type."""
    for name, fld in simple.fields.items():
        out = node.fields[name]
        out.type = resolver.ref(fld.type, out.id)
        for arg_name, arg in fld.args.items():
            out_arg = out.args[arg_name]
            out_arg.type = resolver.ref(arg.type, out_arg.id)

    for name, fld in simple.input_fields.items():
        out_arg = node.input_fields[name]
        out_arg.type = resolver.ref(fld.type, out_arg.id)

    node.interfaces = resolver.relations(ids.INTERFACE, simple.name, simple.interfaces)
    node.derived_types = resolver.relations(ids.DERIVED_TYPE, simple.name, simple.derived_types)
    node.possible_types = resolver.relations(ids.POSSIBLE_TYPE, simple.name, simple.possible_types)


def link_schema(schema: SimplifiedSchema) -> TypeGraph:
    """
    Assign ids and resolve every type reference.

    Ids are assigned to all types and their members before any reference
    is resolved, so forward, self and mutual references need no ordering.

    Args:
        schema: Simplified schema with bare-name references

    Returns:
        Linked TypeGraph keyed by type id

    Raises:
        UnresolvedReferenceError: If any reference names a missing type
    """
    store: dict[str, TypeNode] = {}
    names: dict[str, str] = {}

    # Phase one: ids
    for name, simple in schema.types.items():
        node = _new_type(simple)
        store[node.id] = node
        names[name] = node.id

    # Phase two: references
    resolver = _Resolver(store, names)
    for name, simple in schema.types.items():
        _resolve_type(store[names[name]], simple, resolver)

    graph = TypeGraph(
        types=store,
        query_type=resolver.ref(schema.query_type, "schema.query"),
        mutation_type=resolver.ref(schema.mutation_type, "schema.mutation") if schema.mutation_type else None,
        subscription_type=(
            resolver.ref(schema.subscription_type, "schema.subscription") if schema.subscription_type else None
        ),
    )
    logger.debug("Linked %d types", len(store))
    return graph
