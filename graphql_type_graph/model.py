"""Linked type graph model."""

from dataclasses import dataclass, field
from typing import Iterator, Mapping, Optional

from graphql import TypeKind

# Wrapper kinds, outermost first in every ``type_wrappers`` list
LIST = TypeKind.LIST
NON_NULL = TypeKind.NON_NULL


@dataclass(frozen=True)
class SourceLocation:
    """Where a definition starts in its source file (1-based)."""

    filepath: str
    line: int
    column: int


@dataclass
class TypeRef:
    """
    Non-owning handle to a type node.

    The handle stores only ids and resolves its target through the owning
    graph's store, so cyclic and self references need no special casing.
    """

    id: str
    type_id: str
    store: Mapping[str, "TypeNode"] = field(repr=False, compare=False)

    @property
    def target(self) -> "TypeNode":
        return self.store[self.type_id]


@dataclass
class EnumValue:
    name: str
    description: Optional[str] = None
    is_deprecated: bool = False
    deprecation_reason: Optional[str] = None


@dataclass
class ArgumentNode:
    """Field argument or input-object field."""

    id: str
    name: str
    description: Optional[str]
    default_value: Optional[str]
    type: Optional[TypeRef]
    type_wrappers: list[TypeKind] = field(default_factory=list)
    location: Optional[SourceLocation] = None


@dataclass
class FieldNode:
    """Output field of an object or interface type."""

    id: str
    name: str
    description: Optional[str]
    type: Optional[TypeRef]
    type_wrappers: list[TypeKind] = field(default_factory=list)
    is_deprecated: bool = False
    deprecation_reason: Optional[str] = None
    args: dict[str, ArgumentNode] = field(default_factory=dict)
    # Set by the Relay normalizer only
    relay_type: Optional[TypeRef] = None
    relay_type_wrappers: Optional[list[TypeKind]] = None
    relay_args: dict[str, ArgumentNode] = field(default_factory=dict)
    location: Optional[SourceLocation] = None


@dataclass
class TypeNode:
    """One named type of the schema."""

    id: str
    name: str
    kind: TypeKind
    description: Optional[str] = None
    location: Optional[SourceLocation] = None
    is_relay_type: bool = False
    fields: dict[str, FieldNode] = field(default_factory=dict)
    interfaces: list[TypeRef] = field(default_factory=list)
    derived_types: list[TypeRef] = field(default_factory=list)
    possible_types: list[TypeRef] = field(default_factory=list)
    enum_values: list[EnumValue] = field(default_factory=list)
    input_fields: dict[str, ArgumentNode] = field(default_factory=dict)


@dataclass
class TypeGraph:
    """
    Root container of a linked schema.

    ``types`` is the only owner of nodes; every ``TypeRef`` in the graph
    resolves through it.
    """

    types: dict[str, TypeNode]
    query_type: TypeRef
    mutation_type: Optional[TypeRef] = None
    subscription_type: Optional[TypeRef] = None

    def get(self, entity_id: str) -> Optional[TypeNode]:
        """Look up a type node by id."""
        return self.types.get(entity_id)

    def by_name(self, type_name: str) -> Optional[TypeNode]:
        for node in self.types.values():
            if node.name == type_name:
                return node
        return None

    def iter_fields(self) -> Iterator[tuple[TypeNode, FieldNode]]:
        """Iterate over (owner, field) pairs across all types."""
        for node in self.types.values():
            for fld in node.fields.values():
                yield node, fld

    def iter_refs(self) -> Iterator[TypeRef]:
        """Iterate over every type reference held by the graph."""
        for ref in (self.query_type, self.mutation_type, self.subscription_type):
            if ref is not None:
                yield ref
        for node in self.types.values():
            yield from node.interfaces
            yield from node.derived_types
            yield from node.possible_types
            for arg in node.input_fields.values():
                yield arg.type
            for fld in node.fields.values():
                yield fld.type
                if fld.relay_type is not None:
                    yield fld.relay_type
                for arg in list(fld.args.values()) + list(fld.relay_args.values()):
                    yield arg.type

    def iter_ids(self) -> Iterator[str]:
        """Iterate over the ids of every entity owned by the graph."""
        for node in self.types.values():
            yield node.id
            for ref in node.interfaces + node.derived_types + node.possible_types:
                yield ref.id
            for arg in node.input_fields.values():
                yield arg.id
            for fld in node.fields.values():
                yield fld.id
                for arg in list(fld.args.values()) + list(fld.relay_args.values()):
                    yield arg.id
