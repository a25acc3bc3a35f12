"""Flatten a graphql-core schema into plain, name-referencing records."""

import logging
from dataclasses import dataclass, field
from typing import Optional, Union

from graphql import (
    GraphQLArgument,
    GraphQLField,
    GraphQLInputField,
    GraphQLNamedType,
    GraphQLSchema,
    GraphQLType,
    TypeKind,
    Undefined,
    ast_from_value,
    is_enum_type,
    is_input_object_type,
    is_interface_type,
    is_introspection_type,
    is_list_type,
    is_non_null_type,
    is_object_type,
    is_scalar_type,
    is_union_type,
    print_ast,
)

from .model import EnumValue, SourceLocation
from .source_link import definition_location

logger = logging.getLogger(__name__)

# Always scalar, whether or not the document declares them
BUILTIN_SCALARS = frozenset({"ID", "String", "Int", "Float", "Boolean"})


@dataclass
class SimplifiedArg:
    name: str
    type: str
    type_wrappers: list[TypeKind] = field(default_factory=list)
    description: Optional[str] = None
    default_value: Optional[str] = None
    location: Optional[SourceLocation] = None


@dataclass
class SimplifiedField:
    name: str
    type: str
    type_wrappers: list[TypeKind] = field(default_factory=list)
    description: Optional[str] = None
    is_deprecated: bool = False
    deprecation_reason: Optional[str] = None
    args: dict[str, SimplifiedArg] = field(default_factory=dict)
    location: Optional[SourceLocation] = None


@dataclass
class SimplifiedType:
    name: str
    kind: TypeKind
    description: Optional[str] = None
    location: Optional[SourceLocation] = None
    fields: dict[str, SimplifiedField] = field(default_factory=dict)
    interfaces: list[str] = field(default_factory=list)
    derived_types: list[str] = field(default_factory=list)
    possible_types: list[str] = field(default_factory=list)
    enum_values: list[EnumValue] = field(default_factory=list)
    input_fields: dict[str, SimplifiedArg] = field(default_factory=dict)


@dataclass
class SimplifiedSchema:
    """Type records keyed by name; every cross reference is still a name."""

    types: dict[str, SimplifiedType]
    query_type: str
    mutation_type: Optional[str] = None
    subscription_type: Optional[str] = None


def classify(named_type: GraphQLNamedType) -> TypeKind:
    """
    Determine the kind of a named type.

    Args:
        named_type: Any named graphql-core type

    Returns:
        TypeKind of the type

    Raises:
        ValueError: If the type is of an unknown kind
    """
    if named_type.name in BUILTIN_SCALARS or is_scalar_type(named_type):
        return TypeKind.SCALAR
    if is_object_type(named_type):
        return TypeKind.OBJECT
    if is_interface_type(named_type):
        return TypeKind.INTERFACE
    if is_union_type(named_type):
        return TypeKind.UNION
    if is_enum_type(named_type):
        return TypeKind.ENUM
    if is_input_object_type(named_type):
        return TypeKind.INPUT_OBJECT
    raise ValueError(f"Cannot classify type {named_type!r}")


def unwrap_type(graphql_type: GraphQLType) -> tuple[list[TypeKind], str]:
    """
    Split a wrapped type into its wrapper chain and bare name.

    Args:
        graphql_type: Possibly wrapped type, e.g. ``[String!]!``

    Returns:
        (wrappers outermost first, named type name)
    """
    wrappers = []
    while is_non_null_type(graphql_type) or is_list_type(graphql_type):
        wrappers.append(TypeKind.NON_NULL if is_non_null_type(graphql_type) else TypeKind.LIST)
        graphql_type = graphql_type.of_type
    return wrappers, graphql_type.name


def _default_value(arg: Union[GraphQLArgument, GraphQLInputField]) -> Optional[str]:
    # Prefer the literal as written; schemas built from introspection have no AST
    if arg.ast_node is not None and arg.ast_node.default_value is not None:
        return print_ast(arg.ast_node.default_value)
    if arg.default_value is Undefined:
        return None
    value_ast = ast_from_value(arg.default_value, arg.type)
    return print_ast(value_ast) if value_ast is not None else None


def convert_arg(name: str, arg: Union[GraphQLArgument, GraphQLInputField]) -> SimplifiedArg:
    """Convert a GraphQLArgument or GraphQLInputField."""
    wrappers, type_name = unwrap_type(arg.type)
    return SimplifiedArg(
        name=name,
        type=type_name,
        type_wrappers=wrappers,
        description=arg.description,
        default_value=_default_value(arg),
        location=definition_location(arg.ast_node),
    )


def convert_field(name: str, fld: GraphQLField) -> SimplifiedField:
    wrappers, type_name = unwrap_type(fld.type)
    is_deprecated = fld.deprecation_reason is not None
    return SimplifiedField(
        name=name,
        type=type_name,
        type_wrappers=wrappers,
        description=fld.description,
        is_deprecated=is_deprecated,
        deprecation_reason=fld.deprecation_reason if is_deprecated else None,
        args={arg_name: convert_arg(arg_name, arg) for arg_name, arg in fld.args.items()},
        location=definition_location(fld.ast_node),
    )


def _unique_names(types) -> list[str]:
    return list(dict.fromkeys(t.name for t in types))


def convert_type(schema: GraphQLSchema, named_type: GraphQLNamedType) -> SimplifiedType:
    kind = classify(named_type)
    out = SimplifiedType(
        name=named_type.name,
        kind=kind,
        description=named_type.description,
        location=definition_location(named_type.ast_node),
    )

    if kind == TypeKind.OBJECT or kind == TypeKind.INTERFACE:
        out.interfaces = _unique_names(named_type.interfaces)
        out.fields = {name: convert_field(name, fld) for name, fld in named_type.fields.items()}
    if kind == TypeKind.INTERFACE:
        implementations = schema.get_implementations(named_type)
        out.derived_types = _unique_names(implementations.objects + implementations.interfaces)
    elif kind == TypeKind.UNION:
        out.possible_types = _unique_names(named_type.types)
    elif kind == TypeKind.ENUM:
        out.enum_values = [
            EnumValue(
                name=value_name,
                description=value.description,
                is_deprecated=value.deprecation_reason is not None,
                deprecation_reason=value.deprecation_reason,
            )
            for value_name, value in named_type.values.items()
        ]
    elif kind == TypeKind.INPUT_OBJECT:
        out.input_fields = {name: convert_arg(name, fld) for name, fld in named_type.fields.items()}

    return out


def simplify_schema(schema: GraphQLSchema) -> SimplifiedSchema:
    """
    Convert every named type into a SimplifiedType.

    Introspection types are skipped. Type order follows the schema's type
    map, which is declaration order unless the schema was sorted.

    Args:
        schema: Built GraphQL schema

    Returns:
        SimplifiedSchema with bare-name cross references
    """
    types = {
        name: convert_type(schema, named_type)
        for name, named_type in schema.type_map.items()
        if not is_introspection_type(named_type)
    }
    logger.debug("Simplified %d types", len(types))

    return SimplifiedSchema(
        types=types,
        query_type=schema.query_type.name,
        mutation_type=schema.mutation_type.name if schema.mutation_type else None,
        subscription_type=schema.subscription_type.name if schema.subscription_type else None,
    )
