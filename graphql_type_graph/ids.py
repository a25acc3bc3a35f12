"""Identifier composition for graph entities.

Every id is a sequence of ``TAG::name`` segments joined by ``::``. A nested
entity's id starts with its owner's id, so the owning type of any field,
argument or relation can be recovered from the id alone.
"""

SEP = "::"

TYPE = "TYPE"
FIELD = "FIELD"
ARGUMENT = "ARGUMENT"
INTERFACE = "INTERFACE"
DERIVED_TYPE = "DERIVED_TYPE"
POSSIBLE_TYPE = "POSSIBLE_TYPE"


def type_id(type_name: str) -> str:
    return f"{TYPE}{SEP}{type_name}"


def field_id(type_name: str, field_name: str) -> str:
    return f"{type_id(type_name)}{SEP}{FIELD}{SEP}{field_name}"


def argument_id(type_name: str, field_name: str, arg_name: str) -> str:
    return f"{field_id(type_name, field_name)}{SEP}{ARGUMENT}{SEP}{arg_name}"


def relation_id(tag: str, type_name: str, other_name: str) -> str:
    """Id of an interface, derived-type or possible-type edge owned by ``type_name``."""
    return f"{type_id(type_name)}{SEP}{tag}{SEP}{other_name}"


def extract_type_id(entity_id: str) -> str:
    """
    Get the owning type id of any entity id.

    Args:
        entity_id: Id of a type, field, argument or relation

    Returns:
        Id of the type that owns the entity (the id itself for types)

    Raises:
        ValueError: If the id is not a type-rooted id
    """
    parts = entity_id.split(SEP)
    if len(parts) < 2 or parts[0] != TYPE:
        raise ValueError(f"Not a type graph id: {entity_id!r}")
    return SEP.join(parts[:2])


def type_name_of(entity_id: str) -> str:
    """Get the owning type's name from any entity id."""
    return extract_type_id(entity_id).split(SEP)[1]
