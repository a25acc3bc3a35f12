"""Output formatting and reporting."""

from collections import Counter
from dataclasses import asdict
from typing import Any, Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from . import ids, utils
from .model import LIST, ArgumentNode, FieldNode, TypeGraph, TypeNode, TypeRef
from .source_link import LinkCreator, make_source_link
from .type_graph import TypeGraphView

console = Console()


def _ref(ref: Optional[TypeRef]) -> Optional[dict]:
    if ref is None:
        return None
    return {"id": ref.id, "type": ref.type_id}


def _wrappers(wrappers) -> Optional[list[str]]:
    return None if wrappers is None else [w.name for w in wrappers]


def _loc(location) -> Optional[dict]:
    return asdict(location) if location is not None else None


def arg_to_dict(arg: ArgumentNode) -> dict[str, Any]:
    return {
        "id": arg.id,
        "name": arg.name,
        "description": arg.description,
        "defaultValue": arg.default_value,
        "type": arg.type.type_id,
        "typeWrappers": _wrappers(arg.type_wrappers),
        "location": _loc(arg.location),
    }


def field_to_dict(fld: FieldNode) -> dict[str, Any]:
    out = {
        "id": fld.id,
        "name": fld.name,
        "description": fld.description,
        "type": fld.type.type_id,
        "typeWrappers": _wrappers(fld.type_wrappers),
        "isDeprecated": fld.is_deprecated,
        "deprecationReason": fld.deprecation_reason,
        "args": {name: arg_to_dict(arg) for name, arg in fld.args.items()},
        "location": _loc(fld.location),
    }
    if fld.relay_type is not None:
        out["relayType"] = fld.relay_type.type_id
        out["relayTypeWrappers"] = _wrappers(fld.relay_type_wrappers)
        out["relayArgs"] = {name: arg_to_dict(arg) for name, arg in fld.relay_args.items()}
    return out


def type_to_dict(node: TypeNode) -> dict[str, Any]:
    return {
        "id": node.id,
        "name": node.name,
        "kind": node.kind.name,
        "description": node.description,
        "isRelayType": node.is_relay_type,
        "location": _loc(node.location),
        "fields": {name: field_to_dict(f) for name, f in node.fields.items()},
        "interfaces": [_ref(r) for r in node.interfaces],
        "derivedTypes": [_ref(r) for r in node.derived_types],
        "possibleTypes": [_ref(r) for r in node.possible_types],
        "enumValues": [asdict(v) for v in node.enum_values],
        "inputFields": {name: arg_to_dict(a) for name, a in node.input_fields.items()},
    }


def graph_to_dict(graph: TypeGraph, view: Optional[TypeGraphView] = None) -> dict[str, Any]:
    """
    Serialize a graph to plain data, keeping store order.

    References are written as type ids, so the output is acyclic.
    """
    out = {
        "queryType": graph.query_type.type_id,
        "mutationType": graph.mutation_type.type_id if graph.mutation_type else None,
        "subscriptionType": graph.subscription_type.type_id if graph.subscription_type else None,
        "types": {type_id: type_to_dict(node) for type_id, node in graph.types.items()},
    }
    if view is not None:
        out["rootId"] = view.root_id
        out["nodeIds"] = list(view.nodes)
    return out


def emit(graph: TypeGraph, view: TypeGraphView, fmt: str) -> None:
    """
    Output a built graph.

    Args:
        graph: Linked type graph
        view: Rooted view of the graph
        fmt: Output format ("json" or "console")
    """
    if fmt == "json":
        print(utils.to_json(graph_to_dict(graph, view)))
        return

    console.print("\n[bold cyan]Type Graph Summary[/bold cyan]\n")

    table = Table(show_header=False, box=None)
    table.add_column("Metric", style="cyan")
    table.add_column("Value")

    table.add_row("Root", view.root_id)
    table.add_row("Types", str(len(graph.types)))
    kinds = Counter(node.kind.name for node in graph.types.values())
    for kind, count in sorted(kinds.items()):
        table.add_row(f"  {kind}", f"[dim]{count}[/dim]")
    table.add_row("Fields", str(sum(1 for _ in graph.iter_fields())))
    table.add_row("Relay types", str(sum(1 for n in graph.types.values() if n.is_relay_type)))
    table.add_row("Graph nodes", str(len(view.nodes)))

    console.print(table)
    console.print()


def emit_node(graph: TypeGraph, entity_id: str, link_creator: Optional[LinkCreator] = None) -> None:
    """
    Print the details of one type, or of the type owning a field/argument id.

    Raises:
        KeyError: If no type owns the id
    """
    node = graph.get(ids.extract_type_id(entity_id))
    if node is None:
        raise KeyError(f"No type named {ids.type_name_of(entity_id)} owns {entity_id}")

    data = {"id": node.id, "kind": node.kind.name}
    if node.description:
        data["description"] = node.description
    link = make_source_link(node.location, link_creator)
    if node.location is not None:
        data["source"] = link or f"{node.location.filepath}:{node.location.line}:{node.location.column}"
    print_kv(node.name, data)

    if node.fields or node.input_fields:
        table = Table(box=None)
        table.add_column("Field", style="cyan")
        table.add_column("Type", style="yellow")
        table.add_column("Args")
        for fld in node.fields.values():
            name = fld.name
            if fld.id == entity_id or entity_id.startswith(fld.id + ids.SEP):
                name += " ◀"
            table.add_row(
                f"[dim]{name}[/dim]" if fld.is_deprecated else name,
                format_type(fld.type, fld.type_wrappers),
                ", ".join(fld.args),
            )
        for arg in node.input_fields.values():
            table.add_row(arg.name, format_type(arg.type, arg.type_wrappers), "")
        console.print(table)
        console.print()


def format_type(ref: TypeRef, wrappers) -> str:
    """Render a reference in SDL notation, e.g. ``[String!]!``."""
    text = ref.target.name
    for wrapper in reversed(wrappers):
        text = f"[{text}]" if wrapper == LIST else f"{text}!"
    return escape(text)


def print_kv(title: str, data: dict) -> None:
    """
    Print key-value pairs (for schema pull, node details).

    Args:
        title: Section title
        data: Key-value data
    """
    console.print(f"\n[bold cyan]{title}[/bold cyan]\n")

    table = Table(show_header=False, box=None)
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="yellow")

    for k, v in data.items():
        table.add_row(k, str(v))

    console.print(table)
    console.print()
