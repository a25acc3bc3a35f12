"""CLI for gql-graph."""

import logging
import sys
from dataclasses import dataclass, field
from typing import Literal, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from . import config, pipeline, schema_loader, utils
from .errors import TypeGraphError
from .model import TypeGraph
from .parser import SourceFragment
from .report import emit, emit_node, graph_to_dict, print_kv
from .source_link import template_link_creator
from .type_graph import TypeGraphView, get_type_graph

app = typer.Typer(help="GraphQL schema to type graph")
schema_app = typer.Typer(help="Schema operations")
config_app = typer.Typer(help="Configuration")
app.add_typer(schema_app, name="schema")
app.add_typer(config_app, name="config")

console = Console(stderr=True)


@dataclass
class BuildOptions:
    """Options for build command."""

    paths: list[str] = field(default_factory=list)
    url: Optional[str] = None
    token: Optional[str] = None
    output: Literal["console", "json"] = "console"
    out: Optional[str] = None
    sort_by_alphabet: Optional[bool] = None
    skip_relay: Optional[bool] = None
    skip_deprecated: Optional[bool] = None
    root_type: Optional[str] = None
    hide_root: Optional[bool] = None


def setup_logging(verbose: bool) -> None:
    """Route library logging through rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def fail(e: Exception) -> None:
    console.print(f"[red]Error: {e}[/red]")
    if "--debug" in sys.argv:
        raise e
    raise typer.Exit(1)


@schema_app.command("pull")
def schema_pull(
    url: Optional[str] = typer.Option(None, help="GraphQL endpoint URL"),
    token: Optional[str] = typer.Option(None, help="Bearer token"),
    out: Optional[str] = typer.Option(None, help="Write SDL to this file"),
):
    """Fetch and cache a remote schema as SDL."""
    try:
        cfg = config.load()
        full_url = url or cfg.default_url

        if not full_url:
            console.print("[red]Error: No URL provided. Use --url or set default_url in config.[/red]")
            raise typer.Exit(1)

        console.print(f"[cyan]Fetching schema from {full_url}...[/cyan]")
        profile = schema_loader.load_remote(full_url, cfg, allow_cache=True, refresh=True, token=token)

        # If custom output path specified, write just the SDL
        if out:
            utils.write_text(out, profile.sdl)
            path = out
        else:
            path = schema_loader.cache_path_for(profile.url, cfg)

        print_kv("Schema pulled", {"url": profile.url, "hash": profile.hash, "path": path})
    except typer.Exit:
        raise
    except (RuntimeError, OSError) as e:
        fail(e)


@config_app.command("init")
def config_init(path: Optional[str] = typer.Option(None, help="Config file path")):
    """Write an example config file."""
    written = config.create_example_config(path)
    print_kv("Config written", {"path": written})


@app.command("build")
def build_cmd(
    paths: list[str] = typer.Argument(None, help="SDL files or directories"),
    url: Optional[str] = typer.Option(None, help="GraphQL endpoint to introspect instead of files"),
    token: Optional[str] = typer.Option(None, help="Bearer token"),
    output: str = typer.Option("console", help="Output format (console|json)"),
    out: Optional[str] = typer.Option(None, help="Write JSON graph to this file"),
    sort: Optional[bool] = typer.Option(None, "--sort/--no-sort", help="Sort types and fields by name"),
    relay: Optional[bool] = typer.Option(None, "--relay/--no-relay", help="Collapse Relay connections"),
    deprecated: Optional[bool] = typer.Option(
        None, "--skip-deprecated/--keep-deprecated", help="Remove deprecated fields"
    ),
    root_type: Optional[str] = typer.Option(None, help="Root type name (default: query type)"),
    hide_root: Optional[bool] = typer.Option(None, "--hide-root/--show-root", help="Leave the root out of the graph"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
):
    """Build the type graph of a schema."""
    setup_logging(verbose)
    try:
        opts = BuildOptions(
            paths=paths or [],
            url=url,
            token=token,
            output=output,
            out=out,
            sort_by_alphabet=sort,
            skip_relay=relay,
            skip_deprecated=deprecated,
            root_type=root_type,
            hide_root=hide_root,
        )
        result = run_build(opts)
        if result is None:
            console.print("[yellow]No schema sources given[/yellow]")
            raise typer.Exit(1)

        graph, view = result
        if out:
            utils.write_json(out, graph_to_dict(graph, view))
            console.print(f"[green]Wrote {out}[/green]")
        else:
            emit(graph, view, output)
    except typer.Exit:
        raise
    except (TypeGraphError, RuntimeError, OSError, UnicodeDecodeError) as e:
        fail(e)


@app.command("show")
def show_cmd(
    node_id: str = typer.Argument(..., help="Type, field or argument id, e.g. TYPE::User"),
    paths: list[str] = typer.Argument(None, help="SDL files or directories"),
    url: Optional[str] = typer.Option(None, help="GraphQL endpoint to introspect instead of files"),
    token: Optional[str] = typer.Option(None, help="Bearer token"),
):
    """Show one node of the type graph."""
    setup_logging(False)
    try:
        cfg = config.load()
        result = run_build(BuildOptions(paths=paths or [], url=url, token=token))
        if result is None:
            console.print("[yellow]No schema sources given[/yellow]")
            raise typer.Exit(1)

        creator = template_link_creator(cfg.source_link_template) if cfg.source_link_template else None
        emit_node(result[0], node_id, creator)
    except typer.Exit:
        raise
    except (TypeGraphError, RuntimeError, OSError, KeyError, ValueError) as e:
        fail(e)


def collect_sources(opts: BuildOptions, cfg: config.Config) -> list[SourceFragment]:
    """Read SDL from the given paths, or from the remote endpoint."""
    if opts.paths:
        return schema_loader.read_sources(opts.paths)
    url = opts.url or cfg.default_url
    if url:
        return schema_loader.load_remote(url, cfg, allow_cache=True, token=opts.token).sources()
    return []


def run_build(opts: BuildOptions) -> Optional[tuple[TypeGraph, TypeGraphView]]:
    """
    Build a type graph and its rooted view.

    Args:
        opts: Build options; unset display flags fall back to the config file

    Returns:
        (graph, view), or None when there are no sources
    """
    cfg = config.load()
    display = cfg.display.merge(
        sort_by_alphabet=opts.sort_by_alphabet,
        skip_relay=opts.skip_relay,
        skip_deprecated=opts.skip_deprecated,
        root_type=opts.root_type,
        hide_root=opts.hide_root,
    )

    graph = pipeline.get_schema(collect_sources(opts, cfg), display)
    if graph is None:
        return None

    return graph, get_type_graph(graph, display.root_type, display.hide_root)


def main():
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
