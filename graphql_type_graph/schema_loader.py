"""Schema source loading and caching."""

import logging
from dataclasses import asdict, dataclass
from typing import Iterable, Optional

import requests
from graphql import build_client_schema, print_schema

from . import utils
from .config import Config
from .parser import SourceFragment

logger = logging.getLogger(__name__)


@dataclass
class SchemaProfile:
    """Remote schema SDL with metadata."""

    url: str
    fetched_at: str
    hash: str
    sdl: str

    def sources(self) -> list[SourceFragment]:
        return [SourceFragment(self.url, self.sdl)]


def read_sources(paths: Iterable[str]) -> list[SourceFragment]:
    """
    Read SDL fragments from files and directories.

    Args:
        paths: SDL files, or directories searched for *.graphql/*.graphqls/*.gql

    Returns:
        SourceFragment list in argument order, directory contents sorted
    """
    sources = []
    for path in paths:
        for filepath in utils.iter_sdl_files(path):
            sources.append(SourceFragment(filepath, utils.read_text(filepath)))
    logger.debug("Read %d SDL file(s)", len(sources))
    return sources


def load_remote(
    url: str,
    cfg: Config,
    allow_cache: bool = True,
    refresh: bool = False,
    token: Optional[str] = None,
) -> SchemaProfile:
    """
    Load a remote schema as SDL, via cache or introspection.

    Args:
        url: GraphQL endpoint URL
        cfg: Configuration object
        allow_cache: Whether to use cached schema
        refresh: Force refresh even if cached
        token: Optional bearer token for authentication

    Returns:
        SchemaProfile with the schema's SDL
    """
    cache_path = cache_path_for(url, cfg)

    # Try cache first
    if allow_cache and utils.exists(cache_path) and not refresh:
        logger.debug("Using cached schema %s", cache_path)
        return SchemaProfile(**utils.read_json(cache_path))

    # Fetch from server
    sdl = fetch_sdl(url, token)
    prof = SchemaProfile(url=url, fetched_at=utils.now_iso(), hash=utils.sha256(sdl), sdl=sdl)

    # Save to cache
    utils.ensure_dir(utils.dirname(cache_path))
    utils.write_json(cache_path, asdict(prof))

    return prof


def fetch_sdl(graphql_url: str, token: Optional[str] = None) -> str:
    """
    Introspect a GraphQL endpoint and print its schema as SDL.

    Args:
        graphql_url: GraphQL endpoint URL
        token: Optional bearer token for authentication

    Returns:
        Schema SDL text

    Raises:
        RuntimeError: If introspection fails
    """
    headers = {}
    if token:
        headers["Authorization"] = f"Bearer {token}"
    logger.info("Introspecting %s", graphql_url)
    resp = requests.post(graphql_url, json={"query": utils.INTROSPECTION_QUERY}, headers=headers, timeout=30)

    if resp.status_code != 200:
        raise RuntimeError(f"Introspection failed with status {resp.status_code}")

    payload = utils.safe_json_response(resp, context="GraphQL introspection")

    if "errors" in payload:
        raise RuntimeError(f"Introspection errors: {payload['errors']}")

    return print_schema(build_client_schema(payload["data"]))


def cache_path_for(url: str, cfg: Config) -> str:
    """
    Get cache path for a schema URL.

    Args:
        url: GraphQL endpoint URL
        cfg: Configuration object

    Returns:
        Path to cache file
    """
    host = utils.sanitize_host(url)
    return utils.join(cfg.schema_cache_dir, f"{host}.json")
