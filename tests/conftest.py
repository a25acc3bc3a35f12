import pytest

from graphql_type_graph.config import DisplayOptions
from graphql_type_graph.pipeline import get_schema

RELAY_SDL = """
interface Node {
  id: ID!
}

type PageInfo {
  hasNextPage: Boolean!
  endCursor: String
}

type Item implements Node {
  id: ID!
  title: String
}

type ItemEdge {
  cursor: String!
  node: Item
}

type ItemConnection {
  edges: [ItemEdge]
  pageInfo: PageInfo!
}

type Query {
  node(id: ID!): Node
  items(first: Int, after: String, last: Int, before: String, filter: String): ItemConnection!
  latestEdge: ItemEdge
  relay: Query
}
"""


def build(*sdl, **options):
    """Build a graph from SDL strings, one fragment per string."""
    sources = [(f"schema{i}.graphql", text) for i, text in enumerate(sdl)]
    return get_schema(sources, DisplayOptions(**options))


@pytest.fixture
def relay_sdl():
    return RELAY_SDL


@pytest.fixture(name="build")
def build_fixture():
    return build
