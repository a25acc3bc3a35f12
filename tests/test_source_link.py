from graphql_type_graph.model import SourceLocation
from graphql_type_graph.source_link import make_source_link, template_link_creator

SDL = '''type Query {
  "The signed-in user"
  me: User
  users(
    """
    Maximum number of users
    """
    limit: Int
  ): [User]
}

"""
A person
"""
# trailing comment
type User {
  id: ID!
}
'''


def test_locations_skip_descriptions(build):
    graph = build(SDL)
    query = graph.types["TYPE::Query"]
    assert query.location == SourceLocation("schema0.graphql", 1, 1)
    assert query.fields["me"].location == SourceLocation("schema0.graphql", 3, 3)
    assert query.fields["users"].location == SourceLocation("schema0.graphql", 4, 3)
    assert query.fields["users"].args["limit"].location == SourceLocation("schema0.graphql", 8, 5)
    assert graph.types["TYPE::User"].location == SourceLocation("schema0.graphql", 16, 1)


def test_locations_name_the_defining_file(build):
    graph = build("type Query { user: User }", "type User { id: ID! }")
    assert graph.types["TYPE::User"].location.filepath == "schema1.graphql"
    assert graph.types["TYPE::User"].fields["id"].location.column == 13


def test_builtin_scalars_have_no_location(build):
    assert build(SDL).types["TYPE::String"].location is None


def test_template_links():
    creator = template_link_creator("vscode://file/{filepath}:{line}:{column}")
    link = make_source_link(SourceLocation("schema/user.graphql", 4, 3), creator)
    assert link == "vscode://file/schema/user.graphql:4:3"


def test_no_link_without_location_or_creator():
    assert make_source_link(None, template_link_creator("{filepath}")) is None
    assert make_source_link(SourceLocation("a", 1, 1), None) is None
