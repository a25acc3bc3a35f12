import json

import pytest
from typer.testing import CliRunner

from graphql_type_graph.cli import app

runner = CliRunner()

SDL = '''
type Query {
  me: User
  users(first: Int, after: String): UserConnection
}

"""Somebody"""
type User {
  id: ID!
  name: String @deprecated(reason: "use id")
}

type UserEdge { node: User }
type UserConnection { edges: [UserEdge] }
'''


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path / "home"))


@pytest.fixture
def schema_file(tmp_path):
    path = tmp_path / "schema.graphql"
    path.write_text(SDL)
    return str(path)


def test_build_json(schema_file):
    result = runner.invoke(app, ["build", schema_file, "--output", "json"])
    assert result.exit_code == 0, result.output
    data = json.loads(result.stdout)
    assert data["rootId"] == "TYPE::Query"
    users = data["types"]["TYPE::Query"]["fields"]["users"]
    assert users["type"] == "TYPE::User"
    assert users["args"] == {}
    assert "name" not in data["types"]["TYPE::User"]["fields"]


def test_build_flags(schema_file):
    result = runner.invoke(
        app, ["build", schema_file, "--output", "json", "--no-relay", "--keep-deprecated", "--root-type", "User"]
    )
    assert result.exit_code == 0, result.output
    data = json.loads(result.stdout)
    assert data["rootId"] == "TYPE::User"
    assert data["types"]["TYPE::Query"]["fields"]["users"]["type"] == "TYPE::UserConnection"
    assert data["types"]["TYPE::User"]["fields"]["name"]["deprecationReason"] == "use id"


def test_build_writes_file(schema_file, tmp_path):
    out = tmp_path / "graph.json"
    result = runner.invoke(app, ["build", schema_file, "--out", str(out)])
    assert result.exit_code == 0, result.output
    assert "TYPE::User" in json.loads(out.read_text())["types"]


def test_build_console_summary(schema_file):
    result = runner.invoke(app, ["build", schema_file])
    assert result.exit_code == 0, result.output
    assert "Type Graph Summary" in result.stdout
    assert "TYPE::Query" in result.stdout


def test_build_without_sources():
    result = runner.invoke(app, ["build"])
    assert result.exit_code == 1


def test_build_reports_parse_errors(tmp_path):
    bad = tmp_path / "bad.graphql"
    bad.write_text("type Query {")
    result = runner.invoke(app, ["build", str(bad)])
    assert result.exit_code == 1
    assert "Error" in result.output


def test_build_skip_deprecated_flag(schema_file):
    result = runner.invoke(app, ["build", schema_file, "--output", "json", "--skip-deprecated"])
    assert result.exit_code == 0, result.output
    assert "name" not in json.loads(result.stdout)["types"]["TYPE::User"]["fields"]


@pytest.mark.parametrize("command", ["build", "show"])
def test_non_utf8_source_is_reported(tmp_path, command):
    bad = tmp_path / "latin1.graphql"
    bad.write_bytes('type Query { café: String }'.encode("latin-1"))
    args = [command, str(bad)] if command == "build" else [command, "TYPE::Query", str(bad)]
    result = runner.invoke(app, args)
    assert result.exit_code == 1
    assert "Error" in result.output
    assert not isinstance(result.exception, UnicodeDecodeError)


def test_show_node(schema_file, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    result = runner.invoke(app, ["show", "TYPE::User::FIELD::id", "schema.graphql"])
    assert result.exit_code == 0, result.output
    assert "Somebody" in result.stdout
    assert "schema.graphql:8:1" in result.stdout


def test_show_unknown_node(schema_file):
    result = runner.invoke(app, ["show", "TYPE::Nope", schema_file])
    assert result.exit_code == 1
    assert "No type named Nope" in result.output


def test_config_init(tmp_path):
    path = tmp_path / "conf" / "config.yaml"
    result = runner.invoke(app, ["config", "init", "--path", str(path)])
    assert result.exit_code == 0, result.output
    assert path.exists()
