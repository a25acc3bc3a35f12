import pytest
from graphql import build_schema, graphql_sync

from graphql_type_graph import schema_loader, utils
from graphql_type_graph.config import Config

SDL = "type Query { me: User }\ntype User { id: ID! }"


class FakeResponse:
    def __init__(self, payload, status_code=200):
        self.payload = payload
        self.status_code = status_code
        self.url = "https://api.example.com/graphql"
        self.headers = {"Content-Type": "application/json"}
        self.text = ""

    def json(self):
        return self.payload


@pytest.fixture
def introspection_payload():
    result = graphql_sync(build_schema(SDL), utils.INTROSPECTION_QUERY)
    return {"data": result.data}


@pytest.fixture
def cfg(tmp_path):
    return Config(schema_cache_dir=str(tmp_path / "cache"))


def test_read_sources(tmp_path):
    (tmp_path / "b.graphql").write_text("type User { id: ID! }")
    (tmp_path / "a.gql").write_text("type Query { me: User }")
    (tmp_path / "notes.txt").write_text("ignored")
    single = tmp_path / "extra.graphqls"
    single.write_text("type Extra { x: Int }")

    sources = schema_loader.read_sources([str(tmp_path / "b.graphql"), str(tmp_path)])
    names = [s.filepath.rsplit("/", 1)[-1] for s in sources]
    assert names == ["b.graphql", "a.gql", "b.graphql", "extra.graphqls"]


def test_fetch_sdl(monkeypatch, introspection_payload):
    calls = []

    def fake_post(url, json, headers, timeout):
        calls.append((url, headers))
        return FakeResponse(introspection_payload)

    monkeypatch.setattr(schema_loader.requests, "post", fake_post)
    sdl = schema_loader.fetch_sdl("https://api.example.com/graphql", token="secret")
    assert "type User" in sdl
    assert calls[0][1] == {"Authorization": "Bearer secret"}


def test_fetch_sdl_errors(monkeypatch):
    monkeypatch.setattr(schema_loader.requests, "post", lambda *a, **k: FakeResponse({}, status_code=500))
    with pytest.raises(RuntimeError, match="500"):
        schema_loader.fetch_sdl("https://api.example.com/graphql")

    monkeypatch.setattr(schema_loader.requests, "post", lambda *a, **k: FakeResponse({"errors": ["nope"]}))
    with pytest.raises(RuntimeError, match="nope"):
        schema_loader.fetch_sdl("https://api.example.com/graphql")


def test_load_remote_uses_cache(monkeypatch, cfg, introspection_payload):
    posts = []

    def fake_post(*args, **kwargs):
        posts.append(args)
        return FakeResponse(introspection_payload)

    monkeypatch.setattr(schema_loader.requests, "post", fake_post)
    url = "https://api.example.com/graphql"

    first = schema_loader.load_remote(url, cfg)
    second = schema_loader.load_remote(url, cfg)
    assert len(posts) == 1
    assert second == first
    assert utils.exists(schema_loader.cache_path_for(url, cfg))

    schema_loader.load_remote(url, cfg, refresh=True)
    assert len(posts) == 2

    sources = first.sources()
    assert sources[0].filepath == url
