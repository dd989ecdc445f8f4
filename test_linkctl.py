import json

import httpx
import pytest

import linkctl
from linkctl import ClientError, LinkClient, load_token

BASE_URL = "http://links.test"


def make_transport(handler, seen):
    def record(request):
        seen.append(request)
        return handler(request)

    return httpx.MockTransport(record)


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "brig.gs"
    path.write_text("# management token\nAPI_TOKEN=s3cret\n")
    return str(path)


def test_load_token(config_file, tmp_path):
    assert load_token(config_file) == "s3cret"
    assert load_token(str(tmp_path / "missing")) is None


def test_client_requires_token():
    with pytest.raises(ClientError, match="no API token set"):
        LinkClient(BASE_URL, None)


def test_add_link():
    seen = []
    transport = make_transport(lambda request: httpx.Response(201, json={"message": "Link created"}), seen)
    client = LinkClient(BASE_URL, "s3cret", transport=transport)
    client.add_link("gh/repo", "https://github.com/x/repo")

    request = seen[0]
    assert request.method == "POST"
    assert request.url.path == "/api/create"
    assert request.headers["Authorization"] == "s3cret"
    assert json.loads(request.content) == {"short_id": "gh/repo", "target_url": "https://github.com/x/repo"}


def test_add_link_conflict():
    seen = []
    transport = make_transport(lambda request: httpx.Response(409, text="Conflict: 'a' already exists"), seen)
    client = LinkClient(BASE_URL, "s3cret", transport=transport)
    with pytest.raises(ClientError, match="already exists"):
        client.add_link("a", "https://example.com")


def test_delete_link_encodes_namespaced_id():
    seen = []
    transport = make_transport(lambda request: httpx.Response(200, json={"message": "Deleted 'gh/repo'"}), seen)
    client = LinkClient(BASE_URL, "s3cret", transport=transport)
    client.delete_link("gh/repo")

    assert seen[0].method == "DELETE"
    assert seen[0].url.raw_path == b"/api/delete/gh%2Frepo"


def test_get_link():
    def handler(request):
        if request.url.path == "/known":
            return httpx.Response(302, headers={"Location": "https://example.com"})
        return httpx.Response(404, text="Not Found")

    seen = []
    client = LinkClient(BASE_URL, "s3cret", transport=make_transport(handler, seen))
    assert client.get_link("known") is True
    assert client.get_link("unknown") is False
    # The redirect is reported, not followed.
    assert len(seen) == 2


def test_main_list(config_file, capsys):
    seen = []
    transport = make_transport(lambda request: httpx.Response(200, json={"a": "https://a.example"}), seen)
    code = linkctl.main(["--config-file", config_file, "--base-url", BASE_URL, "list"], transport=transport)
    assert code == 0
    assert json.loads(capsys.readouterr().out) == {"a": "https://a.example"}
    assert seen[0].url.path == "/api/list"


def test_main_reports_errors(config_file, capsys):
    seen = []
    transport = make_transport(lambda request: httpx.Response(404, text="Not Found: 'x' does not exist"), seen)
    code = linkctl.main(["--config-file", config_file, "--base-url", BASE_URL, "delete", "x"], transport=transport)
    assert code == 1
    assert "error: error deleting link: Not Found: 'x' does not exist" in capsys.readouterr().err


def test_main_without_token(tmp_path, capsys):
    code = linkctl.main(["--config-file", str(tmp_path / "missing"), "list"])
    assert code == 1
    assert "no API token set" in capsys.readouterr().err


def test_get_link_escapes_query_characters():
    seen = []
    transport = make_transport(lambda request: httpx.Response(404, text="Not Found"), seen)
    client = LinkClient(BASE_URL, "s3cret", transport=transport)
    assert client.get_link("gh/a?b#c") is False
    assert seen[0].url.raw_path == b"/gh/a%3Fb%23c"
