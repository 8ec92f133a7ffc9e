"""
HTTP-level tests for create, redirect and the static page.
"""

import re

from fastapi.testclient import TestClient

from main import create_app

SHORT_URL = re.compile(r"^http://testserver/([0-9a-zA-Z]{6})$")


def _create(client, long_url, custom_id=None):
    payload = {"longUrl": long_url}
    if custom_id is not None:
        payload["customId"] = custom_id
    return client.post("/api/create", json=payload)


def test_index_page(client):
    for path in ("/", "/index.html"):
        resp = client.get(path)
        assert resp.status_code == 200
        assert resp.headers["content-type"].startswith("text/html")
        assert "<title>URL Shortener</title>" in resp.text
        assert "/api/create" in resp.text


def test_health_returns_ok(client):
    resp = client.get("/api/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_create_generated_id(client, storage):
    url = "https://example.com/some/long/path?x=1"
    resp = _create(client, url)

    assert resp.status_code == 201
    assert resp.headers["content-type"].startswith("application/json")
    data = resp.json()
    assert data["longUrl"] == url
    match = SHORT_URL.match(data["shortUrl"])
    assert match, data["shortUrl"]
    assert storage.get(match.group(1)) == url


def test_create_custom_id(client, storage):
    resp = _create(client, "https://openai.com", "openai")
    assert resp.status_code == 201
    assert resp.json() == {"shortUrl": "http://testserver/openai", "longUrl": "https://openai.com"}
    assert storage.get("openai") == "https://openai.com"


def test_create_then_redirect_round_trip(client):
    url = "https://example.com/round/trip?a=1&b=2"
    short_url = _create(client, url).json()["shortUrl"]
    short_id = short_url.rsplit("/", 1)[-1]

    resp = client.get(f"/{short_id}", follow_redirects=False)
    assert resp.status_code == 302
    assert resp.headers["location"] == url


def test_custom_id_round_trip_with_hyphen_and_underscore(client):
    url = "https://example.com/docs"
    assert _create(client, url, "my-docs_v2").status_code == 201
    resp = client.get("/my-docs_v2", follow_redirects=False)
    assert resp.status_code == 302
    assert resp.headers["location"] == url


def test_repeated_redirects_are_identical(client):
    _create(client, "https://example.com/stable", "stable")
    locations = {client.get("/stable", follow_redirects=False).headers["location"] for _ in range(5)}
    assert locations == {"https://example.com/stable"}


def test_redirect_unknown_id(client):
    resp = client.get("/doesnotexist", follow_redirects=False)
    assert resp.status_code == 404
    assert resp.text == "Short link not found"


def test_redirect_nested_path_is_looked_up_whole(client, storage):
    storage.put("a/b", "https://example.com/nested")
    resp = client.get("/a/b", follow_redirects=False)
    assert resp.status_code == 302
    assert resp.headers["location"] == "https://example.com/nested"


def test_redirect_followed_inside_app(client):
    """The 302 hop lands on an internal endpoint, so TestClient can follow it."""
    original = "http://testserver/api/health"
    code = _create(client, original, "health").json()["shortUrl"].rsplit("/", 1)[-1]

    resp = client.get(f"/{code}")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}
    assert resp.history[0].status_code == 302
    assert resp.history[0].headers["location"] == original


def test_invalid_url(client):
    resp = _create(client, "not a url")
    assert resp.status_code == 400
    assert resp.text == "Invalid URL"


def test_missing_long_url(client):
    resp = client.post("/api/create", json={"customId": "abc"})
    assert resp.status_code == 400
    assert resp.text == "Invalid URL"


def test_invalid_custom_id(client, storage):
    resp = _create(client, "https://example.com", "bad id!")
    assert resp.status_code == 400
    assert resp.text == "Custom ID can only contain letters, numbers, hyphens, and underscores"
    assert storage.get("bad id!") is None


def test_custom_id_conflict(client):
    assert _create(client, "https://one.com", "dup").status_code == 201
    resp = _create(client, "https://two.com", "dup")
    assert resp.status_code == 409
    assert resp.text == "Custom ID already exists"
    assert client.get("/dup", follow_redirects=False).headers["location"] == "https://one.com"


def test_empty_custom_id_generates(client):
    resp = _create(client, "https://example.com", "")
    assert resp.status_code == 201
    assert SHORT_URL.match(resp.json()["shortUrl"])


def test_sync_write_mode(sync_client, storage):
    resp = _create(sync_client, "https://example.com/sync")
    short_id = resp.json()["shortUrl"].rsplit("/", 1)[-1]
    assert resp.status_code == 201
    assert storage.get(short_id) == "https://example.com/sync"


def test_public_origin_override(storage):
    client = TestClient(create_app(storage=storage, public_origin="https://sho.rt/"))
    resp = _create(client, "https://example.com", "brand")
    assert resp.json()["shortUrl"] == "https://sho.rt/brand"


def test_long_url_returned_verbatim(client):
    url = "https://Example.COM:443/Path/../x?q=a%20b&q=c#Frag"
    data = _create(client, url, "verbatim").json()
    assert data["longUrl"] == url
    assert client.get("/verbatim", follow_redirects=False).headers["location"] == url
