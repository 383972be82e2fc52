import io
import json
from http.client import IncompleteRead
from urllib.error import HTTPError, URLError
from urllib.parse import parse_qs, urlparse

import pytest
from pydantic import ValidationError

from random_media.config import Settings
from random_media.errors import ProviderError, ProviderNotConfigured
from random_media.provider import pixabay
from random_media.provider.pixabay import (
    Category, MediaQuery, MediaType, Orientation, build_params, fetch_hits, parse_response,
)

from conftest import hit


class FakeResponse(io.BytesIO):
    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
        return False


@pytest.fixture
def cfg():
    return Settings(pixabay_api_key="secret", request_timeout_s=3)


@pytest.fixture
def captured(monkeypatch):
    calls = []

    def install(body=None, exc=None):
        def fake_urlopen(req, timeout=None):
            calls.append((req, timeout))
            if exc is not None:
                raise exc
            return FakeResponse(body if isinstance(body, bytes) else json.dumps(body).encode())

        monkeypatch.setattr(pixabay, "urlopen", fake_urlopen)
        return calls

    return install


def test_build_params_defaults():
    params = build_params(MediaQuery(), "k")
    assert params == {
        "key": "k",
        "image_type": "photo",
        "video_type": "film",
        "editors_choice": "true",
        "per_page": "200",
    }


def test_build_params_forwards_filters():
    q = MediaQuery(q="  sunset ", category="nature", orientation="vertical")
    params = build_params(q, "k", per_page=50)
    assert params["q"] == "sunset"
    assert params["category"] == "nature"
    assert params["orientation"] == "vertical"
    assert params["per_page"] == "50"


def test_orientation_dropped_for_video():
    q = MediaQuery(type="video", orientation=Orientation.horizontal)
    assert "orientation" not in build_params(q, "k")


def test_query_blank_fields_become_none():
    q = MediaQuery(q="   ", category="", orientation="")
    assert q.q is None and q.category is None and q.orientation is None


@pytest.mark.parametrize("value,expected", [(-20, 0.0), (30, 30.0), (180, 100.0)])
def test_query_clamps_randomness(value, expected):
    assert MediaQuery(randomness=value).randomness == expected


def test_query_rejects_unknown_category():
    with pytest.raises(ValidationError):
        MediaQuery(category="dinosaurs")


def test_fetch_hits_image(cfg, captured):
    calls = captured({"totalHits": 500, "hits": [hit(1, views=3, tags="a"), hit(2)]})
    resp = fetch_hits(MediaQuery(q="cats", category=Category.animals), cfg)

    assert [r.id for r in resp.hits] == [1, 2]
    assert resp.hits[0].payload["tags"] == "a"
    assert resp.total_hits == 500

    req, timeout = calls[0]
    url = urlparse(req.full_url)
    assert f"{url.scheme}://{url.netloc}{url.path}" == cfg.image_api_url
    qs = parse_qs(url.query)
    assert qs["key"] == ["secret"]
    assert qs["q"] == ["cats"]
    assert qs["category"] == ["animals"]
    assert timeout == 3


def test_fetch_hits_video_endpoint(cfg, captured):
    calls = captured({"totalHits": 0, "hits": []})
    resp = fetch_hits(MediaQuery(type=MediaType.video), cfg)
    assert resp.hits == []
    assert calls[0][0].full_url.startswith(cfg.video_api_url)


def test_fetch_hits_requires_key(captured):
    calls = captured({"hits": []})
    with pytest.raises(ProviderNotConfigured):
        fetch_hits(MediaQuery(), Settings(pixabay_api_key=""))
    assert calls == []


@pytest.mark.parametrize(
    "exc",
    [
        HTTPError("https://pixabay.com/api/", 429, "Too Many Requests", {}, None),
        URLError("name resolution failed"),
        TimeoutError(),
        IncompleteRead(b'{"hits": [', 512),
    ],
)
def test_fetch_hits_transport_errors(cfg, captured, exc):
    captured(exc=exc)
    with pytest.raises(ProviderError):
        fetch_hits(MediaQuery(), cfg)


def test_fetch_hits_malformed_json(cfg, captured):
    captured(b"<html>oops</html>")
    with pytest.raises(ProviderError):
        fetch_hits(MediaQuery(), cfg)


@pytest.mark.parametrize(
    "data",
    [
        [],
        "nope",
        {"hits": "x"},
        {"hits": [{"id": "abc", "views": 1}], "totalHits": 1},
        {"hits": [{"id": [3]}]},
        {"hits": [], "totalHits": "many"},
        {"hits": [{"id": float("inf")}]},
    ],
)
def test_parse_response_rejects_bad_shapes(data):
    with pytest.raises(ProviderError):
        parse_response(data)


def test_parse_response_missing_hits_is_empty():
    resp = parse_response({"total": 0})
    assert resp.hits == [] and resp.total_hits == 0


def test_http_error_response_is_closed(cfg, captured):
    body = io.BytesIO(b'{"error": "rate limited"}')
    captured(exc=HTTPError(cfg.image_api_url, 429, "Too Many Requests", {}, body))
    with pytest.raises(ProviderError):
        fetch_hits(MediaQuery(), cfg)
    assert body.closed
