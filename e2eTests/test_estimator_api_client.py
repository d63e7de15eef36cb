import json

import pytest
import requests

from cihub.domain.errors import ResponseParseError, TransportError
from cihub.infra.estimator_api_client import EstimatorApiClient
from fakes import SUCCESS_BODY


class FakeHttpResponse:
    def __init__(self, status_code: int, text: str) -> None:
        self.status_code = status_code
        self.text = text

    def json(self):
        return json.loads(self.text)


@pytest.fixture
def calls():
    return []


def patch_post(monkeypatch, calls, response=None, exc=None):
    def fake_post(url, json=None, timeout=None):
        calls.append((url, json, timeout))
        if exc is not None:
            raise exc
        return response

    monkeypatch.setattr(requests, "post", fake_post)


def test_posts_payload_to_estimate_path(monkeypatch, calls):
    patch_post(monkeypatch, calls, FakeHttpResponse(200, json.dumps(SUCCESS_BODY)))
    client = EstimatorApiClient("http://estimator:8080/", timeout=3)

    body = client.post_estimate({"region": "us-west1"})

    assert body == SUCCESS_BODY
    assert calls == [("http://estimator:8080/api/estimate", {"region": "us-west1"}, 3)]


def test_error_body_is_returned_regardless_of_status(monkeypatch, calls):
    patch_post(monkeypatch, calls, FakeHttpResponse(422, '{"error": "bad region"}'))

    body = EstimatorApiClient("http://estimator").post_estimate({})

    assert body == {"error": "bad region"}


def test_connection_error_becomes_transport_error(monkeypatch, calls):
    patch_post(monkeypatch, calls, exc=requests.ConnectionError("refused"))

    with pytest.raises(TransportError) as info:
        EstimatorApiClient("http://estimator").post_estimate({})

    assert isinstance(info.value.__cause__, requests.ConnectionError)


@pytest.mark.parametrize("text", ["invalid json: unexpected EOF\n", "[1, 2]", "use POST"])
def test_unreadable_body_becomes_parse_error(monkeypatch, calls, text):
    patch_post(monkeypatch, calls, FakeHttpResponse(400, text))

    with pytest.raises(ResponseParseError):
        EstimatorApiClient("http://estimator").post_estimate({})


def test_health_check(monkeypatch):
    monkeypatch.setattr(requests, "get", lambda url, timeout=None: FakeHttpResponse(200, "ok"))
    assert EstimatorApiClient("http://estimator").check_health() is True

    def down(url, timeout=None):
        raise requests.Timeout("slow")

    monkeypatch.setattr(requests, "get", down)
    assert EstimatorApiClient("http://estimator").check_health() is False
