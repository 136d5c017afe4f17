from unittest.mock import MagicMock

import pytest
import requests

from riddlebox.puzzles.client import GEMINI_URL, OAI_URL, GenerationClient, client_from_config
from riddlebox.puzzles.errors import EmptyUpstreamResponse, NoCredentials, UpstreamError, UpstreamTimeout


def _response(body=None, status=200, bad_json=False):
    resp = MagicMock()
    resp.ok = status < 400
    resp.status_code = status
    resp.text = "upstream says no" if status >= 400 else ""
    if bad_json:
        resp.json.side_effect = ValueError("no json")
    else:
        resp.json.return_value = body
    return resp


def _gemini_body(*parts):
    return {"candidates": [{"content": {"parts": [{"text": p} for p in parts]}}]}


def test_missing_key_never_touches_the_network():
    session = MagicMock()
    client = GenerationClient(api_key="", session=session)
    assert client.has_credentials is False
    with pytest.raises(NoCredentials):
        client.generate("prompt")
    session.post.assert_not_called()


def test_gemini_request_and_text_extraction():
    session = MagicMock()
    session.post.return_value = _response(_gemini_body("RIDDLE: What has keys?\n", "ANSWER: piano"))
    client = GenerationClient(api_key="k-123", session=session)

    text = client.generate("make a riddle", temperature=1.0, max_output_length=150)

    assert text == "RIDDLE: What has keys?\nANSWER: piano"
    args, kwargs = session.post.call_args
    assert args[0] == GEMINI_URL.format(model="gemini-2.0-flash")
    assert kwargs["headers"]["x-goog-api-key"] == "k-123"
    assert "params" not in kwargs
    assert "k-123" not in args[0]
    assert kwargs["timeout"] == 30
    assert kwargs["json"]["generationConfig"] == {"temperature": 1.0, "maxOutputTokens": 150}
    assert kwargs["json"]["contents"][0]["parts"][0]["text"] == "make a riddle"


def test_openai_request_and_text_extraction():
    session = MagicMock()
    session.post.return_value = _response({"choices": [{"message": {"content": "  ANSWER: comb  "}}]})
    client = GenerationClient(api_key="sk-1", provider="openai", timeout=5, session=session)

    assert client.generate("p", temperature=0.8, max_output_length=200) == "ANSWER: comb"
    args, kwargs = session.post.call_args
    assert args[0] == OAI_URL
    assert kwargs["headers"]["Authorization"] == "Bearer sk-1"
    assert kwargs["json"]["max_tokens"] == 200
    assert kwargs["timeout"] == 5


def test_timeout_maps_to_upstream_timeout():
    session = MagicMock()
    session.post.side_effect = requests.Timeout("slow")
    with pytest.raises(UpstreamTimeout) as exc:
        GenerationClient(api_key="k", session=session).generate("p")
    assert exc.value.reason == "upstream_timeout"


def test_connection_error_maps_to_upstream_error():
    session = MagicMock()
    session.post.side_effect = requests.ConnectionError("refused")
    with pytest.raises(UpstreamError):
        GenerationClient(api_key="k", session=session).generate("p")


def test_http_error_status_is_kept():
    session = MagicMock()
    session.post.return_value = _response(status=429)
    with pytest.raises(UpstreamError) as exc:
        GenerationClient(api_key="k", session=session).generate("p")
    assert exc.value.status == 429


@pytest.mark.parametrize("resp", [
    _response(bad_json=True),
    _response({"candidates": []}),
    _response(_gemini_body("   ")),
    _response(["not", "a", "dict"]),
])
def test_empty_or_malformed_bodies(resp):
    session = MagicMock()
    session.post.return_value = resp
    with pytest.raises(EmptyUpstreamResponse):
        GenerationClient(api_key="k", session=session).generate("p")


def test_unknown_provider_is_rejected():
    with pytest.raises(ValueError):
        GenerationClient(api_key="k", provider="carrier-pigeon")


def test_client_from_config_uses_provider_key():
    gemini = client_from_config({"GEMINI_API_KEY": "g", "OPENAI_API_KEY": "o", "GENERATION_TIMEOUT": 12})
    assert (gemini.provider, gemini.api_key, gemini.timeout) == ("gemini", "g", 12)

    openai = client_from_config({"GENERATION_PROVIDER": "openai", "OPENAI_API_KEY": "o"})
    assert (openai.provider, openai.api_key, openai.model) == ("openai", "o", "gpt-4o-mini")


def test_transport_error_message_never_carries_the_key():
    session = MagicMock()
    session.post.side_effect = requests.ConnectionError(
        "HTTPSConnectionPool: Max retries exceeded with url: "
        "/v1beta/models/gemini-2.0-flash:generateContent?key=SECRET-KEY-123"
    )
    with pytest.raises(UpstreamError) as exc:
        GenerationClient(api_key="SECRET-KEY-123", session=session).generate("p")
    assert "SECRET-KEY-123" not in str(exc.value)
