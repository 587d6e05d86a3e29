import json

import httpx
import pytest
import respx

from aicommit.config import Platform
from aicommit.providers import (
    ANTHROPIC_API_BASE_ENV,
    GEMINI_API_BASE_ENV,
    OPENAI_API_BASE_ENV,
    ApiError,
    call_claude,
    call_gemini,
    call_openai,
    generate_commit_message,
)

BASE = "http://mock.test"


@pytest.fixture
def mock_bases(monkeypatch):
    for name in (ANTHROPIC_API_BASE_ENV, OPENAI_API_BASE_ENV, GEMINI_API_BASE_ENV):
        monkeypatch.setenv(name, BASE)


def claude_reply(text="Add feature"):
    return httpx.Response(200, json={"content": [{"type": "text", "text": text}]})


def openai_reply(text="Fix bug"):
    return httpx.Response(
        200, json={"choices": [{"message": {"role": "assistant", "content": text}}]}
    )


def gemini_reply(text="Update docs"):
    return httpx.Response(
        200,
        json={"candidates": [{"content": {"role": "model", "parts": [{"text": text}]}}]},
    )


def test_call_claude_request_and_result(mock_bases):
    with respx.mock() as router:
        route = router.post(f"{BASE}/v1/messages").mock(return_value=claude_reply())
        result = call_claude("placeholder", "claude-3-5-haiku-20241022", "sys", "usr")
    assert result == "Add feature"
    request = route.calls.last.request
    assert request.headers["x-api-key"] == "placeholder"
    assert request.headers["anthropic-version"] == "2023-06-01"
    assert json.loads(request.content) == {
        "model": "claude-3-5-haiku-20241022",
        "max_tokens": 1000,
        "system": "sys",
        "messages": [{"role": "user", "content": [{"type": "text", "text": "usr"}]}],
    }


def test_call_claude_default_base_url(monkeypatch):
    monkeypatch.delenv(ANTHROPIC_API_BASE_ENV, raising=False)
    with respx.mock() as router:
        router.post("https://api.anthropic.com/v1/messages").mock(
            return_value=claude_reply("Default host")
        )
        assert call_claude("placeholder", "m", "s", "u") == "Default host"


def test_call_claude_http_error(mock_bases):
    with respx.mock() as router:
        router.post(f"{BASE}/v1/messages").mock(
            return_value=httpx.Response(529, text="overloaded")
        )
        with pytest.raises(ApiError, match="Claude API error: overloaded"):
            call_claude("placeholder", "m", "s", "u")


def test_call_claude_empty_content(mock_bases):
    with respx.mock() as router:
        router.post(f"{BASE}/v1/messages").mock(
            return_value=httpx.Response(200, json={"content": []})
        )
        with pytest.raises(ApiError, match="Unexpected response format from Claude API"):
            call_claude("placeholder", "m", "s", "u")


def test_call_claude_non_text_content(mock_bases):
    with respx.mock() as router:
        router.post(f"{BASE}/v1/messages").mock(
            return_value=httpx.Response(
                200, json={"content": [{"type": "image", "text": ""}]}
            )
        )
        with pytest.raises(ApiError, match="Unexpected response format from Claude API"):
            call_claude("placeholder", "m", "s", "u")


def test_call_claude_connection_failure(mock_bases):
    with respx.mock() as router:
        router.post(f"{BASE}/v1/messages").mock(side_effect=httpx.ConnectError("down"))
        with pytest.raises(ApiError, match="Claude API request failed"):
            call_claude("placeholder", "m", "s", "u")


def test_call_openai_request_and_result(mock_bases):
    with respx.mock() as router:
        route = router.post(f"{BASE}/v1/chat/completions").mock(
            return_value=openai_reply()
        )
        result = call_openai("placeholder", "gpt-4o-mini", "sys", "usr")
    assert result == "Fix bug"
    request = route.calls.last.request
    assert request.headers["Authorization"] == "Bearer placeholder"
    assert json.loads(request.content) == {
        "model": "gpt-4o-mini",
        "max_tokens": 1000,
        "messages": [
            {"role": "system", "content": "sys"},
            {"role": "user", "content": "usr"},
        ],
    }


def test_call_openai_http_error(mock_bases):
    with respx.mock() as router:
        router.post(f"{BASE}/v1/chat/completions").mock(
            return_value=httpx.Response(401, text="unauthorized")
        )
        with pytest.raises(ApiError, match="OpenAI API error: unauthorized"):
            call_openai("placeholder", "m", "s", "u")


def test_call_openai_no_choices(mock_bases):
    with respx.mock() as router:
        router.post(f"{BASE}/v1/chat/completions").mock(
            return_value=httpx.Response(200, json={"choices": []})
        )
        with pytest.raises(ApiError, match="Unexpected response format from OpenAI API"):
            call_openai("placeholder", "m", "s", "u")


def test_call_gemini_request_and_result(mock_bases):
    with respx.mock() as router:
        route = router.post(
            host="mock.test", path="/v1/models/gemini-2.0-flash:generateContent"
        ).mock(return_value=gemini_reply())
        result = call_gemini("placeholder", "gemini-2.0-flash", "sys", "usr")
    assert result == "Update docs"
    request = route.calls.last.request
    assert request.url.params["key"] == "placeholder"
    assert json.loads(request.content) == {
        "contents": [{"role": "user", "parts": [{"text": "sys\n\nusr"}]}],
        "generation_config": {"max_output_tokens": 1000},
    }


def test_call_gemini_http_error(mock_bases):
    with respx.mock() as router:
        router.post(host="mock.test", path="/v1/models/m:generateContent").mock(
            return_value=httpx.Response(400, text="bad request")
        )
        with pytest.raises(ApiError, match="Gemini API error: bad request"):
            call_gemini("placeholder", "m", "s", "u")


def test_call_gemini_no_candidates(mock_bases):
    with respx.mock() as router:
        router.post(host="mock.test", path="/v1/models/m:generateContent").mock(
            return_value=httpx.Response(200, json={"candidates": []})
        )
        with pytest.raises(ApiError, match="Unexpected response format from Gemini API"):
            call_gemini("placeholder", "m", "s", "u")


def test_call_gemini_empty_parts(mock_bases):
    with respx.mock() as router:
        router.post(host="mock.test", path="/v1/models/m:generateContent").mock(
            return_value=httpx.Response(
                200, json={"candidates": [{"content": {"role": "model", "parts": []}}]}
            )
        )
        with pytest.raises(ApiError, match="No text in response from Gemini API"):
            call_gemini("placeholder", "m", "s", "u")


@pytest.mark.parametrize(
    ("platform", "expected"),
    [
        (Platform.CLAUDE, "from claude"),
        (Platform.OPENAI, "from openai"),
        (Platform.GEMINI, "from gemini"),
    ],
)
def test_generate_commit_message_dispatches(mock_bases, platform, expected):
    with respx.mock(assert_all_called=False) as router:
        router.post(f"{BASE}/v1/messages").mock(return_value=claude_reply("from claude"))
        router.post(f"{BASE}/v1/chat/completions").mock(
            return_value=openai_reply("from openai")
        )
        router.post(host="mock.test", path="/v1/models/m:generateContent").mock(
            return_value=gemini_reply("from gemini")
        )
        assert generate_commit_message(platform, "placeholder", "m", "s", "u") == expected