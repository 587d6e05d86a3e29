"""Clients for the AI services that write commit messages."""

from __future__ import annotations

import os
from typing import Any

import httpx

from .config import Platform

ANTHROPIC_API_BASE_ENV = "ANTHROPIC_API_BASE"
OPENAI_API_BASE_ENV = "OPENAI_API_BASE"
GEMINI_API_BASE_ENV = "GEMINI_API_BASE"

_MAX_TOKENS = 1000


class ApiError(Exception):
    """An AI service failed or answered in an unexpected form."""


def _base_url(env_name: str, default: str) -> str:
    return os.environ.get(env_name, default)


def _post(
    service: str,
    url: str,
    payload: dict[str, Any],
    headers: dict[str, str],
    params: dict[str, str] | None = None,
) -> Any:
    try:
        response = httpx.post(
            url, json=payload, headers=headers, params=params, timeout=None
        )
    except httpx.HTTPError as exc:
        raise ApiError(f"{service} API request failed: {exc}") from exc
    if not response.is_success:
        raise ApiError(f"{service} API error: {response.text}")
    try:
        return response.json()
    except ValueError as exc:
        raise ApiError(f"Invalid JSON from {service} API: {exc}") from exc


def call_claude(api_key: str, model: str, system_prompt: str, user_prompt: str) -> str:
    """Ask Claude for a message and return its text."""
    base = _base_url(ANTHROPIC_API_BASE_ENV, "https://api.anthropic.com")
    payload = {
        "model": model,
        "max_tokens": _MAX_TOKENS,
        "system": system_prompt,
        "messages": [
            {"role": "user", "content": [{"type": "text", "text": user_prompt}]}
        ],
    }
    headers = {
        "x-api-key": api_key,
        "anthropic-version": "2023-06-01",
        "content-type": "application/json",
    }
    body = _post("Claude", f"{base}/v1/messages", payload, headers)
    try:
        first = body["content"][0]
        if first["type"] != "text":
            raise ValueError("first content block is not text")
        text = first["text"]
    except (KeyError, IndexError, TypeError, ValueError) as exc:
        raise ApiError("Unexpected response format from Claude API") from exc
    if not isinstance(text, str):
        raise ApiError("Unexpected response format from Claude API")
    return text


def call_openai(api_key: str, model: str, system_prompt: str, user_prompt: str) -> str:
    """Ask an OpenAI chat model for a message and return its text."""
    base = _base_url(OPENAI_API_BASE_ENV, "https://api.openai.com")
    payload = {
        "model": model,
        "max_tokens": _MAX_TOKENS,
        "messages": [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_prompt},
        ],
    }
    headers = {
        "Authorization": f"Bearer {api_key}",
        "Content-Type": "application/json",
    }
    body = _post("OpenAI", f"{base}/v1/chat/completions", payload, headers)
    try:
        text = body["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError) as exc:
        raise ApiError("Unexpected response format from OpenAI API") from exc
    if not isinstance(text, str):
        raise ApiError("Unexpected response format from OpenAI API")
    return text


def call_gemini(api_key: str, model: str, system_prompt: str, user_prompt: str) -> str:
    """Ask Gemini for a message and return its text.

    Gemini takes the system and user prompts joined as one message.
    """
    base = _base_url(GEMINI_API_BASE_ENV, "https://generativelanguage.googleapis.com")
    payload = {
        "contents": [
            {"role": "user", "parts": [{"text": f"{system_prompt}\n\n{user_prompt}"}]}
        ],
        "generation_config": {"max_output_tokens": _MAX_TOKENS},
    }
    headers = {"Content-Type": "application/json"}
    body = _post(
        "Gemini",
        f"{base}/v1/models/{model}:generateContent",
        payload,
        headers,
        params={"key": api_key},
    )
    try:
        candidates = body["candidates"]
        if not candidates:
            raise IndexError("no candidates")
        parts = candidates[0]["content"]["parts"]
    except (KeyError, IndexError, TypeError) as exc:
        raise ApiError("Unexpected response format from Gemini API") from exc
    if not parts:
        raise ApiError("No text in response from Gemini API")
    try:
        text = parts[0]["text"]
    except (KeyError, TypeError) as exc:
        raise ApiError("Unexpected response format from Gemini API") from exc
    if not isinstance(text, str):
        raise ApiError("Unexpected response format from Gemini API")
    return text


def generate_commit_message(
    platform: Platform, api_key: str, model: str, system_prompt: str, user_prompt: str
) -> str:
    """Generate a message with the service for ``platform``."""
    call = {
        Platform.CLAUDE: call_claude,
        Platform.OPENAI: call_openai,
        Platform.GEMINI: call_gemini,
    }[platform]
    return call(api_key, model, system_prompt, user_prompt)