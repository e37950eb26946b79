"""Optional LLM-based transfer parser (feature-flagged remote collaborator).

The LLM is only allowed to produce **ParseResult JSON**. The output is validated against the schema
by the enhancer before it is merged with the local result.
"""

from __future__ import annotations

import asyncio
import json
import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from dotenv import load_dotenv

DEFAULT_MODEL = "deepseek-chat"
DEFAULT_API_BASE = "https://api.deepseek.com/v1"


class LLMParserError(RuntimeError):
    """The remote model could not be reached or did not answer with a JSON object."""


@dataclass(frozen=True)
class LLMConfig:
    """Endpoint, credentials and sampling knobs for the remote transfer parser."""

    api_key: str
    model: str = DEFAULT_MODEL
    api_base: str = DEFAULT_API_BASE
    timeout_s: float | None = None
    temperature: float = 0.1
    max_tokens: int = 500


_FENCED_JSON_RE = re.compile(r"^```(?:json)?\s*(?P<body>.*?)\s*```$", re.DOTALL | re.IGNORECASE)


def _load_prompt() -> str:
    prompt_path = Path(__file__).resolve().parent / "prompt_transfer_v1.md"
    return prompt_path.read_text(encoding="utf-8")


def _build_request(user_text: str, config: LLMConfig) -> Request:
    payload = {
        "model": config.model,
        "temperature": config.temperature,
        "max_tokens": config.max_tokens,
        "response_format": {"type": "json_object"},
        "messages": [
            {"role": "system", "content": _load_prompt()},
            {"role": "user", "content": user_text},
        ],
    }
    return Request(
        f"{config.api_base.rstrip('/')}/chat/completions",
        method="POST",
        headers={
            "Authorization": f"Bearer {config.api_key}",
            "Content-Type": "application/json",
        },
        data=json.dumps(payload).encode(),
    )


def _post(req: Request, timeout_s: float | None) -> bytes:
    # `urlopen` blocks forever when no timeout is passed.
    kwargs: dict[str, Any] = {} if timeout_s is None else {"timeout": timeout_s}
    try:
        with urlopen(req, **kwargs) as resp:  # noqa: S310 (explicit, feature-flagged network call)
            return resp.read()
    except HTTPError as exc:
        raise LLMParserError(f"remote parser returned HTTP {exc.code}") from exc
    except URLError as exc:
        raise LLMParserError("remote parser unreachable") from exc


def _completion_text(body: bytes) -> str:
    try:
        content = json.loads(body)["choices"][0]["message"]["content"]
    except (ValueError, KeyError, IndexError, TypeError) as exc:
        raise LLMParserError("completion has no text content") from exc
    if not isinstance(content, str):
        raise LLMParserError("completion has no text content")
    return content


def _decode_document(content: str) -> dict[str, Any]:
    text = content.strip()
    fenced = _FENCED_JSON_RE.match(text)
    if fenced:
        text = fenced.group("body")

    try:
        obj = json.loads(text)
    except json.JSONDecodeError as exc:
        raise LLMParserError("completion is not JSON") from exc

    if not isinstance(obj, dict):
        raise LLMParserError("completion JSON is not an object")
    return obj


def parse_transfer_json_via_llm(user_text: str, *, config: LLMConfig) -> dict[str, Any]:
    """Ask the remote model for a ParseResult-shaped JSON object.

    Compatible with OpenAI-style `/v1/chat/completions` APIs. Blocks until the response arrives
    (no timeout unless `config.timeout_s` is set).

    Raises:
        LLMParserError: On transport errors or when the reply is not a JSON object.
    """

    body = _post(_build_request(user_text, config), config.timeout_s)
    return _decode_document(_completion_text(body))


class LLMRemoteParser:
    """Async remote parser: runs the blocking HTTP call in a worker thread."""

    def __init__(self, config: LLMConfig) -> None:
        self.config = config

    async def __call__(self, text: str) -> dict[str, Any]:
        return await asyncio.to_thread(parse_transfer_json_via_llm, text, config=self.config)


def llm_config_from_env(*, api_key: str | None = None) -> LLMConfig:
    """Build LLM config from environment variables (a local `.env` file is loaded first).

    Environment variables (optional):
        - LLM_MODEL
        - LLM_API_BASE
        - LLM_TIMEOUT_S
    """

    load_dotenv(".env")

    key = api_key or os.getenv("LLM_API_KEY") or ""
    if not key:
        raise LLMParserError("LLM_API_KEY is not set")

    raw_timeout = os.getenv("LLM_TIMEOUT_S")
    timeout_s = float(raw_timeout) if raw_timeout else None
    return LLMConfig(
        api_key=key,
        model=os.getenv("LLM_MODEL") or DEFAULT_MODEL,
        api_base=os.getenv("LLM_API_BASE") or DEFAULT_API_BASE,
        timeout_s=timeout_s,
    )
