# riddlebox/puzzles/client.py
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests

from .errors import EmptyUpstreamResponse, NoCredentials, UpstreamError, UpstreamTimeout

logger = logging.getLogger(__name__)

GEMINI_URL = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"
GEMINI_MODEL = "gemini-2.0-flash"

OAI_URL = "https://api.openai.com/v1/chat/completions"
OAI_MODEL = "gpt-4o-mini"

DEFAULT_TIMEOUT = 30


class GenerationClient:
    """
    Text-in/text-out wrapper around the generation service.

    `generate` returns the raw model text or raises one of the
    GenerationError subclasses. It never retries; the pipeline falls back
    instead so a request waits on at most one upstream call.
    """

    def __init__(self, api_key: str = "", provider: str = "gemini", model: str = "",
                 timeout: float = DEFAULT_TIMEOUT, session: Optional[requests.Session] = None):
        self.api_key = (api_key or "").strip()
        self.provider = (provider or "gemini").lower()
        if self.provider not in ("gemini", "openai"):
            raise ValueError(f"unknown generation provider: {provider}")
        self.model = model or (GEMINI_MODEL if self.provider == "gemini" else OAI_MODEL)
        self.timeout = timeout
        self.session = session or requests.Session()

    @property
    def has_credentials(self) -> bool:
        return bool(self.api_key)

    def generate(self, prompt: str, temperature: float = 0.9, max_output_length: int = 200) -> str:
        if not self.api_key:
            raise NoCredentials(f"{self.provider} API key not configured")

        if self.provider == "openai":
            url, kwargs = self._openai_request(prompt, temperature, max_output_length)
        else:
            url, kwargs = self._gemini_request(prompt, temperature, max_output_length)

        try:
            r = self.session.post(url, timeout=self.timeout, **kwargs)
        except requests.Timeout as exc:
            raise UpstreamTimeout(f"{self.provider} timed out after {self.timeout}s") from exc
        except requests.RequestException as exc:
            # transport errors echo the request URL; keep them out of the message
            raise UpstreamError(f"{self.provider} request failed ({type(exc).__name__})") from exc

        if not r.ok:
            logger.warning("[puzzles] %s returned HTTP %s: %s", self.provider, r.status_code, (r.text or "")[:200])
            raise UpstreamError(f"{self.provider} returned HTTP {r.status_code}", status=r.status_code)

        try:
            body = r.json()
        except ValueError as exc:
            raise EmptyUpstreamResponse(f"{self.provider} returned a non-JSON body") from exc

        text = self._extract_text(body)
        if not text:
            raise EmptyUpstreamResponse(f"{self.provider} returned no text")
        return text

    # ------------------------------------------------------------------
    # provider payloads
    # ------------------------------------------------------------------

    def _gemini_request(self, prompt: str, temperature: float, max_output_length: int):
        payload = {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": {
                "temperature": temperature,
                "maxOutputTokens": max_output_length,
            },
        }
        headers = {"x-goog-api-key": self.api_key, "Content-Type": "application/json"}
        return GEMINI_URL.format(model=self.model), {"headers": headers, "json": payload}

    def _openai_request(self, prompt: str, temperature: float, max_output_length: int):
        payload = {
            "model": self.model,
            "messages": [{"role": "user", "content": prompt}],
            "temperature": temperature,
            "max_tokens": max_output_length,
        }
        headers = {"Authorization": f"Bearer {self.api_key}", "Content-Type": "application/json"}
        return OAI_URL, {"headers": headers, "json": payload}

    def _extract_text(self, body: Any) -> str:
        if not isinstance(body, dict):
            return ""
        try:
            if self.provider == "openai":
                text = body["choices"][0]["message"]["content"]
            else:
                parts = body["candidates"][0]["content"]["parts"]
                text = "".join(p.get("text") or "" for p in parts if isinstance(p, dict))
        except (KeyError, IndexError, TypeError):
            return ""
        return (text or "").strip()


def client_from_config(cfg: Dict[str, Any], session: Optional[requests.Session] = None) -> GenerationClient:
    provider = (cfg.get("GENERATION_PROVIDER") or "gemini").lower()
    key = cfg.get("OPENAI_API_KEY") if provider == "openai" else cfg.get("GEMINI_API_KEY")
    return GenerationClient(
        api_key=key or "",
        provider=provider,
        model=cfg.get("GENERATION_MODEL") or "",
        timeout=cfg.get("GENERATION_TIMEOUT") or DEFAULT_TIMEOUT,
        session=session,
    )
