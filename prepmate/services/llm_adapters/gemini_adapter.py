# prepmate/services/llm_adapters/gemini_adapter.py
"""
Async HTTP adapter for the Gemini generateContent REST endpoint.
Retries transport errors with backoff; HTTP error statuses are not retried.

Env configuration:
- LLM_HTTP_URL: API base (default https://generativelanguage.googleapis.com/v1beta)
- LLM_MODEL: model name (default gemini-2.5-flash)
- LLM_API_KEY: required, sent as x-goog-api-key
- LLM_TIMEOUT_SEC: request timeout (default 60)
- LLM_RETRIES: number of retries on transport errors (default 0)
- LLM_BACKOFF_FACTOR: backoff multiplier (default 0.5)
"""

import asyncio
import logging
from typing import Any, Dict, Optional

import httpx

from prepmate.core.config import settings

logger = logging.getLogger(__name__)

# tests install an httpx.MockTransport here
_transport: Optional[httpx.AsyncBaseTransport] = None


def build_body(prompt: str, system_prompt: str = "") -> Dict[str, Any]:
    text = f"{system_prompt}\n\nUser: {prompt}" if system_prompt else prompt
    return {
        "contents": [{"role": "user", "parts": [{"text": text}]}],
        "generationConfig": {
            "temperature": settings.LLM_TEMPERATURE,
            "maxOutputTokens": settings.LLM_MAX_OUTPUT_TOKENS,
        },
    }


def extract_text(data: Dict[str, Any]) -> str:
    """Concatenate the text parts of the first candidate."""
    candidates = data.get("candidates") or []
    if not candidates:
        feedback = data.get("promptFeedback") or {}
        raise RuntimeError(f"no candidates returned (blockReason={feedback.get('blockReason')})")
    parts = ((candidates[0] or {}).get("content") or {}).get("parts") or []
    return "".join(p.get("text", "") for p in parts if isinstance(p, dict))


async def _post_once(client: httpx.AsyncClient, url: str, body: Dict[str, Any]) -> Dict[str, Any]:
    headers = {"Content-Type": "application/json", "x-goog-api-key": settings.LLM_API_KEY}
    resp = await client.post(url, json=body, headers=headers, timeout=settings.LLM_TIMEOUT_SEC)
    resp.raise_for_status()
    return resp.json()


async def generate(prompt_type: str, prompt: str, system_prompt: str = "") -> str:
    if not settings.LLM_API_KEY:
        raise RuntimeError("LLM_API_KEY unset for gemini_adapter")
    url = f"{settings.LLM_HTTP_URL.rstrip('/')}/models/{settings.LLM_MODEL}:generateContent"
    body = build_body(prompt, system_prompt)
    retries = max(0, int(settings.LLM_RETRIES))

    async with httpx.AsyncClient(transport=_transport) as client:
        for attempt in range(1, retries + 2):
            try:
                data = await _post_once(client, url, body)
                return extract_text(data)
            except httpx.TransportError as exc:
                if attempt <= retries:
                    logger.info("gemini %s transport error (attempt %d): %s", prompt_type, attempt, exc)
                    await asyncio.sleep(settings.LLM_BACKOFF_FACTOR * attempt)
                    continue
                raise
