# prepmate/services/llm_adapter.py
"""
Pluggable LLM adapter loader and facade.

Environment:
- LLM_ADAPTER: "mock" (default), "gemini", or a dotted module path

Adapter modules expose:
- async def generate(prompt_type: str, prompt: str, system_prompt: str) -> str

Public:
- async def call_llm(prompt_type, prompt, system_prompt) -> Ok(LLMReply) | Err(UpstreamFailure)
"""

import importlib
import logging
import time
import uuid
from dataclasses import dataclass

from prepmate.core.config import settings
from prepmate.services.llm_result import Err, Ok, Result, UpstreamFailure

logger = logging.getLogger(__name__)

_BUILTIN = {
    "mock": "prepmate.services.llm_adapters.mock_adapter",
    "gemini": "prepmate.services.llm_adapters.gemini_adapter",
}

_adapter = None


@dataclass(frozen=True)
class LLMReply:
    text: str
    processing_time_ms: int
    request_id: str


def new_request_id() -> str:
    return f"req_{int(time.time() * 1000)}_{uuid.uuid4().hex[:9]}"


def _load_adapter(name: str):
    global _adapter
    mod = importlib.import_module(_BUILTIN.get(name, name))
    # adapter module must implement async generate
    if not hasattr(mod, "generate"):
        raise RuntimeError(f"Adapter {name} does not expose generate()")
    _adapter = mod
    return mod


def get_adapter():
    if _adapter is None:
        _load_adapter(settings.LLM_ADAPTER)
    return _adapter


def set_adapter(mod) -> None:
    """Swap the active adapter module (tests, scripts)."""
    global _adapter
    _adapter = mod


async def call_llm(prompt_type: str, prompt: str, system_prompt: str = "") -> Result:
    """
    Unified entry to call the configured adapter. Any adapter exception is an
    UpstreamFailure; the text itself is returned untouched.
    """
    request_id = new_request_id()
    started = time.monotonic()
    try:
        adapter = get_adapter()
        text = await adapter.generate(prompt_type, prompt, system_prompt)
    except Exception as exc:
        logger.warning("LLM call %s (%s) failed: %s", prompt_type, request_id, exc)
        return Err(UpstreamFailure(reason=f"{type(exc).__name__}: {exc}"))
    elapsed = int((time.monotonic() - started) * 1000)
    logger.debug("LLM call %s (%s) took %d ms", prompt_type, request_id, elapsed)
    return Ok(LLMReply(text=text if isinstance(text, str) else "", processing_time_ms=elapsed,
                       request_id=request_id))
