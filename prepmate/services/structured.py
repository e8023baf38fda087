# prepmate/services/structured.py
"""
Call the generative API and turn its answer into a normalized payload.

generate_structured(prompt, normalize_fn, expect=...) runs
adapter -> strip_fences -> parse_lenient -> normalize_fn -> accept.
A MalformedResponse on the primary answer triggers exactly one further call
with a stricter system instruction. UpstreamFailure is returned as-is.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

from prepmate.services import prompts
from prepmate.services.llm_adapter import LLMReply, call_llm
from prepmate.services.llm_output import extract_and_parse
from prepmate.services.llm_result import Err, MalformedResponse, Ok, Result

logger = logging.getLogger(__name__)

Accept = Callable[[Any], Optional[str]]


@dataclass(frozen=True)
class StructuredReply:
    data: Any
    reply: LLMReply
    attempts: int


def _interpret(reply: LLMReply, expect: str, normalize_fn: Callable[[Any], Any],
               accept: Optional[Accept]) -> Result:
    parsed = extract_and_parse(reply.text, expect)
    if not parsed.ok:
        return parsed
    data = normalize_fn(parsed.value)
    if accept is not None:
        reason = accept(data)
        if reason:
            return Err(MalformedResponse.from_raw(reason, reply.text))
    return Ok(data)


async def generate_structured(
    prompt: prompts.Prompt,
    normalize_fn: Callable[[Any], Any],
    expect: str = "object",
    *,
    retry: bool = True,
    strict_prompt: Optional[prompts.Prompt] = None,
    accept: Optional[Accept] = None,
) -> Result:
    """
    Returns Ok(StructuredReply) or Err(MalformedResponse | UpstreamFailure).
    At most two outbound calls.
    """
    prompt_type, system, user = prompt
    called = await call_llm(prompt_type, user, system)
    if not called.ok:
        return called
    result = _interpret(called.value, expect, normalize_fn, accept)
    if result.ok:
        return Ok(StructuredReply(data=result.value, reply=called.value, attempts=1))

    logger.warning("LLM %s returned malformed output (%s)", prompt_type, result.error.reason)
    if not retry:
        return result

    if strict_prompt is None:
        strict_prompt = (prompt_type, prompts.strict(system), user)
    retry_type, retry_system, retry_user = strict_prompt
    called = await call_llm(retry_type, retry_user, retry_system)
    if not called.ok:
        return called
    result = _interpret(called.value, expect, normalize_fn, accept)
    if result.ok:
        return Ok(StructuredReply(data=result.value, reply=called.value, attempts=2))

    logger.error("LLM %s still malformed after strict retry (%s)", prompt_type, result.error.reason)
    return result
