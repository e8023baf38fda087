# prepmate/services/llm_result.py
"""
Explicit result values threaded through the LLM output pipeline.

Every step (adapter call, fence stripping, lenient parsing, normalization)
returns either ``Ok(value)`` or ``Err(error)`` where the error is one of:

- MalformedResponse: the model answered but the text could not be turned into
  the expected JSON shape. Triggers the single strict retry.
- UpstreamFailure: the call itself failed (network, auth, quota, non-2xx).
  Never retried by the pipeline.
"""

from dataclasses import dataclass
from typing import Any, Generic, TypeVar, Union

T = TypeVar("T")

RAW_LOG_LIMIT = 500


@dataclass(frozen=True)
class MalformedResponse:
    reason: str
    raw: str = ""

    status_code = 502
    public_message = "Invalid JSON returned from the generative API."

    @classmethod
    def from_raw(cls, reason: str, raw: Any) -> "MalformedResponse":
        text = raw if isinstance(raw, str) else repr(raw)
        return cls(reason=reason, raw=text[:RAW_LOG_LIMIT])


@dataclass(frozen=True)
class UpstreamFailure:
    reason: str

    status_code = 500
    public_message = "The generative API call failed."


LLMError = Union[MalformedResponse, UpstreamFailure]


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err:
    error: LLMError

    @property
    def ok(self) -> bool:
        return False


Result = Union[Ok[T], Err]
