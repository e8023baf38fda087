# prepmate/services/normalizer.py
"""
Schema normalizer for loosely structured LLM output.

A schema is an ordered mapping of target field name -> field spec. Each spec
carries an ordered tuple of candidate source keys. A key is either a dotted
path relative to the object being normalized ("analysis.summary") or a
"/"-prefixed path resolved from the document root ("/ATS_Score"). The first
candidate that is present and coerces wins; otherwise the spec's fallback,
then its default.

Every spec lists its own canonical name first, so an object that is already
in-schema normalizes to itself.

normalize(value, schema) never raises and always returns every field.
"""

import math
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Tuple

_MISSING = object()

CONFIDENCE_BANDS = (
    ("high", 90),
    ("medium", 70),
    ("low", 40),
)


class Invalid(Exception):
    """Raised by a spec's coerce() when a candidate value cannot be used."""


def _lookup(obj: Any, path: str) -> Any:
    cur = obj
    for part in path.split("."):
        if not isinstance(cur, dict) or part not in cur:
            return _MISSING
        cur = cur[part]
    return cur


def _resolve(source: Dict[str, Any], root: Dict[str, Any], key: str) -> Any:
    if key.startswith("/"):
        return _lookup(root, key[1:].replace("/", "."))
    return _lookup(source, key)


def _to_number(value: Any) -> float:
    if isinstance(value, bool) or value is None:
        raise Invalid("not a number")
    if isinstance(value, (int, float)):
        num = value
    elif isinstance(value, str) and value.strip():
        try:
            num = float(value.strip().rstrip("%"))
        except ValueError as exc:
            raise Invalid(str(exc)) from exc
    else:
        raise Invalid("not a number")
    if isinstance(num, float) and not math.isfinite(num):
        raise Invalid("not finite")
    return num


def _clamp(num, lo, hi):
    if num < lo:
        return lo
    if num > hi:
        return hi
    # "87" from a string becomes 87, 87.5 stays a float
    if isinstance(num, float) and num.is_integer() and not isinstance(lo, float):
        return int(num)
    return num


class FieldSpec:
    def __init__(self, keys: Sequence[str], default: Any = None):
        self.keys: Tuple[str, ...] = tuple(keys)
        self.default = default

    def coerce(self, value: Any, root: Dict[str, Any]) -> Any:
        raise NotImplementedError

    def fallback(self, source: Dict[str, Any], root: Dict[str, Any]) -> Any:
        return _MISSING

    def make_default(self) -> Any:
        if isinstance(self.default, (list, dict)):
            return type(self.default)(self.default)
        return self.default

    def resolve(self, source: Dict[str, Any], root: Dict[str, Any]) -> Any:
        for key in self.keys:
            value = _resolve(source, root, key)
            if value is _MISSING or value is None:
                continue
            try:
                return self.coerce(value, root)
            except Invalid:
                continue
        derived = self.fallback(source, root)
        if derived is not _MISSING:
            return derived
        return self.make_default()


class Number(FieldSpec):
    def __init__(self, keys, lo, hi, default=0,
                 fallback: Optional[Callable[[Dict[str, Any], Dict[str, Any]], Any]] = None):
        super().__init__(keys, default)
        self.lo = lo
        self.hi = hi
        self._fallback = fallback

    def coerce(self, value, root):
        return _clamp(_to_number(value), self.lo, self.hi)

    def fallback(self, source, root):
        if self._fallback is None:
            return _MISSING
        derived = self._fallback(source, root)
        if derived is None:
            return _MISSING
        return _clamp(derived, self.lo, self.hi)


class Confidence(FieldSpec):
    """Qualitative labels map onto fixed bands; numbers are clamped.

    scale=100 -> [0, 100] with low/medium/high = 40/70/90
    scale=1   -> [0, 1]   with low/medium/high = 0.4/0.7/0.9
    """

    def __init__(self, keys, scale=100, default=0):
        super().__init__(keys, default)
        self.scale = scale

    def coerce(self, value, root):
        if isinstance(value, str):
            label = value.strip().lower()
            for name, band in CONFIDENCE_BANDS:
                if name in label:
                    return band if self.scale == 100 else band / 100
        num = _to_number(value)
        if self.scale == 100:
            return _clamp(num, 0, 100)
        return _clamp(num, 0.0, 1.0)


class Text(FieldSpec):
    def __init__(self, keys, default="", strip=False):
        super().__init__(keys, default)
        self.strip = strip

    def coerce(self, value, root):
        if isinstance(value, bool):
            raise Invalid("bool is not text")
        if isinstance(value, (int, float)):
            value = str(value)
        if not isinstance(value, str):
            raise Invalid("not text")
        if self.strip:
            value = value.strip()
            if not value:
                raise Invalid("empty")
        return value


class Choice(FieldSpec):
    def __init__(self, keys, choices: Iterable[str], default: str):
        super().__init__(keys, default)
        self.choices = {c.lower(): c for c in choices}

    def coerce(self, value, root):
        if not isinstance(value, str):
            raise Invalid("not text")
        canonical = self.choices.get(value.strip().lower())
        if canonical is None:
            raise Invalid(f"unknown choice {value!r}")
        return canonical


class TextList(FieldSpec):
    def __init__(self, keys, limit: Optional[int] = None):
        super().__init__(keys, [])
        self.limit = limit

    def coerce(self, value, root):
        if isinstance(value, str):
            value = [value]
        if not isinstance(value, list):
            raise Invalid("not a list")
        out: List[str] = []
        for item in value:
            if isinstance(item, bool) or item is None:
                continue
            if isinstance(item, (int, float)):
                item = str(item)
            if isinstance(item, str) and item.strip():
                out.append(item)
        if self.limit is not None:
            out = out[:self.limit]
        return out


class Nested(FieldSpec):
    def __init__(self, schema: "Schema", keys):
        super().__init__(keys, None)
        self.schema = schema

    def coerce(self, value, root):
        if not isinstance(value, dict):
            raise Invalid("not an object")
        return _normalize(value, self.schema, root)

    def fallback(self, source, root):
        # root-relative candidates inside the sub-schema still apply
        return _normalize({}, self.schema, root)


class NestedList(FieldSpec):
    def __init__(self, schema: "Schema", keys, limit: Optional[int] = None,
                 require: Optional[str] = None):
        super().__init__(keys, [])
        self.schema = schema
        self.limit = limit
        self.require = require

    def coerce(self, value, root):
        if not isinstance(value, list):
            raise Invalid("not a list")
        out = []
        for item in value:
            if not isinstance(item, dict):
                continue
            normalized = _normalize(item, self.schema, root)
            if self.require and not normalized.get(self.require):
                continue
            out.append(normalized)
        if self.limit is not None:
            out = out[:self.limit]
        return out


Schema = Dict[str, FieldSpec]


def _normalize(source: Dict[str, Any], schema: Schema, root: Dict[str, Any]) -> Dict[str, Any]:
    return {name: spec.resolve(source, root) for name, spec in schema.items()}


def normalize(value: Any, schema: Schema) -> Dict[str, Any]:
    """Map an arbitrary parsed object onto ``schema``. Total."""
    source = value if isinstance(value, dict) else {}
    return _normalize(source, schema, source)


def normalize_list(value: Any, schema: Schema, limit: Optional[int] = None,
                   require: Optional[str] = None) -> List[Dict[str, Any]]:
    """Same as normalize() for a top-level array payload."""
    items = value if isinstance(value, list) else []
    return NestedList(schema, (), limit=limit, require=require).coerce(items, {})
