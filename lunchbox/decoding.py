"""Decode AI responses into `LunchBoxIdea` lists.

Providers are not consistent about where the ideas end up, so decoding is an
ordered list of named strategies tried in turn. The first one to succeed
wins:

1. provider envelope: the provider's generated text, itself JSON, decoded
   with strategies 2 and 3
2. wrapper object: ``{"ideas": [...]}``
3. bare array: ``[...]``

An entry missing a required field fails the whole strategy, so a partially
valid payload never yields ideas with empty names, ingredients or steps.
"""

import json
from typing import Any, Callable, Iterable, NamedTuple

from pydantic import BaseModel, TypeAdapter, ValidationError

from lunchbox.models import LunchBoxIdea


class DecodeError(ValueError):
    pass


class Strategy(NamedTuple):
    name: str
    decode: Callable[[Any], list[LunchBoxIdea]]


class IdeasWrapper(BaseModel):
    ideas: list[LunchBoxIdea]


_IDEAS = TypeAdapter(list[LunchBoxIdea])


def _describe(exc: ValidationError) -> str:
    first = exc.errors()[0]
    loc = ".".join(str(part) for part in first["loc"])
    return f"{exc.error_count()} invalid field(s), first at {loc}: {first['msg']}"


def strip_fences(text: str) -> str:
    """Remove a surrounding Markdown code fence, if there is one."""
    cleaned = text.strip()
    if cleaned.startswith("```"):
        lines = cleaned.split("\n")
        lines = [l for l in lines[1:] if not l.strip().startswith("```")]
        cleaned = "\n".join(lines)
    return cleaned


def parse_json(raw: str | bytes) -> Any:
    try:
        return json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise DecodeError(f"Not JSON: {exc}") from exc


def decode_wrapper(data: Any) -> list[LunchBoxIdea]:
    if not isinstance(data, dict) or "ideas" not in data:
        raise DecodeError("No 'ideas' key")
    try:
        return IdeasWrapper.model_validate(data).ideas
    except ValidationError as exc:
        raise DecodeError(_describe(exc)) from exc


def decode_bare_array(data: Any) -> list[LunchBoxIdea]:
    if not isinstance(data, list):
        raise DecodeError("Not an array")
    try:
        return _IDEAS.validate_python(data)
    except ValidationError as exc:
        raise DecodeError(_describe(exc)) from exc


INNER_STRATEGIES = (
    Strategy("wrapper object", decode_wrapper),
    Strategy("bare array", decode_bare_array),
)


def decode_first(data: Any, strategies: Iterable[Strategy]) -> list[LunchBoxIdea]:
    failures: list[str] = []
    for strategy in strategies:
        try:
            return strategy.decode(data)
        except DecodeError as exc:
            failures.append(f"{strategy.name}: {exc}")
    raise DecodeError("; ".join(failures))


def envelope_strategy(extract: Callable[[Any], str]) -> Strategy:
    """Wrap a provider's envelope extractor as the first decoding strategy."""

    def decode(data: Any) -> list[LunchBoxIdea]:
        inner = parse_json(strip_fences(extract(data)))
        try:
            return decode_first(inner, INNER_STRATEGIES)
        except DecodeError as exc:
            raise DecodeError(f"[{exc}]") from exc

    return Strategy("provider envelope", decode)


def decode_ideas(
    body: str | bytes,
    extract: Callable[[Any], str],
) -> list[LunchBoxIdea]:
    """Decode a raw response body, raising `DecodeError` if nothing fits."""
    data = parse_json(body)
    return decode_first(data, (envelope_strategy(extract), *INNER_STRATEGIES))
