"""Payload projection.

Inbound payloads stay as plain JSON mappings until a handler asks for a typed
view. Typed views are validated with pydantic, so any type pydantic can
validate works (models, dataclasses, TypedDicts, ``dict[str, Any]``).

Outbound payloads go the other way: models are dumped to JSON-mode mappings,
and the result must be object-shaped and must not touch the reserved body
fields.
"""

from __future__ import annotations

import dataclasses
from functools import lru_cache
from typing import Any, Dict, Mapping, Type, TypeVar

from pydantic import BaseModel, ConfigDict, TypeAdapter, ValidationError

from maelnode.net.codec import WireEncodeError, dumps_json
from maelnode.net.errors import crash, malformed
from maelnode.net.messages import RESERVED_BODY_FIELDS, JsonObject

T = TypeVar("T")


class PayloadModel(BaseModel):
    """Base for typed payload views: unknown keys are ignored, never rejected."""

    model_config = ConfigDict(extra="ignore")


class EmptyPayload(PayloadModel):
    pass


@lru_cache(maxsize=256)
def _adapter(tp: Any) -> TypeAdapter:
    return TypeAdapter(tp)


def project_payload(kind: str, payload: Mapping[str, Any], tp: Type[T]) -> T:
    try:
        return _adapter(tp).validate_python(dict(payload))
    except ValidationError as e:
        raise malformed(f"failed to deserialize message `{kind}`", cause=e) from e


def to_payload(data: Any) -> JsonObject:
    """Normalize outbound content to a JSON object mapping.

    ``None`` means an empty payload. The result is checked to encode as JSON
    here, before any id is assigned, so bad content fails at the call site.
    """
    if data is None:
        return {}
    if isinstance(data, BaseModel):
        out: Dict[str, Any] = data.model_dump(mode="json")
    elif dataclasses.is_dataclass(data) and not isinstance(data, type):
        out = dataclasses.asdict(data)
    elif isinstance(data, Mapping):
        out = dict(data)
    else:
        raise crash("message content must serialize to an object")

    if not all(isinstance(k, str) for k in out):
        raise crash("message content keys must be strings")
    clash = sorted(RESERVED_BODY_FIELDS.intersection(out))
    if clash:
        raise crash(f"message content uses reserved fields: {', '.join(clash)}")
    try:
        dumps_json(out)
    except WireEncodeError as e:
        raise crash("message content is not JSON-representable", cause=e) from e
    return out


__all__ = [
    "EmptyPayload",
    "PayloadModel",
    "project_payload",
    "to_payload",
]
