# src/maelnode/net/codec.py
from __future__ import annotations

import json
from typing import Any, Dict

from maelnode.net.messages import (
    IN_REPLY_TO_FIELD,
    MSG_ID_FIELD,
    RESERVED_BODY_FIELDS,
    TYPE_FIELD,
    Body,
    Envelope,
)

Json = Dict[str, Any]


class WireDecodeError(RuntimeError):
    def __init__(self, code: str, msg: str) -> None:
        super().__init__(msg)
        self.code = code


class WireEncodeError(RuntimeError):
    def __init__(self, code: str, msg: str) -> None:
        super().__init__(msg)
        self.code = code


def dumps_json(obj: Any) -> str:
    try:
        return json.dumps(obj, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    except (TypeError, ValueError) as e:
        raise WireEncodeError("encode_failed", f"encode failed: {e}") from e


def loads_json(data: bytes | str) -> Any:
    try:
        if isinstance(data, bytes):
            data = data.decode("utf-8")
        return json.loads(data)
    except json.JSONDecodeError as e:
        raise WireDecodeError("invalid_json", f"invalid json: {e}") from e
    except UnicodeDecodeError as e:
        raise WireDecodeError("invalid_utf8", f"invalid utf-8: {e}") from e


def _coerce_opt_int(v: Any, field: str) -> int | None:
    if v is None:
        return None
    if isinstance(v, bool) or not isinstance(v, int):
        raise WireDecodeError("invalid_int_field", f"Invalid int field '{field}': expected int, got {type(v).__name__}")
    return v


def _coerce_opt_str(v: Any, field: str) -> str | None:
    if v is None:
        return None
    if isinstance(v, str):
        return v
    raise WireDecodeError("invalid_str_field", f"Invalid str field '{field}': expected str, got {type(v).__name__}")


def _coerce_body(body_raw: Any) -> Body:
    if not isinstance(body_raw, dict):
        raise WireDecodeError("missing_body", "Wire message missing 'body' object")

    kind = body_raw.get(TYPE_FIELD)
    if not isinstance(kind, str):
        raise WireDecodeError("invalid_type_field", "Wire message body missing string 'type'")

    msg_id = _coerce_opt_int(body_raw.get(MSG_ID_FIELD), MSG_ID_FIELD)
    if msg_id is not None and msg_id < 1:
        raise WireDecodeError("invalid_int_field", f"Invalid int field '{MSG_ID_FIELD}': must be positive")
    in_reply_to = _coerce_opt_int(body_raw.get(IN_REPLY_TO_FIELD), IN_REPLY_TO_FIELD)

    payload = {k: v for (k, v) in body_raw.items() if k not in RESERVED_BODY_FIELDS}
    return Body(kind=kind, msg_id=msg_id, in_reply_to=in_reply_to, payload=payload)


def envelope_to_dict(env: Envelope) -> Json:
    body: Json = dict(env.body.payload)
    body[TYPE_FIELD] = env.body.kind
    if env.body.msg_id is not None:
        body[MSG_ID_FIELD] = env.body.msg_id
    if env.body.in_reply_to is not None:
        body[IN_REPLY_TO_FIELD] = env.body.in_reply_to

    out: Json = {"body": body}
    if env.src is not None:
        out["src"] = env.src
    if env.dest is not None:
        out["dest"] = env.dest
    return out


def envelope_from_dict(raw: Any) -> Envelope:
    if not isinstance(raw, dict):
        raise WireDecodeError("invalid_message", "wire message must be an object")
    return Envelope(
        body=_coerce_body(raw.get("body")),
        src=_coerce_opt_str(raw.get("src"), "src"),
        dest=_coerce_opt_str(raw.get("dest"), "dest"),
    )


def encode_envelope(env: Envelope) -> str:
    """Encode one envelope as a single JSON line (no trailing newline)."""
    return dumps_json(envelope_to_dict(env))


def decode_envelope(line: bytes | str) -> Envelope:
    return envelope_from_dict(loads_json(line))
