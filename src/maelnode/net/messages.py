from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

JsonScalar = Union[str, int, float, bool, None]
JsonValue = Union[JsonScalar, Dict[str, Any], List[Any]]
JsonObject = Dict[str, JsonValue]

NodeId = str
MessageId = int

# Body metadata and payload share one flattened namespace on the wire.
TYPE_FIELD = "type"
MSG_ID_FIELD = "msg_id"
IN_REPLY_TO_FIELD = "in_reply_to"
RESERVED_BODY_FIELDS = frozenset({TYPE_FIELD, MSG_ID_FIELD, IN_REPLY_TO_FIELD})

# System discriminators
INIT = "init"
INIT_OK = "init_ok"
ERROR = "error"


@dataclass(frozen=True, slots=True)
class Body:
    kind: str
    msg_id: Optional[MessageId] = None
    in_reply_to: Optional[MessageId] = None
    payload: JsonObject = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class Envelope:
    body: Body
    src: Optional[NodeId] = None
    dest: Optional[NodeId] = None

    @property
    def kind(self) -> str:
        return self.body.kind

    @property
    def msg_id(self) -> Optional[MessageId]:
        return self.body.msg_id

    @property
    def in_reply_to(self) -> Optional[MessageId]:
        return self.body.in_reply_to

    @property
    def payload(self) -> JsonObject:
        return self.body.payload
