from __future__ import annotations

import copy
from collections import deque
from typing import Any, Deque, Iterator, Optional, Tuple, Type, TypeVar

from maelnode.net.errors import ErrorMessage, malformed
from maelnode.net.handshake import Node
from maelnode.net.messages import ERROR, Envelope, JsonObject, MessageId, NodeId
from maelnode.net.payload import project_payload, to_payload
from maelnode.net.sequencer import OutputSequencer

T = TypeVar("T")


class MessageContext:
    """Handler-facing view of one dispatch cycle.

    Wraps at most one inbound envelope and owns the outbound buffer for the
    cycle. Every write goes through the shared ``OutputSequencer`` so ids stay
    monotonic across contexts. The node (and its peer set) is only read here.
    """

    def __init__(
        self,
        inbound: Optional[Envelope],
        sequencer: OutputSequencer,
        node: Optional[Node] = None,
    ) -> None:
        self._inbound = inbound
        self._sequencer = sequencer
        self._node = node
        self._outbound: Deque[Envelope] = deque()

    @classmethod
    def empty(cls, sequencer: OutputSequencer) -> "MessageContext":
        return cls(None, sequencer)

    # ---- inbound accessors ----

    @property
    def inbound(self) -> Optional[Envelope]:
        return self._inbound

    @property
    def kind(self) -> str:
        return self._inbound.kind if self._inbound is not None else ""

    @property
    def src(self) -> Optional[NodeId]:
        return self._inbound.src if self._inbound is not None else None

    @property
    def dest(self) -> Optional[NodeId]:
        return self._inbound.dest if self._inbound is not None else None

    @property
    def msg_id(self) -> Optional[MessageId]:
        return self._inbound.msg_id if self._inbound is not None else None

    @property
    def in_reply_to(self) -> Optional[MessageId]:
        return self._inbound.in_reply_to if self._inbound is not None else None

    @property
    def payload(self) -> JsonObject:
        return dict(self._inbound.payload) if self._inbound is not None else {}

    @property
    def peers(self) -> Tuple[NodeId, ...]:
        return self._node.peers if self._node is not None else ()

    @property
    def local_id(self) -> Optional[NodeId]:
        return self._node.local_id if self._node is not None else None

    def typed_payload(self, tp: Type[T]) -> T:
        if self._inbound is None:
            raise malformed("message not available")
        return project_payload(self._inbound.kind, self._inbound.payload, tp)

    # ---- outbound ----

    def reply(self, kind: str, payload: Any = None) -> Envelope:
        return self._send(kind, to_payload(payload), dest=self.src, in_reply_to=self.msg_id)

    def announce(self, kind: str, payload: Any = None) -> Envelope:
        return self._send(kind, to_payload(payload), dest=None, in_reply_to=None)

    def fan_out(self, kind: str, payload: Any = None) -> list[Envelope]:
        data = to_payload(payload)
        return [self._send(kind, copy.deepcopy(data), dest=peer, in_reply_to=None) for peer in self.peers]

    def error(self, err: ErrorMessage) -> Envelope:
        return self.reply(ERROR, err.to_payload())

    def _send(
        self,
        kind: str,
        payload: JsonObject,
        *,
        dest: Optional[NodeId],
        in_reply_to: Optional[MessageId],
    ) -> Envelope:
        env = self._sequencer.envelope(kind, payload, dest=dest, in_reply_to=in_reply_to)
        self._outbound.append(env)
        return env

    @property
    def pending(self) -> int:
        return len(self._outbound)

    def drain(self) -> Iterator[Envelope]:
        out = list(self._outbound)
        self._outbound.clear()
        return iter(out)

    def __repr__(self) -> str:
        return f"MessageContext(kind={self.kind!r}, pending={len(self._outbound)})"
