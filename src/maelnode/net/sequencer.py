from __future__ import annotations

from typing import Optional

from maelnode.net.handshake import Node
from maelnode.net.messages import Body, Envelope, JsonObject, MessageId, NodeId


class OutputSequencer:
    """Assigns outbound message ids and stamps the source address.

    One instance per node process. Ids start at 1 and are never reused within
    a run; every envelope built here is expected to be appended to an outbound
    buffer.
    """

    def __init__(self, node: Optional[Node] = None, *, start: int = 1) -> None:
        self._node = node
        self._next_id = int(start)

    @property
    def next_id(self) -> MessageId:
        return self._next_id

    def _local_id(self) -> Optional[NodeId]:
        if self._node is None or not self._node.initialized:
            return None
        return self._node.local_id

    def envelope(
        self,
        kind: str,
        payload: JsonObject,
        *,
        dest: Optional[NodeId] = None,
        in_reply_to: Optional[MessageId] = None,
    ) -> Envelope:
        msg_id = self._next_id
        self._next_id += 1
        return Envelope(
            src=self._local_id(),
            dest=dest,
            body=Body(kind=kind, msg_id=msg_id, in_reply_to=in_reply_to, payload=payload),
        )

    def __repr__(self) -> str:
        return f"OutputSequencer(next_id={self._next_id!r})"
