from __future__ import annotations

from typing import Any, List, Mapping, Optional

from maelnode.net.codec import decode_envelope, encode_envelope
from maelnode.net.messages import Body, Envelope, NodeId
from maelnode.net.service import NodeService


class InMemoryHarness:
    """
    Minimal in-process harness used for unit tests.

    - Does not touch stdin/stdout
    - Sends through the wire codec so tests exercise the same encode/decode
      path as the line transport
    - Keeps every envelope the node produced, in order, in ``sent``
    """

    def __init__(self, service: NodeService, *, client_id: NodeId = "c1") -> None:
        self.service = service
        self.client_id = client_id
        self.sent: List[Envelope] = []
        self._next_client_msg_id = 1

    def send(
        self,
        kind: str,
        payload: Optional[Mapping[str, Any]] = None,
        *,
        src: Optional[NodeId] = None,
        dest: Optional[NodeId] = None,
        msg_id: Optional[int] = None,
    ) -> List[Envelope]:
        if msg_id is None:
            msg_id = self._next_client_msg_id
            self._next_client_msg_id += 1
        env = Envelope(
            src=src if src is not None else self.client_id,
            dest=dest if dest is not None else self.service.node.local_id,
            body=Body(kind=kind, msg_id=msg_id, payload=dict(payload or {})),
        )
        return self.send_line(encode_envelope(env))

    def send_line(self, line: str) -> List[Envelope]:
        out = [decode_envelope(encode_envelope(e)) for e in self.service.input(line)]
        self.sent.extend(out)
        return out

    def init(self, node_id: NodeId = "n1", node_ids: Optional[List[NodeId]] = None) -> List[Envelope]:
        return self.send("init", {"node_id": node_id, "node_ids": list(node_ids or [node_id])})
