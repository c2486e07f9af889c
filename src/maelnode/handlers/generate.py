from __future__ import annotations

from typing import List, Optional

from maelnode.net.context import MessageContext
from maelnode.net.errors import ErrorKind, ErrorMessage
from maelnode.net.handler import MessageHandler
from maelnode.net.messages import NodeId
from maelnode.net.payload import EmptyPayload


class GenerateHandler(MessageHandler):
    """Cluster-unique ids without coordination.

    Ids are ``<node_id>-<n>``: node ids are unique within the cluster and ``n``
    only grows on this node.
    """

    handled_messages = ("generate",)

    def __init__(self) -> None:
        self._node_id: Optional[NodeId] = None
        self._seq = 0

    def on_init(self, node_id: NodeId, node_ids: List[NodeId], ctx: MessageContext) -> None:
        self._node_id = node_id

    def handle(self, ctx: MessageContext) -> None:
        ctx.typed_payload(EmptyPayload)
        node_id = self._node_id or ctx.local_id
        if not node_id:
            raise ErrorMessage(ErrorKind.TEMPORARILY_UNAVAILABLE, "node id not known yet")
        self._seq += 1
        ctx.reply("generate_ok", {"id": f"{node_id}-{self._seq}"})
