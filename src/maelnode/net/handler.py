from __future__ import annotations

from typing import ClassVar, List, Tuple

from maelnode.net.context import MessageContext
from maelnode.net.messages import NodeId


class MessageHandler:
    """Base class for message handlers.

    Subclasses declare the discriminators they handle in ``handled_messages``
    and implement ``handle``. Instances are created once and live for the
    whole process; any state they keep is private to them.

    Failures are reported by raising ``ErrorMessage``.
    """

    handled_messages: ClassVar[Tuple[str, ...]] = ()

    def on_init(self, node_id: NodeId, node_ids: List[NodeId], ctx: MessageContext) -> None:
        """Called after every successful init handshake. Default: no-op."""
        return None

    def handle(self, ctx: MessageContext) -> None:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}(handles={list(self.handled_messages)!r})"
