from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List

from maelnode.net.context import MessageContext
from maelnode.net.errors import ErrorMessage, crash, not_supported
from maelnode.net.handler import MessageHandler
from maelnode.net.messages import NodeId
from maelnode.net.net_logging import log_event

_log = logging.getLogger("maelnode.router")


def _invoke(handler: MessageHandler, fn_name: str, *args) -> None:
    try:
        getattr(handler, fn_name)(*args)
    except ErrorMessage:
        raise
    except Exception as e:
        raise crash(f"{type(handler).__name__}.{fn_name} failed: {type(e).__name__}", cause=e) from e


@dataclass
class Router:
    """Registry of handler instances keyed by discriminator.

    Registration order is dispatch order, across all discriminators.
    """

    handlers: List[MessageHandler] = field(default_factory=list)
    by_kind: Dict[str, List[int]] = field(default_factory=dict)

    def register(self, handler: MessageHandler) -> int:
        idx = len(self.handlers)
        self.handlers.append(handler)
        kinds = tuple(handler.handled_messages)
        for kind in kinds:
            self.by_kind.setdefault(str(kind), []).append(idx)
        log_event(_log, "handler_registered", handler=type(handler).__name__, index=idx, kinds=list(kinds))
        return idx

    def register_all(self, handlers: Iterable[MessageHandler]) -> None:
        for h in handlers:
            self.register(h)

    def dispatch(self, ctx: MessageContext) -> None:
        kind = ctx.kind
        idxs = self.by_kind.get(kind)
        if not idxs:
            raise not_supported(kind)

        # First failure stops the chain; earlier output stays buffered.
        for i in idxs:
            _invoke(self.handlers[i], "handle", ctx)

    def notify_init(self, node_id: NodeId, node_ids: List[NodeId], ctx: MessageContext) -> None:
        for handler in self.handlers:
            _invoke(handler, "on_init", node_id, list(node_ids), ctx)
