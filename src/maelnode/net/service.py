# src/maelnode/net/service.py
"""
Node service: one inbound message in, zero or more outbound envelopes out.

Flow per message:
  decode -> MessageContext -> ("init" ? handshake : gate + router) -> drain

Errors:
  - ErrorMessage raised anywhere in the cycle becomes an ``error`` reply to the
    inbound sender. Envelopes buffered before the failure are still returned.
  - Undecodable lines have no sender to reply to: they are logged and dropped.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from maelnode.net.codec import WireDecodeError, decode_envelope
from maelnode.net.context import MessageContext
from maelnode.net.errors import ErrorMessage, malformed
from maelnode.net.handler import MessageHandler
from maelnode.net.handshake import Node, process_init, require_initialized
from maelnode.net.messages import INIT, Envelope
from maelnode.net.net_logging import log_event
from maelnode.net.router import Router
from maelnode.net.sequencer import OutputSequencer
from maelnode.runtime.metrics import inc_counter

_log = logging.getLogger("maelnode.service")


class NodeService:
    def __init__(
        self,
        *,
        router: Optional[Router] = None,
        node: Optional[Node] = None,
        sequencer: Optional[OutputSequencer] = None,
    ) -> None:
        self.router = router if router is not None else Router()
        self.node = node if node is not None else Node()
        self.sequencer = sequencer if sequencer is not None else OutputSequencer(self.node)

    def register(self, handler: MessageHandler) -> "NodeService":
        self.router.register(handler)
        return self

    def register_all(self, handlers: Iterable[MessageHandler]) -> "NodeService":
        self.router.register_all(handlers)
        return self

    def new_context(self, inbound: Optional[Envelope]) -> MessageContext:
        return MessageContext(inbound, self.sequencer, self.node)

    # ---- entry points ----

    def input(self, line: bytes | str) -> List[Envelope]:
        """Process one raw inbound line."""
        try:
            env = decode_envelope(line)
        except WireDecodeError as e:
            err = malformed(str(e), cause=e)
            inc_counter("decode_dropped")
            log_event(_log, "decode_dropped", level=logging.WARNING, code=e.code, error=str(err))
            return []
        return self.input_envelope(env)

    def input_envelope(self, env: Envelope) -> List[Envelope]:
        """Process one decoded envelope and drain everything it produced."""
        inc_counter("messages_in")
        ctx = self.new_context(env)
        try:
            self.handle(ctx)
        except ErrorMessage as err:
            self._report(ctx, err)

        out = list(ctx.drain())
        inc_counter("messages_out", len(out))
        return out

    def handle(self, ctx: MessageContext) -> None:
        if ctx.kind == INIT:
            self._handle_init(ctx)
            return
        require_initialized(self.node, ctx.kind)
        self.router.dispatch(ctx)

    # ---- internals ----

    def _handle_init(self, ctx: MessageContext) -> None:
        msg = process_init(self.node, ctx)
        log_event(_log, "node_init", node_id=msg.node_id, node_ids=list(self.node.peers), src=ctx.src)
        self.router.notify_init(msg.node_id, msg.node_ids, ctx)

    def _report(self, ctx: MessageContext, err: ErrorMessage) -> None:
        inc_counter("errors_total")
        inc_counter(f"errors_code_{err.code}")
        log_event(
            _log,
            "dispatch_failed",
            level=logging.WARNING,
            kind=ctx.kind,
            src=ctx.src,
            msg_id=ctx.msg_id,
            code=err.code,
            text=err.text,
            cause=repr(err.cause) if err.cause is not None else None,
        )
        ctx.error(err)
