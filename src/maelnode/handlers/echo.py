from __future__ import annotations

from typing import Any

from maelnode.net.context import MessageContext
from maelnode.net.handler import MessageHandler
from maelnode.net.payload import PayloadModel


class EchoMessage(PayloadModel):
    echo: Any


class EchoHandler(MessageHandler):
    handled_messages = ("echo",)

    def handle(self, ctx: MessageContext) -> None:
        msg = ctx.typed_payload(EchoMessage)
        ctx.reply("echo_ok", {"echo": msg.echo})
