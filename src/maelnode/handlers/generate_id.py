from __future__ import annotations

from pydantic import Field

from maelnode.net.context import MessageContext
from maelnode.net.errors import not_supported
from maelnode.net.handler import MessageHandler
from maelnode.net.payload import EmptyPayload, PayloadModel


class MaxIdMessage(PayloadModel):
    id: int = Field(ge=0)


class GenerateIdHandler(MessageHandler):
    """Counter-exchange id generation.

    ``generate_id`` bumps a private counter and returns it, ``get_max_id``
    reports the counter, and a ``get_max_id_ok`` from another node lets this
    one catch up. The counter never moves backwards.
    """

    handled_messages = ("generate_id", "get_max_id", "get_max_id_ok")

    def __init__(self) -> None:
        self.max_id = 0

    def handle(self, ctx: MessageContext) -> None:
        kind = ctx.kind
        if kind == "generate_id":
            ctx.typed_payload(EmptyPayload)
            self.max_id += 1
            ctx.reply("generate_id_ok", {"id": self.max_id})
        elif kind == "get_max_id":
            ctx.typed_payload(EmptyPayload)
            ctx.reply("get_max_id_ok", {"id": self.max_id})
        elif kind == "get_max_id_ok":
            msg = ctx.typed_payload(MaxIdMessage)
            self.max_id = max(self.max_id, msg.id)
        else:
            raise not_supported(kind)
