from __future__ import annotations

from typing import Callable, Dict, Iterable, List

from maelnode.handlers.echo import EchoHandler
from maelnode.handlers.generate import GenerateHandler
from maelnode.handlers.generate_id import GenerateIdHandler
from maelnode.net.handler import MessageHandler

BUILTIN_HANDLERS: Dict[str, Callable[[], MessageHandler]] = {
    "echo": EchoHandler,
    "generate": GenerateHandler,
    "generate_id": GenerateIdHandler,
}


def build_handlers(names: Iterable[str]) -> List[MessageHandler]:
    out: List[MessageHandler] = []
    for raw in names:
        name = str(raw or "").strip().lower()
        if not name:
            continue
        factory = BUILTIN_HANDLERS.get(name)
        if factory is None:
            raise ValueError(f"Unknown handler: {name} (known: {', '.join(sorted(BUILTIN_HANDLERS))})")
        out.append(factory())
    return out


__all__ = ["BUILTIN_HANDLERS", "EchoHandler", "GenerateHandler", "GenerateIdHandler", "build_handlers"]
