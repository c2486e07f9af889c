# src/maelnode/net/handshake.py
"""
Node lifecycle and the init handshake.

Purpose:
  - Establish the local node identity and peer set BEFORE any other traffic
  - Gate every other discriminator on a completed handshake

Lifecycle:
  UNINITIALIZED -> INITIALIZED
  A fresh ``init`` re-enters INITIALIZED and overwrites identity and peers.

Non-goals:
  - No validation of a re-init against the previous values
  - No transport I/O here (the service decodes and drains)
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, List, Optional, Tuple

from maelnode.net.errors import ErrorKind, ErrorMessage
from maelnode.net.messages import INIT_OK, NodeId
from maelnode.net.payload import PayloadModel

if TYPE_CHECKING:
    from maelnode.net.context import MessageContext


class NodeStatus(str, Enum):
    UNINITIALIZED = "UNINITIALIZED"
    INITIALIZED = "INITIALIZED"


class InitMessage(PayloadModel):
    node_id: NodeId
    node_ids: List[NodeId]


@dataclass(slots=True)
class Node:
    """Process-wide node identity. Only the init transition writes to it."""

    local_id: Optional[NodeId] = None
    peers: Tuple[NodeId, ...] = ()
    initialized: bool = False

    @property
    def status(self) -> NodeStatus:
        return NodeStatus.INITIALIZED if self.initialized else NodeStatus.UNINITIALIZED


def _ordered_unique(ids: List[NodeId]) -> Tuple[NodeId, ...]:
    return tuple(dict.fromkeys(ids))


def process_init(node: Node, ctx: "MessageContext") -> InitMessage:
    """Apply an inbound ``init`` to ``node`` and reply ``init_ok`` to its sender.

    The payload is validated before the node is touched, so a malformed init
    leaves the node as it was.
    """
    msg = ctx.typed_payload(InitMessage)

    node.local_id = msg.node_id
    node.peers = _ordered_unique(msg.node_ids)
    node.initialized = True

    ctx.reply(INIT_OK, None)
    return msg


def require_initialized(node: Node, kind: str) -> None:
    if not node.initialized:
        raise ErrorMessage(
            ErrorKind.PRECONDITION_FAILED,
            f"node not initialized; cannot handle message type {kind}",
        )
