"""
Public API:
- NodeService: one inbound line in, outbound envelopes out
- MessageContext: per-message reads and writes for handlers
- MessageHandler: base class handlers extend
- Router: discriminator -> ordered handlers
- OutputSequencer: outbound ids + source stamping
- Node: local identity and peer set
- Envelope, Body: wire-level types
- ErrorKind, ErrorMessage: error taxonomy
- encode_envelope, decode_envelope: one JSON object per line
"""

from .net.codec import WireDecodeError, WireEncodeError, decode_envelope, encode_envelope
from .net.context import MessageContext
from .net.errors import ErrorKind, ErrorMessage
from .net.handler import MessageHandler
from .net.handshake import InitMessage, Node, NodeStatus
from .net.messages import Body, Envelope
from .net.payload import PayloadModel
from .net.router import Router
from .net.sequencer import OutputSequencer
from .net.service import NodeService

__all__ = [
    "NodeService",
    "MessageContext",
    "MessageHandler",
    "Router",
    "OutputSequencer",
    "Node",
    "NodeStatus",
    "InitMessage",
    "Envelope",
    "Body",
    "PayloadModel",
    "ErrorKind",
    "ErrorMessage",
    "WireDecodeError",
    "WireEncodeError",
    "encode_envelope",
    "decode_envelope",
]

__version__ = "0.1.0"
