# src/maelnode/net/__init__.py
"""
maelnode.net: message runtime package

This package provides the node-side message runtime:
  - messages: envelope/body wire shapes (dataclasses)
  - errors: fixed error taxonomy + ErrorMessage
  - codec: JSON line encoding/decoding
  - payload: typed payload projection (pydantic)
  - sequencer: outbound id assignment + source stamping
  - context: per-message handler I/O
  - handler: handler base class
  - router: discriminator -> handlers dispatch
  - handshake: init handshake + lifecycle gate
  - service: one message in, envelopes out
  - transport_stdio: line loop over text streams
  - transport_memory: in-process harness for tests

Handlers should depend on:
  - net.context (for reading and replying)
  - net.handler (for the base class)
  - net.errors (for failures)
and keep their own state private.
"""

from __future__ import annotations

__all__ = [
    "messages",
    "errors",
    "codec",
    "payload",
    "sequencer",
    "context",
    "handler",
    "router",
    "handshake",
    "service",
    "transport_stdio",
    "transport_memory",
]
