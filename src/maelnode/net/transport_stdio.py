"""
Line transport over text streams.

One JSON envelope per line in both directions. Each inbound line is fully
processed, and its output written and flushed, before the next line is read.
End of input ends the loop.
"""

from __future__ import annotations

import logging
import sys
from typing import Callable, Iterable, Optional, TextIO

from maelnode.net.codec import WireEncodeError, encode_envelope
from maelnode.net.net_logging import log_event
from maelnode.net.service import NodeService
from maelnode.runtime.metrics import inc_counter

_log = logging.getLogger("maelnode.transport")


def run_lines(service: NodeService, lines: Iterable[str], write: Callable[[str], None]) -> int:
    """Feed ``lines`` through ``service``; returns the number of envelopes written."""
    written = 0
    for line in lines:
        if not line.strip():
            continue
        for env in service.input(line):
            try:
                encoded = encode_envelope(env)
            except WireEncodeError as e:
                inc_counter("encode_dropped")
                log_event(_log, "encode_dropped", level=logging.ERROR, kind=env.kind, msg_id=env.msg_id, error=str(e))
                continue
            write(encoded)
            written += 1
    return written


def run_stdio(
    service: NodeService,
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
) -> int:
    src = stdin if stdin is not None else sys.stdin
    dst = stdout if stdout is not None else sys.stdout

    def _write(line: str) -> None:
        dst.write(line + "\n")
        dst.flush()

    written = run_lines(service, src, _write)
    log_event(_log, "run_finished", written=written, node_id=service.node.local_id)
    return written
