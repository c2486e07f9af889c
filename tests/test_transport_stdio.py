from __future__ import annotations

import io
import json
from typing import List

from maelnode.handlers import EchoHandler
from maelnode.net.context import MessageContext
from maelnode.net.handler import MessageHandler
from maelnode.net.messages import Body, Envelope
from maelnode.net.service import NodeService
from maelnode.net.transport_stdio import run_lines, run_stdio
from maelnode.runtime import metrics

INIT = '{"src":"c0","dest":"n1","body":{"type":"init","msg_id":1,"node_id":"n1","node_ids":["n1"]}}'
ECHO = '{"src":"c1","dest":"n1","body":{"type":"echo","msg_id":2,"echo":"hi"}}'


def _service() -> NodeService:
    return NodeService().register(EchoHandler())


def test_run_lines_skips_blank_and_undecodable_lines() -> None:
    out: List[str] = []
    n = run_lines(_service(), [INIT, "", "   \n", "not json", ECHO], out.append)

    assert n == 2
    assert [json.loads(x)["body"]["type"] for x in out] == ["init_ok", "echo_ok"]


def test_run_stdio_writes_one_line_per_envelope() -> None:
    stdin = io.StringIO(INIT + "\n" + ECHO + "\n")
    stdout = io.StringIO()

    assert run_stdio(_service(), stdin=stdin, stdout=stdout) == 2

    lines = stdout.getvalue().splitlines()
    assert len(lines) == 2
    assert stdout.getvalue().endswith("\n")
    echo_ok = json.loads(lines[1])
    assert echo_ok == {
        "src": "n1",
        "dest": "c1",
        "body": {"type": "echo_ok", "msg_id": 2, "in_reply_to": 2, "echo": "hi"},
    }


def test_run_stdio_empty_input() -> None:
    stdout = io.StringIO()
    assert run_stdio(_service(), stdin=io.StringIO(""), stdout=stdout) == 0
    assert stdout.getvalue() == ""


class _BadReply(MessageHandler):
    handled_messages = ("bad",)

    def handle(self, ctx: MessageContext) -> None:
        ctx.reply("bad_ok", {"vals": {1, 2}})


def test_unencodable_reply_does_not_stop_the_loop() -> None:
    bad = '{"src":"c1","body":{"type":"bad","msg_id":%d}}'
    stdin = io.StringIO("\n".join([INIT, bad % 2, bad % 3, ECHO]) + "\n")
    stdout = io.StringIO()
    service = NodeService().register_all([_BadReply(), EchoHandler()])

    assert run_stdio(service, stdin=stdin, stdout=stdout) == 4

    bodies = [json.loads(x)["body"] for x in stdout.getvalue().splitlines()]
    assert [b["type"] for b in bodies] == ["init_ok", "error", "error", "echo_ok"]
    assert [b.get("code") for b in bodies[1:3]] == [13, 13]


def test_run_lines_skips_envelopes_that_fail_to_encode() -> None:
    class _Raw:
        def input(self, line: str) -> List[Envelope]:
            if line == "raw":
                return [Envelope(body=Body(kind="raw", msg_id=1, payload={"vals": {1}}))]
            return [Envelope(body=Body(kind="fine", msg_id=2))]

    out: List[str] = []
    assert run_lines(_Raw(), ["raw", "next"], out.append) == 1
    assert [json.loads(x)["body"]["type"] for x in out] == ["fine"]
    assert metrics.get_counter("encode_dropped") == 1
