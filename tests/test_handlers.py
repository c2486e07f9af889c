from __future__ import annotations

import pytest

from maelnode.handlers import BUILTIN_HANDLERS, EchoHandler, GenerateHandler, GenerateIdHandler, build_handlers
from maelnode.net.service import NodeService
from maelnode.net.transport_memory import InMemoryHarness


def _harness(*handlers) -> InMemoryHarness:
    return InMemoryHarness(NodeService().register_all(handlers))


def test_echo_returns_value_unchanged() -> None:
    h = _harness(EchoHandler())
    h.init("n1", ["n1"])

    (env,) = h.send("echo", {"echo": {"nested": [1, "two", None]}})
    assert env.kind == "echo_ok"
    assert env.payload == {"echo": {"nested": [1, "two", None]}}


def test_echo_missing_field_is_malformed() -> None:
    h = _harness(EchoHandler())
    h.init("n1", ["n1"])

    (env,) = h.send("echo")
    assert env.kind == "error"
    assert env.payload["code"] == 12


def test_generate_ids_are_unique_and_prefixed() -> None:
    h = _harness(GenerateHandler())
    h.init("n3", ["n1", "n2", "n3"])

    ids = [h.send("generate")[0].payload["id"] for _ in range(4)]
    assert ids == ["n3-1", "n3-2", "n3-3", "n3-4"]


def test_generate_ids_do_not_collide_across_nodes() -> None:
    a = _harness(GenerateHandler())
    b = _harness(GenerateHandler())
    a.init("n1", ["n1", "n2"])
    b.init("n2", ["n1", "n2"])

    ids = {h.send("generate")[0].payload["id"] for h in (a, b) for _ in range(3)}
    assert len(ids) == 6


def test_generate_id_counter_exchange() -> None:
    gen = GenerateIdHandler()
    h = _harness(gen)
    h.init("n1", ["n1", "n2"])

    assert h.send("generate_id")[0].payload == {"id": 1}
    assert h.send("generate_id")[0].payload == {"id": 2}

    assert h.send("get_max_id_ok", {"id": 10}, src="n2") == []
    assert gen.max_id == 10
    assert h.send("get_max_id")[0].payload == {"id": 10}
    assert h.send("generate_id")[0].payload == {"id": 11}


def test_generate_id_never_moves_backwards() -> None:
    gen = GenerateIdHandler()
    h = _harness(gen)
    h.init("n1", ["n1"])
    h.send("get_max_id_ok", {"id": 5})
    h.send("get_max_id_ok", {"id": 3})

    assert gen.max_id == 5


@pytest.mark.parametrize("bad", [{"id": -1}, {"id": "x"}, {}])
def test_generate_id_malformed_report(bad) -> None:
    gen = GenerateIdHandler()
    h = _harness(gen)
    h.init("n1", ["n1"])

    (env,) = h.send("get_max_id_ok", bad)
    assert env.kind == "error"
    assert env.payload["code"] == 12
    assert gen.max_id == 0


def test_build_handlers_by_name() -> None:
    hs = build_handlers(["echo", " Generate ", "", "generate_id"])
    assert [type(x) for x in hs] == [EchoHandler, GenerateHandler, GenerateIdHandler]
    assert set(BUILTIN_HANDLERS) == {"echo", "generate", "generate_id"}


def test_build_handlers_unknown_name() -> None:
    with pytest.raises(ValueError) as e:
        build_handlers(["echo", "raft"])
    assert "raft" in str(e.value)


def test_unit_requests_ignore_extra_fields() -> None:
    h = _harness(GenerateHandler(), GenerateIdHandler())
    h.init("n1", ["n1"])

    assert h.send("generate", {"hint": 1})[0].payload == {"id": "n1-1"}
    assert h.send("generate_id", {"hint": 1})[0].payload == {"id": 1}
    assert h.send("get_max_id", {"hint": 1})[0].payload == {"id": 1}
