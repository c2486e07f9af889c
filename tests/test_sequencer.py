from __future__ import annotations

from maelnode.net.context import MessageContext
from maelnode.net.handshake import Node
from maelnode.net.sequencer import OutputSequencer


def test_ids_start_at_one_and_increase() -> None:
    seq = OutputSequencer()

    ids = [seq.envelope("x", {}).msg_id for _ in range(5)]
    assert ids == [1, 2, 3, 4, 5]
    assert seq.next_id == 6


def test_ids_are_shared_across_contexts() -> None:
    node = Node(local_id="n1", peers=("n1", "n2"), initialized=True)
    seq = OutputSequencer(node)

    c1 = MessageContext(None, seq, node)
    c1.announce("a")
    c1.fan_out("b")
    c2 = MessageContext(None, seq, node)
    c2.announce("c")

    ids = [e.msg_id for e in list(c1.drain()) + list(c2.drain())]
    assert ids == [1, 2, 3, 4]


def test_independent_sequencers_do_not_share_state() -> None:
    a = OutputSequencer()
    b = OutputSequencer()
    a.envelope("x", {})
    a.envelope("x", {})
    assert b.envelope("x", {}).msg_id == 1


def test_src_is_stamped_only_when_initialized() -> None:
    node = Node()
    seq = OutputSequencer(node)
    assert seq.envelope("x", {}).src is None

    node.local_id = "n7"
    node.initialized = True
    assert seq.envelope("x", {}).src == "n7"


def test_no_node_means_no_src() -> None:
    assert OutputSequencer().envelope("x", {}, dest="n2").src is None
