#!/usr/bin/env python3

"""Run a maelnode process on stdin/stdout.

Usage:
  maelnode
  maelnode --handlers echo --log-level DEBUG
  python -m maelnode --metrics

Environment (flags win over these):
  MAELNODE_HANDLERS=echo,generate,generate_id
  MAELNODE_LOG_LEVEL=INFO
  MAELNODE_METRICS_ENABLED=0
  MAELNODE_DOTENV_PATH=.env
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
from typing import List, Optional, Sequence, TextIO

from maelnode.env import NodeConfig, split_names, load_dotenv_if_present, node_config_from_env
from maelnode.handlers import BUILTIN_HANDLERS, build_handlers
from maelnode.net.net_logging import configure_logging, log_event
from maelnode.net.service import NodeService
from maelnode.net.transport_stdio import run_stdio
from maelnode.runtime import metrics

_log = logging.getLogger("maelnode.main")


def _parse_args(argv: Optional[Sequence[str]]) -> argparse.Namespace:
    ap = argparse.ArgumentParser(prog="maelnode", description="Line-oriented JSON message node.")
    ap.add_argument(
        "--handlers",
        default=None,
        help=f"Comma-separated handler names (known: {', '.join(sorted(BUILTIN_HANDLERS))}).",
    )
    ap.add_argument("--log-level", default=None, help="Logging level for stderr JSONL logs.")
    ap.add_argument("--metrics", action="store_true", default=None, help="Log a metrics snapshot at end of input.")
    return ap.parse_args(list(argv) if argv is not None else None)


def resolve_config(argv: Optional[Sequence[str]] = None) -> NodeConfig:
    load_dotenv_if_present()
    cfg = node_config_from_env()
    args = _parse_args(argv)

    overrides = {}
    if args.handlers is not None:
        overrides["handlers"] = split_names(args.handlers)
    if args.log_level is not None:
        overrides["log_level"] = str(args.log_level).strip().upper()
    if args.metrics:
        overrides["metrics_enabled"] = True
    return dataclasses.replace(cfg, **overrides) if overrides else cfg


def build_service(cfg: NodeConfig) -> NodeService:
    return NodeService().register_all(build_handlers(cfg.handlers))


def main(
    argv: Optional[List[str]] = None,
    *,
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
) -> int:
    cfg = resolve_config(argv)
    configure_logging(cfg.log_level)

    try:
        service = build_service(cfg)
    except ValueError as e:
        print(f"maelnode: {e}", file=sys.stderr)
        return 2

    run_stdio(service, stdin=stdin, stdout=stdout)

    if cfg.metrics_enabled:
        log_event(_log, "metrics", **metrics.snapshot())
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
