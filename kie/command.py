"""Command-line options of the server."""

from __future__ import annotations

import argparse
import os
import sys
from collections.abc import Sequence

from kie.config import Config, configurations

DEFAULT_CONFIG_FILE = "/etc/servicecomb-kie/kie-conf.yaml"


class _Parser(argparse.ArgumentParser):
    def error(self, message: str) -> None:  # type: ignore[override]
        raise ValueError(message)


def _build_parser() -> _Parser:
    parser = _Parser(description="servicecomb-kie server cmd line.")
    env = os.environ
    parser.add_argument(
        "--config",
        dest="config_file",
        default=DEFAULT_CONFIG_FILE,
        help="config file, example: --config=kie-conf.yaml",
    )
    parser.add_argument(
        "--name",
        dest="node_name",
        default=env.get("NODE_NAME", ""),
        help="node name, example: --name=kie0",
    )
    parser.add_argument(
        "--peer-addr",
        dest="peer_addr",
        default=env.get("PEER_ADDR", ""),
        help="kie use this ip port to join a kie cluster, example: --peer-addr=10.1.1.10:5000",
    )
    parser.add_argument(
        "--listen-peer-addr",
        dest="listen_peer_addr",
        default=env.get("LISTEN_PEER_ADDR", ""),
        help="listen on ip port, kie receive events example: --listen-peer-addr=10.1.1.10:5000",
    )
    parser.add_argument(
        "--advertise-addr",
        dest="advertise_addr",
        default=env.get("ADVERTISE_ADDR", ""),
        help="advertise host port to other members, "
        "example: --advertise-addr=kie.svc.cluster.local:5000",
    )
    return parser


def parse_config(args: Sequence[str] | None = None) -> Config:
    """Parse the command line (program name first) into the global configuration.

    Environment variables supply defaults that explicit options override.
    Raises ValueError on malformed or unknown options.
    """
    argv = list(sys.argv if args is None else args)
    parsed, extra = _build_parser().parse_known_args(argv[1:])
    if extra:
        raise ValueError(f"unrecognized arguments: {' '.join(extra)}")
    configurations.config_file = parsed.config_file
    configurations.node_name = parsed.node_name
    configurations.peer_addr = parsed.peer_addr
    configurations.listen_peer_addr = parsed.listen_peer_addr
    configurations.advertise_addr = parsed.advertise_addr
    return configurations