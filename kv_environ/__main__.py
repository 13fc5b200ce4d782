"""Interface for ``python -m kv_environ``."""

from __future__ import annotations

from argparse import ArgumentParser
from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from collections.abc import Sequence

from ._version import version
from .key_mapping import EnvMap
from .stores import OSEnvironStore


__all__ = ["main"]


def main(args: Sequence[str] | None = None) -> None:
    """Print the environment entries visible under a prefix, prefix stripped."""
    parser = ArgumentParser(prog="kv_environ")
    _ = parser.add_argument("-v", "--version", action="version", version=version)
    _ = parser.add_argument("-p", "--prefix", default="", help="only show keys starting with this prefix")
    parsed = parser.parse_args(args)

    env = EnvMap(OSEnvironStore().entries(), parsed.prefix)
    for key, value in sorted(env.data.items()):
        print(f"{key}={value}")


if __name__ == "__main__":
    main()
