"""Installed distribution version."""

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _distribution_version


try:
    version = _distribution_version("kv-environ")
except PackageNotFoundError:  # pragma: no cover - running from a source checkout
    version = "0.0.0"
