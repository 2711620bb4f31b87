"""
Messagr - cross-platform message query facade

Aggregates conversations from several messaging platforms and runs text,
structured and AI-assisted queries against a single remote endpoint.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("messagr")
except PackageNotFoundError:
    __version__ = "0.1.0"

__all__ = [
    "__version__",
]
