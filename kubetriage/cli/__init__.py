"""kubetriage command-line interface.

Exposes:
    cli -- Click command entry point (registered as ``kubetriage`` and
           ``kubectl-triage`` scripts).
"""

from kubetriage.cli.main import cli

__all__ = ["cli"]
