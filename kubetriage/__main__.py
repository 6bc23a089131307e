"""Entry point for `python -m kubetriage`.

Usage:
    python -m kubetriage my-pod -n production
"""

from __future__ import annotations

from kubetriage.cli import cli

cli(prog_name="kubetriage")
