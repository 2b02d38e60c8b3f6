"""Allow ``python -m yt_shaper`` invocation.

This module simply delegates to the CLI error-boundary entry point so
that ``python -m yt_shaper`` behaves identically to the ``yt-shaper``
console script.
"""

from __future__ import annotations

from yt_shaper.cli.app import cli

if __name__ == "__main__":
    cli()
