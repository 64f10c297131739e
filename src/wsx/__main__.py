"""Allow ``python -m wsx`` invocation.

This module simply delegates to the CLI error-boundary entry point so
that ``python -m wsx`` behaves identically to the ``wsx`` console
script.
"""

from __future__ import annotations

from wsx.cli.app import cli

if __name__ == "__main__":
    cli()
