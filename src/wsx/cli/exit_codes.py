"""Exit-code constants used by the CLI layer.

Centralised here so that every exit path uses a well-known, tested
value rather than magic integers scattered across the codebase.  The
exit code of an executed bin is passed through verbatim and is not
limited to these values.
"""

from __future__ import annotations

SUCCESS: int = 0
"""Clean exit — dry run reported, diagnostics passed, or help shown."""

GENERAL_ERROR: int = 1
"""A known WsxError was caught. User-facing message was displayed."""

KEYBOARD_INTERRUPT: int = 130
"""User pressed Ctrl+C.  Follows POSIX convention (128 + SIGINT=2)."""

UNEXPECTED_ERROR: int = 1
"""An unhandled exception escaped all known error boundaries."""
