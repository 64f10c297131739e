"""Decide whether a bin file must be run through Node."""

from __future__ import annotations

from os import PathLike

NODE_EXTENSIONS: tuple[str, ...] = (".js", ".mjs", ".cjs")


def is_node_executable(bin_path: str | PathLike[str]) -> bool:
    """Return ``True`` for ``.js``, ``.mjs`` and ``.cjs`` files (any case).

    Only the final extension counts: ``script.js.bak`` is not a Node
    script, and extensionless or ``.sh`` files are executed directly.
    """
    return str(bin_path).lower().endswith(NODE_EXTENSIONS)
