"""``package.json`` reader backed by the local filesystem.

Satisfies :class:`~wsx.core.protocols.ManifestReader`.  Every OS or
JSON failure is re-raised as a :class:`~wsx.exceptions.ManifestReadError`
subclass so callers can tell "missing" from "broken" from "unreadable".
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from wsx.exceptions import InvalidManifestError, ManifestNotFoundError, ManifestReadError

MANIFEST_NAME: str = "package.json"


class ManifestFileReader:
    """Read ``<directory>/package.json`` fresh on every call."""

    def read(self, directory: Path) -> dict[str, Any]:
        """Read and parse the manifest in *directory*.

        Raises
        ------
        ManifestNotFoundError
            If the file does not exist.
        InvalidManifestError
            If the content is not valid JSON or not a JSON object.
        ManifestReadError
            For any other OS-level failure (permissions, is-a-directory...).
        """
        path = Path(directory) / MANIFEST_NAME

        try:
            content = path.read_text(encoding="utf-8")
        except FileNotFoundError as exc:
            raise ManifestNotFoundError(f"{path} not found", path) from exc
        except (OSError, UnicodeDecodeError) as exc:
            raise ManifestReadError(str(exc), path) from exc

        try:
            data: Any = json.loads(content)
        except json.JSONDecodeError as exc:
            raise InvalidManifestError(f"Invalid JSON in {path}: {exc}", path) from exc

        if not isinstance(data, dict):
            raise InvalidManifestError(
                f"{path} does not contain a JSON object", path, reason="not a JSON object",
            )

        return data
