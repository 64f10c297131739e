"""Match a requested command name against every workspace package.

Each package's manifest is read through an injected
:class:`~wsx.core.protocols.ManifestReader`.  Failures are isolated per
package: one unreadable or malformed manifest never stops the scan, so
a bin provided by another package can still be found.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence

from wsx.core.bin_resolver import resolve_bin_path
from wsx.core.models import BinInfo, PackageInfo
from wsx.core.protocols import ManifestReader
from wsx.exceptions import InvalidManifestError, ManifestNotFoundError, ManifestReadError

WarningCallback = Callable[[str], None]


def find_matching_bins(
    packages: Sequence[PackageInfo],
    requested_name: str,
    reader: ManifestReader,
    *,
    on_warning: WarningCallback | None = None,
) -> list[BinInfo]:
    """Return every bin named *requested_name*, in package order.

    Parameters
    ----------
    packages:
        Packages reported by workspace discovery.  Not mutated.
    requested_name:
        The command name to look for.
    reader:
        Manifest reader used once per package.
    on_warning:
        Optional callable receiving a human-readable message for each
        package that was skipped because its manifest is invalid or
        unreadable.  Missing manifests are skipped silently.
    """
    matches: list[BinInfo] = []

    for pkg in packages:
        try:
            manifest = reader.read(pkg.path)
        except ManifestNotFoundError:
            continue
        except InvalidManifestError as exc:
            _warn(
                on_warning,
                f'Failed to parse package.json for package "{pkg.name}" '
                f'at "{pkg.path}": {exc.reason}.',
            )
            continue
        except ManifestReadError as exc:
            _warn(
                on_warning,
                f'Could not read package.json for package "{pkg.name}" '
                f'at "{pkg.path}": {exc}',
            )
            continue

        bin_path = resolve_bin_path(pkg, manifest.get("bin"), requested_name)
        if bin_path is None:
            continue

        matches.append(
            BinInfo(
                package_name=pkg.name,
                package_path=pkg.path,
                bin_name=requested_name,
                bin_path=bin_path,
            )
        )

    return matches


def _warn(on_warning: WarningCallback | None, message: str) -> None:
    if on_warning is not None:
        on_warning(message)
