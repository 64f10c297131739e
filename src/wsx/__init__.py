"""wsx — run a bin script from any package in a JavaScript workspace.

Resolves a command name against every workspace package's ``bin``
entries and executes the single match with an npm-compatible
environment.
"""

from wsx.version import __version__

__all__: list[str] = ["__version__"]
