"""Dotfiles prerequisite bootstrap.

Core design goals:
- Idempotent: packages already present are reported, never reinstalled
- Ordered: the package manager first, then the tools that need it
- Operator-confirmed installs, fatal on install failure
- Centralized logging
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
