"""Error taxonomy.

Everything under BootstrapError is fatal for the run: ``main`` prints the
message to stderr and exits with status 1. Invalid operator input never raises;
the prompt loop recovers from it.
"""

from __future__ import annotations


class BootstrapError(RuntimeError):
    """Fatal error that ends the bootstrap run."""


class PreconditionFailure(BootstrapError):
    """Host is not eligible (platform, admin group, network, sudo)."""


class InstallActionFailure(BootstrapError):
    def __init__(self, package: str) -> None:
        super().__init__(f"Failed to install {package}.")
        self.package = package


class PostInstallVerificationFailure(BootstrapError):
    def __init__(self, package: str, command: str) -> None:
        super().__init__(f"{package} installed, but {command} command is not available.")
        self.package = package
        self.command = command


class PrerequisiteUnmet(BootstrapError):
    """Only raised when prerequisite failures are configured as fatal."""

    def __init__(self, package: str, message: str) -> None:
        super().__init__(message or f"Prerequisites for {package} are not met.")
        self.package = package


class ManifestError(ValueError):
    pass


class ConfigError(ValueError):
    pass
