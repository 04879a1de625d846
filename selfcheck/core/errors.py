"""Exceptions raised by the health checks.

Two families: version source failures, which the update checker turns into
"no update", and compatibility failures, which must stop the application.
"""


class SelfcheckError(Exception):
    """Base class for all selfcheck errors."""


class VersionSourceError(SelfcheckError):
    """A version could not be obtained from a source."""

    def __init__(self, location: str, reason: str):
        super().__init__(f"{location}: {reason}")
        self.location = location
        self.reason = reason


class UnreachableSource(VersionSourceError):
    """The location could not be opened or read within the timeout."""


class NoVersionFound(VersionSourceError):
    """The content holds no recognizable version token."""


class CompatibilityError(SelfcheckError):
    """The runtime cannot run the application."""


class ObsoleteRuntime(CompatibilityError):
    """The interpreter is older than the minimum supported version."""

    def __init__(self, min_version: str, actual_version: str):
        super().__init__(
            f"Your Python version is obsolete! "
            f"At least Python {min_version} is required, "
            f"but Python {actual_version} is running. "
            f"This version has known security vulnerabilities "
            f"and should be updated as soon as possible."
        )
        self.min_version = min_version
        self.actual_version = actual_version


class MissingExtension(CompatibilityError):
    """One or more required extension modules are not available."""

    def __init__(self, names: list[str]):
        super().__init__(
            "Required Python extensions are missing: " + ", ".join(names)
        )
        self.names = list(names)
