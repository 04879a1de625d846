"""Centralized branding constants — single source of truth for version.

The release repository and version file are what the update checker polls.
"""


class AppBranding:
    """Application identity constants."""

    APP_NAME = "Selfcheck"
    VERSION = "0.3.0"

    # Raw file host of the release repository: <base>/<branch>/<version file>
    RELEASE_RAW_URL = "https://raw.githubusercontent.com/selfcheck/selfcheck"
    VERSION_FILE = "VERSION"
    UPDATE_BRANCHES = ("stable", "latest")

    @classmethod
    def user_agent(cls) -> str:
        return f"{cls.APP_NAME}/{cls.VERSION}"

    @classmethod
    def version_file_url(cls, branch: str = "stable") -> str:
        """URL of the version file published on a release branch."""
        if branch not in cls.UPDATE_BRANCHES:
            raise ValueError(f"Invalid branch selected for updates: '{branch}'")
        return f"{cls.RELEASE_RAW_URL}/{branch}/{cls.VERSION_FILE}"
