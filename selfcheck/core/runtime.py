"""Runtime compatibility — interpreter version, extension modules, end of life.

An obsolete interpreter or a missing required extension is fatal: these
checks raise instead of returning diagnostics.
"""

import importlib.util
import logging
import platform
import re
from datetime import date

from packaging.version import Version, InvalidVersion

from selfcheck.core.errors import MissingExtension, ObsoleteRuntime
from selfcheck.core.models import ExtensionRequirement

logger = logging.getLogger(__name__)

# Python release end-of-life dates, keyed by major.minor.
# Maintained by hand from the CPython release schedule.
PYTHON_EOL: dict[str, str] = {
    '2.7': '2020-01-01',
    '3.5': '2020-09-30',
    '3.6': '2021-12-23',
    '3.7': '2023-06-27',
    '3.8': '2024-10-07',
    '3.9': '2025-10-31',
    '3.10': '2026-10-31',
    '3.11': '2027-10-31',
    '3.12': '2028-10-31',
    '3.13': '2029-10-31',
    '3.14': '2030-10-31',
}

# (module name, required, purpose); order is stable, index 0 is always json
EXTENSIONS: list[tuple[str, bool, str]] = [
    ('json', True, 'Configuration parsing'),
    ('pyexpat', True, 'XML parsing (feeds and imports)'),
    ('unicodedata', True, 'Unicode text normalization'),
    ('PIL', False, 'Required to use thumbnails'),
    ('icu', False, 'Localized text sorting (e.g. e->è->f)'),
    ('ssl', False, 'Retrieval of page metadata and thumbnails over HTTPS'),
    ('gettext', False, 'Use the translation system in gettext mode'),
    ('ldap3', False, 'Login using LDAP server'),
]

_MINOR_PREFIX_RE = re.compile(r'^(\d+)\.(\d+)')


def check_version(min_version: str, actual_version: str | None = None) -> bool:
    """Raise ObsoleteRuntime if actual_version is older than min_version.

    Versions may have two or three components ("3.10", "3.12.4").
    actual_version defaults to the running interpreter.
    """
    if actual_version is None:
        actual_version = platform.python_version()
    try:
        minimum = Version(min_version)
    except InvalidVersion as e:
        raise ValueError(f"Invalid minimum Python version: {min_version!r}") from e
    try:
        actual = Version(actual_version)
    except InvalidVersion as e:
        raise ObsoleteRuntime(min_version, actual_version) from e

    if actual < minimum:
        raise ObsoleteRuntime(min_version, actual_version)
    return True


def _is_loaded(name: str) -> bool:
    try:
        return importlib.util.find_spec(name) is not None
    except (ImportError, ValueError):
        return False


def list_extension_requirements() -> list[ExtensionRequirement]:
    """Extension modules the application uses, and whether each is available."""
    return [
        ExtensionRequirement(name=name, required=required,
                             description=desc, loaded=_is_loaded(name))
        for name, required, desc in EXTENSIONS
    ]


def missing_extensions(
        requirements: list[ExtensionRequirement] | None = None,
) -> list[ExtensionRequirement]:
    if requirements is None:
        requirements = list_extension_requirements()
    return [ext for ext in requirements if ext.required and not ext.loaded]


def check_extensions() -> bool:
    """Raise MissingExtension if any required extension is unavailable."""
    missing = missing_extensions()
    if missing:
        raise MissingExtension([ext.name for ext in missing])
    return True


def _two_years_later(today: date) -> date:
    try:
        return today.replace(year=today.year + 2)
    except ValueError:
        # 29 February
        return today.replace(year=today.year + 2, day=28)


def lookup_eol(version: str, today: date | None = None) -> str:
    """End-of-life date (YYYY-MM-DD) of the release line of version.

    Unknown versions get a date two years from today.
    """
    if today is None:
        today = date.today()

    match = _MINOR_PREFIX_RE.match(version.strip())
    if match:
        eol = PYTHON_EOL.get(f"{int(match.group(1))}.{int(match.group(2))}")
        if eol:
            return eol

    logger.debug("No end-of-life date known for Python %s", version)
    return _two_years_later(today).isoformat()


def has_reached_eol(version: str, today: date | None = None) -> bool:
    if today is None:
        today = date.today()
    return date.fromisoformat(lookup_eol(version, today)) <= today
