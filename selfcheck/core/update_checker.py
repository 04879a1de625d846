"""Update checker — throttled lookup of the latest published release.

The last result is kept in a small JSON cache file so that repeated calls
within the check interval never hit the version source again:

    {"checked_at": 1760774400.0, "version": "1.8.3"}

Any failure (source unreachable, cache unreadable or unwritable) degrades
to "no update available"; nothing here raises to the caller.
"""

import json
import logging
import os
import time

from selfcheck.branding import AppBranding
from selfcheck.core.errors import VersionSourceError
from selfcheck.core.models import UpdateCacheRecord
from selfcheck.core.version_source import RemoteVersionSource, VersionSource
from selfcheck.core.versioning import is_newer, is_semantic

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL = 86400     # 24 hours
DEFAULT_TIMEOUT = 2          # seconds


def read_update_cache(path: str) -> UpdateCacheRecord | None:
    """Return the cached record, or None if it is missing or corrupt."""
    if not os.path.isfile(path):
        return None
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        record = UpdateCacheRecord(
            checked_at=float(data['checked_at']),
            version=str(data['version']),
        )
    except (OSError, ValueError, TypeError, KeyError) as e:
        logger.info("Ignoring unreadable update cache %s: %s", path, e)
        return None
    return record


def write_update_cache(path: str, record: UpdateCacheRecord):
    """Replace the cache file in one step. Raises OSError on failure."""
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    tmp_path = f"{path}.{os.getpid()}.tmp"
    try:
        with open(tmp_path, 'w', encoding='utf-8') as f:
            json.dump({'checked_at': record.checked_at, 'version': record.version}, f)
        os.replace(tmp_path, path)
    finally:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)


class UpdateChecker:
    """Checks whether a newer release than the running one is published.

    Concurrent processes may both find a stale cache and both fetch; the
    last one to write the cache wins.
    """

    def __init__(self, current_version: str, cache_path: str,
                 source: VersionSource, interval: float = DEFAULT_INTERVAL,
                 location: str | None = None, timeout: float = DEFAULT_TIMEOUT,
                 clock=time.time):
        self.current_version = current_version
        self.cache_path = cache_path
        self.source = source
        self.interval = interval
        self.location = location or AppBranding.version_file_url()
        self.timeout = timeout
        self._clock = clock

    @classmethod
    def from_settings(cls, settings, source: VersionSource | None = None) -> 'UpdateChecker':
        """Build a checker for the running application from its settings.

        Raises ValueError if the configured update branch is unknown.
        """
        return cls(
            current_version=AppBranding.VERSION,
            cache_path=settings.update_check_file,
            source=source or RemoteVersionSource(),
            interval=settings.check_updates_interval,
            location=AppBranding.version_file_url(settings.check_updates_branch),
            timeout=settings.check_updates_timeout,
        )

    def check_update(self, enable_checks: bool = True,
                     updates_allowed: bool = True) -> str | None:
        """Return the newer version string if one is available, else None."""
        if not enable_checks or not updates_allowed:
            return None

        # Development builds never check
        if not is_semantic(self.current_version):
            return None

        now = self._clock()
        latest = self._cached_version(now)
        if latest is None:
            latest = self._fetch_version(now)
            if latest is None:
                return None

        if is_newer(latest, self.current_version):
            logger.info("Update available: %s -> %s", self.current_version, latest)
            return latest
        return None

    def _cached_version(self, now: float) -> str | None:
        record = read_update_cache(self.cache_path)
        if record is None or record.checked_at <= now - self.interval:
            return None
        logger.debug("Reusing update check from %s: %s", self.cache_path, record.version)
        return record.version

    def _fetch_version(self, now: float) -> str | None:
        try:
            latest = self.source.fetch(self.location, self.timeout)
        except VersionSourceError as e:
            logger.warning("Update check failed: %s", e)
            return None

        try:
            write_update_cache(self.cache_path, UpdateCacheRecord(now, latest))
        except OSError as e:
            logger.warning("Failed to write update cache %s: %s", self.cache_path, e)
        return latest
