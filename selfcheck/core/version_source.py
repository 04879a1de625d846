"""Version sources — where the latest release version is read from.

The update checker receives a VersionSource instead of reaching for the
network itself, so tests (and offline installs) can plug in a fixed answer.

  RemoteVersionSource: URL (http, https, file) or local path, via urllib
  StaticVersionSource: fixed version string, counts how often it was asked
"""

import http.client
import logging
import os
import re
from abc import ABC, abstractmethod
from urllib.error import URLError
from urllib.parse import urlparse
from urllib.request import Request, urlopen

from selfcheck.branding import AppBranding
from selfcheck.core.errors import NoVersionFound, UnreachableSource

logger = logging.getLogger(__name__)

VERSION_RE = re.compile(r'(\d+\.\d+\.\d+)')

# Non-semantic token inside comment markers: /* dev */, <!-- dev -->, # dev
COMMENT_TAG_RE = re.compile(
    r'/\*\s*([\w.\-]+)\s*\*/'
    r'|<!--\s*([\w.\-]+)\s*-->'
    r'|^\s*#\s*([\w.\-]+)\s*$',
    re.MULTILINE,
)

URL_SCHEMES = ('http', 'https', 'file')


def extract_version(content: str, location: str = "<content>") -> str:
    """Return the first major.minor.patch token, else a comment-tagged token.

    Raises NoVersionFound if neither is present.
    """
    match = VERSION_RE.search(content)
    if match:
        return match.group(1)

    tag = COMMENT_TAG_RE.search(content)
    if tag:
        return next(group for group in tag.groups() if group)

    raise NoVersionFound(location, "no version token in content")


class VersionSource(ABC):
    """Strategy for resolving the latest published version."""

    @abstractmethod
    def fetch(self, location: str, timeout: float) -> str:
        """Return a version string, or raise a VersionSourceError."""


class RemoteVersionSource(VersionSource):
    """Reads a version file from a URL or the local filesystem."""

    def __init__(self, user_agent: str | None = None):
        self.user_agent = user_agent or AppBranding.user_agent()

    def fetch(self, location: str, timeout: float) -> str:
        if urlparse(location).scheme in URL_SCHEMES:
            content = self._read_url(location, timeout)
        else:
            content = self._read_file(location)
        return extract_version(content, location)

    def _read_url(self, url: str, timeout: float) -> str:
        req = Request(url, headers={'User-Agent': self.user_agent})
        try:
            with urlopen(req, timeout=timeout) as resp:
                data = resp.read()
        except (URLError, OSError, ValueError, http.client.HTTPException) as e:
            # socket.timeout is an OSError subclass
            logger.warning("Failed to fetch version from %s: %s", url, e)
            raise UnreachableSource(url, str(e)) from e
        return data.decode('utf-8', errors='replace')

    def _read_file(self, path: str) -> str:
        if not os.path.isfile(path):
            raise UnreachableSource(path, "no such file")
        try:
            with open(path, 'rb') as f:
                data = f.read()
        except OSError as e:
            logger.warning("Failed to read version file %s: %s", path, e)
            raise UnreachableSource(path, str(e)) from e
        return data.decode('utf-8', errors='replace')


class StaticVersionSource(VersionSource):
    """Always answers the same version; None means the source is unreachable."""

    def __init__(self, version: str | None):
        self.version = version
        self.fetch_count = 0

    def fetch(self, location: str, timeout: float) -> str:
        self.fetch_count += 1
        if not self.version:
            raise UnreachableSource(location, "no version available")
        return extract_version(self.version, location)
