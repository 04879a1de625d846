"""Health check data models."""

from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple


class SemVer(NamedTuple):
    """A major.minor.patch triple; tuple ordering is release ordering."""
    major: int
    minor: int
    patch: int

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


class ResourceKind(Enum):
    FILE = "file"
    DIRECTORY = "directory"


@dataclass(frozen=True)
class ResourceRequirement:
    """A filesystem path the application depends on."""
    name: str
    path: str
    kind: ResourceKind
    must_be_readable: bool = True
    must_be_writable: bool = False
    optional: bool = False      # May not exist yet (created on first write)
    minimal: bool = False       # Still checked in minimal mode


@dataclass
class ExtensionRequirement:
    """An extension module and whether the running interpreter provides it."""
    name: str
    required: bool
    description: str
    loaded: bool


@dataclass
class UpdateCacheRecord:
    """Last update check: when it ran and which version it resolved."""
    checked_at: float           # epoch seconds
    version: str
