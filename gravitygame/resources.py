"""Locating game resources relative to the executable's directory."""

from __future__ import annotations

from dataclasses import dataclass


class ResourceError(Exception):
    """Raised when the resource directory cannot be determined."""


def find_resource_path(run_path: str) -> str:
    """Return the directory part of ``run_path``, keeping the trailing slash."""
    slash = run_path.rfind("/")
    if slash < 0:
        raise ResourceError("Unable to find resource path")
    return run_path[: slash + 1]


@dataclass(frozen=True)
class ResourceLocator:
    """Builds resource paths under a fixed base directory."""

    base: str

    @classmethod
    def from_executable(cls, run_path: str) -> ResourceLocator:
        """Create a locator rooted at the directory holding ``run_path``."""
        return cls(find_resource_path(run_path))

    def find(self, resource: str) -> str:
        """Return the full path of ``resource``."""
        return self.base + resource