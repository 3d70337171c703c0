"""Compiled-in vanity import path registry.

Maps URL paths on the vanity domain to the repositories that serve them.
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import StrEnum

from govanity.types import URLPath


class VCS(StrEnum):
    """Version control systems understood by `go get`."""

    GIT = "git"
    HG = "hg"
    SVN = "svn"
    BZR = "bzr"


@dataclass(frozen=True)
class Package:
    """Vanity path bound to a source repository."""

    path: URLPath
    repo: str
    vcs: VCS


PACKAGES: tuple[Package, ...] = (
    Package(
        path=URLPath("/go-utils"),
        repo="https://github.com/aykhans/go-utils",
        vcs=VCS.GIT,
    ),
    Package(
        path=URLPath("/sarin"),
        repo="https://github.com/aykhans/sarin",
        vcs=VCS.GIT,
    ),
)


class Registry:
    """Read-only, ordered collection of packages with lookup by path.

    Paths are expected to be unique. If they are not, the first declared
    entry wins, exactly as a linear scan would behave.
    """

    def __init__(self, packages: Iterable[Package] = PACKAGES) -> None:
        self._packages = tuple(packages)
        self._by_path: dict[str, Package] = {}
        for package in self._packages:
            self._by_path.setdefault(package.path, package)

    def find_by_path(self, path: str) -> Package | None:
        """Return the package registered at exactly ``path``, if any.

        No normalization is applied: ``/go-utils/`` does not match ``/go-utils``.
        """
        return self._by_path.get(path)

    @property
    def packages(self) -> tuple[Package, ...]:
        return self._packages

    def __iter__(self) -> Iterator[Package]:
        return iter(self._packages)

    def __len__(self) -> int:
        return len(self._packages)
