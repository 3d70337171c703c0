"""Shared test fixtures."""

import pytest
from govanity.config import Config, HostConfig, ServerConfig
from govanity.registry import VCS, Package, Registry
from govanity.types import URLPath

PUBLIC_HOST = "go.example.org"


@pytest.fixture
def test_config() -> Config:
    """Create a configuration with a fixed public host."""
    return Config(
        server=ServerConfig(host="127.0.0.1", port=8421),
        vanity=HostConfig(override=PUBLIC_HOST),
    )


@pytest.fixture
def registry() -> Registry:
    """Create a registry covering every VCS kind."""
    return Registry(
        [
            Package(URLPath("/tools"), "https://github.com/example/tools", VCS.GIT),
            Package(URLPath("/legacy"), "https://hg.example.org/legacy", VCS.HG),
            Package(URLPath("/svnpkg"), "https://svn.example.org/svnpkg", VCS.SVN),
            Package(URLPath("/bzrpkg"), "https://bzr.example.org/bzrpkg", VCS.BZR),
        ]
    )
