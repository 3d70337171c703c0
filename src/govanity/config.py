"""Configuration management for govanity.

Supports TOML configuration format with auto-discovery. The package registry
itself is compiled in and not part of the configuration.
"""

import tomllib
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Self

CONFIG_FILENAME = "govanity.toml"

DEFAULT_PORT = 8421
DEFAULT_HOST_HEADER = "X-Forwarded-Host"


@dataclass(frozen=True)
class ServerConfig:
    """Listener configuration."""

    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT


@dataclass(frozen=True)
class HostConfig:
    """Public domain resolution settings.

    ``override`` takes precedence over anything sent by the client. When empty,
    the ``header`` request header is used, then the request's own Host.
    """

    override: str = ""
    header: str = DEFAULT_HOST_HEADER


@dataclass(frozen=True)
class Config:
    """Application configuration."""

    server: ServerConfig = field(default_factory=ServerConfig)
    vanity: HostConfig = field(default_factory=HostConfig)
    config_path: Path | None = None

    @classmethod
    def load(cls, config_path: Path | None = None) -> Self:
        """Load configuration from file.

        If config_path is provided, loads from that file.
        Otherwise, searches for govanity.toml in current directory and parents.

        Args:
            config_path: Optional explicit path to config file

        Returns:
            Config instance with defaults for missing sections

        Raises:
            FileNotFoundError: If explicit config_path doesn't exist
            ValueError: If configuration is invalid
        """
        if config_path is not None:
            if not config_path.exists():
                raise FileNotFoundError(f"Configuration file not found: {config_path}")
            return cls._load_from_file(config_path)

        discovered_path = cls._discover_config()
        if discovered_path is None:
            return cls()

        return cls._load_from_file(discovered_path)

    @classmethod
    def _discover_config(cls) -> Path | None:
        """Search for config file in current directory and parents."""
        current = Path.cwd()
        while True:
            candidate = current / CONFIG_FILENAME
            if candidate.exists():
                return candidate
            parent = current.parent
            if parent == current:
                return None
            current = parent

    @classmethod
    def _load_from_file(cls, path: Path) -> Self:
        with path.open("rb") as f:
            try:
                data = tomllib.load(f)
            except tomllib.TOMLDecodeError as e:
                raise ValueError(f"Invalid TOML in {path}: {e}") from e

        return cls(
            server=cls._parse_server(data.get("server")),
            vanity=cls._parse_vanity(data.get("vanity")),
            config_path=path,
        )

    @classmethod
    def _parse_server(cls, data: object) -> ServerConfig:
        """Parse server configuration section.

        Args:
            data: Raw server section data

        Returns:
            ServerConfig instance
        """
        if data is None:
            return ServerConfig()

        if not isinstance(data, dict):
            raise ValueError("server section must be a dictionary")

        host = data.get("host", ServerConfig.host)
        if not isinstance(host, str):
            raise ValueError("server.host must be a string")

        port = data.get("port", DEFAULT_PORT)
        if not isinstance(port, int) or isinstance(port, bool):
            raise ValueError("server.port must be an integer")

        return ServerConfig(host=host, port=port)

    @classmethod
    def _parse_vanity(cls, data: object) -> HostConfig:
        """Parse vanity configuration section.

        Args:
            data: Raw vanity section data

        Returns:
            HostConfig instance
        """
        if data is None:
            return HostConfig()

        if not isinstance(data, dict):
            raise ValueError("vanity section must be a dictionary")

        override = data.get("host", "")
        if not isinstance(override, str):
            raise ValueError("vanity.host must be a string")

        header = data.get("host_header", DEFAULT_HOST_HEADER)
        if not isinstance(header, str):
            raise ValueError("vanity.host_header must be a string")
        if not header:
            raise ValueError("vanity.host_header must not be empty")

        return HostConfig(override=override, header=header)

    def with_overrides(
        self,
        *,
        bind: str | None = None,
        port: int | None = None,
        host_override: str | None = None,
        host_header: str | None = None,
    ) -> Self:
        """Create a new Config with CLI overrides applied.

        Only non-None values override the existing config. The original
        Config is not modified.

        Args:
            bind: Override server.host
            port: Override server.port
            host_override: Override vanity.host
            host_header: Override vanity.host_header

        Returns:
            New Config instance with overrides applied
        """
        server = self.server
        if bind is not None or port is not None:
            server = replace(
                self.server,
                host=bind if bind is not None else self.server.host,
                port=port if port is not None else self.server.port,
            )

        vanity = self.vanity
        if host_override is not None or host_header is not None:
            vanity = replace(
                self.vanity,
                override=host_override if host_override is not None else self.vanity.override,
                header=host_header or self.vanity.header,
            )

        return replace(self, server=server, vanity=vanity)
