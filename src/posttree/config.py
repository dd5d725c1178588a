"""Configuration management for posttree.

Supports TOML configuration format with auto-discovery.
"""

import tomllib
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import cast

from posttree.core.navigation import RenderOptions
from posttree.core.tree import HiddenRootPolicy

CONFIG_FILENAME = "posttree.toml"

HIDDEN_ROOT_POLICIES = ("show", "fail")


@dataclass
class ServerConfig:
    """Server configuration."""

    host: str = "127.0.0.1"
    port: int = 8080


@dataclass
class NavigationConfig:
    """Navigation rendering configuration."""

    only_descendants: bool = False
    full_tree: bool = False
    current_item_marker: str = "current"
    hidden_filter_key: str = "hidden"
    hidden_root: HiddenRootPolicy = "show"
    max_depth: int | None = None


@dataclass
class SiteConfig:
    """Site source configuration."""

    source: Path = field(default_factory=lambda: Path("site.json"))


@dataclass
class Config:
    """Application configuration."""

    navigation: NavigationConfig
    site: SiteConfig
    server: ServerConfig = field(default_factory=ServerConfig)
    config_path: Path | None = None

    @classmethod
    def load(cls, config_path: Path | None = None) -> "Config":
        """Load configuration from file.

        If config_path is provided, loads from that file.
        Otherwise, searches for posttree.toml in current directory and parents.

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
            return cls._default()

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
    def _default(cls) -> "Config":
        return cls(navigation=NavigationConfig(), site=SiteConfig())

    @classmethod
    def _load_from_file(cls, path: Path) -> "Config":
        """Load configuration from a specific file.

        Args:
            path: Path to TOML configuration file

        Returns:
            Config instance

        Raises:
            ValueError: If configuration is invalid
        """
        with path.open("rb") as f:
            data = tomllib.load(f)

        if not isinstance(data, dict):
            raise ValueError("Configuration must be a dictionary")

        navigation = cls._parse_navigation(data.get("navigation"))
        site = cls._parse_site(data.get("site"), path.parent)
        server = cls._parse_server(data.get("server"))

        return cls(navigation=navigation, site=site, server=server, config_path=path)

    @classmethod
    def _parse_navigation(cls, data: object) -> NavigationConfig:
        """Parse navigation configuration section.

        Args:
            data: Raw navigation section data

        Returns:
            NavigationConfig instance
        """
        if data is None:
            return NavigationConfig()

        if not isinstance(data, dict):
            raise ValueError("navigation section must be a dictionary")

        flags: dict[str, bool] = {}
        for key in ("only_descendants", "full_tree"):
            value = data.get(key, False)
            if not isinstance(value, bool):
                raise ValueError(f"navigation.{key} must be a boolean")
            flags[key] = value

        current_item_marker = data.get("current_item_marker", "current")
        if not isinstance(current_item_marker, str):
            raise ValueError("navigation.current_item_marker must be a string")

        hidden_filter_key = data.get("hidden_filter_key", "hidden")
        if not isinstance(hidden_filter_key, str) or not hidden_filter_key:
            raise ValueError("navigation.hidden_filter_key must be a non-empty string")

        hidden_root = data.get("hidden_root", "show")
        if hidden_root not in HIDDEN_ROOT_POLICIES:
            raise ValueError('navigation.hidden_root must be "show" or "fail"')

        max_depth = data.get("max_depth")
        if max_depth is not None and (
            not isinstance(max_depth, int) or isinstance(max_depth, bool) or max_depth < 1
        ):
            raise ValueError("navigation.max_depth must be a positive integer")

        return NavigationConfig(
            only_descendants=flags["only_descendants"],
            full_tree=flags["full_tree"],
            current_item_marker=current_item_marker,
            hidden_filter_key=hidden_filter_key,
            hidden_root=cast(HiddenRootPolicy, hidden_root),
            max_depth=max_depth,
        )

    @classmethod
    def _parse_site(cls, data: object, config_dir: Path) -> SiteConfig:
        """Parse site configuration section.

        Args:
            data: Raw site section data
            config_dir: Directory containing config file (for relative paths)

        Returns:
            SiteConfig instance
        """
        if data is None:
            return SiteConfig(source=config_dir / "site.json")

        if not isinstance(data, dict):
            raise ValueError("site section must be a dictionary")

        source = data.get("source", "site.json")
        if not isinstance(source, str):
            raise ValueError("site.source must be a string")

        return SiteConfig(source=config_dir / source)

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

        host = data.get("host", "127.0.0.1")
        if not isinstance(host, str):
            raise ValueError("server.host must be a string")

        port = data.get("port", 8080)
        if not isinstance(port, int):
            raise ValueError("server.port must be an integer")

        return ServerConfig(host=host, port=port)

    def render_options(self) -> RenderOptions:
        """Build rendering options from the navigation section."""
        nav = self.navigation
        return RenderOptions(
            only_descendants=nav.only_descendants,
            full_tree=nav.full_tree,
            current_item_marker=nav.current_item_marker,
            hidden_filter_key=nav.hidden_filter_key,
            hidden_root=nav.hidden_root,
            max_depth=nav.max_depth,
        )

    def with_overrides(
        self,
        *,
        source: Path | None = None,
        host: str | None = None,
        port: int | None = None,
        only_descendants: bool | None = None,
        full_tree: bool | None = None,
        current_item_marker: str | None = None,
        hidden_filter_key: str | None = None,
        hidden_root: HiddenRootPolicy | None = None,
    ) -> "Config":
        """Create a new Config with CLI overrides applied.

        Only non-None values override the existing config. The original
        Config is not modified.

        Args:
            source: Override site.source
            host: Override server.host
            port: Override server.port
            only_descendants: Override navigation.only_descendants
            full_tree: Override navigation.full_tree
            current_item_marker: Override navigation.current_item_marker
            hidden_filter_key: Override navigation.hidden_filter_key
            hidden_root: Override navigation.hidden_root

        Returns:
            New Config instance with overrides applied
        """
        site = self.site
        if source is not None:
            site = replace(self.site, source=source)

        server = self.server
        if host is not None or port is not None:
            server = replace(
                self.server,
                host=host if host is not None else self.server.host,
                port=port if port is not None else self.server.port,
            )

        overrides = {
            "only_descendants": only_descendants,
            "full_tree": full_tree,
            "current_item_marker": current_item_marker,
            "hidden_filter_key": hidden_filter_key,
            "hidden_root": hidden_root,
        }
        navigation = replace(
            self.navigation,
            **{key: value for key, value in overrides.items() if value is not None},
        )

        return replace(self, navigation=navigation, site=site, server=server)
