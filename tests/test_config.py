"""Tests for configuration loading."""

from pathlib import Path
from unittest.mock import patch

import pytest
from posttree.config import Config, NavigationConfig, SiteConfig
from posttree.core.navigation import RenderOptions


class TestConfigLoad:
    """Tests for Config.load()."""

    def test__explicit_path__loads_config(self, tmp_path: Path) -> None:
        """Load config from explicit path."""
        config_file = tmp_path / "posttree.toml"
        config_file.write_text("""
[navigation]
only_descendants = true
full_tree = true
current_item_marker = "WpPostTree-current-post"
hidden_filter_key = "hideInNav"
hidden_root = "fail"
max_depth = 10

[site]
source = "content/site.json"
""")

        config = Config.load(config_file)

        assert config.navigation.only_descendants is True
        assert config.navigation.full_tree is True
        assert config.navigation.current_item_marker == "WpPostTree-current-post"
        assert config.navigation.hidden_filter_key == "hideInNav"
        assert config.navigation.hidden_root == "fail"
        assert config.navigation.max_depth == 10
        assert config.site.source == tmp_path / "content/site.json"
        assert config.config_path == config_file

    def test__minimal_config__uses_defaults(self, tmp_path: Path) -> None:
        """Load minimal config with defaults relative to config file."""
        config_file = tmp_path / "posttree.toml"
        config_file.write_text("")

        config = Config.load(config_file)

        assert config.navigation == NavigationConfig()
        assert config.navigation.max_depth is None
        assert config.site.source == tmp_path / "site.json"

    def test__missing_explicit_path__raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError, match="Configuration file not found"):
            Config.load(tmp_path / "nonexistent.toml")

    def test__no_config_found__returns_defaults(self) -> None:
        """Fall back to defaults when discovery finds nothing."""
        with patch.object(Config, "_discover_config", return_value=None):
            config = Config.load()

        assert config.navigation == NavigationConfig()
        assert config.site == SiteConfig()
        assert config.config_path is None

    def test__discovers_config_in_parent(self, tmp_path: Path) -> None:
        """Find posttree.toml in a parent directory."""
        config_file = tmp_path / "posttree.toml"
        config_file.write_text("[navigation]\nfull_tree = true\n")
        subdir = tmp_path / "a" / "b"
        subdir.mkdir(parents=True)

        with patch("pathlib.Path.cwd", return_value=subdir):
            config = Config.load()

        assert config.navigation.full_tree is True
        assert config.config_path == config_file


class TestNavigationConfigParsing:
    """Tests for navigation config section parsing."""

    @pytest.mark.parametrize(
        ("content", "message"),
        [
            ("navigation = 1", "navigation section must be a dictionary"),
            ("[navigation]\nfull_tree = \"yes\"", "navigation.full_tree must be a boolean"),
            ("[navigation]\nonly_descendants = 1", "navigation.only_descendants must be a boolean"),
            ("[navigation]\ncurrent_item_marker = 1", "navigation.current_item_marker must be a string"),
            ("[navigation]\nhidden_filter_key = \"\"", "navigation.hidden_filter_key must be a non-empty"),
            ("[navigation]\nhidden_root = \"hide\"", "navigation.hidden_root must be"),
            ("[navigation]\nmax_depth = 0", "navigation.max_depth must be a positive integer"),
            ("[navigation]\nmax_depth = true", "navigation.max_depth must be a positive integer"),
        ],
    )
    def test__invalid_values__raise(self, tmp_path: Path, content: str, message: str) -> None:
        config_file = tmp_path / "posttree.toml"
        config_file.write_text(content)

        with pytest.raises(ValueError, match=message):
            Config.load(config_file)

    def test__empty_marker__allowed(self, tmp_path: Path) -> None:
        """Empty marker disables current item marking."""
        config_file = tmp_path / "posttree.toml"
        config_file.write_text('[navigation]\ncurrent_item_marker = ""')

        config = Config.load(config_file)

        assert config.navigation.current_item_marker == ""


class TestSiteConfigParsing:
    """Tests for site config section parsing."""

    def test__invalid_section__raises(self, tmp_path: Path) -> None:
        config_file = tmp_path / "posttree.toml"
        config_file.write_text("site = 1")

        with pytest.raises(ValueError, match="site section must be a dictionary"):
            Config.load(config_file)

    def test__invalid_source__raises(self, tmp_path: Path) -> None:
        config_file = tmp_path / "posttree.toml"
        config_file.write_text("[site]\nsource = 1")

        with pytest.raises(ValueError, match="site.source must be a string"):
            Config.load(config_file)


class TestRenderOptions:
    """Tests for Config.render_options()."""

    def test__defaults_match_render_options(self) -> None:
        config = Config(navigation=NavigationConfig(), site=SiteConfig())

        assert config.render_options() == RenderOptions()

    def test__copies_navigation_values(self) -> None:
        config = Config(
            navigation=NavigationConfig(full_tree=True, hidden_root="fail", max_depth=5),
            site=SiteConfig(),
        )

        options = config.render_options()

        assert options.full_tree is True
        assert options.hidden_root == "fail"
        assert options.max_depth == 5


class TestWithOverrides:
    """Tests for Config.with_overrides()."""

    def test__applies_non_none_values(self, tmp_path: Path) -> None:
        config = Config(navigation=NavigationConfig(), site=SiteConfig())

        updated = config.with_overrides(
            source=tmp_path / "other.json",
            full_tree=True,
            current_item_marker="active",
        )

        assert updated.site.source == tmp_path / "other.json"
        assert updated.navigation.full_tree is True
        assert updated.navigation.current_item_marker == "active"
        assert updated.navigation.only_descendants is False

    def test__false_overrides_true(self) -> None:
        """Explicit False is an override, not a missing value."""
        config = Config(navigation=NavigationConfig(full_tree=True), site=SiteConfig())

        updated = config.with_overrides(full_tree=False)

        assert updated.navigation.full_tree is False

    def test__original_unchanged(self) -> None:
        config = Config(navigation=NavigationConfig(), site=SiteConfig())

        config.with_overrides(only_descendants=True, hidden_filter_key="draft")

        assert config.navigation == NavigationConfig()


class TestServerConfigParsing:
    """Tests for server config section parsing."""

    def test__valid_server__parses_correctly(self, tmp_path: Path) -> None:
        config_file = tmp_path / "posttree.toml"
        config_file.write_text('[server]\nhost = "0.0.0.0"\nport = 3000\n')

        config = Config.load(config_file)

        assert config.server.host == "0.0.0.0"
        assert config.server.port == 3000

    def test__invalid_port__raises(self, tmp_path: Path) -> None:
        config_file = tmp_path / "posttree.toml"
        config_file.write_text('[server]\nport = "80"\n')

        with pytest.raises(ValueError, match="server.port must be an integer"):
            Config.load(config_file)

    def test__host_port_overrides(self) -> None:
        config = Config(navigation=NavigationConfig(), site=SiteConfig())

        updated = config.with_overrides(port=9000)

        assert updated.server.host == "127.0.0.1"
        assert updated.server.port == 9000
        assert config.server.port == 8080
