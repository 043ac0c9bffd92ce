"""Tests for the configuration module."""

from __future__ import annotations

from pathlib import Path

import pytest

from leftover_hunter.config import (
    DEFAULT_CONFIG_TEMPLATE,
    Config,
    DefaultsConfig,
    DiscoveryConfig,
    PathsConfig,
    _dict_to_config,
    _merge_dicts,
    _validate_config,
    get_config_paths,
    get_xdg_config_home,
    load_config,
    load_config_from_file,
)
from leftover_hunter.core.parallel import DEFAULT_WORKERS


class TestDefaultsConfig:
    """Tests for DefaultsConfig dataclass."""

    def test_default_values(self):
        config = DefaultsConfig()
        assert config.dry_run is True
        assert config.trash is False
        assert config.interactive is True

    def test_custom_values(self):
        config = DefaultsConfig(dry_run=False, trash=True)
        assert config.dry_run is False
        assert config.trash is True
        assert config.interactive is True  # default


class TestDiscoveryConfig:
    """Tests for DiscoveryConfig dataclass."""

    def test_default_values(self):
        config = DiscoveryConfig()
        assert config.prefix == "harbour-*"
        assert config.parallel is True
        assert config.max_workers == DEFAULT_WORKERS

    def test_parallel_config(self):
        parallel = DiscoveryConfig(parallel=False, max_workers=3).parallel_config
        assert parallel.enabled is False
        assert parallel.max_workers == 3


class TestConfig:
    """Tests for Config root dataclass."""

    def test_default_values(self):
        config = Config()
        assert isinstance(config.defaults, DefaultsConfig)
        assert isinstance(config.paths, PathsConfig)
        assert isinstance(config.discovery, DiscoveryConfig)
        assert config.known_apps == []
        assert config._source is None

    def test_locations_default_to_xdg(self, monkeypatch, tmp_path):
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "c"))
        monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path / "k"))
        monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "d"))
        monkeypatch.setenv("XDG_DATA_DIRS", "/usr/share")

        locations = Config().locations(home_dir=tmp_path)
        assert locations.config_root == tmp_path / "c"
        assert locations.cache_root == tmp_path / "k"
        assert locations.data_root == tmp_path / "d"
        assert locations.application_dirs == [
            tmp_path / "d" / "applications",
            Path("/usr/share/applications"),
        ]

    def test_locations_overrides(self, tmp_path):
        config = Config(
            paths=PathsConfig(
                config_root=str(tmp_path / "cfg"),
                application_dirs=[str(tmp_path / "apps")],
                icon_templates=["/icons/{icon}.svg"],
            )
        )
        locations = config.locations(home_dir=tmp_path)
        assert locations.config_root == tmp_path / "cfg"
        assert locations.application_dirs == [tmp_path / "apps"]
        assert locations.icon_templates == ["/icons/{icon}.svg"]


class TestMergeDicts:
    """Tests for _merge_dicts function."""

    def test_simple_merge(self):
        result = _merge_dicts({"a": 1, "b": 2}, {"b": 3, "c": 4})
        assert result == {"a": 1, "b": 3, "c": 4}

    def test_deep_merge(self):
        result = _merge_dicts({"section": {"a": 1, "b": 2}}, {"section": {"b": 3}})
        assert result == {"section": {"a": 1, "b": 3}}

    def test_base_unchanged(self):
        base = {"a": 1}
        _merge_dicts(base, {"a": 2})
        assert base == {"a": 1}


class TestValidateConfig:
    """Tests for _validate_config function."""

    def test_valid_config(self):
        data = {
            "defaults": {"dry_run": False},
            "discovery": {"prefix": "org.example.*", "max_workers": 2},
            "paths": {"icon_templates": ["/icons/{icon}.png"]},
            "known_apps": [{"name": "a", "config": ["{config}/a"], "cache": ["~/.a-cache"]}],
        }
        assert _validate_config(data) == []

    def test_invalid_prefix(self):
        errors = _validate_config({"discovery": {"prefix": ""}})
        assert len(errors) == 1
        assert "discovery.prefix" in errors[0]

    def test_invalid_max_workers(self):
        errors = _validate_config({"discovery": {"max_workers": 0}})
        assert len(errors) == 1
        assert "discovery.max_workers" in errors[0]

    def test_icon_template_needs_placeholder(self):
        errors = _validate_config({"paths": {"icon_templates": ["/icons/app.png"]}})
        assert len(errors) == 1
        assert "icon_templates" in errors[0]

    def test_icon_template_with_unknown_placeholder(self):
        errors = _validate_config({"paths": {"icon_templates": ["/icons/{icon}-{size}.png"]}})
        assert len(errors) == 1
        assert "icon_templates" in errors[0]
        assert "size" in errors[0]

    def test_icon_template_with_positional_field(self):
        errors = _validate_config({"paths": {"icon_templates": ["/icons/{icon}/{0}.png"]}})
        assert len(errors) == 1

    def test_application_dirs_must_be_list(self):
        errors = _validate_config({"paths": {"application_dirs": "/usr/share/applications"}})
        assert len(errors) == 1
        assert "paths.application_dirs" in errors[0]

    def test_known_app_needs_name(self):
        errors = _validate_config({"known_apps": [{"config": ["{config}/a"]}]})
        assert len(errors) == 1
        assert "known_apps[0]" in errors[0]

    def test_known_app_unknown_placeholder(self):
        errors = _validate_config({"known_apps": [{"name": "a", "cache": ["{tmp}/a"]}]})
        assert len(errors) == 1
        assert "known_apps[0].cache" in errors[0]

    def test_known_apps_must_be_array(self):
        errors = _validate_config({"known_apps": {"name": "a"}})
        assert len(errors) == 1


class TestDictToConfig:
    """Tests for _dict_to_config function."""

    def test_empty_dict(self):
        config = _dict_to_config({})
        assert config.defaults.dry_run is True  # Default
        assert config._source is None

    def test_partial_config(self):
        config = _dict_to_config({"defaults": {"dry_run": False}})
        assert config.defaults.dry_run is False
        assert config.defaults.interactive is True  # Default

    def test_unknown_keys_ignored(self):
        config = _dict_to_config({"defaults": {"bogus": 1}, "discovery": {"prefix": "x-*"}})
        assert config.discovery.prefix == "x-*"

    def test_known_apps(self):
        config = _dict_to_config(
            {"known_apps": [{"name": "a", "local_data": ["{data}/a"], "extra": True}]}
        )
        assert len(config.known_apps) == 1
        assert config.known_apps[0].name == "a"
        assert config.known_apps[0].local_data == ["{data}/a"]
        assert config.known_apps[0].config == []

    def test_with_source(self):
        path = Path("/test/config.toml")
        config = _dict_to_config({}, source=path)
        assert config._source == path


class TestGetConfigPaths:
    """Tests for get_config_paths function."""

    def test_xdg_path_format(self):
        xdg, _ = get_config_paths()
        assert xdg.name == "config.toml"
        assert "leftover-hunter" in str(xdg)

    def test_cwd_path_format(self):
        _, cwd = get_config_paths()
        assert cwd.name == "leftoverhunter.toml"


class TestGetXdgConfigHome:
    """Tests for get_xdg_config_home function."""

    def test_default_path(self, monkeypatch):
        monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
        assert get_xdg_config_home() == Path.home() / ".config"

    def test_custom_xdg(self, monkeypatch):
        monkeypatch.setenv("XDG_CONFIG_HOME", "/custom/config")
        assert get_xdg_config_home() == Path("/custom/config")


class TestLoadConfig:
    """Tests for load_config function."""

    def test_no_config_files(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "nonexistent"))
        config = load_config()
        assert config._source is None
        assert config.defaults.dry_run is True

    def test_cwd_overrides_xdg(self, monkeypatch, tmp_path):
        xdg_dir = tmp_path / "xdg" / "leftover-hunter"
        xdg_dir.mkdir(parents=True)
        (xdg_dir / "config.toml").write_text(
            '[defaults]\ndry_run = false\ntrash = true\n[discovery]\nprefix = "a-*"\n'
        )
        work = tmp_path / "work"
        work.mkdir()
        (work / "leftoverhunter.toml").write_text("[defaults]\ntrash = false\n")
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
        monkeypatch.chdir(work)

        config = load_config()
        assert config.defaults.dry_run is False
        assert config.defaults.trash is False
        assert config.discovery.prefix == "a-*"
        assert config._source == work / "leftoverhunter.toml"

    def test_invalid_toml(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "nonexistent"))
        (tmp_path / "leftoverhunter.toml").write_text("[defaults\n")
        with pytest.raises(ValueError, match="Invalid TOML"):
            load_config()


class TestLoadConfigFromFile:
    """Tests for load_config_from_file function."""

    def test_load_valid_file(self, tmp_path):
        config_file = tmp_path / "test.toml"
        config_file.write_text("""
[defaults]
dry_run = false
trash = true

[[known_apps]]
name = "my-app"
config = ["{config}/org.example/my-app"]
""")
        config = load_config_from_file(config_file)
        assert config.defaults.dry_run is False
        assert config.defaults.trash is True
        assert config.known_apps[0].name == "my-app"
        assert config._source == config_file

    def test_load_invalid_file(self, tmp_path):
        config_file = tmp_path / "test.toml"
        config_file.write_text('[discovery]\nprefix = ""\n')
        with pytest.raises(ValueError, match="discovery.prefix"):
            load_config_from_file(config_file)


class TestDefaultConfigTemplate:
    """Tests for DEFAULT_CONFIG_TEMPLATE."""

    def test_template_is_valid_toml(self, tmp_path):
        config_file = tmp_path / "test.toml"
        config_file.write_text(DEFAULT_CONFIG_TEMPLATE)
        config = load_config_from_file(config_file)
        assert config.defaults.dry_run is True
        assert config.discovery.prefix == "harbour-*"

    def test_template_has_all_sections(self):
        assert "[defaults]" in DEFAULT_CONFIG_TEMPLATE
        assert "[paths]" in DEFAULT_CONFIG_TEMPLATE
        assert "[discovery]" in DEFAULT_CONFIG_TEMPLATE
        assert "[[known_apps]]" in DEFAULT_CONFIG_TEMPLATE
