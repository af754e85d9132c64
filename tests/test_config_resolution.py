"""Tests for config file resolution, env handling and the initial form."""

import pytest
import yaml

from reqtty import config
from reqtty.model import Header


def _write_config(path, **defaults):
    """Helper to write a config YAML file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(yaml.dump({"defaults": defaults}))


# ── find_config ─────────────────────────────────────────────────────────


class TestFindConfig:
    def test_explicit_flag_takes_priority(self, tmp_project, global_reqtty_dir):
        """Explicit -c flag should win over everything else."""
        explicit = tmp_project / "custom" / "my.yaml"
        _write_config(explicit, url="explicit")
        # Also create a CWD config and global config to prove they're ignored
        _write_config(tmp_project / ".reqtty.yaml", url="cwd")
        _write_config(global_reqtty_dir / "config.yaml", url="global")

        result = config.find_config(str(explicit))
        assert result == explicit.resolve()

    def test_explicit_flag_nonexistent_returns_none(self, tmp_project, global_reqtty_dir):
        """Explicit -c pointing to a missing file does not fall through."""
        _write_config(global_reqtty_dir / "config.yaml", url="global")
        assert config.find_config("/nonexistent/config.yaml") is None

    @pytest.mark.parametrize("name", config.CWD_CONFIG_CANDIDATES)
    def test_cwd_variants(self, tmp_project, global_reqtty_dir, name):
        _write_config(tmp_project / name)
        _write_config(global_reqtty_dir / "config.yaml", url="global")

        result = config.find_config(None)
        assert result == (tmp_project / name).resolve()

    def test_dotted_yaml_wins_over_plain(self, tmp_project, global_reqtty_dir):
        _write_config(tmp_project / "reqtty.yaml")
        _write_config(tmp_project / ".reqtty.yaml")

        result = config.find_config(None)
        assert result == (tmp_project / ".reqtty.yaml").resolve()

    def test_global_fallback(self, tmp_project, global_reqtty_dir):
        _write_config(global_reqtty_dir / "config.yaml")

        result = config.find_config(None)
        assert result == (global_reqtty_dir / "config.yaml").resolve()

    def test_nothing_found(self, tmp_project, global_reqtty_dir):
        assert config.find_config(None) is None


# ── read_config ─────────────────────────────────────────────────────────


class TestReadConfig:
    def test_none_path(self):
        settings = config.read_config(None)
        assert settings.defaults == {}
        assert settings.source is None

    def test_missing_file(self, tmp_path):
        assert config.read_config(tmp_path / "missing.yaml") == config.Settings()

    def test_reads_defaults_and_source(self, tmp_path):
        path = tmp_path / "sub" / "c.yaml"
        _write_config(path, url="http://api/", method="POST")

        settings = config.read_config(path)
        assert settings.defaults == {"url": "http://api/", "method": "POST"}
        assert settings.source == path.resolve()
        assert settings.base_dir == path.resolve().parent

    def test_empty_file(self, tmp_path):
        path = tmp_path / "c.yaml"
        path.write_text("")
        assert config.read_config(path).defaults == {}

    def test_empty_defaults_section(self, tmp_path):
        path = tmp_path / "c.yaml"
        path.write_text("defaults:\n")
        assert config.read_config(path).defaults == {}

    def test_malformed_yaml(self, tmp_path):
        path = tmp_path / "c.yaml"
        path.write_text("defaults: [unclosed")
        with pytest.raises(config.ConfigError, match="Cannot parse"):
            config.read_config(path)

    def test_non_mapping(self, tmp_path):
        path = tmp_path / "c.yaml"
        path.write_text("- just\n- a list\n")
        with pytest.raises(config.ConfigError, match="mapping"):
            config.read_config(path)

    def test_defaults_must_be_mapping(self, tmp_path):
        path = tmp_path / "c.yaml"
        path.write_text("defaults:\n  - url\n  - method\n")
        with pytest.raises(config.ConfigError, match="'defaults'"):
            config.read_config(path)


# ── env ─────────────────────────────────────────────────────────────────


class TestEnv:
    def test_dotenv_overrides_environ(self, tmp_path, monkeypatch):
        monkeypatch.setenv("API_TOKEN", "from-os")
        (tmp_path / ".env").write_text("API_TOKEN=from-file\n")
        settings = config.Settings({"env_file": ".env"}, tmp_path / "c.yaml")

        env = config.load_environment(settings)
        assert env["API_TOKEN"] == "from-file"

    def test_missing_env_file_uses_environ(self, tmp_path, monkeypatch):
        monkeypatch.setenv("API_TOKEN", "from-os")
        settings = config.Settings({"env_file": ".env"}, tmp_path / "c.yaml")
        assert config.load_environment(settings)["API_TOKEN"] == "from-os"

    def test_no_env_file(self, monkeypatch):
        monkeypatch.setenv("API_TOKEN", "from-os")
        assert config.load_environment(config.Settings())["API_TOKEN"] == "from-os"

    def test_env_file_must_be_string(self, tmp_path):
        settings = config.Settings({"env_file": [".env"]}, tmp_path / "c.yaml")
        with pytest.raises(config.ConfigError, match="'env_file' must be a string"):
            config.load_environment(settings)

    def test_expand_both_syntaxes(self):
        env = {"HOST": "api", "PORT": "8080"}
        assert config.expand("http://$HOST:${PORT}/", env) == "http://api:8080/"

    def test_unknown_variable_left_alone(self):
        assert config.expand("${NOPE_NOT_SET} $ALSO_NOT", {}) == "${NOPE_NOT_SET} $ALSO_NOT"


# ── build_form ──────────────────────────────────────────────────────────


class TestParseHeader:
    def test_splits_on_first_colon(self):
        assert config.parse_header("X-Time: 12:30") == Header("X-Time", "12:30")

    def test_no_colon(self):
        assert config.parse_header("garbage") is None


class TestBuildForm:
    def test_builtin_defaults(self):
        form = config.build_form({}, {})
        assert form == {
            "url": "",
            "body": "",
            "method": "GET",
            "content_type": "application/json",
            "headers": [],
        }

    def test_config_values_resolved(self):
        defaults = {
            "url": "${BASE}/health",
            "method": "post",
            "content_type": "text/plain",
            "body": "hello $WHO",
            "headers": {"Authorization": "Bearer ${TOKEN}"},
        }
        env = {"BASE": "http://api", "WHO": "you", "TOKEN": "t0k"}
        form = config.build_form(defaults, env)
        assert form["url"] == "http://api/health"
        assert form["method"] == "POST"
        assert form["content_type"] == "text/plain"
        assert form["body"] == "hello you"
        assert form["headers"] == [Header("Authorization", "Bearer t0k")]

    def test_flags_override_config(self):
        defaults = {"url": "http://config/", "method": "PUT", "body": "cfg"}
        form = config.build_form(
            defaults,
            {},
            url="http://flag/",
            method="delete",
            body="",
        )
        assert form["url"] == "http://flag/"
        assert form["method"] == "DELETE"
        assert form["body"] == ""

    def test_flag_headers_appended_after_config(self):
        defaults = {"headers": {"X-A": "1"}}
        form = config.build_form(defaults, {}, header_specs=("X-B: 2",))
        assert form["headers"] == [Header("X-A", "1"), Header("X-B", "2")]

    def test_unknown_method(self):
        with pytest.raises(config.ConfigError, match="Unsupported method 'FETCH'"):
            config.build_form({}, {}, method="fetch")

    def test_unknown_content_type(self):
        with pytest.raises(config.ConfigError, match="Unsupported content type"):
            config.build_form({"content_type": "text/csv"}, {})

    def test_bad_header_spec(self):
        with pytest.raises(config.ConfigError, match="Invalid header"):
            config.build_form({}, {}, header_specs=("nocolon",))


class TestBuildFormValidation:
    def test_header_without_value_is_blank(self):
        form = config.build_form({"headers": {"Authorization": None}}, {})
        assert form["headers"] == [Header("Authorization", "")]

    def test_scalar_header_values(self):
        form = config.build_form({"headers": {"X-Retry": 3, "X-Debug": True}}, {})
        assert form["headers"] == [Header("X-Retry", "3"), Header("X-Debug", "true")]

    def test_nested_header_value_rejected(self):
        with pytest.raises(config.ConfigError, match="Header 'X-A'"):
            config.build_form({"headers": {"X-A": ["a", "b"]}}, {})

    def test_headers_must_be_mapping(self):
        with pytest.raises(config.ConfigError, match="'headers' must be a mapping"):
            config.build_form({"headers": ["Authorization: x"]}, {})

    @pytest.mark.parametrize("name", ["url", "method", "body", "content_type"])
    def test_non_string_field_rejected(self, name):
        with pytest.raises(config.ConfigError, match=f"'{name}' must be a string"):
            config.build_form({name: 1}, {})

    def test_null_fields_fall_back(self):
        form = config.build_form({"url": None, "method": None, "body": None}, {})
        assert form["url"] == ""
        assert form["method"] == "GET"
        assert form["body"] == ""
