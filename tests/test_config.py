"""Tests for config.py: env loading, typed parsing, and constants."""

import pytest

from boards_client import config


class TestLoadEnv:
    @pytest.fixture(autouse=True)
    def _clean_environ(self, monkeypatch):
        """Remove known keys from os.environ so file-parsing tests are isolated."""
        for key in config._ENV_KEYS:
            monkeypatch.delenv(key, raising=False)

    def _env_file(self, tmp_path, monkeypatch, text):
        env_file = tmp_path / ".env"
        env_file.write_text(text)
        monkeypatch.setattr(config, "ENV_PATH", str(env_file))

    def test_basic_key_value(self, tmp_path, monkeypatch):
        self._env_file(tmp_path, monkeypatch, "FOO=bar\nBAZ=qux\n")
        assert config.load_env() == {"FOO": "bar", "BAZ": "qux"}

    def test_strips_whitespace(self, tmp_path, monkeypatch):
        self._env_file(tmp_path, monkeypatch, "  KEY  =  value  \n")
        assert config.load_env() == {"KEY": "value"}

    def test_skips_comments_and_blank_lines(self, tmp_path, monkeypatch):
        self._env_file(tmp_path, monkeypatch, "# comment\n\nA=1\n\n# more\nB=2\n")
        assert config.load_env() == {"A": "1", "B": "2"}

    def test_value_with_equals(self, tmp_path, monkeypatch):
        self._env_file(tmp_path, monkeypatch, "BOARDS_URL=https://x.example.com/?a=b\n")
        assert config.load_env()["BOARDS_URL"] == "https://x.example.com/?a=b"

    def test_missing_file(self, tmp_path, monkeypatch):
        monkeypatch.setattr(config, "ENV_PATH", str(tmp_path / "missing.env"))
        assert config.load_env() == {}

    def test_environ_fallback(self, tmp_path, monkeypatch):
        monkeypatch.setattr(config, "ENV_PATH", str(tmp_path / "missing.env"))
        monkeypatch.setenv("BOARDS_TOKEN", "from-environ")
        assert config.load_env() == {"BOARDS_TOKEN": "from-environ"}

    def test_file_wins_over_environ(self, tmp_path, monkeypatch):
        self._env_file(tmp_path, monkeypatch, "BOARDS_TOKEN=from-file\n")
        monkeypatch.setenv("BOARDS_TOKEN", "from-environ")
        assert config.load_env()["BOARDS_TOKEN"] == "from-file"

    def test_unknown_environ_keys_ignored(self, tmp_path, monkeypatch):
        monkeypatch.setattr(config, "ENV_PATH", str(tmp_path / "missing.env"))
        monkeypatch.setenv("SOMETHING_ELSE", "x")
        assert "SOMETHING_ELSE" not in config.load_env()


class TestTypedParsing:
    @pytest.mark.parametrize("raw", ["1", "true", "YES", " on "])
    def test_bool_true(self, monkeypatch, raw):
        monkeypatch.setattr(config, "env", {"FLAG": raw})
        assert config._env_bool("FLAG") is True

    @pytest.mark.parametrize("raw", ["0", "false", "nope", ""])
    def test_bool_false(self, monkeypatch, raw):
        monkeypatch.setattr(config, "env", {"FLAG": raw})
        assert config._env_bool("FLAG", default=True) is False

    def test_bool_default_when_missing(self):
        assert config._env_bool("FLAG", default=True) is True

    def test_int(self, monkeypatch):
        monkeypatch.setattr(config, "env", {"N": "12", "BAD": "twelve", "EMPTY": ""})
        assert config._env_int("N", 5) == 12
        assert config._env_int("BAD", 5) == 5
        assert config._env_int("EMPTY", 5) == 5
        assert config._env_int("MISSING", 5) == 5

    def test_float(self, monkeypatch):
        monkeypatch.setattr(config, "env", {"R": "0.25", "BAD": "half"})
        assert config._env_float("R", 1.0) == 0.25
        assert config._env_float("BAD", 1.0) == 1.0


class TestConstants:
    def test_api_suffix(self):
        assert config.API_URL_SUFFIX == "/api/v2"

    def test_default_headers(self):
        assert config.DEFAULT_HEADERS == {"X-Requested-With": "XMLHttpRequest"}

    def test_response_modes(self):
        assert config.VALID_MCP_RESPONSE_MODES == {"legacy", "envelope"}
        assert config.MCP_RESPONSE_MODE in config.VALID_MCP_RESPONSE_MODES

    def test_log_sample_rate_bounds(self):
        assert 0.0 <= config.HTTP_LOG_SAMPLE_RATE <= 1.0
