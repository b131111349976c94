"""
Property-based tests for configuration module.

Uses Hypothesis for property-based testing of file round trips, plus
example tests for environment loading.
"""

import json
import string
import tempfile
from pathlib import Path

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from dns_domain_client.config import (
    ENV_BASE_URL,
    ENV_LOG_LEVEL,
    ENV_TIMEOUT,
    ENV_TOKEN,
    ClientConfig,
    LoggingConfig,
    config_from_dict,
    config_to_dict,
    load_config_from_env,
    load_config_from_file,
    save_config_to_file,
)
from dns_domain_client.enums import LogLevel
from dns_domain_client.exceptions import ValidationError


@st.composite
def client_config_strategy(draw) -> ClientConfig:
    """Generate valid ClientConfig objects."""
    host = draw(st.text(alphabet=string.ascii_lowercase, min_size=1, max_size=20))
    return ClientConfig(
        token=draw(st.text(alphabet=string.ascii_letters + string.digits, min_size=1, max_size=40)),
        base_url=f"https://{host}.example/api/v1",
        timeout=draw(st.floats(min_value=0.1, max_value=300.0)),
        auth_scheme=draw(st.sampled_from(["Token", "Bearer"])),
        user_agent=draw(st.one_of(st.none(), st.just("tool/1.0"))),
        logging=LoggingConfig(
            level=draw(st.sampled_from([level.value for level in LogLevel])),
            output_format=draw(st.sampled_from(["json", "text", "both"])),
        ),
    )


class TestConfigRoundTrip:
    """Configuration survives serialization to dicts and files."""

    @given(config=client_config_strategy())
    @settings(max_examples=100)
    def test_dict_round_trip(self, config: ClientConfig) -> None:
        assert config_from_dict(config_to_dict(config)) == config

    @given(config=client_config_strategy())
    @settings(max_examples=25)
    def test_file_round_trip(self, config: ClientConfig) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "nested" / "config.json"
            assert save_config_to_file(config, path)
            assert load_config_from_file(path) == config

    def test_defaults_applied(self) -> None:
        config = config_from_dict({"token": "abc"})

        assert config.base_url == "https://desec.io/api/v1"
        assert config.timeout == 10.0
        assert config.auth_scheme == "Token"
        assert config.logging == LoggingConfig()


class TestConfigFileErrors:
    """Missing or broken files yield None."""

    def test_missing_file(self, tmp_path: Path) -> None:
        assert load_config_from_file(tmp_path / "absent.json") is None

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "config.json"
        path.write_text("{not json", encoding="utf-8")
        assert load_config_from_file(path) is None

    def test_missing_token(self, tmp_path: Path) -> None:
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"base_url": "https://x.example"}), encoding="utf-8")
        assert load_config_from_file(path) is None

    @pytest.mark.parametrize("logging_section", ["debug", ["info"], 3, None])
    def test_logging_section_not_an_object(self, tmp_path: Path, logging_section) -> None:
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"token": "t", "logging": logging_section}), encoding="utf-8")
        assert load_config_from_file(path) is None

    def test_config_not_an_object(self, tmp_path: Path) -> None:
        path = tmp_path / "config.json"
        path.write_text(json.dumps(["token"]), encoding="utf-8")
        assert load_config_from_file(path) is None


class TestLoggingConfig:
    """Log level names map to LogLevel; output formats are checked."""

    @pytest.mark.parametrize("name", ["debug", "INFO", "Warn", "error"])
    def test_valid_levels(self, name: str) -> None:
        assert LoggingConfig(level=name).log_level == LogLevel(name.lower())

    @pytest.mark.parametrize("level", ["verbose", 5, None])
    def test_invalid_level(self, level) -> None:
        with pytest.raises(ValidationError):
            LoggingConfig(level=level).log_level

    @pytest.mark.parametrize("output_format", ["json", "text", "both"])
    def test_valid_formats(self, output_format: str) -> None:
        assert LoggingConfig(output_format=output_format).log_format == output_format

    @given(output_format=st.text(max_size=10).filter(lambda s: s not in ("json", "text", "both")))
    @settings(max_examples=50)
    def test_invalid_format(self, output_format: str) -> None:
        with pytest.raises(ValidationError) as exc_info:
            LoggingConfig(output_format=output_format).log_format

        assert exc_info.value.details["output_format"] == output_format


class TestEnvironmentConfig:
    """Configuration from environment variables and .env files."""

    @pytest.fixture(autouse=True)
    def clean_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for name in (ENV_BASE_URL, ENV_TOKEN, ENV_TIMEOUT, ENV_LOG_LEVEL):
            monkeypatch.delenv(name, raising=False)

    def test_env_variables(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.setenv(ENV_TOKEN, "env-token")
        monkeypatch.setenv(ENV_BASE_URL, "https://dns.example.net/api")
        monkeypatch.setenv(ENV_TIMEOUT, "2.5")
        monkeypatch.setenv(ENV_LOG_LEVEL, "debug")

        config = load_config_from_env(tmp_path / "absent.env")

        assert config.token == "env-token"
        assert config.base_url == "https://dns.example.net/api"
        assert config.timeout == 2.5
        assert config.logging.log_level == LogLevel.DEBUG

    def test_dotenv_file(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        dotenv = tmp_path / ".env"
        dotenv.write_text(f"{ENV_TOKEN}=from-dotenv\n", encoding="utf-8")
        # load_dotenv writes into os.environ; let monkeypatch restore it
        monkeypatch.setenv(ENV_TOKEN, "")
        monkeypatch.delenv(ENV_TOKEN)

        config = load_config_from_env(dotenv)

        assert config.token == "from-dotenv"
        assert config.base_url == "https://desec.io/api/v1"

    def test_missing_token(self, tmp_path: Path) -> None:
        with pytest.raises(ValidationError) as exc_info:
            load_config_from_env(tmp_path / "absent.env")

        assert exc_info.value.details["variable"] == ENV_TOKEN

    def test_invalid_timeout(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.setenv(ENV_TOKEN, "t")
        monkeypatch.setenv(ENV_TIMEOUT, "soon")

        with pytest.raises(ValidationError):
            load_config_from_env(tmp_path / "absent.env")
