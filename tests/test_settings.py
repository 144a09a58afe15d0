import pytest
from pydantic import ValidationError

from conftest import make_settings
from lemmy_settings.constants import DATABASE_URL_ENV, SLUR_PATTERN
from lemmy_settings.errors import HostnameFormatError, RegexCompileError
from lemmy_settings.settings.models import FederationConfig, Settings


def test_defaults_match_shipped_config() -> None:
    cfg = make_settings()
    assert cfg.bind == "0.0.0.0"
    assert cfg.port == 8536
    assert cfg.tls_enabled is True
    assert cfg.additional_slurs is None
    assert cfg.database.pool_size == 5
    assert cfg.rate_limit.register_ == 3
    assert cfg.rate_limit.register_per_second == 3600
    assert cfg.federation.enabled is False
    assert cfg.captcha.difficulty == "medium"
    assert cfg.email is None
    assert cfg.setup is None


def test_database_block_is_required() -> None:
    with pytest.raises(ValidationError):
        Settings.model_validate({"hostname": "lemmy.ml"})


def test_database_port_range() -> None:
    with pytest.raises(ValidationError):
        make_settings(database={"user": "u", "password": "p", "host": "h", "port": 0, "database": "d"})


def test_federation_allow_and_block_exclusive() -> None:
    with pytest.raises(ValueError):
        FederationConfig(allowed_instances=["a"], blocked_instances=["b"])


def test_captcha_difficulty_choices() -> None:
    with pytest.raises(ValidationError):
        make_settings(captcha={"difficulty": "impossible"})


def test_get_database_url() -> None:
    assert make_settings().get_database_url() == "postgres://u:p@h:5432/d"


def test_get_database_url_does_not_escape() -> None:
    cfg = make_settings(
        database={"user": "a@b", "password": "p:w/d", "host": "h", "port": 1, "database": "d"}
    )
    assert cfg.get_database_url() == "postgres://a@b:p:w/d@h:1/d"


def test_resolve_database_url_prefers_env(monkeypatch: pytest.MonkeyPatch) -> None:
    cfg = make_settings()
    assert cfg.resolve_database_url() == "postgres://u:p@h:5432/d"
    monkeypatch.setenv(DATABASE_URL_ENV, "postgres://other/db")
    assert cfg.resolve_database_url() == "postgres://other/db"
    monkeypatch.setenv(DATABASE_URL_ENV, "")
    assert cfg.resolve_database_url() == "postgres://u:p@h:5432/d"


@pytest.mark.parametrize("tls, expected", [(True, "https"), (False, "http")])
def test_protocol_string(tls: bool, expected: str) -> None:
    cfg = make_settings(tls_enabled=tls, hostname="lemmy-alpha:8541")
    assert cfg.get_protocol_string() == expected
    assert cfg.get_protocol_and_hostname() == f"{expected}://lemmy-alpha:8541"


@pytest.mark.parametrize(
    "hostname, expected",
    [
        ("lemmy-alpha:8541", "lemmy-alpha"),
        ("lemmy.ml", "lemmy.ml"),
        ("localhost:8536:extra", "localhost"),
    ],
)
def test_hostname_without_port(hostname: str, expected: str) -> None:
    assert make_settings(hostname=hostname).get_hostname_without_port() == expected


@pytest.mark.parametrize("hostname", ["", ":8536"])
def test_hostname_without_port_malformed(hostname: str) -> None:
    with pytest.raises(HostnameFormatError):
        make_settings(hostname=hostname).get_hostname_without_port()


def test_slur_regex_base_pattern_only() -> None:
    regex = make_settings().slur_regex()
    assert regex.pattern == SLUR_PATTERN
    assert regex.search("what a BiTcH move")
    assert regex.search("Nothing to see here") is None


def test_slur_regex_with_additional_slurs() -> None:
    regex = make_settings(additional_slurs="(foo|bar)baz").slur_regex()
    assert regex.pattern == f"{SLUR_PATTERN}|(foo|bar)baz"
    assert regex.search("a FOOBAZ appears")
    assert regex.search("bitches")
    assert regex.search("plain foo") is None


def test_slur_regex_is_rebuilt_each_call() -> None:
    cfg = make_settings()
    first = cfg.slur_regex()
    cfg.additional_slurs = "widget"
    assert first.search("widget") is None
    assert cfg.slur_regex().search("WIDGET")


def test_slur_regex_invalid_additions() -> None:
    with pytest.raises(RegexCompileError) as exc_info:
        make_settings(additional_slurs="(unclosed").slur_regex()
    assert exc_info.value.pattern.endswith("|(unclosed")


def test_rate_limit_register_key() -> None:
    cfg = make_settings(rate_limit={"register": 9, "register_per_second": 60})
    assert cfg.rate_limit.register_ == 9
    assert cfg.rate_limit.model_dump(by_alias=True)["register"] == 9
    assert "register_" not in cfg.rate_limit.model_dump(by_alias=True)


def test_rate_limit_model_has_no_shadowed_fields() -> None:
    from pydantic import BaseModel

    from lemmy_settings.settings.models import RateLimitConfig

    assert [name for name in RateLimitConfig.model_fields if hasattr(BaseModel, name)] == []
