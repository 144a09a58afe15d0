from collections.abc import Callable, Iterator
from pathlib import Path

import pytest

from lemmy_settings.constants import CONFIG_LOCATION_ENV, DATABASE_URL_ENV
from lemmy_settings.settings.models import DatabaseConfig, Settings
from lemmy_settings.store import get_store

CONFIG_HJSON = """\
{
  # test instance
  hostname: lemmy-alpha:8541
  tls_enabled: false
  database: {
    user: lemmy
    password: secret
    host: postgres
    port: 5432
    database: lemmy_alpha
  }
  federation: {
    enabled: true
    allowed_instances: ["lemmy-beta", "lemmy-gamma"]
  }
}
"""

CONFIG_HJSON_RELOADED = """\
{
  hostname: lemmy.ml
  tls_enabled: true
  additional_slurs: "(widget|gadget)"
  database: {
    user: ml
    password: hunter2
    host: db.lemmy.ml
    port: 6543
    database: lemmy
  }
}
"""


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Keep the host environment and the default store out of every test."""
    monkeypatch.delenv(CONFIG_LOCATION_ENV, raising=False)
    monkeypatch.delenv(DATABASE_URL_ENV, raising=False)
    get_store.cache_clear()
    yield
    get_store.cache_clear()


@pytest.fixture
def write_config(tmp_path: Path) -> Callable[..., Path]:
    def _write(text: str = CONFIG_HJSON, name: str = "config.hjson") -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def config_file(write_config: Callable[..., Path]) -> Path:
    return write_config()


def make_settings(**overrides: object) -> Settings:
    values: dict[str, object] = {
        "hostname": "lemmy.ml",
        "database": DatabaseConfig(
            user="u", password="p", host="h", port=5432, database="d"
        ),
    }
    values.update(overrides)
    return Settings.model_validate(values)
