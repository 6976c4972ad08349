import pytest
from pydantic import ValidationError

from cfpurge.settings import BASE_URL, load_config

CONFIG = """
settings:
  log:
    level: debug
    colors: false
  cloudflare:
    token: secret-token
    timeout: 10
zones:
  zone-b:
    files:
      - https://example.com/app.js
    tags: []
  zone-a:
  zone-c:
    hosts:
      - example.com
"""


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in ("CLOUDFLARE_TOKEN", "CLOUDFLARE_EMAIL", "CLOUDFLARE_KEY", "CLOUDFLARE_BASE_URL"):
        monkeypatch.delenv(key, raising=False)


def test_load_config(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(CONFIG)

    config = load_config(str(path))

    assert config.settings.log.level == "debug"
    assert config.settings.log.colors is False
    assert config.settings.cloudflare.token == "secret-token"
    assert config.settings.cloudflare.timeout == 10
    assert config.settings.cloudflare.base_url == BASE_URL

    zones = config.zone_descriptors()
    assert list(zones) == ["zone-b", "zone-a", "zone-c"]
    assert zones["zone-b"].serialize() == {"files": ["https://example.com/app.js"]}
    assert zones["zone-a"].serialize() == {"purge_everything": True}
    assert zones["zone-c"].serialize() == {"hosts": ["example.com"]}


def test_global_key_credentials(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("settings:\n  cloudflare:\n    email: ops@example.com\n    key: global-key\n")

    config = load_config(str(path))

    assert config.settings.cloudflare.email == "ops@example.com"
    assert config.zone_descriptors() == {}


def test_token_from_environment(tmp_path, monkeypatch):
    monkeypatch.setenv("CLOUDFLARE_TOKEN", "env-token")
    path = tmp_path / "config.yaml"
    path.write_text("zones:\n  zone-a:\n")

    assert load_config(str(path)).settings.cloudflare.token == "env-token"


def test_missing_credentials(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("settings:\n  cloudflare:\n    email: ops@example.com\n")

    with pytest.raises(ValidationError):
        load_config(str(path))
