#!/usr/bin/env python3
"""
Tests for config file and secrets loading.
"""
from smarttank.config import load_config_file, load_secrets, resolve_auth_token


def test_config_file_type_coercion(tmp_path):
    path = tmp_path / 'monitor.conf'
    path.write_text(
        "# comment\n"
        "WEB_PORT = 9090\n"
        "PAUSE_POLL_WHEN_HIDDEN = true\n"
        "BLYNK_AUTH_TOKEN = 0123456789\n"
        "WEB_HOST = 127.0.0.1\n"
        "SCALE = 1.5\n"
    )
    config = load_config_file(path)
    assert config['WEB_PORT'] == 9090
    assert config['PAUSE_POLL_WHEN_HIDDEN'] is True
    assert config['BLYNK_AUTH_TOKEN'] == '0123456789'
    assert config['WEB_HOST'] == '127.0.0.1'
    assert config['SCALE'] == 1.5


def test_missing_config_file(tmp_path):
    assert load_config_file(tmp_path / 'nope.conf') == {}


def test_token_from_secrets_file(tmp_path, monkeypatch):
    monkeypatch.delenv('SMARTTANK_BLYNK_TOKEN', raising=False)
    path = tmp_path / 'secrets.conf'
    path.write_text("BLYNK_AUTH_TOKEN = abc123\n")
    assert resolve_auth_token(load_secrets(path)) == 'abc123'


def test_environment_overrides_secrets(monkeypatch):
    monkeypatch.setenv('SMARTTANK_BLYNK_TOKEN', 'from-env')
    assert resolve_auth_token({'BLYNK_AUTH_TOKEN': 'from-file'}) == 'from-env'
