import os

import pytest

from gui_endpoint.internal import config


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Keep user settings files and override variables out of every test."""
    for name in list(os.environ):
        if name.startswith(config.ENV_PREFIX):
            monkeypatch.delenv(name)
    monkeypatch.delenv("STGUIADDRESS", raising=False)
    monkeypatch.delenv("STGUIAPIKEY", raising=False)
    monkeypatch.setenv("GUI_ENDPOINT_CONFIG", str(tmp_path / "missing.toml"))
    config.reload_config()
    yield
    config.reload_config()
