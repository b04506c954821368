"""Tests for the gui-endpoint command."""

import json

import pytest
import toml

from gui_endpoint import cli
from gui_endpoint.exceptions import ConfigError


@pytest.fixture
def record_file(tmp_path):
    path = tmp_path / "gui.json"
    path.write_text(
        json.dumps({"address": "0.0.0.0:8384", "useTLS": True, "apiKey": "abc123"}),
        encoding="utf-8",
    )
    return str(path)


class TestLoadRecord:
    def test_default_record(self):
        assert cli.load_record(None).raw_address == "127.0.0.1:8384"

    def test_reads_json(self, record_file):
        record = cli.load_record(record_file)

        assert record.raw_address == "0.0.0.0:8384"
        assert record.api_key == "abc123"

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="Failed to read"):
            cli.load_record(str(tmp_path / "nope.json"))

    def test_not_an_object(self, tmp_path):
        path = tmp_path / "list.json"
        path.write_text("[1, 2]", encoding="utf-8")

        with pytest.raises(ConfigError, match="must be a JSON object"):
            cli.load_record(str(path))

    def test_invalid_field(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text('{"authMode": "kerberos"}', encoding="utf-8")

        with pytest.raises(ConfigError, match="Invalid endpoint record"):
            cli.load_record(str(path))


class TestCommands:
    def test_show_json(self, record_file, capsys):
        assert cli.main(["show", "--config", record_file]) == 0

        data = json.loads(capsys.readouterr().out)
        assert data["url"] == "https://127.0.0.1:8384/"
        assert data["network"] == "tcp"

    def test_show_toml(self, record_file, capsys):
        assert cli.main(["show", "--config", record_file, "--format", "toml"]) == 0

        data = toml.loads(capsys.readouterr().out)
        assert data["endpoint"]["address"] == "0.0.0.0:8384"
        assert data["endpoint"]["use_tls"] is True

    def test_show_honours_override(self, record_file, capsys, monkeypatch):
        monkeypatch.setenv("STGUIADDRESS", "unix:///run/gui.sock")

        assert cli.main(["show", "-c", record_file]) == 0

        data = json.loads(capsys.readouterr().out)
        assert data["network"] == "unix"
        assert data["address"] == "/run/gui.sock"

    def test_url(self, record_file, capsys):
        assert cli.main(["url", "--config", record_file]) == 0
        assert capsys.readouterr().out.strip() == "https://127.0.0.1:8384/"

    def test_check_key(self, record_file, capsys):
        assert cli.main(["check-key", "abc123", "--config", record_file]) == 0
        assert capsys.readouterr().out.strip() == "valid"

        assert cli.main(["check-key", "wrong", "--config", record_file]) == 1
        assert capsys.readouterr().out.strip() == "invalid"

    def test_check_key_from_environment(self, capsys, monkeypatch):
        monkeypatch.setenv("STGUIAPIKEY", "from-env")

        assert cli.main(["check-key", "from-env"]) == 0

    def test_unreadable_record_exits_2(self, tmp_path, capsys):
        assert cli.main(["url", "--config", str(tmp_path / "nope.json")]) == 2
        assert "error:" in capsys.readouterr().err
