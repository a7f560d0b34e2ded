import pytest

from catalog_service.__main__ import main
from catalog_service.config import DEFAULT_PORT, load_settings


def test_defaults():
    settings = load_settings({})
    assert settings.port == DEFAULT_PORT == 5000
    assert settings.data_file == "db.json"
    assert not settings.development


def test_environment_overrides():
    settings = load_settings({"PORT": "8080", "CATALOG_DATA_FILE": "/tmp/x.json", "CATALOG_ENV": "Development"})
    assert settings.port == 8080
    assert settings.data_file == "/tmp/x.json"
    assert settings.development


@pytest.mark.parametrize("port", ["abc", "0", "70000"])
def test_invalid_port(port):
    with pytest.raises(ValueError):
        load_settings({"PORT": port})


def test_cli_rejects_bad_port(capsys, monkeypatch):
    monkeypatch.delenv("PORT", raising=False)
    assert main(["--port", "abc"]) == 2
    assert "PORT must be an integer" in capsys.readouterr().err


def test_invalid_port_error_is_not_chained():
    with pytest.raises(ValueError) as excinfo:
        load_settings({"PORT": "abc"})
    assert excinfo.value.__suppress_context__
