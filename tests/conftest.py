import pytest

from catalog_service import JsonFileStore, create_app
from catalog_service.config import Settings


@pytest.fixture
def data_file(tmp_path):
    return tmp_path / "db.json"


@pytest.fixture
def store(data_file):
    return JsonFileStore(str(data_file))


@pytest.fixture
def settings(data_file):
    return Settings(data_file=str(data_file))


@pytest.fixture
def app(settings, store):
    app = create_app(settings, store=store)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()
