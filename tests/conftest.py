from unittest.mock import Mock

import pytest

from imgur_uploader.api import ImgurClient


@pytest.fixture
def session():
    return Mock()


@pytest.fixture
def anonymous_client(session):
    return ImgurClient(client_id="CLIENT", session=session)


@pytest.fixture
def account_client(session):
    return ImgurClient(access_token="TOKEN", session=session)


@pytest.fixture(autouse=True)
def no_credentials_env(monkeypatch):
    monkeypatch.delenv("IMGUR_CLIENT_ID", raising=False)
    monkeypatch.delenv("IMGUR_ACCESS_TOKEN", raising=False)
    monkeypatch.delenv("DEBUG", raising=False)


@pytest.fixture
def images(tmp_path):
    paths = []
    for name in ("first.jpg", "second.png"):
        path = tmp_path / name
        path.write_bytes(b"\x89fake image data")
        paths.append(str(path))
    return paths


