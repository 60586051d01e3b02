import base64
import pytest

from app import create_app
from config import Credentials, Settings


def basic(user_pass: str, scheme: str = "Basic") -> dict:
    token = base64.b64encode(user_pass.encode("utf-8")).decode("ascii")
    return {"Authorization": f"{scheme} {token}"}


@pytest.fixture
def settings():
    return Settings(credentials=Credentials("admin", "s3cr3t"), secret_message="top secret")


@pytest.fixture
def app(settings):
    app = create_app(settings)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()
