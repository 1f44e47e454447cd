from collections.abc import Generator

import pytest
from flask import Flask
from flask.testing import FlaskClient

from contact_quality.config.settings import Settings
from contact_quality.service.example_client_adapter import ExampleClientAdapter
from contact_quality.web.app import create_app


@pytest.fixture()
def service() -> ExampleClientAdapter:
    return ExampleClientAdapter()


@pytest.fixture()
def app(service: ExampleClientAdapter) -> Generator[Flask, None, None]:
    settings = Settings(secret_key="test", analysis_provider="example", log_level="DEBUG")
    app = create_app(settings, client=service)
    app.config["TESTING"] = True
    yield app


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    return app.test_client()
