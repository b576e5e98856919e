"""Pytest configuration and shared fixtures for ebs-volume-tool."""

from __future__ import annotations

import logging
from unittest import mock

import pytest
import requests

from ebs_volume_tool.ebs.core.polling import PollSettings
from ebs_volume_tool.ebs.logging_config import ROOT_LOGGER
from tests.fake_gateway import FakeGateway


@pytest.fixture(name="gateway")
def fixture_gateway():
    """Provide an empty scripted gateway."""
    return FakeGateway()


@pytest.fixture(name="fast_poll")
def fixture_fast_poll():
    """Polling settings that keep waits well under a second."""
    return PollSettings(interval=0.01, timeout=0.3)


@pytest.fixture(name="http_session")
def fixture_http_session():
    """requests.Session whose send() returns a configurable response."""
    session = requests.Session()
    response = mock.Mock(spec=requests.Response)
    response.status_code = 200
    response.content = b"<Response/>"
    session.send = mock.Mock(return_value=response)
    return session


@pytest.fixture(autouse=True)
def fixture_aws_env(monkeypatch, tmp_path):
    """Keep tests away from real credentials and regions."""
    monkeypatch.setenv("AWS_CONFIG_FILE", str(tmp_path / "aws_config"))
    monkeypatch.setenv("AWS_SHARED_CREDENTIALS_FILE", str(tmp_path / "aws_credentials"))
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "AKIDEXAMPLE")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "wJalrXUtnFEMI/K7MDENG+bPxRfiCYEXAMPLEKEY")
    monkeypatch.delenv("AWS_SESSION_TOKEN", raising=False)
    monkeypatch.delenv("AWS_PROFILE", raising=False)
    monkeypatch.delenv("AWS_REGION", raising=False)
    monkeypatch.delenv("AWS_DEFAULT_REGION", raising=False)
    monkeypatch.delenv("EBS_ENDPOINT", raising=False)


@pytest.fixture(autouse=True)
def fixture_reset_logging():
    """Undo setup_logging() so handlers never outlive a CliRunner stream."""
    yield
    package_logger = logging.getLogger(ROOT_LOGGER)
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
    package_logger.setLevel(logging.NOTSET)
    package_logger.propagate = True
