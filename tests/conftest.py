"""
Shared pytest fixtures and configuration for snspush tests.

This module provides common fixtures used across unit and integration tests,
including mocked boto3 SNS clients, LocalStack clients and event recorders.
"""

import os
from unittest.mock import MagicMock

import boto3
import pytest

from snspush import InterfaceOptions, PushInterface
from tests.helpers.sns import EventRecorder

ANDROID_APP_ARN = "arn:aws:sns:eu-west-1:123456789012:app/GCM/test-app"


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests with mocked dependencies")
    config.addinivalue_line("markers", "integration: Integration tests against LocalStack")


@pytest.fixture(scope="session")
def localstack_endpoint() -> str:
    """Get LocalStack endpoint URL from environment or default."""
    return os.getenv("LOCALSTACK_ENDPOINT", "http://localhost:4566")


@pytest.fixture(scope="session")
def localstack_client(localstack_endpoint: str):
    """
    Creates a boto3 SNS client connected to LocalStack.

    Integration tests are skipped when LocalStack is not reachable.
    """
    from tests.helpers.localstack import is_localstack_available

    if not is_localstack_available(localstack_endpoint):
        pytest.skip(f"LocalStack is not reachable at {localstack_endpoint}")

    return boto3.client(
        "sns",
        endpoint_url=localstack_endpoint,
        region_name="eu-west-1",
        aws_access_key_id="test",
        aws_secret_access_key="test",
    )


@pytest.fixture
def mock_client():
    """
    Creates a fully mocked boto3 SNS client.

    Region and API version are set on ``meta`` the way a real client exposes them.
    """
    client = MagicMock()
    client.meta.region_name = "eu-west-1"
    client.meta.service_model.api_version = "2010-03-31"
    return client


@pytest.fixture
def android_options() -> InterfaceOptions:
    return InterfaceOptions(platform="android", platform_application_arn=ANDROID_APP_ARN)


@pytest.fixture
def interface(android_options, mock_client) -> PushInterface:
    """An Android PushInterface backed by the mocked client."""
    return PushInterface(android_options, client=mock_client)


@pytest.fixture
def recorder() -> EventRecorder:
    return EventRecorder()
