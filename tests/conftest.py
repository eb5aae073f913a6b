"""pytest configuration for CodePush CLI tests."""

import os
import tempfile
from unittest.mock import AsyncMock

import pytest


# Set environment variables needed for tests
def pytest_configure(config):
    """Configure pytest environment."""
    # API endpoint configuration
    os.environ.setdefault("CODEPUSH_API_BASE_URL", "http://localhost:3000/api")
    os.environ.setdefault("CODEPUSH_API_KEY", "test-token")
    os.environ.setdefault("CODEPUSH_APP", "contoso/app")
    os.environ["CODEPUSH_LOG_DIR"] = tempfile.mkdtemp(prefix="codepush-logs-")
    # Wide console so rich tables and messages do not wrap
    os.environ["COLUMNS"] = "200"


@pytest.fixture
def release_payload():
    """Latest release of a deployment as returned by the API."""
    return {
        "label": "v2",
        "targetBinaryRange": "1.0.0",
        "isMandatory": True,
        "uploadTime": 1750086240000,
        "releasedBy": "dev@contoso.com",
    }


@pytest.fixture
def deployments(release_payload):
    from codepush_cli.deployments.api_client import Deployment

    return [
        Deployment(name="Staging", key="staging-key-123", latestRelease=release_payload),
        Deployment(name="Production", key="production-key-456"),
    ]


@pytest.fixture
def release_metrics():
    from codepush_cli.deployments.api_client import ReleaseMetric

    return [
        ReleaseMetric(label="v1", active=3, downloaded=4, installed=3, failed=0),
        ReleaseMetric(label="v2", active=7, downloaded=10, installed=7, failed=1),
    ]


@pytest.fixture
def app_ref():
    from codepush_cli.deployments.api_client import AppReference

    return AppReference(owner_name="contoso", app_name="app")


@pytest.fixture
def fake_client(deployments, release_metrics):
    """A deployments client whose API calls are AsyncMocks."""
    client = AsyncMock()
    client.list_deployments.return_value = deployments
    client.get_deployment_metrics.return_value = release_metrics
    return client

