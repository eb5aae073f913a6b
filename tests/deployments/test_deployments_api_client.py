"""Tests for the deployments API client."""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from codepush_cli.deployments.api_client import (
    AppReference,
    DeploymentAPIClient,
)


@pytest.fixture
def mock_httpx_client():
    """Create a mock httpx.AsyncClient."""
    with patch("httpx.AsyncClient") as mock_client:
        mock_instance = AsyncMock()
        mock_client.return_value.__aenter__.return_value = mock_instance

        mock_response = MagicMock()
        mock_response.status_code = 200
        mock_response.raise_for_status = MagicMock()
        mock_instance.get.return_value = mock_response

        yield mock_instance


@pytest.fixture
def api_client():
    return DeploymentAPIClient(api_url="http://localhost:3000/api", api_key="test-token")


@pytest.mark.asyncio
async def test_list_deployments(api_client, app_ref, mock_httpx_client, release_payload):
    mock_httpx_client.get.return_value.json.return_value = [
        {"name": "Staging", "key": "staging-key-123", "latestRelease": release_payload},
        {"name": "Production", "key": "production-key-456", "latestRelease": None},
    ]

    deployments = await api_client.list_deployments(app_ref)

    args, _ = mock_httpx_client.get.call_args
    assert args[0] == "http://localhost:3000/api/v0.1/apps/contoso/app/deployments"

    assert [d.name for d in deployments] == ["Staging", "Production"]
    release = deployments[0].latestRelease
    assert release.label == "v2"
    assert release.isMandatory is True
    assert release.uploadTime == datetime(2025, 6, 16, 15, 4, tzinfo=timezone.utc)
    assert release.metrics is None
    assert deployments[1].latestRelease is None


@pytest.mark.asyncio
async def test_list_deployments_rejects_unexpected_payload(
    api_client, app_ref, mock_httpx_client
):
    mock_httpx_client.get.return_value.json.return_value = {"error": "nope"}

    with pytest.raises(ValueError):
        await api_client.list_deployments(app_ref)


@pytest.mark.asyncio
async def test_get_deployment_metrics(api_client, mock_httpx_client):
    mock_httpx_client.get.return_value.json.return_value = [
        {"label": "v1", "active": 3, "downloaded": 4, "installed": 3, "failed": 0},
        {"label": "v2", "active": 7, "downloaded": 10, "failed": 1},
    ]

    metrics = await api_client.get_deployment_metrics(
        AppReference("contoso team", "app"), "My Staging"
    )

    args, _ = mock_httpx_client.get.call_args
    assert args[0] == (
        "http://localhost:3000/api/v0.1/apps/contoso%20team/app/deployments/My%20Staging/metrics"
    )
    assert [m.label for m in metrics] == ["v1", "v2"]
    assert metrics[0].installed == 3
    assert metrics[1].installed is None


@pytest.mark.parametrize(
    "value, expected",
    [
        ("contoso/app", AppReference("contoso", "app")),
        (" contoso/app ", AppReference("contoso", "app")),
        ("contoso", None),
        ("contoso/", None),
        ("/app", None),
        ("a/b/c", None),
        ("", None),
    ],
)
def test_app_reference_parse(value, expected):
    assert AppReference.parse(value) == expected
