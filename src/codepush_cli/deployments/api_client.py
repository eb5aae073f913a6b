"""Deployments API client implementation for the CodePush management API."""

from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional
from urllib.parse import quote

from pydantic import BaseModel

from ..core.api_client import APIClient
from ..core.constants import API_VERSION_PREFIX


class AggregatedMetric(BaseModel):
    """Install counters of a release, with the deployment-wide active total."""

    active: int = 0
    downloaded: int = 0
    installed: Optional[int] = None
    failed: int = 0
    totalActive: int = 0


class Release(BaseModel):
    """A single update published to a deployment."""

    label: str
    targetBinaryRange: Optional[str] = None
    isMandatory: bool = False
    uploadTime: Optional[datetime] = None
    releasedBy: Optional[str] = None
    metrics: Optional[AggregatedMetric] = None


class Deployment(BaseModel):
    """A named release channel of an app, e.g. Staging or Production."""

    name: str
    key: str
    latestRelease: Optional[Release] = None


class ReleaseMetric(BaseModel):
    """Install counters for one release label as tracked by the backend."""

    label: str
    active: int = 0
    downloaded: int = 0
    installed: Optional[int] = None
    failed: int = 0


@dataclass(frozen=True)
class AppReference:
    """An app addressed as owner/appname."""

    owner_name: str
    app_name: str

    @property
    def identifier(self) -> str:
        return f"{self.owner_name}/{self.app_name}"

    @classmethod
    def parse(cls, value: str) -> Optional["AppReference"]:
        """Parse ``owner/appname``; returns None if the value is malformed."""
        parts = (value or "").strip().split("/")
        if len(parts) != 2 or not all(parts):
            return None
        return cls(owner_name=parts[0], app_name=parts[1])


class DeploymentAPIClient(APIClient):
    """Client for the CodePush deployments endpoints."""

    def _app_path(self, app: AppReference) -> str:
        return (
            f"/{API_VERSION_PREFIX}/apps/{quote(app.owner_name, safe='')}"
            f"/{quote(app.app_name, safe='')}"
        )

    async def list_deployments(self, app: AppReference) -> List[Deployment]:
        """List the deployments of an app.

        Args:
            app: The app whose deployments to list

        Returns:
            List[Deployment]: Deployments with their latest release, if any

        Raises:
            ValueError: If the API response is invalid
            httpx.HTTPStatusError: If the API returns an error (e.g., 404, 403)
            httpx.HTTPError: If the request fails
        """
        response = await self.get(f"{self._app_path(app)}/deployments")

        res = response.json()
        if not isinstance(res, list):
            raise ValueError("API response did not contain a list of deployments")

        return [Deployment(**deployment) for deployment in res]

    async def get_deployment_metrics(
        self, app: AppReference, deployment_name: str
    ) -> List[ReleaseMetric]:
        """Get the per-release install metrics of a deployment.

        Args:
            app: The app owning the deployment
            deployment_name: Name of the deployment, e.g. Staging

        Returns:
            List[ReleaseMetric]: One entry per release label with recorded metrics

        Raises:
            ValueError: If the API response is invalid
            httpx.HTTPStatusError: If the API returns an error (e.g., 404, 403)
            httpx.HTTPError: If the request fails
        """
        response = await self.get(
            f"{self._app_path(app)}/deployments/{quote(deployment_name, safe='')}/metrics"
        )

        res = response.json()
        if not isinstance(res, list):
            raise ValueError("API response did not contain a list of release metrics")

        return [ReleaseMetric(**metric) for metric in res]
