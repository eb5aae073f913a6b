"""API client implementation for the CodePush management API."""

import uuid
from typing import Dict, Optional

import httpx
from opentelemetry import trace
from opentelemetry.propagate import inject

from .constants import DEFAULT_REQUEST_TIMEOUT


class UnauthenticatedError(Exception):
    """The API rejected the token or bounced the request to its sign-in page."""


def _raise_for_unauthenticated(response: httpx.Response):
    if response.status_code == 401 or (
        response.status_code == 307
        and "/signin" in response.headers.get("location", "")
    ):
        raise UnauthenticatedError(
            "Unauthenticated request. Please check your API token or login status."
        )


def _raise_for_status_with_details(response: httpx.Response) -> None:
    """Re-raise a non-2xx status with the API's own error message attached."""
    try:
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        content_type = response.headers.get("content-type", "")
        if "application/json" in content_type:
            try:
                error_info = response.json()
            except ValueError:
                error_info = None
            if isinstance(error_info, dict):
                message = error_info.get("message") or error_info.get("error") or str(error_info)
            else:
                message = response.text
        else:
            message = response.text
        raise httpx.HTTPStatusError(
            f"{exc.response.status_code} Error for {exc.request.url}: {message}",
            request=exc.request,
            response=exc.response,
        ) from exc


class APIClient:
    """Authenticated GET access to the CodePush REST API; one span per request."""

    def __init__(self, api_url: str, api_key: str, trace_id: Optional[str] = None):
        """
        Args:
            api_url: Service root, e.g. https://api.appcenter.ms
            api_key: App Center API token sent as X-API-Token
            trace_id: Correlates every request of one CLI run; random if omitted
        """
        self.api_url = api_url.rstrip("/")
        self.api_key = api_key
        self.trace_id = trace_id or str(uuid.uuid4())
        self.tracer = trace.get_tracer(__name__)

    def _get_headers(self) -> Dict[str, str]:
        headers = {
            "X-API-Token": self.api_key,
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

        # W3C traceparent/baggage from the active span
        trace_headers: Dict[str, str] = {}
        inject(trace_headers)
        headers.update(trace_headers)

        headers["X-CodePush-Trace-Id"] = self.trace_id

        return headers

    async def get(
        self, path: str, timeout: float = DEFAULT_REQUEST_TIMEOUT
    ) -> httpx.Response:
        url = f"{self.api_url}/{path.lstrip('/')}"
        with self.tracer.start_as_current_span(
            f"api.get.{path.strip('/').replace('/', '.')}",
            attributes={
                "http.method": "GET",
                "http.url": url,
                "codepush.trace_id": self.trace_id,
            },
        ) as span:
            try:
                async with httpx.AsyncClient() as client:
                    response = await client.get(
                        url,
                        headers=self._get_headers(),
                        timeout=timeout,
                    )
                    span.set_attribute("http.status_code", response.status_code)
                    _raise_for_unauthenticated(response)
                    _raise_for_status_with_details(response)
                    return response
            except Exception as e:
                span.record_exception(e)
                raise
