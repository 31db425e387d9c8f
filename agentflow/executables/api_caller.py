"""API Caller executable - makes an HTTP request to an external API."""

from __future__ import annotations

import json
from typing import Any, TYPE_CHECKING

import httpx

from .base import BaseExecutable, ExecutableMetadata, SettingField

if TYPE_CHECKING:
    from ..engine.types import ExecutableResult


BODY_METHODS = {"POST", "PUT", "PATCH"}
DEFAULT_TIMEOUT = 30.0


class ApiCallerExecutable(BaseExecutable):
    """Call an HTTP endpoint and return its response."""

    metadata = ExecutableMetadata(
        name="API Caller",
        description="Make HTTP requests to external APIs",
        category="Web & API",
        icon="ApiOutlined",
        settings=[
            SettingField(key="url", label="URL", required=True, description="Request URL"),
            SettingField(key="method", label="Method", default="GET", description="HTTP method"),
            SettingField(
                key="headers",
                label="Headers",
                type="json",
                description="Request headers as a JSON object",
            ),
            SettingField(
                key="body",
                label="Body",
                type="json",
                description="Request body (defaults to the previous step's output)",
            ),
            SettingField(
                key="timeout",
                label="Timeout (seconds)",
                type="number",
                default=DEFAULT_TIMEOUT,
            ),
        ],
    )

    def __init__(self, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self._transport = transport

    @property
    def identifier(self) -> str:
        return "api-caller"

    async def execute(self, input_data: Any, settings: dict[str, Any]) -> ExecutableResult:
        url = self.get_setting(settings, "url")
        if not url:
            return self.failure("No URL specified. Please provide a request URL.")

        method = str(self.get_setting(settings, "method", "GET")).upper()

        try:
            headers = self._parse_json_setting(settings.get("headers")) or {}
        except json.JSONDecodeError:
            return self.failure("Invalid headers: expected a JSON object")
        if not isinstance(headers, dict):
            return self.failure("Invalid headers: expected a JSON object")

        request_kwargs: dict[str, Any] = {"headers": headers}
        if method in BODY_METHODS:
            body = settings.get("body")
            if body in (None, ""):
                body = input_data
            if isinstance(body, str):
                request_kwargs["content"] = body
            elif body is not None:
                request_kwargs["json"] = body

        timeout = float(self.get_setting(settings, "timeout", DEFAULT_TIMEOUT))

        try:
            async with httpx.AsyncClient(timeout=timeout, transport=self._transport) as client:
                response = await client.request(method, url, **request_kwargs)
        except httpx.TimeoutException:
            return self.failure(f"Request timed out after {timeout}s: {method} {url}")
        except httpx.HTTPError as e:
            return self.failure(f"Request failed: {e}")

        if response.is_error:
            return self.failure(f"Request failed with status {response.status_code}: {method} {url}")

        return self.success(
            {
                "statusCode": response.status_code,
                "headers": dict(response.headers),
                "body": self._parse_body(response),
            }
        )

    def _parse_json_setting(self, value: Any) -> Any:
        if isinstance(value, str):
            return json.loads(value) if value.strip() else None
        return value

    def _parse_body(self, response: httpx.Response) -> Any:
        content_type = response.headers.get("content-type", "")
        if "application/json" in content_type:
            try:
                return response.json()
            except json.JSONDecodeError:
                pass
        return response.text
