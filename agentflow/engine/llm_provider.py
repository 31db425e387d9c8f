"""Text provider client for generative steps (Ollama over HTTP).

Public API:
    OllamaProvider.generate(prompt) -> str

Failures surface as exceptions the generative invoker classifies:
  - ProviderConnectionError  provider unreachable
  - ProviderTimeoutError     no answer within the time budget
  - ProviderError            anything else (bad status, unexpected body)
"""

from __future__ import annotations

import asyncio
import json
import logging
import re
from typing import Any, Protocol, TYPE_CHECKING

import httpx

from ..core.exceptions import ProviderConnectionError, ProviderError, ProviderTimeoutError

if TYPE_CHECKING:
    from ..core.config import Settings

logger = logging.getLogger(__name__)

CONNECTION_CHECK_TIMEOUT = 5.0


class TextProvider(Protocol):
    """Anything that turns a prompt into generated text."""

    async def generate(self, prompt: str) -> str:
        ...


class OllamaProvider:
    """Client for Ollama's ``/api/generate`` endpoint."""

    def __init__(
        self,
        base_url: str = "http://localhost:11434",
        model: str = "llama3.1:latest",
        timeout: float = 120.0,
        max_retries: int = 0,
        retry_delay: int = 1000,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.timeout = timeout
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Settings) -> OllamaProvider:
        return cls(
            base_url=settings.ollama_base_url,
            model=settings.ollama_model,
            timeout=settings.llm_timeout,
            max_retries=settings.llm_max_retries,
            retry_delay=settings.llm_retry_delay,
        )

    async def generate(
        self,
        prompt: str,
        model: str | None = None,
        timeout: float | None = None,
    ) -> str:
        """
        Generate a response for ``prompt``.

        Connection and timeout failures are retried up to ``max_retries``
        times; other provider errors are raised immediately.
        """
        attempt = 0
        while True:
            try:
                return await self._generate_once(prompt, model or self.model, timeout or self.timeout)
            except (ProviderConnectionError, ProviderTimeoutError) as e:
                if attempt >= self.max_retries:
                    raise
                attempt += 1
                logger.warning(
                    f"Provider call failed (attempt {attempt}/{self.max_retries + 1}): {e.message}"
                )
                await asyncio.sleep(self.retry_delay / 1000)

    async def _generate_once(self, prompt: str, model: str, timeout: float) -> str:
        payload = {"model": model, "prompt": prompt, "stream": False}

        try:
            async with httpx.AsyncClient(timeout=timeout, transport=self._transport) as client:
                response = await client.post(f"{self.base_url}/api/generate", json=payload)
                response.raise_for_status()
        except httpx.TimeoutException as e:
            raise ProviderTimeoutError(self.base_url, timeout) from e
        except httpx.ConnectError as e:
            raise ProviderConnectionError(self.base_url) from e
        except httpx.HTTPStatusError as e:
            raise ProviderError(
                f"Ollama returned status {e.response.status_code}: {e.response.text}",
                base_url=self.base_url,
            ) from e
        except httpx.HTTPError as e:
            raise ProviderError(f"Ollama request failed: {e}", base_url=self.base_url) from e

        try:
            data = response.json()
        except json.JSONDecodeError as e:
            raise ProviderError("Ollama returned a non-JSON response", base_url=self.base_url) from e

        if not isinstance(data, dict) or not isinstance(data.get("response"), str):
            raise ProviderError("Unexpected response from Ollama: missing 'response' field", base_url=self.base_url)

        return data["response"]

    async def check_connection(self) -> bool:
        """Return True if the provider answers on ``/api/tags``."""
        try:
            async with httpx.AsyncClient(
                timeout=CONNECTION_CHECK_TIMEOUT, transport=self._transport
            ) as client:
                response = await client.get(f"{self.base_url}/api/tags")
                response.raise_for_status()
            return True
        except httpx.HTTPError:
            return False

    def get_config(self) -> dict[str, Any]:
        """Current provider configuration."""
        return {
            "baseUrl": self.base_url,
            "model": self.model,
            "timeout": self.timeout,
            "maxRetries": self.max_retries,
        }


_JSON_BLOCK = re.compile(r"\{[\s\S]*\}")


def extract_json_from_response(response_text: str) -> Any:
    """
    Extract a JSON object from a model reply.

    Takes the outermost ``{...}`` span if there is one, otherwise parses the
    whole text. Raises json.JSONDecodeError when neither parses.
    """
    match = _JSON_BLOCK.search(response_text)
    if match:
        return json.loads(match.group(0))
    return json.loads(response_text)
