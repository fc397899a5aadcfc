"""Client for an OpenAI-compatible image-generation endpoint.

The client issues a single POST per request::

    POST {api_base_url}/images/generations
    Authorization: Bearer <api_key>

    {"prompt": "...", "n": 2, "size": "512x512", "response_format": "b64_json"}

and expects ``{"data": [{"b64_json": "..."}, ...]}`` back.  Every returned
payload is wrapped in a :class:`~imaginator.core.images.GeneratedImage`, in
response order.

Any non-success status or transport failure is raised as
:class:`~imaginator.core.errors.GenerationError`.  There is no retry.

Usage
-----
::

    from imaginator.core.config import config
    from imaginator.core.generation_client import ImageGenerationClient

    client = ImageGenerationClient.from_config(config)
    images = await client.generate("a red cube", 2)
"""

from __future__ import annotations

import logging

import httpx

from imaginator.core.config import ImaginatorConfig
from imaginator.core.errors import GenerationError
from imaginator.core.images import GeneratedImage

logger = logging.getLogger(__name__)

API_FAILURE_MESSAGE = "Failed to generate AI images. Make sure your API key is valid."


class ImageGenerationClient:
    """Async HTTP client for the ``/images/generations`` endpoint.

    Attributes:
        url: Full endpoint URL
        api_key: Bearer credential
        size: Requested image size (``WxH``)
        timeout: Request timeout in seconds, or ``None`` for no timeout
    """

    def __init__(
        self,
        url: str,
        api_key: str,
        size: str = "512x512",
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.url = url
        self.api_key = api_key
        self.size = size
        self.timeout = timeout
        # Injected by tests (httpx.MockTransport); None uses the network.
        self._transport = transport

    @classmethod
    def from_config(
        cls, cfg: ImaginatorConfig, transport: httpx.AsyncBaseTransport | None = None
    ) -> ImageGenerationClient:
        return cls(
            url=cfg.generations_url,
            api_key=cfg.api_key,
            size=cfg.image_size,
            timeout=cfg.request_timeout,
            transport=transport,
        )

    def build_payload(self, prompt: str, count: int) -> dict:
        """Build the JSON request body."""
        return {
            "prompt": prompt,
            "n": count,
            "size": self.size,
            "response_format": "b64_json",
        }

    def _headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_key}",
        }

    async def generate(self, prompt: str, count: int) -> list[GeneratedImage]:
        """Request ``count`` images for ``prompt``.

        Args:
            prompt: Free-text prompt
            count: Number of images to request (>= 1)

        Returns:
            Generated images in response order

        Raises:
            GenerationError: On transport failure, non-success status, or a
                malformed response body
        """
        payload = self.build_payload(prompt, count)
        logger.info(f"Requesting {count} image(s) of size {self.size}")

        try:
            async with httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout), transport=self._transport
            ) as client:
                response = await client.post(self.url, headers=self._headers(), json=payload)
        except httpx.HTTPError as e:
            logger.error(f"Generation request failed: {e}")
            raise GenerationError(f"Could not reach the image API: {e}") from e

        if not response.is_success:
            logger.error(f"Generation API returned {response.status_code}: {response.text[:300]}")
            raise GenerationError(API_FAILURE_MESSAGE)

        try:
            data = response.json()["data"]
        except (ValueError, KeyError, TypeError) as e:
            raise GenerationError(f"Unexpected response from the image API: {e}") from e

        if not isinstance(data, list):
            raise GenerationError(
                f"Unexpected response from the image API: data is {type(data).__name__}"
            )

        images = []
        for item in data:
            b64_json = item.get("b64_json") if isinstance(item, dict) else None
            if not b64_json:
                raise GenerationError("Response item has no b64_json payload")
            images.append(GeneratedImage.from_b64_json(b64_json))

        logger.info(f"Received {len(images)} image(s)")
        return images
