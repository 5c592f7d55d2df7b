"""Async client for an Ollama-compatible text-generation API.

Wraps ``/api/generate`` and ``/api/tags`` with timeout handling, structured
responses, and model fallback.  Transport failures are reported through
``OllamaResponse.success`` / ``error`` rather than raised.

Typical usage::

    client = OllamaClient(base_url=config.ollama.url)
    if await client.is_available():
        resp = await client.generate("Describe a travel company", model="qwen3:8b")
        print(resp.text)
"""

from __future__ import annotations

import httpx
from pydantic import BaseModel, Field


class OllamaResponse(BaseModel):
    """Structured response from an Ollama generation call."""

    text: str = Field(default="", description="Generated text")
    model: str = Field(default="", description="Model that produced the response")
    duration_ms: float = Field(default=0.0, description="Server-side generation time in ms")
    success: bool = Field(default=True, description="Whether the request succeeded")
    error: str | None = Field(default=None, description="Error message on failure")


class OllamaClient:
    """Async client for the Ollama REST API.

    One instance is built by the caller from ``Config.ollama`` and passed to
    whatever needs it.  Each request opens a short-lived
    ``httpx.AsyncClient``.
    """

    def __init__(self, base_url: str = "http://localhost:11434", timeout: int = 180) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _client(self) -> httpx.AsyncClient:
        """Return a fresh ``AsyncClient`` configured with our base URL and timeout."""
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=httpx.Timeout(self.timeout, connect=10.0),
        )

    @staticmethod
    def _extract_text(data: dict) -> str:
        """Pull the generated text out of a /api/generate JSON response."""
        return data.get("response", "")

    @staticmethod
    def _extract_duration_ms(data: dict) -> float:
        """Extract the total generation duration in milliseconds.

        The API returns ``total_duration`` in **nanoseconds**.
        """
        ns = data.get("total_duration", 0)
        return ns / 1_000_000.0

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def generate(
        self,
        prompt: str,
        model: str = "qwen3:8b",
        system: str = "",
        json_mode: bool = False,
    ) -> OllamaResponse:
        """Generate text from a prompt.

        Args:
            prompt: The user prompt.
            model: Model tag to use.
            system: Optional system prompt.
            json_mode: Ask the server to constrain output to valid JSON.

        Returns:
            An ``OllamaResponse`` with the generated text or an error.
        """
        payload: dict = {
            "model": model,
            "prompt": prompt,
            "stream": False,
        }
        if system:
            payload["system"] = system
        if json_mode:
            payload["format"] = "json"

        try:
            async with self._client() as client:
                response = await client.post("/api/generate", json=payload)
                response.raise_for_status()
                data = response.json()
                return OllamaResponse(
                    text=self._extract_text(data),
                    model=data.get("model", model),
                    duration_ms=self._extract_duration_ms(data),
                    success=True,
                )
        except httpx.ConnectError:
            return OllamaResponse(
                model=model,
                success=False,
                error=f"Cannot connect to Ollama at {self.base_url}. Is the server running?",
            )
        except httpx.TimeoutException:
            return OllamaResponse(
                model=model,
                success=False,
                error=f"Request to Ollama timed out after {self.timeout}s.",
            )
        except httpx.HTTPStatusError as exc:
            return OllamaResponse(
                model=model,
                success=False,
                error=f"Ollama returned HTTP {exc.response.status_code}: {exc.response.text[:500]}",
            )
        except Exception as exc:  # noqa: BLE001
            return OllamaResponse(
                model=model,
                success=False,
                error=f"Unexpected error during Ollama generate: {exc}",
            )

    async def generate_with_fallback(
        self,
        prompt: str,
        primary_model: str,
        fallback_model: str | None = None,
        system: str = "",
        json_mode: bool = False,
    ) -> OllamaResponse:
        """Try ``primary_model`` first; on failure retry with ``fallback_model``."""
        result = await self.generate(prompt, model=primary_model, system=system, json_mode=json_mode)
        if result.success or not fallback_model or fallback_model == primary_model:
            return result
        return await self.generate(prompt, model=fallback_model, system=system, json_mode=json_mode)

    async def is_available(self) -> bool:
        """Return ``True`` if the server responds to ``/api/tags``."""
        try:
            async with self._client() as client:
                response = await client.get("/api/tags")
                return response.status_code == 200
        except Exception:  # noqa: BLE001
            return False

    async def list_models(self) -> list[str]:
        """Return the sorted names of all locally-available models.

        Returns an empty list if the server is unreachable.
        """
        try:
            async with self._client() as client:
                response = await client.get("/api/tags")
                response.raise_for_status()
                data = response.json()
                models = data.get("models", [])
                return sorted(m.get("name", "") for m in models if m.get("name"))
        except Exception:  # noqa: BLE001
            return []

    async def has_model(self, model: str) -> bool:
        """Check whether a specific model is already pulled locally."""
        available = await self.list_models()
        return model in available
