"""
LLM client abstraction for content generation.

Thin wrapper over the Anthropic Messages API: one system prompt, one user
prompt, text back.
"""

import logging
import os
from typing import Optional

import anthropic
import httpx

from .errors import LLMClientError

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "claude-sonnet-4-20250514"


class LLMClient:
    """
    Client for Anthropic Claude completions.

    Example:
        >>> client = LLMClient(api_key="sk-...")
        >>> text = client.complete(system="You are...", prompt="Write...", max_tokens=2048)
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = DEFAULT_MODEL,
        temperature: float = 0.7,
        timeout: float = 60.0,
        client=None,
    ):
        """
        Initialize the LLM client.

        Args:
            api_key: Anthropic API key. If None, reads from ANTHROPIC_API_KEY env var.
            model: Model identifier to use.
            temperature: Sampling temperature.
            timeout: Read timeout in seconds for API calls.
            client: Pre-built Anthropic client (skips key lookup).
        """
        self.model = model
        self.temperature = temperature

        if client is not None:
            self.client = client
            return

        self.api_key = api_key or os.environ.get("ANTHROPIC_API_KEY")
        if not self.api_key:
            raise LLMClientError(
                "No API key provided. Set ANTHROPIC_API_KEY environment variable "
                "or pass api_key parameter."
            )

        http_client = httpx.Client(
            timeout=httpx.Timeout(timeout, connect=30.0),
            follow_redirects=True,
        )
        self.client = anthropic.Anthropic(
            api_key=self.api_key,
            http_client=http_client,
        )

    def complete(self, system: str, prompt: str, max_tokens: int = 4096) -> str:
        """
        Run one completion.

        Args:
            system: System prompt.
            prompt: User prompt.
            max_tokens: Maximum tokens in response.

        Returns:
            Concatenated text of the response.

        Raises:
            LLMClientError: If the API call fails.
        """
        logger.debug(f"Requesting completion from {self.model} (max_tokens={max_tokens})")
        try:
            response = self.client.messages.create(
                model=self.model,
                max_tokens=max_tokens,
                temperature=self.temperature,
                system=system,
                messages=[{"role": "user", "content": prompt}],
            )
        except Exception as e:
            raise LLMClientError(f"LLM API call failed: {e}") from e

        return "".join(
            getattr(block, "text", "") for block in (response.content or [])
        )


def create_llm_client(
    api_key: Optional[str] = None,
    model: str = DEFAULT_MODEL,
    temperature: float = 0.7,
    timeout: float = 60.0,
) -> LLMClient:
    """
    Factory function to create an LLM client.

    Returns:
        Configured LLMClient instance.
    """
    return LLMClient(api_key=api_key, model=model, temperature=temperature, timeout=timeout)
