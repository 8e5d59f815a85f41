"""
Azure OpenAI client for single-shot component generation.
"""

from typing import Any, Optional

from openai import AzureOpenAI

from codecrafter.config import Config


def normalize_response_text(response: Any) -> str:
    """
    Flatten a service response into plain text.

    Accepts a plain string, an object exposing ``text`` either as a value or
    as a zero-argument accessor, or an OpenAI chat completion.

    Args:
        response: Whatever the service returned

    Returns:
        The response text ("" when the service returned nothing)
    """
    if response is None:
        return ""
    if isinstance(response, str):
        return response

    text = getattr(response, "text", None)
    if text is not None:
        return (text() if callable(text) else text) or ""

    choices = getattr(response, "choices", None)
    if choices:
        return choices[0].message.content or ""

    return ""


class AzureOpenAIClient:
    """Client for Azure OpenAI chat completions, configured explicitly."""

    def __init__(
        self,
        api_key: str,
        endpoint: str,
        deployment: str,
        api_version: str = "2024-02-15-preview",
        temperature: float = 0.7,
        max_tokens: int = 4096,
    ):
        self.client = AzureOpenAI(
            api_key=api_key,
            api_version=api_version,
            azure_endpoint=endpoint,
        )
        self.deployment = deployment
        self.temperature = temperature
        self.max_tokens = max_tokens

    @classmethod
    def from_config(cls, config: Config) -> "AzureOpenAIClient":
        """Build a client from the application configuration."""
        return cls(
            api_key=config.azure_openai_api_key,
            endpoint=config.azure_openai_endpoint,
            deployment=config.azure_openai_deployment_name,
            api_version=config.azure_openai_api_version,
        )

    def complete(self, prompt: str) -> str:
        """
        Send one prompt to the model and return its text.

        Exceptions from the OpenAI SDK propagate unchanged; the caller
        decides whether they are worth retrying.

        Args:
            prompt: The full instruction string

        Returns:
            Text response from the model
        """
        response = self.client.chat.completions.create(
            model=self.deployment,
            messages=[
                {"role": "user", "content": prompt}
            ],
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )
        return normalize_response_text(response)


# Global client instance
_client: Optional[AzureOpenAIClient] = None


def get_azure_client(config: Config) -> AzureOpenAIClient:
    """Get the process-wide Azure OpenAI client, creating it on first use."""
    global _client
    if _client is None:
        _client = AzureOpenAIClient.from_config(config)
    return _client
