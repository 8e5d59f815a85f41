"""
Generation service access: the Azure OpenAI adapter and the retrying client.
"""

from codecrafter.llm.azure_openai_client import AzureOpenAIClient, normalize_response_text
from codecrafter.llm.generation_client import GenerationClient, classify_failure

__all__ = [
    "AzureOpenAIClient",
    "normalize_response_text",
    "GenerationClient",
    "classify_failure",
]
