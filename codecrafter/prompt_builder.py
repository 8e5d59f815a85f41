"""
Prompt construction for component generation.
"""

from functools import lru_cache
from pathlib import Path

from codecrafter.schemas import GenerationRequest


PROMPTS_DIR = Path(__file__).parent / "prompts"


@lru_cache(maxsize=None)
def _load_prompt(filename: str) -> str:
    """Load a prompt template from the prompts directory."""
    prompt_path = PROMPTS_DIR / filename
    return prompt_path.read_text(encoding="utf-8")


def build_prompt(request: GenerationRequest) -> str:
    """
    Compose the full instruction sent to the model.

    The template names the framework, embeds its generation instruction and
    demands a single fenced code block with no surrounding prose, which is
    what extract_code relies on.

    Args:
        request: Description and target framework

    Returns:
        The prompt string
    """
    framework = request.framework
    template = _load_prompt("component_system.txt")
    return template.format(
        description=request.user_description,
        framework_label=framework.label,
        framework_instruction=framework.generation_instruction,
        fence_tag=framework.editor_language,
    ).strip()
