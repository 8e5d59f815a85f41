"""
Extract source code from a free-form model response.
"""

import re
from typing import Optional

# First complete fence; optional language tag on the opening line.
_FENCE_PATTERN = re.compile(r"```(?:[\w.+#-]+)?[ \t]*\n?(.*?)```", re.DOTALL)


def extract_code(response: Optional[str]) -> str:
    """
    Pull the code out of a model response.

    If the response contains a fenced code block, the trimmed interior of the
    first complete block is returned. Otherwise the whole response is returned
    trimmed. Never raises.

    Args:
        response: Raw text returned by the model

    Returns:
        The extracted code (possibly empty)
    """
    if not response:
        return ""

    match = _FENCE_PATTERN.search(response)
    if match:
        return match.group(1).strip()
    return response.strip()
