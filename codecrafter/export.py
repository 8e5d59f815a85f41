"""
Export generated code as a downloadable file or clipboard payload.
"""

from dataclasses import dataclass

from codecrafter import frameworks
from codecrafter.errors import UnknownFramework, ValidationError


PRODUCT_NAME = "CodeCrafter"

FALLBACK_EXTENSION = "html"

# MIME type per file extension
MIME_TYPES = {
    "html": "text/html",
    "jsx": "text/javascript",
    "ts": "text/typescript",
}
DEFAULT_MIME_TYPE = "text/plain"


@dataclass(frozen=True)
class ExportFile:
    """A file ready to hand to the download sink."""
    filename: str
    mime_type: str
    data: bytes


def resolve_extension(framework_id: str) -> str:
    """File extension for a framework; unknown ids fall back to generic markup."""
    try:
        return frameworks.lookup(framework_id).file_extension
    except UnknownFramework:
        return FALLBACK_EXTENSION


def export_file(code: str, framework_id: str) -> ExportFile:
    """
    Serialize code into a named file with a framework-correct extension.

    Args:
        code: The generated code
        framework_id: Catalog id of the target

    Returns:
        ExportFile with filename, MIME type and UTF-8 bytes

    Raises:
        ValidationError: If there is no code to export
    """
    if not code or not code.strip():
        raise ValidationError("No code to download")

    extension = resolve_extension(framework_id)
    return ExportFile(
        filename=f"{PRODUCT_NAME}-Code.{extension}",
        mime_type=MIME_TYPES.get(extension, DEFAULT_MIME_TYPE),
        data=code.encode("utf-8"),
    )


def copy_payload(code: str) -> str:
    """
    Validate code before it is written to the clipboard.

    Raises:
        ValidationError: If there is no code to copy
    """
    if not code or not code.strip():
        raise ValidationError("No code to copy")
    return code
