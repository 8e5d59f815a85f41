"""
Framework Catalog - Static registry of supported generation targets.

Each entry carries everything the pipeline needs to know about a target:
- The label shown to the user and named in the prompt
- The framework-specific generation instruction
- File extension and MIME type for export
- Editor language hint for syntax highlighting
- Which preview strategy can render it
"""

from dataclasses import dataclass
from typing import Dict, List, Literal

from codecrafter.errors import UnknownFramework


PreviewStrategy = Literal["static", "dynamic"]


# =============================================================================
# DATA CLASSES
# =============================================================================

@dataclass(frozen=True)
class FrameworkEntry:
    """A single supported framework target."""
    id: str
    label: str
    generation_instruction: str
    file_extension: str
    mime_type: str
    editor_language: str
    strategy: PreviewStrategy

    @property
    def is_static(self) -> bool:
        """Whether the target is plain markup that needs no compilation."""
        return self.strategy == "static"


# =============================================================================
# CATALOG
# =============================================================================

DEFAULT_FRAMEWORK_ID = "html-css"

_ENTRIES = (
    FrameworkEntry(
        id="html-css",
        label="HTML + CSS",
        generation_instruction="Return a complete HTML + CSS code inside a single HTML file.",
        file_extension="html",
        mime_type="text/html",
        editor_language="html",
        strategy="static",
    ),
    FrameworkEntry(
        id="html-tailwind",
        label="HTML + Tailwind CSS",
        generation_instruction="Return a complete HTML file using Tailwind CSS via CDN.",
        file_extension="html",
        mime_type="text/html",
        editor_language="html",
        strategy="static",
    ),
    FrameworkEntry(
        id="html-bootstrap",
        label="HTML + Bootstrap",
        generation_instruction="Return a complete HTML file using Bootstrap via CDN.",
        file_extension="html",
        mime_type="text/html",
        editor_language="html",
        strategy="static",
    ),
    FrameworkEntry(
        id="react-js",
        label="React JS",
        generation_instruction=(
            "Return only React component code in JSX format, "
            "without <html>, <body>, or <script> tags."
        ),
        file_extension="jsx",
        mime_type="text/javascript",
        editor_language="jsx",
        strategy="dynamic",
    ),
    FrameworkEntry(
        id="react-tailwind",
        label="React + Tailwind CSS",
        generation_instruction="Return a React component using Tailwind CSS (JSX only).",
        file_extension="jsx",
        mime_type="text/javascript",
        editor_language="jsx",
        strategy="dynamic",
    ),
    FrameworkEntry(
        id="react-bootstrap",
        label="React + Bootstrap",
        generation_instruction="Return a React component using Bootstrap (JSX only).",
        file_extension="jsx",
        mime_type="text/javascript",
        editor_language="jsx",
        strategy="dynamic",
    ),
    FrameworkEntry(
        id="next-js",
        label="Next JS",
        generation_instruction=(
            "Return a Next.js page component (use JSX, no HTML shell). "
            "Add 'use client' if needed."
        ),
        file_extension="jsx",
        mime_type="text/javascript",
        editor_language="jsx",
        strategy="dynamic",
    ),
    FrameworkEntry(
        id="angular",
        label="Angular JS",
        generation_instruction=(
            "Return Angular component code with .ts, .html, and .css parts if applicable."
        ),
        file_extension="ts",
        mime_type="text/typescript",
        editor_language="typescript",
        strategy="dynamic",
    ),
)

_CATALOG: Dict[str, FrameworkEntry] = {entry.id: entry for entry in _ENTRIES}


# =============================================================================
# LOOKUP FUNCTIONS
# =============================================================================

def lookup(framework_id: str) -> FrameworkEntry:
    """
    Look up a framework entry by id.

    Raises:
        UnknownFramework: If the id is not in the catalog
    """
    try:
        return _CATALOG[framework_id]
    except KeyError:
        raise UnknownFramework(framework_id) from None


def resolve(framework_id: str) -> FrameworkEntry:
    """Look up a framework entry, falling back to the default (HTML + CSS)."""
    try:
        return lookup(framework_id)
    except UnknownFramework:
        return _CATALOG[DEFAULT_FRAMEWORK_ID]


def default_entry() -> FrameworkEntry:
    """Get the default framework entry."""
    return _CATALOG[DEFAULT_FRAMEWORK_ID]


def all_entries() -> List[FrameworkEntry]:
    """Get all catalog entries in display order."""
    return list(_ENTRIES)
