"""
Preview Router - Choose and own the rendering surface for generated code.

This module handles:
- Picking the static (sandboxed iframe) or dynamic (live-mounted) strategy
- Tearing down the previous surface before a new one is created
- Epoch-based remounts requested by the user
- The fullscreen view, which always uses the static strategy

Rendering failures never escape the router: a surface that cannot be built
comes back blank.
"""

import html
import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from codecrafter import frameworks
from codecrafter.frameworks import PreviewStrategy
from codecrafter.live_render import BabelLiveRenderer, LiveRenderer


logger = logging.getLogger(__name__)


# =============================================================================
# CONSTANTS
# =============================================================================

DEFAULT_HEIGHT = 640
FULLSCREEN_HEIGHT = 900

# Scripts may run, but the document gets a unique origin and no access to the host
STATIC_SANDBOX = "allow-scripts"

PLACEHOLDER_HTML = """<!DOCTYPE html>
<html><body style="margin:0;display:flex;align-items:center;justify-content:center;
height:100vh;font-family:system-ui,sans-serif;color:#888;">
<p>Your component preview will appear here.</p>
</body></html>"""

BLANK_HTML = "<!DOCTYPE html><html><body></body></html>"


# =============================================================================
# DATA CLASSES
# =============================================================================

@dataclass(frozen=True)
class PreviewSurface:
    """A renderable preview document and the strategy that produced it."""
    strategy: Optional[PreviewStrategy]
    html: str
    key: str
    height: int = DEFAULT_HEIGHT
    error: Optional[str] = None

    @property
    def is_blank(self) -> bool:
        return self.strategy is None


def sandboxed_document(code: str, epoch: int = 0, height: int = DEFAULT_HEIGHT) -> str:
    """
    Wrap markup in a script-restricted iframe document.

    Args:
        code: Untrusted HTML to show
        epoch: Refresh token, embedded so a new epoch yields a new document
        height: Frame height in pixels

    Returns:
        HTML string containing the sandboxed iframe
    """
    return (
        f"<!-- preview epoch {epoch} -->\n"
        f'<iframe sandbox="{STATIC_SANDBOX}" srcdoc="{html.escape(code, quote=True)}" '
        f'style="width:100%;height:{height}px;border:0;background:#fff;"></iframe>'
    )


# =============================================================================
# ROUTER
# =============================================================================

class PreviewRouter:
    """
    Owns the preview surface for one session.

    The surface is identified by (strategy, framework, epoch). A change of
    any of those disposes the current surface before the next one is built.
    """

    def __init__(self, live_renderer: Optional[LiveRenderer] = None):
        self.live_renderer = live_renderer or BabelLiveRenderer()
        self._current: Optional[Tuple[PreviewStrategy, str, int]] = None
        self._last: Optional[Tuple[str, PreviewSurface]] = None

    @staticmethod
    def strategy_for(framework_id: str) -> PreviewStrategy:
        """Static for plain markup targets, dynamic for component frameworks."""
        return frameworks.resolve(framework_id).strategy

    @property
    def current_key(self) -> Optional[Tuple[PreviewStrategy, str, int]]:
        return self._current

    def render(self, code: str, framework_id: str, epoch: int) -> PreviewSurface:
        """
        Produce the preview surface for the given code.

        Args:
            code: Generated source
            framework_id: Catalog id of the target
            epoch: Refresh token; a new value forces a fresh surface

        Returns:
            PreviewSurface to hand to the shell
        """
        if not code or not code.strip():
            self.dispose()
            return PreviewSurface(strategy=None, html=PLACEHOLDER_HTML, key=f"placeholder-{epoch}")

        entry = frameworks.resolve(framework_id)
        key = (entry.strategy, entry.id, epoch)
        if key != self._current:
            self.dispose()
        elif self._last is not None and self._last[0] == code:
            return self._last[1]

        if entry.strategy == "static":
            surface = PreviewSurface(
                strategy="static",
                html=sandboxed_document(code, epoch),
                key=self._key_string(key),
            )
            self._remember(key, code, surface)
            return surface

        try:
            page = self.live_renderer.mount(code, entry.id, epoch)
        except Exception as e:
            logger.exception("Live preview failed to mount for %s", entry.id)
            self._current = None
            self._last = None
            return PreviewSurface(
                strategy=None,
                html=BLANK_HTML,
                key=self._key_string(key),
                error=str(e),
            )

        surface = PreviewSurface(strategy="dynamic", html=page, key=self._key_string(key))
        self._remember(key, code, surface)
        return surface

    def fullscreen(self, code: str) -> PreviewSurface:
        """
        Render the code as a static sandboxed document regardless of framework.

        Does not touch the router's current surface.
        """
        if not code or not code.strip():
            return PreviewSurface(strategy=None, html=PLACEHOLDER_HTML, key="fullscreen-placeholder",
                                  height=FULLSCREEN_HEIGHT)
        return PreviewSurface(
            strategy="static",
            html=sandboxed_document(code, height=FULLSCREEN_HEIGHT),
            key="fullscreen",
            height=FULLSCREEN_HEIGHT,
        )

    def dispose(self) -> None:
        """Tear down the current surface, if any."""
        if self._current is None:
            return
        strategy, framework_id, epoch = self._current
        self._current = None
        self._last = None
        if strategy == "dynamic":
            try:
                self.live_renderer.unmount(f"{framework_id}:{epoch}")
            except Exception:
                logger.exception("Live preview failed to unmount for %s", framework_id)

    def _remember(self, key, code: str, surface: PreviewSurface) -> None:
        self._current = key
        self._last = (code, surface)

    @staticmethod
    def _key_string(key: Tuple[PreviewStrategy, str, int]) -> str:
        strategy, framework_id, epoch = key
        return f"{strategy}-{framework_id}-{epoch}"
