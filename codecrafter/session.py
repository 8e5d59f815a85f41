"""
Session view-state machine.

SessionState is the only owner of the generated code and of the view flags
(output visibility, active tab, loading, fullscreen, preview epoch). Every
mutation goes through one of its transition methods.
"""

from dataclasses import dataclass, field
from typing import Literal, Optional

from codecrafter import frameworks
from codecrafter.errors import ValidationError


Tab = Literal["code", "preview"]


@dataclass
class ViewState:
    """Flags that drive what the shell renders."""
    output_visible: bool = False
    active_tab: Tab = "code"
    loading: bool = False
    fullscreen_open: bool = False
    preview_epoch: int = 0


@dataclass
class SessionState:
    """Per-user session: prompt, framework selection, code and view flags."""
    prompt: str = ""
    framework_id: str = frameworks.DEFAULT_FRAMEWORK_ID
    code: str = ""
    view: ViewState = field(default_factory=ViewState)

    @property
    def framework(self) -> frameworks.FrameworkEntry:
        return frameworks.resolve(self.framework_id)

    @property
    def code_ready(self) -> bool:
        """Whether there is code to show, export or preview."""
        return bool(self.code.strip()) and not self.view.loading

    # -------------------------------------------------------------------------
    # Generation lifecycle
    # -------------------------------------------------------------------------

    def begin_generation(self, prompt: str) -> bool:
        """
        Start a generation request.

        Raises:
            ValidationError: If the prompt is empty; no state is changed

        Returns:
            False if a request is already in flight (the trigger is ignored),
            True once the session is marked loading
        """
        if not prompt or not prompt.strip():
            raise ValidationError("Please describe your component first")
        if self.view.loading:
            return False

        self.prompt = prompt
        self.view.output_visible = True
        self.view.loading = True
        return True

    def finish_generation(self, code: Optional[str] = None) -> None:
        """
        End the in-flight request.

        Loading always ends; the code is only replaced when a new, non-empty
        result is supplied.
        """
        if code:
            self.code = code
        self.view.loading = False

    # -------------------------------------------------------------------------
    # User-driven toggles
    # -------------------------------------------------------------------------

    def select_framework(self, framework_id: str) -> None:
        self.framework_id = frameworks.resolve(framework_id).id

    def select_tab(self, tab: Tab) -> None:
        if tab not in ("code", "preview"):
            raise ValueError(f"Unknown tab: {tab!r}")
        self.view.active_tab = tab

    def refresh_preview(self) -> int:
        """Bump the preview epoch, forcing the preview surface to be rebuilt."""
        self.view.preview_epoch += 1
        return self.view.preview_epoch

    def open_fullscreen(self) -> None:
        self.view.fullscreen_open = True

    def close_fullscreen(self) -> None:
        self.view.fullscreen_open = False
