"""
Notification sinks for user-facing messages.
"""

from typing import Literal, Protocol

import streamlit as st


Severity = Literal["info", "success", "error"]

_ICONS = {
    "info": "ℹ️",
    "success": "✅",
    "error": "❌",
}


class Notifier(Protocol):
    """Fire-and-forget sink for user-visible messages."""

    def notify(self, severity: Severity, message: str) -> None:
        ...


class StreamlitNotifier:
    """Shows notifications as Streamlit toasts."""

    def notify(self, severity: Severity, message: str) -> None:
        st.toast(message, icon=_ICONS.get(severity))
