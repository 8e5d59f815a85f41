"""
CodeCrafter - Streamlit Application

Describe a UI component, pick a framework, and let the model write it.
The result can be read in the code view, previewed live, opened fullscreen,
copied, or downloaded.
"""

import logging

import streamlit as st
import streamlit.components.v1 as components

from codecrafter import frameworks
from codecrafter.config import ConfigError, get_config
from codecrafter.errors import ValidationError
from codecrafter.export import copy_payload, export_file
from codecrafter.live_render import script_literal
from codecrafter.llm.azure_openai_client import get_azure_client
from codecrafter.llm.generation_client import GenerationClient
from codecrafter.notify import StreamlitNotifier
from codecrafter.orchestrator import run_generation
from codecrafter.preview import PreviewRouter, PreviewSurface
from codecrafter.session import SessionState


# Page configuration
st.set_page_config(
    page_title="CodeCrafter",
    page_icon="✨",
    layout="wide",
)

# Custom CSS for better styling
st.markdown("""
<style>
    .main-header {
        font-size: 2.2rem;
        font-weight: 700;
        background: linear-gradient(90deg, #60a5fa, #2563eb);
        -webkit-background-clip: text;
        -webkit-text-fill-color: transparent;
        margin-bottom: 0.25rem;
    }
    .sub-header {
        font-size: 1.05rem;
        color: #9ca3af;
        margin-bottom: 1.5rem;
    }
    .empty-output {
        height: 60vh;
        display: flex;
        align-items: center;
        justify-content: center;
        color: #9ca3af;
        border: 1px dashed #3f3f46;
        border-radius: 12px;
    }
</style>
""", unsafe_allow_html=True)


# =============================================================================
# SESSION STATE INITIALIZATION
# =============================================================================

def init_session_state():
    """Initialize session state variables."""
    if "session" not in st.session_state:
        st.session_state.session = SessionState()
    if "preview_router" not in st.session_state:
        st.session_state.preview_router = PreviewRouter()


def validate_config() -> bool:
    """Validate configuration and show error if missing."""
    try:
        config = get_config()
    except ConfigError as e:
        st.error(f"⚠️ Configuration Error\n\n{str(e)}")
        st.info(
            "Please create a `.env` file in the project root with the required Azure OpenAI credentials. "
            "See `.env.example` for reference."
        )
        return False

    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    return True


def build_generation_client(notifier: StreamlitNotifier) -> GenerationClient:
    """Create the retrying client around the configured Azure OpenAI deployment."""
    config = get_config()
    return GenerationClient(
        service=get_azure_client(config),
        max_attempts=config.max_attempts,
        base_delay=config.retry_base_delay,
        notifier=notifier,
    )


# =============================================================================
# DISPLAY HELPERS
# =============================================================================

def show_surface(surface: PreviewSurface):
    """Hand a preview surface to the embedded browsing context."""
    if surface.error:
        st.caption("Preview could not be rendered. Try refreshing.")
    components.html(surface.html, height=surface.height, scrolling=True)


def copy_to_clipboard(session: SessionState, notifier: StreamlitNotifier):
    """Copy the current code, if any, to the user's clipboard."""
    try:
        payload = copy_payload(session.code)
    except ValidationError as e:
        notifier.notify("error", str(e))
        return

    components.html(
        f"<script>navigator.clipboard.writeText({script_literal(payload)});</script>",
        height=0,
    )
    notifier.notify("success", "Code copied to clipboard")


def display_input_panel(session: SessionState, notifier: StreamlitNotifier):
    """Framework selector, description box, and generate button."""
    st.subheader("AI Component Generator")
    st.caption("Describe your component and let AI code it for you.")

    entries = frameworks.all_entries()
    ids = [entry.id for entry in entries]
    labels = {entry.id: entry.label for entry in entries}

    framework_id = st.selectbox(
        "Framework",
        options=ids,
        index=ids.index(session.framework_id),
        format_func=lambda value: labels[value],
    )
    session.select_framework(framework_id)

    prompt = st.text_area(
        "Describe your component",
        value=session.prompt,
        height=200,
        placeholder="Describe your component in detail and AI will generate it...",
    )

    if st.button(
        "✨ Generate",
        type="primary",
        use_container_width=True,
        disabled=session.view.loading,
    ):
        with st.spinner("Generating your component..."):
            run_generation(
                session,
                prompt,
                framework_id,
                build_generation_client(notifier),
                notifier,
            )
        st.rerun()


def display_toolbar(session: SessionState, notifier: StreamlitNotifier):
    """Tab switch plus the tab-specific actions."""
    code_col, preview_col = st.columns(2)
    with code_col:
        if st.button(
            "Code",
            use_container_width=True,
            type="primary" if session.view.active_tab == "code" else "secondary",
        ):
            session.select_tab("code")
            st.rerun()
    with preview_col:
        if st.button(
            "Preview",
            use_container_width=True,
            type="primary" if session.view.active_tab == "preview" else "secondary",
        ):
            session.select_tab("preview")
            st.rerun()

    if session.view.active_tab == "code":
        copy_col, download_col = st.columns(2)
        with copy_col:
            if st.button("📋 Copy", use_container_width=True):
                copy_to_clipboard(session, notifier)
        with download_col:
            try:
                exported = export_file(session.code, session.framework_id)
            except ValidationError:
                if st.button("⬇️ Download", use_container_width=True):
                    notifier.notify("error", "No code to download")
            else:
                st.download_button(
                    label="⬇️ Download",
                    data=exported.data,
                    file_name=exported.filename,
                    mime=exported.mime_type,
                    use_container_width=True,
                )
    else:
        fullscreen_col, refresh_col = st.columns(2)
        with fullscreen_col:
            if st.button("🗖 Fullscreen", use_container_width=True):
                session.open_fullscreen()
                st.rerun()
        with refresh_col:
            if st.button("🔄 Refresh", use_container_width=True):
                session.refresh_preview()
                st.rerun()


def display_output_panel(session: SessionState, router: PreviewRouter, notifier: StreamlitNotifier):
    """Code view or preview for the current result."""
    if not session.view.output_visible:
        st.markdown(
            '<div class="empty-output">Your component &amp; code will appear here.</div>',
            unsafe_allow_html=True,
        )
        return

    display_toolbar(session, notifier)

    if not session.code_ready:
        st.info("Your code will appear here once generation finishes.")
        return

    if session.view.active_tab == "code":
        router.dispose()
        st.code(session.code, language=session.framework.editor_language, line_numbers=True)
    else:
        surface = router.render(session.code, session.framework_id, session.view.preview_epoch)
        show_surface(surface)


def display_fullscreen(session: SessionState, router: PreviewRouter):
    """Overlay preview of the same code through the static strategy."""
    header_col, close_col = st.columns([6, 1])
    with header_col:
        st.markdown("**Preview**")
    with close_col:
        if st.button("✖ Close", use_container_width=True):
            session.close_fullscreen()
            st.rerun()

    show_surface(router.fullscreen(session.code))


# =============================================================================
# MAIN APPLICATION
# =============================================================================

def main():
    """Main application entry point."""
    init_session_state()

    # Header
    st.markdown('<p class="main-header">CodeCrafter</p>', unsafe_allow_html=True)
    st.markdown(
        '<p class="sub-header">Describe a UI component and get production-ready code with a live preview</p>',
        unsafe_allow_html=True
    )

    # Validate configuration
    if not validate_config():
        return

    session: SessionState = st.session_state.session
    router: PreviewRouter = st.session_state.preview_router
    notifier = StreamlitNotifier()

    if session.view.fullscreen_open:
        display_fullscreen(session, router)
        return

    left, right = st.columns(2, gap="large")
    with left:
        display_input_panel(session, notifier)
    with right:
        display_output_panel(session, router, notifier)


if __name__ == "__main__":
    main()
