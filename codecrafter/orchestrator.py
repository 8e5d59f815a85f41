"""
Orchestrator for the component generation pipeline.

Provides wrapper functions for the LangGraph-based workflow and converts its
outcome into session transitions and user notifications.
"""

import logging

from codecrafter import frameworks
from codecrafter.errors import ValidationError
from codecrafter.graph import build_graph
from codecrafter.llm.generation_client import GenerationClient
from codecrafter.notify import Notifier
from codecrafter.schemas import GenerationRequest
from codecrafter.session import SessionState
from codecrafter.state import GraphState, create_initial_state


logger = logging.getLogger(__name__)


OVERLOADED_MESSAGE = "The model is temporarily overloaded. Please try again in a few seconds."
GENERIC_FAILURE_MESSAGE = "Something went wrong while generating code"


# =============================================================================
# GRAPH-BASED ORCHESTRATION
# =============================================================================

def run_pipeline(request: GenerationRequest, client: GenerationClient) -> GraphState:
    """
    Run the generation graph for one request.

    Args:
        request: Description and target framework
        client: Retrying generation client

    Returns:
        The final GraphState with result and extracted code
    """
    graph = build_graph(client)
    return graph.invoke(create_initial_state(request))


def run_generation(
    session: SessionState,
    prompt: str,
    framework_id: str,
    client: GenerationClient,
    notifier: Notifier,
) -> bool:
    """
    Generate a component and apply the outcome to the session.

    Validation problems and service failures are reported through the
    notifier; nothing is raised to the caller. Loading always ends false.

    Args:
        session: The user's session state
        prompt: The component description as typed
        framework_id: Selected catalog id
        client: Retrying generation client
        notifier: Sink for user-facing messages

    Returns:
        True if new code was stored in the session
    """
    try:
        started = session.begin_generation(prompt)
    except ValidationError as e:
        notifier.notify("error", str(e))
        return False

    if not started:
        logger.info("Ignoring generation trigger while a request is in flight")
        return False

    code = None
    try:
        entry = frameworks.resolve(framework_id)
        session.select_framework(entry.id)
        request = GenerationRequest(user_description=prompt, framework=entry)

        final_state = run_pipeline(request, client)
        result = final_state.get("result")

        if result is None or not result.ok:
            if result is not None and result.error.is_overload:
                notifier.notify("error", OVERLOADED_MESSAGE)
            else:
                notifier.notify("error", GENERIC_FAILURE_MESSAGE)
            return False

        code = final_state.get("code")
        if not code:
            logger.error("Model response contained no code")
            notifier.notify("error", GENERIC_FAILURE_MESSAGE)
            return False

        notifier.notify("success", f"{entry.label} component generated")
        return True

    except Exception:
        logger.exception("Generation pipeline crashed")
        notifier.notify("error", GENERIC_FAILURE_MESSAGE)
        return False

    finally:
        session.finish_generation(code)
