"""
State definitions for LangGraph orchestration.
"""

from typing import List, Optional, TypedDict

from codecrafter.schemas import GenerationRequest, GenerationResult


class GraphState(TypedDict, total=False):
    """
    Typed state dictionary for the generation workflow.

    This state is passed between nodes and updated as the graph executes.
    """
    # Input
    request: GenerationRequest

    # Service outcome
    result: Optional[GenerationResult]

    # Output
    code: Optional[str]

    # Error tracking
    errors: List[str]


def create_initial_state(request: GenerationRequest) -> GraphState:
    """
    Create an initial state for the graph.

    Args:
        request: The validated generation request

    Returns:
        Initialized GraphState
    """
    return GraphState(
        request=request,
        result=None,
        code=None,
        errors=[],
    )
