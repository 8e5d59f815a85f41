"""
LangGraph implementation of the generation pipeline.

Nodes:
- generate_node: Calls the model through the retrying GenerationClient
- extract_node: Pulls the code block out of the raw response

Extraction only runs when generation succeeded.
"""

from typing import Literal

from langgraph.graph import StateGraph, END

from codecrafter.extract import extract_code
from codecrafter.llm.generation_client import GenerationClient
from codecrafter.state import GraphState


def build_graph(client: GenerationClient):
    """
    Build and compile the generation graph around a client.

    Args:
        client: The retrying generation client to call

    Returns:
        Compiled LangGraph runnable
    """

    def generate_node(state: GraphState) -> GraphState:
        result = client.generate(state["request"])
        state["result"] = result
        if not result.ok:
            state["errors"] = state.get("errors", []) + [result.error.message]
        return state

    def route_after_generate(state: GraphState) -> Literal["extract", "end"]:
        result = state.get("result")
        if result is not None and result.ok:
            return "extract"
        return "end"

    def extract_node(state: GraphState) -> GraphState:
        state["code"] = extract_code(state["result"].raw_text)
        return state

    workflow = StateGraph(GraphState)

    workflow.add_node("generate", generate_node)
    workflow.add_node("extract", extract_node)

    workflow.set_entry_point("generate")
    workflow.add_conditional_edges(
        "generate",
        route_after_generate,
        {
            "extract": "extract",
            "end": END,
        },
    )
    workflow.add_edge("extract", END)

    return workflow.compile()
