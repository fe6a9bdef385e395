from typing import Any, TypedDict

from langgraph.graph import END, START, StateGraph
from loguru import logger

from .config import sampling_config, settings
from .errors import EmptyResultError, InvalidRequestError, MalformedOutputError
from .generator import RESPONSE_SCHEMA, SYSTEM_INSTRUCTION, build_user_prompt, call_llm, require_api_key
from .normalizer import normalize_titles
from .parsing import extract_text, parse_json_payload
from .schemas import SuggestionRequest


class SuggestState(TypedDict, total=False):
    request: SuggestionRequest
    raw_response: Any
    raw_text: str
    parsed: Any
    titles: list


def check_credentials_node(state: SuggestState) -> SuggestState:
    require_api_key()
    return state


def validate_request_node(state: SuggestState) -> SuggestState:
    req = state["request"]
    if settings.require_description and not (req.description or "").strip():
        raise InvalidRequestError("Description is required")
    return state


async def generate_node(state: SuggestState) -> SuggestState:
    prompt = build_user_prompt(state["request"])
    state["raw_response"] = await call_llm(SYSTEM_INSTRUCTION, prompt, RESPONSE_SCHEMA, sampling_config())
    return state


async def extract_node(state: SuggestState) -> SuggestState:
    state["raw_text"] = await extract_text(state["raw_response"])
    logger.debug(f"Raw model response: {state['raw_text']}")
    return state


def decode_node(state: SuggestState) -> SuggestState:
    state["parsed"] = parse_json_payload(state["raw_text"])
    if state["parsed"] is None:
        logger.warning("Model output is not JSON")
    return state


def normalize_node(state: SuggestState) -> SuggestState:
    parsed = state.get("parsed")
    if parsed is None:
        raise MalformedOutputError(state["raw_text"])
    titles = normalize_titles(parsed)
    if not titles:
        logger.warning("Model output parsed but held no usable titles")
        raise EmptyResultError(parsed)
    state["titles"] = titles
    return state


def build_suggest_graph(normalize: bool = True):
    """Public pipeline when normalize is set; the internal one stops after JSON decoding."""
    workflow = StateGraph(SuggestState)
    workflow.add_node("check_credentials", check_credentials_node)
    workflow.add_node("validate_request", validate_request_node)
    workflow.add_node("generate", generate_node)
    workflow.add_node("extract", extract_node)
    workflow.add_node("decode", decode_node)

    workflow.add_edge(START, "check_credentials")
    workflow.add_edge("check_credentials", "validate_request")
    workflow.add_edge("validate_request", "generate")
    workflow.add_edge("generate", "extract")
    workflow.add_edge("extract", "decode")

    if normalize:
        workflow.add_node("normalize", normalize_node)
        workflow.add_edge("decode", "normalize")
        workflow.add_edge("normalize", END)
    else:
        workflow.add_edge("decode", END)

    return workflow.compile()


PUBLIC_GRAPH = build_suggest_graph(normalize=True)
INTERNAL_GRAPH = build_suggest_graph(normalize=False)


async def run_suggestion(req: SuggestionRequest, normalize: bool = True) -> SuggestState:
    graph = PUBLIC_GRAPH if normalize else INTERNAL_GRAPH
    return await graph.ainvoke({"request": req})
