"""
Single-purpose tools kept for clients written against the earlier API.

Registered only when ``ENABLE_LEGACY_TOOLS`` is set. ``ct_gov_search_studies``
targets /api/int/studies with the abbreviated vocabulary; the suggest and get
tools share the unified tool's request models and handlers.
"""

from collections.abc import Mapping
from typing import Any

from ctgov_mcp.constants import (
    DEFAULT_PAGE_SIZE,
    MARKUP_FORMATS,
    MAX_LEGACY_LIMIT,
    STUDY_FORMATS,
    SUGGEST_DICTIONARIES,
    SUGGEST_MIN_INPUT_LENGTH,
)
from ctgov_mcp.helpers.vocabulary import LEGACY_VOCABULARIES
from ctgov_mcp.models.requests import (
    GetStudyRequest,
    LegacySearchRequest,
    SuggestRequest,
    parse_request,
)
from ctgov_mcp.services.dispatcher import StudiesDispatcher
from ctgov_mcp.tools.base import RegisteredTool, ToolDefinition, ToolExample
from ctgov_mcp.tools.schema import search_properties

# ------------------------------------------------------------------
# ct_gov_search_studies
# ------------------------------------------------------------------


async def handle_search(
    dispatcher: StudiesDispatcher, arguments: Mapping[str, Any] | None
) -> str:
    request = parse_request(LegacySearchRequest, arguments)
    return await dispatcher.legacy_search(request)


SEARCH_DEFINITION = ToolDefinition(
    name="ct_gov_search_studies",
    description=(
        "Search clinical trials on ClinicalTrials.gov using official API "
        "parameters. Supports filtering by condition, interventions, study "
        "phases, recruitment status, demographics, locations, sponsors, study "
        "types, funding sources, study design, research purpose, observational "
        "models, intervention types, time perspectives, masking details, and "
        "temporal ranges."
    ),
    input_schema={
        "type": "object",
        "properties": {
            **search_properties(LEGACY_VOCABULARIES),
            "limit": {
                "type": "integer",
                "description": (
                    f"Maximum number of results to return "
                    f"(default: {DEFAULT_PAGE_SIZE}, max: {MAX_LEGACY_LIMIT})"
                ),
                "minimum": 1,
                "maximum": MAX_LEGACY_LIMIT,
                "default": DEFAULT_PAGE_SIZE,
            },
        },
        "required": [],
    },
    examples=[
        ToolExample(
            description="Search for diabetes and hypertension studies",
            usage={
                "condition": "Diabetes Mellitus Type 2",
                "term": "Hypertension",
                "limit": 5,
            },
        ),
        ToolExample(
            description="Expanded access programs that are currently available",
            usage={"status": "ava tna", "studyType": "exp", "limit": 10},
        ),
    ],
)

# ------------------------------------------------------------------
# ct_gov_suggest
# ------------------------------------------------------------------


async def handle_suggest(
    dispatcher: StudiesDispatcher, arguments: Mapping[str, Any] | None
) -> str:
    request = parse_request(SuggestRequest, arguments)
    return await dispatcher.suggest(request)


SUGGEST_DEFINITION = ToolDefinition(
    name="ct_gov_suggest",
    description=(
        "Get term suggestions from ClinicalTrials.gov dictionaries. Useful for "
        "finding proper terminology, condition names, intervention names, "
        "sponsor names, and facility locations."
    ),
    input_schema={
        "type": "object",
        "properties": {
            "input": {
                "type": "string",
                "description": "The text input to search for suggestions",
                "minLength": SUGGEST_MIN_INPUT_LENGTH,
            },
            "dictionary": {
                "type": "string",
                "enum": list(SUGGEST_DICTIONARIES),
                "description": "The dictionary to search in",
            },
        },
        "required": ["input", "dictionary"],
    },
    examples=[
        ToolExample(
            description="Find condition terms starting with 'lung'",
            usage={"input": "lung", "dictionary": "Condition"},
        )
    ],
)

# ------------------------------------------------------------------
# ct_gov_get_study
# ------------------------------------------------------------------


async def handle_get_study(
    dispatcher: StudiesDispatcher, arguments: Mapping[str, Any] | None
) -> str:
    request = parse_request(GetStudyRequest, arguments)
    return await dispatcher.get_study(request)


GET_STUDY_DEFINITION = ToolDefinition(
    name="ct_gov_get_study",
    description=(
        "Retrieve detailed information for a single clinical trial by NCT ID "
        "from ClinicalTrials.gov, including protocol details, design, "
        "outcomes, eligibility criteria and locations."
    ),
    input_schema={
        "type": "object",
        "properties": {
            "nctId": {
                "type": "string",
                "description": "NCT Number of the study (e.g., NCT00841061)",
                "pattern": r"^[Nn][Cc][Tt]0*[1-9]\d{0,7}$",
            },
            "format": {
                "type": "string",
                "enum": list(STUDY_FORMATS),
                "default": "json",
            },
            "markupFormat": {
                "type": "string",
                "enum": list(MARKUP_FORMATS),
                "default": "markdown",
            },
            "fields": {"type": "array", "items": {"type": "string"}, "minItems": 1},
        },
        "required": ["nctId"],
    },
    examples=[
        ToolExample(
            description="Get detailed study information",
            usage={"nctId": "NCT04000165"},
        )
    ],
)

TOOLS = [
    RegisteredTool(definition=SEARCH_DEFINITION, handler=handle_search),
    RegisteredTool(definition=SUGGEST_DEFINITION, handler=handle_suggest),
    RegisteredTool(definition=GET_STUDY_DEFINITION, handler=handle_get_study),
]
