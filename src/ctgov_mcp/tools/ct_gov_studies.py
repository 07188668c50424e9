"""The unified ``ct_gov_studies`` tool: search, suggest and get in one."""

from collections.abc import Mapping
from typing import Any

from ctgov_mcp.constants import (
    DEFAULT_PAGE_SIZE,
    MARKUP_FORMATS,
    MAX_PAGE_SIZE,
    STUDY_FORMATS,
    SUGGEST_DICTIONARIES,
    SUGGEST_MIN_INPUT_LENGTH,
    UNIFIED_METHODS,
    UNIFIED_TOOL_NAME,
)
from ctgov_mcp.helpers.vocabulary import V2_VOCABULARIES
from ctgov_mcp.services.dispatcher import StudiesDispatcher
from ctgov_mcp.tools.base import RegisteredTool, ToolDefinition, ToolExample
from ctgov_mcp.tools.schema import search_properties

DESCRIPTION = (
    "Unified tool for ClinicalTrials.gov operations: search clinical trials, "
    "get term suggestions, and retrieve detailed study information. Supports "
    "both simple parameter searches and advanced complex queries using CT.gov "
    "search operators. Use the method parameter to specify the operation type."
)

COMPLEX_QUERY_DESCRIPTION = (
    "For search: Advanced search expression using CT.gov operators (AND, OR, "
    "NOT, AREA[], RANGE[], SEARCH[], etc.). When provided, this takes "
    "precedence over individual search parameters. Use MAX/MIN for open "
    "ranges and quotes for exact phrases. Available AREA fields include Phase, "
    "StdAge, DesignAllocation, DesignMasking, DesignInterventionModel, "
    "DesignPrimaryPurpose, StudyType, InterventionType, LeadSponsorClass, "
    "InterventionName, DesignObservationalModel, DesignTimePerspective, "
    "DesignWhoMasked, StudyFirstPostDate."
)


def _input_schema() -> dict[str, Any]:
    properties: dict[str, Any] = {
        "method": {
            "type": "string",
            "enum": list(UNIFIED_METHODS),
            "description": (
                "The operation to perform: search (find clinical trials), "
                "suggest (get term suggestions), or get (get detailed study "
                "information)"
            ),
        },
        "complexQuery": {"type": "string", "description": COMPLEX_QUERY_DESCRIPTION},
    }
    properties.update(search_properties(V2_VOCABULARIES, prefix="For search: "))
    properties.update(
        {
            "pageSize": {
                "type": "integer",
                "description": (
                    f"For search: Number of results per page "
                    f"(default: {DEFAULT_PAGE_SIZE}, max: {MAX_PAGE_SIZE})"
                ),
                "minimum": 1,
                "maximum": MAX_PAGE_SIZE,
                "default": DEFAULT_PAGE_SIZE,
            },
            "limit": {
                "type": "integer",
                "description": "For search: DEPRECATED alias for pageSize",
                "minimum": 1,
                "maximum": MAX_PAGE_SIZE,
            },
            "pageToken": {
                "type": "string",
                "description": (
                    "For search: Token to get a specific page of results "
                    "(from a previous nextPageToken)"
                ),
            },
            "countTotal": {
                "type": "boolean",
                "description": (
                    "For search: Whether to include total count in response "
                    "(default: true)"
                ),
                "default": True,
            },
            "input": {
                "type": "string",
                "description": (
                    "For suggest: The text input to search for suggestions "
                    f"(minimum {SUGGEST_MIN_INPUT_LENGTH} characters)"
                ),
                "minLength": SUGGEST_MIN_INPUT_LENGTH,
            },
            "dictionary": {
                "type": "string",
                "enum": list(SUGGEST_DICTIONARIES),
                "description": "For suggest: The dictionary to search in",
            },
            "nctId": {
                "type": "string",
                "description": (
                    "For get: NCT Number of the study (e.g., NCT00841061, NCT04000165)"
                ),
                "pattern": r"^[Nn][Cc][Tt]0*[1-9]\d{0,7}$",
            },
            "format": {
                "type": "string",
                "enum": list(STUDY_FORMATS),
                "description": "For get: Response format",
                "default": "json",
            },
            "markupFormat": {
                "type": "string",
                "enum": list(MARKUP_FORMATS),
                "description": (
                    "For get: Format of markup fields (applies to json format only)"
                ),
                "default": "markdown",
            },
            "fields": {
                "type": "array",
                "items": {"type": "string"},
                "description": (
                    "For get: Specific fields to return (if unspecified, all "
                    "fields returned)"
                ),
                "minItems": 1,
            },
        }
    )
    return {"type": "object", "properties": properties, "required": ["method"]}


EXAMPLES = [
    ToolExample(
        description="Search for diabetes studies",
        usage={"method": "search", "condition": "diabetes", "pageSize": 5},
    ),
    ToolExample(
        description="Get term suggestions for conditions",
        usage={"method": "suggest", "input": "diab", "dictionary": "Condition"},
    ),
    ToolExample(
        description="Get detailed study information",
        usage={"method": "get", "nctId": "NCT00841061"},
    ),
    ToolExample(
        description="Recruiting Phase 2 or 3 trials funded by NIH or industry",
        usage={
            "method": "search",
            "condition": "breast cancer",
            "phase": "PHASE2 OR PHASE3",
            "status": "recruiting",
            "funderType": "nih OR industry",
        },
    ),
    ToolExample(
        description=(
            "Find Phase 2 diabetes or metabolic syndrome trials using complex query"
        ),
        usage={
            "method": "search",
            "complexQuery": '(diabetes OR "metabolic syndrome") AND AREA[Phase]PHASE2',
            "pageSize": 10,
        },
    ),
    ToolExample(
        description="Search for aspirin studies excluding placebo-only trials",
        usage={
            "method": "search",
            "complexQuery": "AREA[InterventionName]aspirin AND NOT placebo",
            "pageSize": 15,
        },
    ),
    ToolExample(
        description="Find cancer studies in the Boston area",
        usage={
            "method": "search",
            "complexQuery": (
                "cancer AND SEARCH[Location](AREA[LocationCity]Boston AND "
                "AREA[LocationState]Massachusetts)"
            ),
            "pageSize": 20,
        },
    ),
    ToolExample(
        description="Look for recent diabetes studies posted since 2020",
        usage={
            "method": "search",
            "complexQuery": "diabetes AND AREA[StudyFirstPostDate]RANGE[2020-01-01, MAX]",
            "pageSize": 25,
        },
    ),
]


async def handle(
    dispatcher: StudiesDispatcher, arguments: Mapping[str, Any] | None
) -> str:
    return await dispatcher.dispatch(arguments)


DEFINITION = ToolDefinition(
    name=UNIFIED_TOOL_NAME,
    description=DESCRIPTION,
    input_schema=_input_schema(),
    examples=EXAMPLES,
)

TOOL = RegisteredTool(definition=DEFINITION, handler=handle)
