"""JSON-schema fragments shared by the tool definitions."""

from typing import Any

from ctgov_mcp.constants import SORT_OPTIONS
from ctgov_mcp.helpers.vocabulary import Vocabulary

TEXT_FIELD_DESCRIPTIONS: dict[str, str] = {
    "condition": (
        'Primary condition to search for (e.g., "Diabetes Mellitus Type 2", '
        '"Heart Failure", "Cancer"). Use OR operator to combine multiple '
        'conditions (e.g., "obesity OR weight loss").'
    ),
    "term": (
        'Additional search terms (e.g., "Hypertension", "Expanded Access"). '
        'Use OR operator to combine multiple terms (e.g., "diabetes OR hypertension").'
    ),
    "intervention": (
        'Intervention or treatment being studied (e.g., "Aspirin", '
        '"Immunotherapy"). Use OR operator to combine multiple interventions '
        '(e.g., "semaglutide OR liraglutide").'
    ),
    "titles": (
        "Search in study titles and acronyms. Use OR operator to combine "
        "multiple terms."
    ),
    "outc": (
        "Search in study outcomes and endpoints. Use OR operator to combine "
        "multiple terms."
    ),
    "id": (
        "Search by study identifiers: NCT ID, organization study ID, secondary "
        "ID, or study acronym. Use OR operator to combine multiple IDs."
    ),
    "location": (
        'Geographic location filter (e.g., "Houston", "Texas", "United States"). '
        'Use OR operator to combine multiple locations (e.g., "Texas OR California").'
    ),
    "lead": (
        "Lead sponsor or principal organization conducting the study. Use OR "
        'operator to combine multiple sponsors (e.g., "Pfizer OR Merck").'
    ),
}

ENUM_FIELD_DESCRIPTIONS: dict[str, str] = {
    "phase": "Clinical trial phase.",
    "status": "Study recruitment and completion status.",
    "ages": "Predefined age groups for study eligibility.",
    "sex": "Sex/gender eligibility filter.",
    "healthy": "Include studies that accept healthy volunteers.",
    "study_type": "Type of clinical study.",
    "funder_type": "Funding organization type.",
    "results": "Filter by availability of study results.",
    "docs": "Filter by availability of study documents.",
    "violation": "Filter studies with FDA violations.",
    "allocation": "Study design allocation method.",
    "masking": "Study blinding/masking design.",
    "assignment": "Intervention assignment strategy.",
    "purpose": "Primary purpose of the study.",
    "model": "Observational study model.",
    "intervention_type": "Type of intervention being studied.",
    "time_perspective": "Time perspective for observational studies.",
    "who_masked": "Who is masked/blinded in the study.",
}

DATE_FIELD_DESCRIPTIONS: dict[str, str] = {
    "start": "Study start date range",
    "primComp": "Primary completion date range",
    "firstPost": "Study first posted date range",
    "resFirstPost": "Results first posted date range",
    "lastUpdPost": "Last update posted date range",
}


def enum_property(vocabulary: Vocabulary, prefix: str = "") -> dict[str, Any]:
    description = f"{prefix}{ENUM_FIELD_DESCRIPTIONS[vocabulary.field]}"
    tokens = list(vocabulary.tokens)
    if vocabulary.multi and len(tokens) > 1:
        description += (
            f" Allowed values: {', '.join(tokens)}. Combine values with OR or "
            f'spaces (e.g., "{tokens[0]} OR {tokens[1]}").'
        )
        return {"type": "string", "description": description}
    return {"type": "string", "description": description, "enum": tokens}


def search_properties(
    vocabularies: dict[str, Vocabulary], prefix: str = ""
) -> dict[str, Any]:
    """Schema properties for every search filter, keyed by camelCase name."""
    properties: dict[str, Any] = {}
    for field, text in TEXT_FIELD_DESCRIPTIONS.items():
        properties[field] = {"type": "string", "description": f"{prefix}{text}"}
    for vocabulary in vocabularies.values():
        properties[vocabulary.param] = enum_property(vocabulary, prefix)
    properties["ageRange"] = {
        "type": "string",
        "description": (
            f'{prefix}Custom age range in format "minAge_maxAge" '
            '(e.g., "16y_34y", "65y_85y", "2m_12m")'
        ),
        "pattern": r"^\d+[ym]_\d+[ym]$",
    }
    for name, text in DATE_FIELD_DESCRIPTIONS.items():
        properties[name] = {
            "type": "string",
            "description": f'{prefix}{text} in format "YYYY-MM-DD_YYYY-MM-DD"',
            "pattern": r"^\d{4}-\d{2}-\d{2}_\d{4}-\d{2}-\d{2}$",
        }
    properties["studyComp"] = {
        "type": "string",
        "description": (
            f'{prefix}Study completion date range in format "YYYY-MM-DD_YYYY-MM-DD", '
            'or "YYYY-MM-DD_" for on or after a date'
        ),
        "pattern": r"^\d{4}-\d{2}-\d{2}_(\d{4}-\d{2}-\d{2})?$",
    }
    properties["sort"] = {
        "type": "string",
        "description": (
            f"{prefix}Sort order for search results, optionally suffixed with "
            ":asc or :desc"
        ),
        "examples": list(SORT_OPTIONS),
    }
    return properties
