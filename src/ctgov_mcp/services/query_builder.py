"""
Translate validated tool requests into ClinicalTrials.gov request URLs.

Two search targets share one request vocabulary:

- ``/api/v2/studies``: free-text filters become ``query.*`` parameters and
  everything else is folded into one ``filter.advanced`` expression of
  ``AREA[...]`` clauses joined with ``AND``.
- ``/api/int/studies`` (legacy tool): free text and ranges are top-level
  parameters; enumerations go into a comma-joined ``aggFilters`` list.

All functions are pure. Query keys are emitted in a fixed order and encoded as
``application/x-www-form-urlencoded``.
"""

from urllib.parse import quote, urlencode

from ctgov_mcp.constants import (
    AGE_RANGE_PATTERN,
    LEGACY_STUDIES_URL,
    STUDIES_URL,
    SUGGEST_URL,
)
from ctgov_mcp.helpers.vocabulary import LEGACY_VOCABULARIES, V2_VOCABULARIES
from ctgov_mcp.models.requests import (
    GetStudyRequest,
    LegacySearchRequest,
    SearchRequest,
    SuggestRequest,
)

QueryParams = list[tuple[str, str]]

# request field -> v2 query parameter
V2_QUERY_PARAMS: tuple[tuple[str, str], ...] = (
    ("condition", "query.cond"),
    ("term", "query.term"),
    ("intervention", "query.intr"),
    ("titles", "query.titles"),
    ("outc", "query.outc"),
    ("id", "query.id"),
    ("location", "query.locn"),
    ("lead", "query.lead"),
)

# request field -> AREA[] date field
V2_DATE_AREAS: tuple[tuple[str, str], ...] = (
    ("start", "StartDate"),
    ("prim_comp", "PrimaryCompletionDate"),
    ("first_post", "StudyFirstPostDate"),
    ("res_first_post", "ResultsFirstPostDate"),
    ("last_upd_post", "LastUpdatePostDate"),
    ("study_comp", "CompletionDate"),
)

# request field -> legacy top-level parameter
LEGACY_QUERY_PARAMS: tuple[tuple[str, str], ...] = (
    ("condition", "cond"),
    ("term", "term"),
    ("intervention", "intr"),
    ("titles", "titles"),
    ("outc", "outc"),
    ("id", "id"),
    ("location", "locn"),
    ("age_range", "ageRange"),
    ("start", "start"),
    ("prim_comp", "primComp"),
    ("first_post", "firstPost"),
    ("res_first_post", "resFirstPost"),
    ("last_upd_post", "lastUpdPost"),
    ("study_comp", "studyComp"),
    ("sort", "sort"),
)

# aggFilters entries, in emission order; lead is free text
LEGACY_AGG_FIELDS: tuple[str, ...] = (
    "phase",
    "status",
    "ages",
    "sex",
    "lead",
    "healthy",
    "study_type",
    "funder_type",
    "results",
    "docs",
    "violation",
    "allocation",
    "masking",
    "assignment",
    "purpose",
    "model",
    "intervention_type",
    "time_perspective",
    "who_masked",
)

AGE_UNITS = {"y": "years", "m": "months"}


def _with_query(base: str, params: QueryParams) -> str:
    return f"{base}?{urlencode(params)}" if params else base


# ------------------------------------------------------------------
# /api/v2/studies
# ------------------------------------------------------------------


def date_range_clause(area: str, value: str) -> str:
    """``2024-01-01_2024-12-31`` -> ``AREA[StartDate]RANGE[2024-01-01, 2024-12-31]``."""
    low, _, high = value.partition("_")
    return f"AREA[{area}]RANGE[{low}, {high or 'MAX'}]"


def age_range_clauses(value: str) -> list[str]:
    """
    Studies whose eligible ages overlap ``min_max``.

    ``18y_65y`` keeps studies with MinimumAge <= 65 years and
    MaximumAge >= 18 years.
    """
    match = AGE_RANGE_PATTERN.match(value)
    if match is None:
        raise ValueError(f"Invalid age range: {value}")
    low, low_unit, high, high_unit = match.groups()
    low_age = f"{int(low)} {AGE_UNITS[low_unit]}"
    high_age = f"{int(high)} {AGE_UNITS[high_unit]}"
    return [
        f"AREA[MinimumAge]RANGE[MIN, {high_age}]",
        f"AREA[MaximumAge]RANGE[{low_age}, MAX]",
    ]


def build_advanced_filter(request: SearchRequest) -> str | None:
    """Combine enum, age and date filters into one ``filter.advanced`` value."""
    clauses: list[str] = []

    for field, vocabulary in V2_VOCABULARIES.items():
        value = getattr(request, field)
        if value is None or vocabulary.area is None:
            continue
        combination = vocabulary.parse(value)
        clauses.append(f"AREA[{vocabulary.area}] {combination.as_advanced()}")

    if request.age_range:
        clauses.extend(age_range_clauses(request.age_range))

    for field, area in V2_DATE_AREAS:
        value = getattr(request, field)
        if value:
            clauses.append(date_range_clause(area, value))

    return " AND ".join(clauses) or None


def build_search_params(request: SearchRequest) -> QueryParams:
    params: QueryParams = []

    if request.complex_query:
        # Supersedes every discrete filter.
        params.append(("query.term", request.complex_query))
    else:
        for field, key in V2_QUERY_PARAMS:
            value = getattr(request, field)
            if value:
                params.append((key, value))
        advanced = build_advanced_filter(request)
        if advanced:
            params.append(("filter.advanced", advanced))

    if request.sort:
        params.append(("sort", request.sort))
    params.append(("pageSize", str(request.effective_page_size)))
    if request.page_token:
        params.append(("pageToken", request.page_token))
    if request.count_total:
        params.append(("countTotal", "true"))
    return params


def build_search_url(request: SearchRequest) -> str:
    return _with_query(STUDIES_URL, build_search_params(request))


# ------------------------------------------------------------------
# /api/int/studies (legacy)
# ------------------------------------------------------------------


def build_agg_filters(request: LegacySearchRequest) -> str | None:
    """``phase:2 3,status:rec,lead:Pfizer`` style aggregation filter."""
    filters: list[str] = []
    for field in LEGACY_AGG_FIELDS:
        value = getattr(request, field)
        if value is None:
            continue
        vocabulary = LEGACY_VOCABULARIES.get(field)
        if vocabulary is None:
            filters.append(f"{field}:{value}")  # free text
        else:
            combination = vocabulary.parse(value)
            filters.append(f"{vocabulary.param}:{combination.as_aggfilter()}")
    return ",".join(filters) or None


def build_legacy_search_params(request: LegacySearchRequest) -> QueryParams:
    params: QueryParams = []
    for field, key in LEGACY_QUERY_PARAMS:
        value = getattr(request, field)
        if value:
            params.append((key, value))
    agg_filters = build_agg_filters(request)
    if agg_filters:
        params.append(("aggFilters", agg_filters))
    params.append(("limit", str(request.limit)))
    return params


def build_legacy_search_url(request: LegacySearchRequest) -> str:
    return _with_query(LEGACY_STUDIES_URL, build_legacy_search_params(request))


# ------------------------------------------------------------------
# Suggest / single study
# ------------------------------------------------------------------


def build_suggest_url(request: SuggestRequest) -> str:
    return _with_query(
        SUGGEST_URL, [("input", request.input), ("dictionary", request.dictionary)]
    )


def build_study_params(request: GetStudyRequest) -> QueryParams:
    params: QueryParams = []
    if request.format != "json":
        params.append(("format", request.format))
    elif request.markup_format != "markdown":
        params.append(("markupFormat", request.markup_format))
    if request.fields:
        params.append(("fields", ",".join(request.fields)))
    return params


def build_study_url(request: GetStudyRequest) -> str:
    base = f"{STUDIES_URL}/{quote(request.nct_id)}"
    return _with_query(base, build_study_params(request))
