"""
Tool-call request models.

The unified tool's arguments are a tagged union keyed on ``method``: each
variant is its own pydantic model with its own validated field set, decoded
once by :func:`decode_request`. Pydantic errors never leave this module; they
are converted into :class:`ctgov_mcp.exceptions.ValidationError` with the
offending field named the way the caller spelled it (camelCase).
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, ClassVar, Literal, TypeVar

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationInfo,
    field_validator,
    model_validator,
)
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from ctgov_mcp.constants import (
    AGE_RANGE_PATTERN,
    DATE_RANGE_OR_AFTER_PATTERN,
    DATE_RANGE_PATTERN,
    DEFAULT_PAGE_SIZE,
    MARKUP_FORMATS,
    MAX_LEGACY_LIMIT,
    MAX_PAGE_SIZE,
    NCT_ID_PATTERN,
    SORT_OPTIONS,
    STUDY_FORMATS,
    SUGGEST_DICTIONARIES,
    SUGGEST_MIN_INPUT_LENGTH,
    UNIFIED_METHODS,
)
from ctgov_mcp.exceptions import InvalidMethodError, ValidationError
from ctgov_mcp.helpers.vocabulary import (
    LEGACY_VOCABULARIES,
    V2_VOCABULARIES,
    Vocabulary,
)

RequestT = TypeVar("RequestT", bound=BaseModel)

TEXT_FIELDS = (
    "condition",
    "term",
    "intervention",
    "titles",
    "outc",
    "id",
    "location",
    "lead",
)
ENUM_FIELDS = (
    "phase",
    "status",
    "ages",
    "sex",
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
# field -> (label used in error messages, example)
DATE_RANGE_FIELDS: dict[str, tuple[str, str]] = {
    "start": ("Start date range", "2024-01-01_2025-03-12"),
    "prim_comp": ("Primary completion date range", "2025-11-01_2025-12-12"),
    "first_post": ("First post date range", "2025-01-01_2025-12-12"),
    "res_first_post": ("Results first post date range", "2025-01-02_2025-11-11"),
    "last_upd_post": ("Last update post date range", "2025-03-03_2025-10-10"),
}
FILTER_FIELDS = (
    TEXT_FIELDS
    + ENUM_FIELDS
    + ("age_range",)
    + tuple(DATE_RANGE_FIELDS)
    + ("study_comp", "sort")
)


class RequestModel(BaseModel):
    """Base for tool-argument models: camelCase in, unknown keys dropped."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
        str_strip_whitespace=True,
    )

    @field_validator("*", mode="before")
    @classmethod
    def _blank_is_missing(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value


# ------------------------------------------------------------------
# Search
# ------------------------------------------------------------------


class SearchFilters(RequestModel):
    """Filter fields shared by the v2 and legacy search endpoints."""

    vocabularies: ClassVar[dict[str, Vocabulary]] = V2_VOCABULARIES

    # Free text
    condition: str | None = None
    term: str | None = None
    intervention: str | None = None
    titles: str | None = None
    outc: str | None = None
    id: str | None = None
    location: str | None = None
    lead: str | None = None

    # Enumerations (space- or OR-separated combinations)
    phase: str | None = None
    status: str | None = None
    ages: str | None = None
    sex: str | None = None
    healthy: str | None = None
    study_type: str | None = None
    funder_type: str | None = None
    results: str | None = None
    docs: str | None = None
    violation: str | None = None
    allocation: str | None = None
    masking: str | None = None
    assignment: str | None = None
    purpose: str | None = None
    model: str | None = None
    intervention_type: str | None = None
    time_perspective: str | None = None
    who_masked: str | None = None

    # Ranges
    age_range: str | None = None
    start: str | None = None
    prim_comp: str | None = None
    first_post: str | None = None
    res_first_post: str | None = None
    last_upd_post: str | None = None
    study_comp: str | None = None

    sort: str | None = None

    @field_validator(*ENUM_FIELDS)
    @classmethod
    def _check_vocabulary(cls, value: str | None, info: ValidationInfo) -> str | None:
        vocabulary = cls.vocabularies.get(info.field_name)
        if value is None or vocabulary is None:
            return value
        try:
            vocabulary.parse(value)
        except ValidationError as exc:
            raise ValueError(exc.message) from exc
        return value

    @field_validator(*DATE_RANGE_FIELDS)
    @classmethod
    def _check_date_range(cls, value: str | None, info: ValidationInfo) -> str | None:
        if value is not None and not DATE_RANGE_PATTERN.match(value):
            label, example = DATE_RANGE_FIELDS[info.field_name]
            raise ValueError(
                f'{label} must be in format "YYYY-MM-DD_YYYY-MM-DD" (e.g., "{example}")'
            )
        return value

    @field_validator("study_comp")
    @classmethod
    def _check_study_comp(cls, value: str | None) -> str | None:
        if value is not None and not DATE_RANGE_OR_AFTER_PATTERN.match(value):
            raise ValueError(
                'Study completion date must be in format "YYYY-MM-DD_YYYY-MM-DD" '
                'or "YYYY-MM-DD_" (e.g., "2025-11-01_")'
            )
        return value

    @field_validator("age_range")
    @classmethod
    def _check_age_range(cls, value: str | None) -> str | None:
        if value is not None and not AGE_RANGE_PATTERN.match(value):
            raise ValueError(
                'Age range must be in format "minAge_maxAge" (e.g., "16y_34y", "2m_12m")'
            )
        return value

    @field_validator("sort")
    @classmethod
    def _check_sort(cls, value: str | None) -> str | None:
        if value is None:
            return value
        name, _, direction = value.partition(":")
        if name not in SORT_OPTIONS or direction not in ("", "asc", "desc"):
            raise ValueError(
                f"Invalid sort: {value}. Must be one of: {', '.join(SORT_OPTIONS)} "
                "(optionally suffixed with :asc or :desc)"
            )
        return value

    def criteria(self) -> dict[str, Any]:
        """Supplied filter fields keyed by their camelCase names."""
        return self.model_dump(
            by_alias=True, exclude_none=True, include=set(FILTER_FIELDS)
        )

    def has_filters(self) -> bool:
        return any(getattr(self, name) is not None for name in FILTER_FIELDS)


class SearchRequest(SearchFilters):
    """``method: search`` against /api/v2/studies."""

    method: Literal["search"] = "search"
    complex_query: str | None = None
    page_size: int | None = None
    limit: int | None = None  # deprecated alias for page_size
    page_token: str | None = None
    count_total: bool = True

    @field_validator("page_size", "limit")
    @classmethod
    def _check_page_size(cls, value: int | None, info: ValidationInfo) -> int | None:
        if value is not None and not 1 <= value <= MAX_PAGE_SIZE:
            raise ValueError(
                f"{to_camel(info.field_name)} must be between 1 and {MAX_PAGE_SIZE}"
            )
        return value

    @property
    def effective_page_size(self) -> int:
        if self.page_size is not None:
            return self.page_size
        if self.limit is not None:
            return self.limit
        return DEFAULT_PAGE_SIZE

    @field_validator("count_total", mode="before")
    @classmethod
    def _none_counts(cls, value: Any) -> Any:
        return True if value is None else value

    def criteria(self) -> dict[str, Any]:
        criteria = super().criteria()
        if self.complex_query is not None:
            criteria = {"complexQuery": self.complex_query, **criteria}
        return criteria


class LegacySearchRequest(SearchFilters):
    """Arguments of the legacy ``ct_gov_search_studies`` tool (/api/int/studies)."""

    vocabularies: ClassVar[dict[str, Vocabulary]] = LEGACY_VOCABULARIES

    limit: int = DEFAULT_PAGE_SIZE

    @field_validator("limit", mode="before")
    @classmethod
    def _check_limit(cls, value: Any) -> Any:
        if value is None:
            return DEFAULT_PAGE_SIZE
        if (
            isinstance(value, bool)
            or not isinstance(value, int)
            or not 1 <= value <= MAX_LEGACY_LIMIT
        ):
            raise ValueError(
                f"Limit must be a number between 1 and {MAX_LEGACY_LIMIT}"
            )
        return value

    @model_validator(mode="after")
    def _require_a_filter(self) -> "LegacySearchRequest":
        if not self.has_filters():
            raise ValueError("At least one search parameter must be provided")
        return self


# ------------------------------------------------------------------
# Suggest
# ------------------------------------------------------------------


class SuggestRequest(RequestModel):
    """``method: suggest`` against /api/int/suggest."""

    method: Literal["suggest"] = "suggest"
    input: str | None = Field(default=None, validate_default=True)
    dictionary: str | None = Field(default=None, validate_default=True)

    @field_validator("input")
    @classmethod
    def _check_input(cls, value: str | None) -> str:
        if value is None:
            raise ValueError("input parameter is required for suggest method")
        if len(value) < SUGGEST_MIN_INPUT_LENGTH:
            raise ValueError(
                f"Input must be at least {SUGGEST_MIN_INPUT_LENGTH} characters long"
            )
        return value

    @field_validator("dictionary")
    @classmethod
    def _check_dictionary(cls, value: str | None) -> str:
        if value is None:
            raise ValueError("dictionary parameter is required for suggest method")
        if value not in SUGGEST_DICTIONARIES:
            raise ValueError(
                f"Invalid dictionary: {value}. "
                f"Must be one of: {', '.join(SUGGEST_DICTIONARIES)}"
            )
        return value


# ------------------------------------------------------------------
# Get study
# ------------------------------------------------------------------


class GetStudyRequest(RequestModel):
    """``method: get`` against /api/v2/studies/{nctId}."""

    method: Literal["get"] = "get"
    nct_id: str | None = Field(default=None, validate_default=True)
    format: str | None = Field(default="json", validate_default=True)
    markup_format: str | None = Field(default="markdown", validate_default=True)
    fields: list[str] = []

    @field_validator("nct_id")
    @classmethod
    def _check_nct_id(cls, value: str | None) -> str:
        if value is None:
            raise ValueError("nctId parameter is required for get method")
        if not NCT_ID_PATTERN.match(value):
            raise ValueError(
                "Invalid NCT ID format. Must be in format NCT followed by 8 digits "
                "(e.g., NCT00841061)"
            )
        return value.upper()

    @field_validator("format")
    @classmethod
    def _check_format(cls, value: str | None) -> str:
        if value is None:
            return "json"
        if value not in STUDY_FORMATS:
            raise ValueError(
                f"Invalid format: {value}. Must be one of: {', '.join(STUDY_FORMATS)}"
            )
        return value

    @field_validator("markup_format")
    @classmethod
    def _check_markup_format(cls, value: str | None) -> str:
        if value is None:
            return "markdown"
        if value not in MARKUP_FORMATS:
            raise ValueError(
                f"Invalid markupFormat: {value}. "
                f"Must be one of: {', '.join(MARKUP_FORMATS)}"
            )
        return value

    @field_validator("fields", mode="before")
    @classmethod
    def _none_is_empty(cls, value: Any) -> Any:
        return [] if value is None else value


UnifiedRequest = SearchRequest | SuggestRequest | GetStudyRequest

_METHOD_MODELS: dict[str, type[RequestModel]] = {
    "search": SearchRequest,
    "suggest": SuggestRequest,
    "get": GetStudyRequest,
}


def parse_request(model: type[RequestT], arguments: Mapping[str, Any] | None) -> RequestT:
    """Validate ``arguments`` into ``model``, raising our ValidationError."""
    try:
        return model.model_validate(dict(arguments or {}))
    except PydanticValidationError as exc:
        raise _to_validation_error(exc) from exc


def decode_request(arguments: Mapping[str, Any] | None) -> UnifiedRequest:
    """Pick the variant named by ``method`` and decode the rest into it."""
    method = (arguments or {}).get("method")
    model = _METHOD_MODELS.get(method) if isinstance(method, str) else None
    if model is None:
        raise InvalidMethodError(method, UNIFIED_METHODS)
    return parse_request(model, arguments)


def _to_validation_error(exc: PydanticValidationError) -> ValidationError:
    error = exc.errors()[0]
    loc = error.get("loc") or ()
    field = str(loc[0]) if loc else None

    if error["type"] == "value_error":
        message = str(error["ctx"]["error"])
    elif field:
        message = f"Invalid {field}: {error['msg']}"
    else:
        message = error["msg"]
    return ValidationError(message, field=field)
