"""Unit tests for tool-argument request models."""

import pytest

from ctgov_mcp.exceptions import InvalidMethodError, ValidationError
from ctgov_mcp.models.requests import (
    GetStudyRequest,
    LegacySearchRequest,
    SearchRequest,
    SuggestRequest,
    decode_request,
    parse_request,
)


class TestDecodeRequest:
    """Tests for decode_request (method dispatch)."""

    @pytest.mark.parametrize(
        "arguments,model",
        [
            ({"method": "search"}, SearchRequest),
            ({"method": "suggest", "input": "diab", "dictionary": "Condition"}, SuggestRequest),
            ({"method": "get", "nctId": "NCT00841061"}, GetStudyRequest),
        ],
    )
    def test_method_selects_variant(self, arguments, model):
        """Each method decodes into its own request model."""
        assert isinstance(decode_request(arguments), model)

    @pytest.mark.parametrize("arguments", [{}, None, {"method": "delete"}, {"method": 3}])
    def test_missing_or_unknown_method(self, arguments):
        """A missing or unknown method raises InvalidMethodError listing the choices."""
        with pytest.raises(InvalidMethodError, match="search, suggest, get"):
            decode_request(arguments)

    def test_unknown_keys_are_ignored(self):
        """Arguments the method does not use are dropped."""
        request = decode_request({"method": "search", "nctId": "NCT1", "bogus": 1})
        assert not request.has_filters()


class TestSearchRequest:
    """Tests for SearchRequest validation."""

    def test_unified_search_needs_no_filters(self):
        """The unified tool accepts a bare search."""
        request = parse_request(SearchRequest, {"method": "search"})
        assert request.effective_page_size == 10
        assert request.count_total is True

    def test_page_size_wins_over_limit(self):
        """pageSize takes precedence over the deprecated limit."""
        request = parse_request(SearchRequest, {"pageSize": 25, "limit": 50})
        assert request.effective_page_size == 25
        assert parse_request(SearchRequest, {"limit": 50}).effective_page_size == 50

    @pytest.mark.parametrize("value,expected", [(None, True), (True, True), (False, False)])
    def test_count_total_null_means_true(self, value, expected):
        """An explicit null countTotal keeps the total count on."""
        request = parse_request(SearchRequest, {"countTotal": value})
        assert request.count_total is expected

    @pytest.mark.parametrize("field,value", [("pageSize", 0), ("pageSize", 1001), ("limit", -1)])
    def test_page_size_bounds(self, field, value):
        """pageSize and limit must be within 1..1000."""
        with pytest.raises(ValidationError, match=f"{field} must be between 1 and 1000") as exc_info:
            parse_request(SearchRequest, {field: value})
        assert exc_info.value.field == field

    def test_blank_strings_count_as_missing(self):
        """Empty and whitespace-only strings are treated as absent."""
        request = parse_request(SearchRequest, {"condition": "  ", "phase": ""})
        assert request.condition is None
        assert request.phase is None
        assert not request.has_filters()

    def test_invalid_date_range_message(self):
        """A malformed date range names the field and shows an example."""
        with pytest.raises(ValidationError, match="Start date range must be in format") as exc_info:
            parse_request(SearchRequest, {"start": "2024-01-01"})
        assert exc_info.value.field == "start"

    def test_study_completion_allows_open_end(self):
        """studyComp accepts YYYY-MM-DD_ with no upper bound."""
        request = parse_request(SearchRequest, {"studyComp": "2025-11-01_"})
        assert request.study_comp == "2025-11-01_"

    def test_open_ended_start_rejected(self):
        """Other date ranges need both bounds."""
        with pytest.raises(ValidationError):
            parse_request(SearchRequest, {"start": "2025-11-01_"})

    @pytest.mark.parametrize("value", ["18y_65y", "2m_12m", "6m_2y"])
    def test_valid_age_ranges(self, value):
        """Age ranges use y/m units on both ends."""
        assert parse_request(SearchRequest, {"ageRange": value}).age_range == value

    def test_invalid_age_range(self):
        """An unparseable ageRange is rejected."""
        with pytest.raises(ValidationError, match="Age range must be in format"):
            parse_request(SearchRequest, {"ageRange": "18-65"})

    def test_invalid_enum_value(self):
        """Enum tokens are validated against the v2 vocabulary."""
        with pytest.raises(ValidationError, match="Invalid phase value 'phase9'") as exc_info:
            parse_request(SearchRequest, {"phase": "phase9"})
        assert exc_info.value.field == "phase"

    @pytest.mark.parametrize("value", ["@relevance", "StartDate:desc", "NCTId:asc"])
    def test_valid_sort(self, value):
        """sort accepts known fields with an optional direction."""
        assert parse_request(SearchRequest, {"sort": value}).sort == value

    @pytest.mark.parametrize("value", ["Popularity", "StartDate:up"])
    def test_invalid_sort(self, value):
        """Unknown sort fields or directions are rejected."""
        with pytest.raises(ValidationError, match="Invalid sort"):
            parse_request(SearchRequest, {"sort": value})

    def test_criteria_lists_complex_query_first(self):
        """criteria() is camelCase and leads with complexQuery."""
        request = parse_request(
            SearchRequest,
            {"complexQuery": "AREA[Phase]PHASE3", "condition": "asthma", "studyType": "interventional"},
        )
        assert list(request.criteria()) == ["complexQuery", "condition", "studyType"]


class TestLegacySearchRequest:
    """Tests for the legacy search tool's arguments."""

    def test_requires_a_filter(self):
        """The legacy tool rejects a call with no search parameters."""
        with pytest.raises(ValidationError, match="At least one search parameter must be provided"):
            parse_request(LegacySearchRequest, {"limit": 5})

    def test_uses_legacy_vocabulary(self):
        """Legacy spellings validate; v2 spellings do not."""
        assert parse_request(LegacySearchRequest, {"status": "rec"}).status == "rec"
        with pytest.raises(ValidationError):
            parse_request(LegacySearchRequest, {"status": "recruiting"})

    @pytest.mark.parametrize("limit", [0, 101, "5", True])
    def test_limit_bounds(self, limit):
        """limit must be an integer within 1..100."""
        with pytest.raises(ValidationError, match="Limit must be a number between 1 and 100"):
            parse_request(LegacySearchRequest, {"condition": "asthma", "limit": limit})

    def test_limit_defaults_to_ten(self):
        """limit falls back to 10 when absent or null."""
        assert parse_request(LegacySearchRequest, {"condition": "asthma", "limit": None}).limit == 10


class TestSuggestRequest:
    """Tests for SuggestRequest validation."""

    def test_missing_input(self):
        """input is required."""
        with pytest.raises(ValidationError, match="input parameter is required for suggest method") as exc_info:
            parse_request(SuggestRequest, {"dictionary": "Condition"})
        assert exc_info.value.field == "input"

    def test_short_input(self):
        """input needs at least two characters."""
        with pytest.raises(ValidationError, match="Input must be at least 2 characters long"):
            parse_request(SuggestRequest, {"input": "a", "dictionary": "Condition"})

    def test_missing_dictionary(self):
        """dictionary is required."""
        with pytest.raises(ValidationError, match="dictionary parameter is required"):
            parse_request(SuggestRequest, {"input": "diab"})

    def test_unknown_dictionary(self):
        """dictionary must be one of the four known dictionaries."""
        with pytest.raises(ValidationError, match="Invalid dictionary: Drug"):
            parse_request(SuggestRequest, {"input": "diab", "dictionary": "Drug"})


class TestGetStudyRequest:
    """Tests for GetStudyRequest validation."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("NCT00841061", "NCT00841061"),
            ("nct00841061", "NCT00841061"),
            ("NCT000000001", "NCT000000001"),
            ("NCT1", "NCT1"),
        ],
    )
    def test_valid_nct_ids_are_uppercased(self, raw, expected):
        """Valid IDs are accepted case-insensitively and normalized to uppercase."""
        assert parse_request(GetStudyRequest, {"nctId": raw}).nct_id == expected

    @pytest.mark.parametrize("raw", ["INVALID123", "NCT00000000", "NCT", "NCT123456789", "00841061"])
    def test_invalid_nct_ids(self, raw):
        """Malformed IDs are rejected."""
        with pytest.raises(ValidationError, match="Invalid NCT ID format") as exc_info:
            parse_request(GetStudyRequest, {"nctId": raw})
        assert exc_info.value.field == "nctId"

    def test_missing_nct_id(self):
        """nctId is required."""
        with pytest.raises(ValidationError, match="nctId parameter is required for get method"):
            parse_request(GetStudyRequest, {})

    def test_defaults(self):
        """format and markupFormat default to json and markdown."""
        request = parse_request(GetStudyRequest, {"nctId": "NCT00841061", "fields": None})
        assert request.format == "json"
        assert request.markup_format == "markdown"
        assert request.fields == []

    def test_invalid_format(self):
        """Unknown formats are rejected."""
        with pytest.raises(ValidationError, match="Invalid format: xml"):
            parse_request(GetStudyRequest, {"nctId": "NCT00841061", "format": "xml"})

    def test_invalid_markup_format(self):
        """Unknown markup formats are rejected."""
        with pytest.raises(ValidationError, match="Invalid markupFormat: html"):
            parse_request(GetStudyRequest, {"nctId": "NCT00841061", "markupFormat": "html"})
