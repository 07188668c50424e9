"""Unit tests for query_builder (pure URL construction)."""

from urllib.parse import parse_qsl, urlsplit

import pytest

from ctgov_mcp.models.requests import (
    GetStudyRequest,
    LegacySearchRequest,
    SearchRequest,
    SuggestRequest,
)
from ctgov_mcp.services.query_builder import (
    age_range_clauses,
    build_advanced_filter,
    build_agg_filters,
    build_legacy_search_url,
    build_search_params,
    build_search_url,
    build_study_url,
    build_suggest_url,
    date_range_clause,
)


def _query(url: str) -> list[tuple[str, str]]:
    return parse_qsl(urlsplit(url).query)


class TestClauses:
    """Tests for AREA[] clause helpers."""

    def test_closed_date_range(self):
        assert date_range_clause("StartDate", "2024-01-01_2024-12-31") == (
            "AREA[StartDate]RANGE[2024-01-01, 2024-12-31]"
        )

    def test_open_date_range_uses_max(self):
        assert date_range_clause("CompletionDate", "2025-11-01_") == (
            "AREA[CompletionDate]RANGE[2025-11-01, MAX]"
        )

    def test_age_range_is_an_overlap(self):
        """18y_65y keeps studies whose eligible ages overlap 18-65 years."""
        assert age_range_clauses("18y_65y") == [
            "AREA[MinimumAge]RANGE[MIN, 65 years]",
            "AREA[MaximumAge]RANGE[18 years, MAX]",
        ]

    def test_age_range_units(self):
        assert age_range_clauses("2m_12m") == [
            "AREA[MinimumAge]RANGE[MIN, 12 months]",
            "AREA[MaximumAge]RANGE[2 months, MAX]",
        ]


class TestSearchParams:
    """Tests for /api/v2/studies parameters."""

    def test_free_text_and_paging(self):
        """Free-text filters map to query.* parameters; countTotal is on by default."""
        request = SearchRequest(condition="Diabetes", intervention="metformin", page_size=5)
        assert build_search_params(request) == [
            ("query.cond", "Diabetes"),
            ("query.intr", "metformin"),
            ("pageSize", "5"),
            ("countTotal", "true"),
        ]

    def test_enum_filters_fold_into_advanced_filter(self):
        """Enum filters become AND-joined AREA clauses; multi-token ones are grouped."""
        request = SearchRequest(
            phase="PHASE2 OR PHASE3", status="recruiting", funder_type="nih fed"
        )
        assert build_advanced_filter(request) == (
            "AREA[Phase] (PHASE2 OR PHASE3) AND AREA[OverallStatus] recruiting "
            "AND AREA[LeadSponsorClass] (nih OR fed)"
        )

    def test_dates_and_ages_in_advanced_filter(self):
        request = SearchRequest(start="2024-01-01_2024-12-31", age_range="18y_65y")
        assert build_advanced_filter(request) == (
            "AREA[MinimumAge]RANGE[MIN, 65 years] AND AREA[MaximumAge]RANGE[18 years, MAX] "
            "AND AREA[StartDate]RANGE[2024-01-01, 2024-12-31]"
        )

    def test_no_filters_means_no_advanced_filter(self):
        assert build_advanced_filter(SearchRequest()) is None

    def test_complex_query_supersedes_filters(self):
        """complexQuery is the only query term; discrete filters are dropped."""
        request = SearchRequest(
            complex_query="AREA[ConditionSearch](asthma)",
            condition="Diabetes",
            phase="PHASE3",
            sort="StartDate:desc",
        )
        params = build_search_params(request)
        assert params[0] == ("query.term", "AREA[ConditionSearch](asthma)")
        keys = [k for k, _ in params]
        assert "query.cond" not in keys
        assert "filter.advanced" not in keys
        assert ("sort", "StartDate:desc") in params

    def test_page_token_and_count_total(self):
        request = SearchRequest(page_token="abc", count_total=False)
        assert build_search_params(request) == [("pageSize", "10"), ("pageToken", "abc")]

    def test_url_is_form_encoded(self):
        """Values are url-encoded onto /api/v2/studies."""
        url = build_search_url(SearchRequest(condition="lung cancer"))
        assert url.startswith("https://clinicaltrials.gov/api/v2/studies?")
        assert "query.cond=lung+cancer" in url


class TestLegacySearchParams:
    """Tests for /api/int/studies parameters."""

    def test_agg_filters_order_and_separator(self):
        """aggFilters entries are comma-joined, tokens space-joined, lead passed through."""
        request = LegacySearchRequest(
            status="rec OR act", phase="2 3", lead="Pfizer", docs="prot sap"
        )
        assert build_agg_filters(request) == "phase:2 3,status:rec act,lead:Pfizer,docs:prot sap"

    def test_camel_case_agg_filter_keys(self):
        request = LegacySearchRequest(funder_type="industry", study_type="int")
        assert build_agg_filters(request) == "studyType:int,funderType:industry"

    def test_url_params(self):
        request = LegacySearchRequest(
            condition="asthma", start="2024-01-01_2024-12-31", sex="f", limit=20
        )
        url = build_legacy_search_url(request)
        assert url.startswith("https://clinicaltrials.gov/api/int/studies?")
        assert _query(url) == [
            ("cond", "asthma"),
            ("start", "2024-01-01_2024-12-31"),
            ("aggFilters", "sex:f"),
            ("limit", "20"),
        ]


class TestSuggestAndStudyUrls:
    """Tests for suggest and single-study URLs."""

    def test_suggest_url(self):
        url = build_suggest_url(SuggestRequest(input="diab", dictionary="Condition"))
        assert url == "https://clinicaltrials.gov/api/int/suggest?input=diab&dictionary=Condition"

    def test_study_url_default_format(self):
        """json + markdown need no query string."""
        url = build_study_url(GetStudyRequest(nct_id="nct00841061"))
        assert url == "https://clinicaltrials.gov/api/v2/studies/NCT00841061"

    @pytest.mark.parametrize(
        "kwargs,expected",
        [
            ({"format": "csv"}, [("format", "csv")]),
            ({"format": "csv", "markup_format": "legacy"}, [("format", "csv")]),
            ({"markup_format": "legacy"}, [("markupFormat", "legacy")]),
            (
                {"fields": ["NCTId", "BriefTitle"]},
                [("fields", "NCTId,BriefTitle")],
            ),
        ],
    )
    def test_study_url_options(self, kwargs, expected):
        url = build_study_url(GetStudyRequest(nct_id="NCT00841061", **kwargs))
        assert _query(url) == expected
