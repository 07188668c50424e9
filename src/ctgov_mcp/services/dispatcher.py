"""Request dispatcher: routes a decoded request to its handler and formatter."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from ctgov_mcp.data_sources.clinical_trials import ClinicalTrialsGovClient
from ctgov_mcp.exceptions import ApiRequestError, NetworkError
from ctgov_mcp.models.requests import (
    GetStudyRequest,
    LegacySearchRequest,
    SearchRequest,
    SuggestRequest,
    UnifiedRequest,
    decode_request,
)
from ctgov_mcp.services.formatter import (
    format_legacy_search_results,
    format_archive_study,
    format_raw_study,
    format_search_results,
    format_study_details,
    format_suggest_error,
    format_suggest_results,
)

logger = logging.getLogger(__name__)


class StudiesDispatcher:
    """
    Runs one tool request end to end: fetch, then render markdown.

    The ClinicalTrials.gov client is injected so tests can hand in one backed
    by a fake session.
    """

    def __init__(self, client: ClinicalTrialsGovClient):
        self.client = client

    async def dispatch(self, arguments: Mapping[str, Any] | None) -> str:
        """Decode unified-tool arguments and run the selected method."""
        request = decode_request(arguments)
        return await self.handle(request)

    async def handle(self, request: UnifiedRequest) -> str:
        if isinstance(request, SearchRequest):
            return await self.search(request)
        if isinstance(request, SuggestRequest):
            return await self.suggest(request)
        return await self.get_study(request)

    async def search(self, request: SearchRequest) -> str:
        page = await self.client.search_studies(request)
        logger.debug(
            "search returned %d studies (total=%s)",
            len(page.studies),
            page.total_count,
        )
        return format_search_results(page, request)

    async def legacy_search(self, request: LegacySearchRequest) -> str:
        page = await self.client.legacy_search_studies(request)
        return format_legacy_search_results(page, request)

    async def suggest(self, request: SuggestRequest) -> str:
        """Remote failures come back as a markdown error block, not an exception."""
        try:
            suggestions = await self.client.suggest(request)
        except (ApiRequestError, NetworkError) as exc:
            logger.warning(
                "suggest failed for input=%r dictionary=%s: %s",
                request.input,
                request.dictionary,
                exc,
            )
            return format_suggest_error(request, exc)
        return format_suggest_results(request, suggestions)

    async def get_study(self, request: GetStudyRequest) -> str:
        result = await self.client.get_study(request)
        if isinstance(result, bytes):
            return format_archive_study(request.nct_id, request.format, result)
        if isinstance(result, str):
            return format_raw_study(request.nct_id, request.format, result)
        return format_study_details(result)
