"""
ClinicalTrials.gov REST API client.

Four methods:
  1. search_studies       : /api/v2/studies search page
  2. legacy_search_studies: /api/int/studies search page (legacy tool)
  3. suggest              : /api/int/suggest terminology list
  4. get_study            : /api/v2/studies/{nctId}, JSON or raw text
"""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from ctgov_mcp.data_sources.base_client import BaseClient, HttpResponse, RequestContext
from ctgov_mcp.exceptions import ApiRequestError, NotFoundError, RedirectedError
from ctgov_mcp.models.requests import (
    GetStudyRequest,
    LegacySearchRequest,
    SearchRequest,
    SuggestRequest,
)
from ctgov_mcp.models.study import LegacySearchPage, SearchPage, StudyRecord
from ctgov_mcp.services.query_builder import (
    build_legacy_search_url,
    build_search_url,
    build_study_url,
    build_suggest_url,
)

PayloadT = TypeVar("PayloadT", bound=BaseModel)

REDIRECT_STATUSES = {301, 302, 307, 308}
BINARY_FORMATS = {"json.zip"}


class ClinicalTrialsGovClient(BaseClient):
    @property
    def _source_name(self) -> str:
        return "clinical_trials"

    def _context(self, method: str) -> RequestContext:
        return RequestContext(source=self._source_name, method=method)

    # ------------------------------------------------------------------
    # Public: search
    # ------------------------------------------------------------------

    async def search_studies(self, request: SearchRequest) -> SearchPage:
        """One page of v2 search results."""
        resp = await self._get(
            build_search_url(request), context=self._context("search_studies")
        )
        self._raise_for_status(resp)
        return _parse(SearchPage, resp)

    async def legacy_search_studies(
        self, request: LegacySearchRequest
    ) -> LegacySearchPage:
        resp = await self._get(
            build_legacy_search_url(request),
            context=self._context("legacy_search_studies"),
        )
        self._raise_for_status(resp)
        return _parse(LegacySearchPage, resp)

    # ------------------------------------------------------------------
    # Public: suggest
    # ------------------------------------------------------------------

    async def suggest(self, request: SuggestRequest) -> list[str]:
        resp = await self._get(
            build_suggest_url(request), context=self._context("suggest")
        )
        self._raise_for_status(resp)
        data = resp.parse_json()
        if not isinstance(data, list):
            raise ApiRequestError(
                f"Unexpected suggest response from {resp.url}: expected a list",
                status_code=resp.status,
                status_text=resp.reason,
                url=resp.url,
            )
        return [str(item) for item in data]

    # ------------------------------------------------------------------
    # Public: get_study
    # ------------------------------------------------------------------

    async def get_study(self, request: GetStudyRequest) -> StudyRecord | str | bytes:
        """
        Fetch one study.

        Returns a StudyRecord for ``format=json``, the raw bytes for
        ``format=json.zip`` and the decoded response body for every other
        format.

        Raises
        ------
        NotFoundError
            404 for the NCT ID.
        RedirectedError
            The NCT ID is an alias and the API answered with a redirect.
        ApiRequestError
            Any other non-2xx status.
        """
        is_json = request.format == "json"
        resp = await self._get(
            build_study_url(request),
            accept="application/json" if is_json else None,
            context=self._context("get_study"),
        )

        if resp.status == 404:
            raise NotFoundError(request.nct_id, url=resp.url)
        if resp.status in REDIRECT_STATUSES:
            raise RedirectedError(
                request.nct_id,
                location=resp.header("Location"),
                url=resp.url,
                status_code=resp.status,
            )
        self._raise_for_status(resp)

        if request.format in BINARY_FORMATS:
            return resp.content
        if not is_json:
            return resp.body
        return _parse(StudyRecord, resp)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _raise_for_status(resp: HttpResponse) -> None:
        if not resp.ok:
            raise ApiRequestError.from_status(resp.status, resp.reason, url=resp.url)


def _parse(model: type[PayloadT], resp: HttpResponse) -> PayloadT:
    data: Any = resp.parse_json()
    try:
        return model.model_validate(data)
    except PydanticValidationError as exc:
        raise ApiRequestError(
            f"Unexpected response shape from {resp.url}: {exc.error_count()} error(s)",
            status_code=resp.status,
            status_text=resp.reason,
            url=resp.url,
        ) from exc
