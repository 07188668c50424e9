"""Request and response models."""

from ctgov_mcp.models.requests import (
    GetStudyRequest,
    LegacySearchRequest,
    SearchRequest,
    SuggestRequest,
    decode_request,
)
from ctgov_mcp.models.study import LegacySearchPage, SearchPage, StudyRecord

__all__ = [
    "GetStudyRequest",
    "LegacySearchRequest",
    "SearchRequest",
    "SuggestRequest",
    "decode_request",
    "LegacySearchPage",
    "SearchPage",
    "StudyRecord",
]
