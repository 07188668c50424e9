"""Pytest configuration and fixtures."""

import json
from unittest.mock import AsyncMock, MagicMock

import pytest

from ctgov_mcp.data_sources.clinical_trials import ClinicalTrialsGovClient


def _make_response(
    status: int = 200,
    body: object = None,
    reason: str = "OK",
    headers: dict | None = None,
) -> AsyncMock:
    """Fake aiohttp response; dict/list bodies are JSON-encoded, str bodies UTF-8."""
    if isinstance(body, bytes):
        content = body
    elif isinstance(body, str):
        content = body.encode("utf-8")
    else:
        content = json.dumps(body).encode("utf-8")
    resp = AsyncMock()
    resp.status = status
    resp.reason = reason
    resp.headers = headers or {}
    resp.read = AsyncMock(return_value=content)
    resp.__aenter__.return_value = resp
    resp.__aexit__.return_value = False
    return resp


def _make_session(*responses: AsyncMock) -> AsyncMock:
    """Fake aiohttp session whose get() yields the responses in order."""
    session = AsyncMock()
    session.closed = False
    if len(responses) == 1:
        session.get = MagicMock(return_value=responses[0])
    else:
        session.get = MagicMock(side_effect=list(responses))
    return session


def _requested_url(session: AsyncMock) -> str:
    """URL of the most recent session.get() call."""
    return session.get.call_args.args[0]


@pytest.fixture
def minimal_study() -> dict:
    """A study carrying only the mandatory fields."""
    return {
        "protocolSection": {
            "identificationModule": {
                "nctId": "NCT01234567",
                "briefTitle": "Metformin in Early Type 2 Diabetes",
            },
            "statusModule": {"overallStatus": "RECRUITING"},
        }
    }


@pytest.fixture
def full_study() -> dict:
    """A study with every section the formatter renders."""
    return {
        "protocolSection": {
            "identificationModule": {
                "nctId": "NCT00841061",
                "briefTitle": "Semaglutide and Cardiovascular Outcomes",
                "officialTitle": "A Randomized Trial of Semaglutide in Adults With Obesity",
                "acronym": "SELECT",
            },
            "statusModule": {
                "overallStatus": "ACTIVE_NOT_RECRUITING",
                "statusVerifiedDate": "2024-03",
                "studyFirstSubmitDate": "2009-02-10",
                "startDateStruct": {"date": "2009-03-01", "type": "ACTUAL"},
                "primaryCompletionDateStruct": {"date": "2026-06", "type": "ESTIMATED"},
            },
            "sponsorCollaboratorsModule": {
                "leadSponsor": {"name": "Novo Nordisk A/S", "class": "INDUSTRY"},
                "collaborators": [{"name": "Duke University", "class": "OTHER"}],
            },
            "oversightModule": {"oversightHasDmc": True, "isFdaRegulatedDrug": False},
            "descriptionModule": {"briefSummary": "Tests semaglutide against placebo."},
            "conditionsModule": {"conditions": ["Obesity", "Cardiovascular Disease"]},
            "designModule": {
                "studyType": "INTERVENTIONAL",
                "phases": ["PHASE3"],
                "designInfo": {
                    "allocation": "RANDOMIZED",
                    "interventionModel": "PARALLEL",
                    "primaryPurpose": "PREVENTION",
                    "maskingInfo": {
                        "masking": "QUADRUPLE",
                        "whoMasked": ["PARTICIPANT", "INVESTIGATOR"],
                    },
                },
                "enrollmentInfo": {"count": 17604, "type": "ACTUAL"},
            },
            "armsInterventionsModule": {
                "armGroups": [
                    {
                        "label": "Semaglutide",
                        "type": "EXPERIMENTAL",
                        "interventionNames": ["Drug: Semaglutide"],
                    }
                ],
                "interventions": [
                    {
                        "type": "DRUG",
                        "name": "Semaglutide",
                        "armGroupLabels": ["Semaglutide"],
                    }
                ],
            },
            "outcomesModule": {
                "primaryOutcomes": [
                    {"measure": "Time to first MACE", "timeFrame": "Up to 59 months"}
                ]
            },
            "eligibilityModule": {
                "eligibilityCriteria": "Inclusion Criteria:\n* Age >= 45 years",
                "healthyVolunteers": False,
                "sex": "ALL",
                "minimumAge": "45 Years",
            },
            "contactsLocationsModule": {
                "locations": [
                    {
                        "facility": "Duke Clinical Research Institute",
                        "city": "Durham",
                        "state": "North Carolina",
                        "country": "United States",
                        "status": "COMPLETED",
                    }
                ],
                "overallOfficials": [
                    {
                        "name": "Clinical Reporting Anchor",
                        "affiliation": "Novo Nordisk A/S",
                        "role": "STUDY_DIRECTOR",
                    }
                ],
            },
            "referencesModule": {
                "references": [{"pmid": "37952131", "citation": "Lincoff AM, et al."}]
            },
        },
        "derivedSection": {
            "conditionBrowseModule": {"meshes": [{"id": "D009765", "term": "Obesity"}]}
        },
        "hasResults": False,
    }


@pytest.fixture
def search_payload(minimal_study) -> dict:
    """One-study v2 search page with a large total."""
    return {"studies": [minimal_study], "totalCount": 100}


@pytest.fixture
def client() -> ClinicalTrialsGovClient:
    return ClinicalTrialsGovClient()


@pytest.fixture
def make_response():
    return _make_response


@pytest.fixture
def make_session():
    return _make_session


@pytest.fixture
def requested_url():
    return _requested_url
