"""Live tests against ClinicalTrials.gov. Run with CTGOV_LIVE_TESTS=1."""

import os

import pytest

from ctgov_mcp.data_sources.clinical_trials import ClinicalTrialsGovClient
from ctgov_mcp.exceptions import NotFoundError
from ctgov_mcp.services.dispatcher import StudiesDispatcher

pytestmark = [
    pytest.mark.live,
    pytest.mark.skipif(
        os.environ.get("CTGOV_LIVE_TESTS") != "1",
        reason="CTGOV_LIVE_TESTS not set, skipping live API tests",
    ),
]


@pytest.fixture
async def dispatcher():
    client = ClinicalTrialsGovClient()
    yield StudiesDispatcher(client)
    await client.close()


async def test_search_diabetes(dispatcher):
    """A broad condition search returns studies and a total."""
    text = await dispatcher.dispatch({"method": "search", "condition": "diabetes", "pageSize": 3})
    assert "studies found" in text
    assert "https://clinicaltrials.gov/study/NCT" in text


async def test_search_with_enum_filters(dispatcher):
    """Enum filters produce a filter.advanced the API accepts."""
    text = await dispatcher.dispatch(
        {
            "method": "search",
            "condition": "asthma",
            "phase": "PHASE2 OR PHASE3",
            "status": "completed",
            "pageSize": 2,
        }
    )
    assert "# Clinical Trials Search Results" in text


async def test_suggest_condition(dispatcher):
    text = await dispatcher.dispatch({"method": "suggest", "input": "diab", "dictionary": "Condition"})
    assert "# ClinicalTrials.gov Suggestions" in text


async def test_get_known_study(dispatcher):
    text = await dispatcher.dispatch({"method": "get", "nctId": "NCT00841061"})
    assert text.startswith("# Clinical Trial Details: NCT00841061")


async def test_get_missing_study(dispatcher):
    with pytest.raises(NotFoundError):
        await dispatcher.dispatch({"method": "get", "nctId": "NCT99999999"})
