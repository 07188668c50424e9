"""Project-wide constants."""

import re

# -- ClinicalTrials.gov endpoints -------------------------------------------
CTGOV_BASE_URL: str = "https://clinicaltrials.gov"
STUDIES_URL: str = f"{CTGOV_BASE_URL}/api/v2/studies"
LEGACY_STUDIES_URL: str = f"{CTGOV_BASE_URL}/api/int/studies"
SUGGEST_URL: str = f"{CTGOV_BASE_URL}/api/int/suggest"
STUDY_PAGE_URL: str = f"{CTGOV_BASE_URL}/study"

# -- HTTP defaults ----------------------------------------------------------
DEFAULT_TIMEOUT: float = 30.0
DEFAULT_USER_AGENT: str = "ct.gov-mcp-server/1.0"

# -- Pagination -------------------------------------------------------------
DEFAULT_PAGE_SIZE: int = 10
MAX_PAGE_SIZE: int = 1000  # v2 API
MAX_LEGACY_LIMIT: int = 100  # /api/int/studies

# -- Input patterns ---------------------------------------------------------
NCT_ID_PATTERN: re.Pattern[str] = re.compile(r"^[Nn][Cc][Tt]0*[1-9][0-9]{0,7}$")
DATE_RANGE_PATTERN: re.Pattern[str] = re.compile(
    r"^[0-9]{4}-[0-9]{2}-[0-9]{2}_[0-9]{4}-[0-9]{2}-[0-9]{2}$"
)
DATE_RANGE_OR_AFTER_PATTERN: re.Pattern[str] = re.compile(
    r"^[0-9]{4}-[0-9]{2}-[0-9]{2}_([0-9]{4}-[0-9]{2}-[0-9]{2})?$"
)
AGE_RANGE_PATTERN: re.Pattern[str] = re.compile(r"^([0-9]+)([ym])_([0-9]+)([ym])$")
SUGGEST_MIN_INPUT_LENGTH: int = 2

# -- Get-study formats ------------------------------------------------------
STUDY_FORMATS: tuple[str, ...] = ("json", "csv", "json.zip", "fhir.json", "ris")
MARKUP_FORMATS: tuple[str, ...] = ("markdown", "legacy")

# -- Suggest dictionaries → display label -----------------------------------
SUGGEST_DICTIONARIES: dict[str, str] = {
    "Condition": "Medical Conditions",
    "InterventionName": "Interventions & Treatments",
    "LeadSponsorName": "Lead Sponsors",
    "LocationFacility": "Medical Facilities",
}

SUGGEST_DICTIONARY_NOTES: dict[str, tuple[str, str]] = {
    "Condition": (
        "Contains medical conditions, diseases, and health disorders",
        "Use for precise condition names in clinical trial searches",
    ),
    "InterventionName": (
        "Contains treatments, drugs, procedures, and interventions",
        "Includes brand names, generic names, and treatment types",
    ),
    "LeadSponsorName": (
        "Contains pharmaceutical companies, research institutions, and organizations",
        "Use to find trials sponsored by specific entities",
    ),
    "LocationFacility": (
        "Contains hospital names, medical centers, and research facilities",
        "Use to find trials at specific institutions",
    ),
}

# -- Unified tool -----------------------------------------------------------
UNIFIED_TOOL_NAME: str = "ct_gov_studies"
UNIFIED_METHODS: tuple[str, ...] = ("search", "suggest", "get")

SORT_OPTIONS: tuple[str, ...] = (
    "@relevance",
    "StudyFirstPostDate",
    "LastUpdatePostDate",
    "NCTId",
    "StartDate",
    "PrimaryCompletionDate",
    "CompletionDate",
    "EnrollmentCount",
)
