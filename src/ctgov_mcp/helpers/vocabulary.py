"""
Enumerated search vocabularies and the combinator for multi-valued filters.

Several search fields accept a combination of enum values inside a single
string: ``"nih OR fed OR industry"`` or ``"prot sap icf"``. A value is parsed
into an :class:`EnumCombination` (an ordered, de-duplicated tuple of tokens
validated against the field's :class:`Vocabulary`) and then re-serialized for
the target endpoint:

* ``/api/int/studies`` aggFilters want space-separated tokens.
* ``/api/v2/studies`` ``filter.advanced`` wants an ``AREA[Field]`` clause with
  ``OR``-joined tokens.

The v2 and legacy endpoints use different spellings for some fields
(``recruiting`` vs ``rec``), so each target has its own vocabulary table.
"""

from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from ctgov_mcp.exceptions import ValidationError

_TOKEN_SPLIT = re.compile(r"\s+")
_OR = "OR"


class EnumCombination(BaseModel):
    """A parsed, validated set of enum tokens for one search field."""

    model_config = ConfigDict(frozen=True)

    field: str
    tokens: tuple[str, ...]

    def as_aggfilter(self) -> str:
        """Space-separated form used by ``aggFilters`` on /api/int/studies."""
        return " ".join(self.tokens)

    def as_advanced(self) -> str:
        """Operand for an ``AREA[...]`` clause on /api/v2/studies."""
        if len(self.tokens) == 1:
            return self.tokens[0]
        return "(" + f" {_OR} ".join(self.tokens) + ")"


class Vocabulary(BaseModel):
    """Allowed tokens for one search field, with display descriptions."""

    model_config = ConfigDict(frozen=True)

    field: str  # attribute name on the request model
    descriptions: dict[str, str]
    area: str | None = None  # v2 AREA[] field; None when not filterable there
    multi: bool = True

    @property
    def param(self) -> str:
        """Name of the field as the caller spells it."""
        return to_camel(self.field)

    @property
    def tokens(self) -> tuple[str, ...]:
        return tuple(self.descriptions)

    def parse(self, value: str) -> EnumCombination:
        """Split, validate and canonicalize a raw field value."""
        raw = [t for t in _TOKEN_SPLIT.split(value.strip()) if t and t != _OR]
        if not raw:
            raise ValidationError(
                f"{self.param} must contain at least one value", field=self.param
            )

        lookup = {t.lower(): t for t in self.descriptions}
        tokens: list[str] = []
        for token in raw:
            canonical = lookup.get(token.lower())
            if canonical is None:
                raise ValidationError(
                    f"Invalid {self.param} value '{token}'. "
                    f"Allowed values: {', '.join(self.tokens)}",
                    field=self.param,
                )
            if canonical not in tokens:
                tokens.append(canonical)

        if not self.multi and len(tokens) > 1:
            raise ValidationError(
                f"{self.param} accepts a single value, got: {value}",
                field=self.param,
            )
        return EnumCombination(field=self.field, tokens=tuple(tokens))

    def describe(self, value: str) -> str:
        """Human-readable list of descriptions for a raw value."""
        combo = self.parse(value)
        return ", ".join(self.descriptions.get(t, t) for t in combo.tokens)


# ---------------------------------------------------------------------------
# Shared description tables
# ---------------------------------------------------------------------------

SEX = {"all": "All", "m": "Male", "f": "Female"}
HEALTHY = {"y": "Yes"}
VIOLATION = {"y": "Tracked"}
RESULTS = {"with": "With Results", "without": "Without Results"}

FUNDER_TYPE = {
    "nih": "NIH",
    "fed": "Federal",
    "industry": "Industry",
    "other": "Other",
    "indiv": "Individual",
    "network": "Network",
}

DOCUMENTS = {
    "prot": "Protocol",
    "sap": "Statistical Analysis Plan",
    "icf": "Informed Consent Form",
    "csr": "Clinical Study Report",
}

ALLOCATION = {
    "randomized": "Randomized",
    "nonrandomized": "Non-Randomized",
    "na": "Not Applicable",
}

MASKING = {
    "none": "Open Label (No Masking)",
    "single": "Single Blind",
    "double": "Double Blind",
    "triple": "Triple Blind",
    "quadruple": "Quadruple Blind",
}

ASSIGNMENT = {
    "single": "Single Group",
    "parallel": "Parallel Assignment",
    "crossover": "Crossover Assignment",
    "factorial": "Factorial Assignment",
    "sequential": "Sequential Assignment",
}

PURPOSE = {
    "treatment": "Treatment",
    "prevention": "Prevention",
    "diagnostic": "Diagnostic",
    "supportive": "Supportive Care",
    "screening": "Screening",
    "healthservices": "Health Services Research",
    "basicscience": "Basic Science",
    "devicefeasibility": "Device Feasibility",
    "other": "Other",
}

MODEL = {
    "cohort": "Cohort",
    "casecontrol": "Case-Control",
    "caseonly": "Case-Only",
    "casecrossover": "Case-Crossover",
    "ecologic": "Ecologic",
    "familybased": "Family-Based",
    "other": "Other",
    "defined": "Defined Population",
}

INTERVENTION_TYPE = {
    "drug": "Drug",
    "device": "Device",
    "biological": "Biological/Vaccine",
    "procedure": "Procedure/Surgery",
    "behavioral": "Behavioral",
    "genetic": "Genetic",
    "dietary": "Dietary Supplement",
    "radiation": "Radiation",
    "combination": "Combination Product",
    "diagnostic": "Diagnostic Test",
    "other": "Other",
}

TIME_PERSPECTIVE = {
    "retrospective": "Retrospective",
    "prospective": "Prospective",
    "crosssectional": "Cross-Sectional",
    "other": "Other",
}

WHO_MASKED = {
    "participant": "Participant",
    "careprovider": "Care Provider",
    "investigator": "Investigator",
    "outcomesassessor": "Outcomes Assessor",
}

# -- v2 spellings -----------------------------------------------------------

PHASE_V2 = {
    "PHASE0": "Phase 0 (Exploratory)",
    "EARLY_PHASE1": "Early Phase 1",
    "PHASE1": "Phase 1 (Safety)",
    "PHASE2": "Phase 2 (Efficacy)",
    "PHASE3": "Phase 3 (Large-scale)",
    "PHASE4": "Phase 4 (Post-marketing)",
    "NA": "Not Applicable",
}

STATUS_V2 = {
    "not_yet_recruiting": "Not yet recruiting",
    "recruiting": "Recruiting",
    "active_not_recruiting": "Active, not recruiting",
    "completed": "Completed",
    "terminated": "Terminated",
    "enrolling_by_invitation": "Enrolling by invitation",
    "suspended": "Suspended",
    "withdrawn": "Withdrawn",
    "unknown": "Unknown status",
    "available": "Available (Expanded Access)",
    "no_longer_available": "No longer available (Expanded Access)",
    "temporarily_not_available": "Temporarily not available (Expanded Access)",
    "approved_for_marketing": "Approved for marketing",
}

AGES_V2 = {
    "child": "Child (birth-17)",
    "adult": "Adult (18-64)",
    "older_adult": "Older Adult (65+)",
}

STUDY_TYPE_V2 = {
    "interventional": "Interventional",
    "observational": "Observational",
    "observational_patient_registry": "Observational (Patient Registry)",
    "expanded_access": "Expanded Access",
    "expanded_access_individual": "Expanded Access (Individual)",
    "expanded_access_intermediate": "Expanded Access (Intermediate)",
    "expanded_access_treatment": "Expanded Access (Treatment)",
}

# -- legacy (/api/int) spellings --------------------------------------------

PHASE_LEGACY = {
    "0": "Phase 0 (Exploratory)",
    "early1": "Early Phase 1",
    "1": "Phase 1 (Safety)",
    "2": "Phase 2 (Efficacy)",
    "3": "Phase 3 (Large-scale)",
    "4": "Phase 4 (Post-marketing)",
    "NA": "Not Applicable",
}

STATUS_LEGACY = {
    "not": "Not yet recruiting",
    "rec": "Recruiting",
    "act": "Active, not recruiting",
    "com": "Completed",
    "ter": "Terminated",
    "enr": "Enrolling by invitation",
    "sus": "Suspended",
    "wit": "Withdrawn",
    "unk": "Unknown status",
    "ava": "Available (Expanded Access)",
    "nla": "No longer available (Expanded Access)",
    "tna": "Temporarily not available (Expanded Access)",
    "afm": "Approved for marketing",
}

AGES_LEGACY = {
    "child": "Child (birth-17)",
    "adult": "Adult (18-64)",
    "older": "Older Adult (65+)",
}

STUDY_TYPE_LEGACY = {
    "int": "Interventional",
    "obs": "Observational",
    "obs_patreg": "Observational (Patient Registry)",
    "exp": "Expanded Access",
    "exp_indiv": "Expanded Access (Individual)",
    "exp_inter": "Expanded Access (Intermediate)",
    "exp_treat": "Expanded Access (Treatment)",
}

EXPANDED_ACCESS_STATUSES = frozenset(
    {
        "available",
        "no_longer_available",
        "temporarily_not_available",
        "approved_for_marketing",
        "ava",
        "nla",
        "tna",
        "afm",
    }
)


def _vocabularies(*items: Vocabulary) -> dict[str, Vocabulary]:
    return {v.field: v for v in items}


# Order matters: it is the order clauses appear in filter.advanced.
V2_VOCABULARIES: dict[str, Vocabulary] = _vocabularies(
    Vocabulary(field="phase", descriptions=PHASE_V2, area="Phase"),
    Vocabulary(field="status", descriptions=STATUS_V2, area="OverallStatus"),
    Vocabulary(field="ages", descriptions=AGES_V2, area="StdAge"),
    Vocabulary(field="study_type", descriptions=STUDY_TYPE_V2, area="StudyType"),
    Vocabulary(field="funder_type", descriptions=FUNDER_TYPE, area="LeadSponsorClass"),
    Vocabulary(field="allocation", descriptions=ALLOCATION, area="DesignAllocation"),
    Vocabulary(field="masking", descriptions=MASKING, area="DesignMasking"),
    Vocabulary(
        field="assignment", descriptions=ASSIGNMENT, area="DesignInterventionModel"
    ),
    Vocabulary(field="purpose", descriptions=PURPOSE, area="DesignPrimaryPurpose"),
    Vocabulary(
        field="intervention_type",
        descriptions=INTERVENTION_TYPE,
        area="InterventionType",
    ),
    Vocabulary(field="model", descriptions=MODEL, area="DesignObservationalModel"),
    Vocabulary(
        field="time_perspective",
        descriptions=TIME_PERSPECTIVE,
        area="DesignTimePerspective",
    ),
    Vocabulary(field="who_masked", descriptions=WHO_MASKED, area="DesignWhoMasked"),
    # Validated and echoed, but the v2 endpoint has no filter for these.
    Vocabulary(field="sex", descriptions=SEX, multi=False),
    Vocabulary(field="healthy", descriptions=HEALTHY, multi=False),
    Vocabulary(field="results", descriptions=RESULTS),
    Vocabulary(field="docs", descriptions=DOCUMENTS),
    Vocabulary(field="violation", descriptions=VIOLATION, multi=False),
)

# Order matters: it is the order of entries in aggFilters.
LEGACY_VOCABULARIES: dict[str, Vocabulary] = _vocabularies(
    Vocabulary(field="phase", descriptions=PHASE_LEGACY),
    Vocabulary(field="status", descriptions=STATUS_LEGACY),
    Vocabulary(field="ages", descriptions=AGES_LEGACY),
    Vocabulary(field="sex", descriptions=SEX, multi=False),
    Vocabulary(field="healthy", descriptions=HEALTHY, multi=False),
    Vocabulary(field="study_type", descriptions=STUDY_TYPE_LEGACY),
    Vocabulary(field="funder_type", descriptions=FUNDER_TYPE),
    Vocabulary(field="results", descriptions=RESULTS),
    Vocabulary(field="docs", descriptions=DOCUMENTS),
    Vocabulary(field="violation", descriptions=VIOLATION, multi=False),
    Vocabulary(field="allocation", descriptions=ALLOCATION),
    Vocabulary(field="masking", descriptions=MASKING),
    Vocabulary(field="assignment", descriptions=ASSIGNMENT),
    Vocabulary(field="purpose", descriptions=PURPOSE),
    Vocabulary(field="model", descriptions=MODEL),
    Vocabulary(field="intervention_type", descriptions=INTERVENTION_TYPE),
    Vocabulary(field="time_perspective", descriptions=TIME_PERSPECTIVE),
    Vocabulary(field="who_masked", descriptions=WHO_MASKED),
)
