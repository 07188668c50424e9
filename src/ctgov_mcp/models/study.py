"""
Pydantic models for ClinicalTrials.gov study payloads.

These mirror the nested v2 JSON shape (``protocolSection`` / ``derivedSection``)
closely enough for the formatter. Every module is optional and every field has
a default, because callers can trim the payload with ``fields[]`` and the API
omits empty modules. Unknown keys are ignored.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """Base for read-only API payload models (camelCase on the wire)."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )


# ------------------------------------------------------------------
# Identification / status
# ------------------------------------------------------------------


class IdentificationModule(ApiModel):
    nct_id: str = ""
    brief_title: str = ""
    official_title: str | None = None
    acronym: str | None = None


class DateStruct(ApiModel):
    date: str | None = None
    type: str | None = None  # ACTUAL | ESTIMATED


class StatusModule(ApiModel):
    overall_status: str | None = None
    why_stopped: str | None = None
    status_verified_date: str | None = None
    study_first_submit_date: str | None = None
    start_date_struct: DateStruct | None = None
    primary_completion_date_struct: DateStruct | None = None
    completion_date_struct: DateStruct | None = None


# ------------------------------------------------------------------
# Sponsors / oversight / description
# ------------------------------------------------------------------


class Sponsor(ApiModel):
    name: str = ""
    sponsor_class: str | None = Field(default=None, alias="class")


class SponsorCollaboratorsModule(ApiModel):
    lead_sponsor: Sponsor | None = None
    collaborators: list[Sponsor] = []


class OversightModule(ApiModel):
    oversight_has_dmc: bool | None = None
    is_fda_regulated_drug: bool | None = None
    is_fda_regulated_device: bool | None = None
    is_unapproved_device: bool | None = None


class DescriptionModule(ApiModel):
    brief_summary: str | None = None
    detailed_description: str | None = None


class ConditionsModule(ApiModel):
    conditions: list[str] = []
    keywords: list[str] = []


# ------------------------------------------------------------------
# Design
# ------------------------------------------------------------------


class MaskingInfo(ApiModel):
    masking: str | None = None
    who_masked: list[str] = []


class DesignInfo(ApiModel):
    allocation: str | None = None
    intervention_model: str | None = None
    primary_purpose: str | None = None
    observational_model: str | None = None
    time_perspective: str | None = None
    masking_info: MaskingInfo | None = None


class EnrollmentInfo(ApiModel):
    count: int | None = None
    type: str | None = None


class DesignModule(ApiModel):
    study_type: str | None = None
    phases: list[str] = []
    design_info: DesignInfo | None = None
    enrollment_info: EnrollmentInfo | None = None


# ------------------------------------------------------------------
# Arms / outcomes / eligibility / locations
# ------------------------------------------------------------------


class ArmGroup(ApiModel):
    label: str = ""
    type: str | None = None
    description: str | None = None
    intervention_names: list[str] = []


class Intervention(ApiModel):
    type: str | None = None
    name: str = ""
    description: str | None = None
    arm_group_labels: list[str] = []


class ArmsInterventionsModule(ApiModel):
    arm_groups: list[ArmGroup] = []
    interventions: list[Intervention] = []


class Outcome(ApiModel):
    measure: str = ""
    description: str | None = None
    time_frame: str | None = None


class OutcomesModule(ApiModel):
    primary_outcomes: list[Outcome] = []
    secondary_outcomes: list[Outcome] = []


class EligibilityModule(ApiModel):
    eligibility_criteria: str | None = None
    healthy_volunteers: bool | None = None
    sex: str | None = None
    minimum_age: str | None = None
    maximum_age: str | None = None


class Location(ApiModel):
    facility: str | None = None
    status: str | None = None
    city: str | None = None
    state: str | None = None
    country: str | None = None


class Official(ApiModel):
    name: str = ""
    affiliation: str | None = None
    role: str | None = None


class ContactsLocationsModule(ApiModel):
    locations: list[Location] = []
    overall_officials: list[Official] = []


class Reference(ApiModel):
    pmid: str | None = None
    type: str | None = None
    citation: str = ""


class ReferencesModule(ApiModel):
    references: list[Reference] = []


class ProtocolSection(ApiModel):
    identification_module: IdentificationModule = IdentificationModule()
    status_module: StatusModule = StatusModule()
    sponsor_collaborators_module: SponsorCollaboratorsModule | None = None
    oversight_module: OversightModule | None = None
    description_module: DescriptionModule | None = None
    conditions_module: ConditionsModule | None = None
    design_module: DesignModule | None = None
    arms_interventions_module: ArmsInterventionsModule | None = None
    outcomes_module: OutcomesModule | None = None
    eligibility_module: EligibilityModule | None = None
    contacts_locations_module: ContactsLocationsModule | None = None
    references_module: ReferencesModule | None = None


# ------------------------------------------------------------------
# Derived section (MeSH)
# ------------------------------------------------------------------


class MeshTerm(ApiModel):
    id: str = ""
    term: str = ""


class BrowseModule(ApiModel):
    meshes: list[MeshTerm] = []


class DerivedSection(ApiModel):
    condition_browse_module: BrowseModule | None = None
    intervention_browse_module: BrowseModule | None = None


# ------------------------------------------------------------------
# Top-level payloads
# ------------------------------------------------------------------


class StudyRecord(ApiModel):
    """One study as returned by /api/v2/studies/{nctId} or inside a search page."""

    protocol_section: ProtocolSection = ProtocolSection()
    derived_section: DerivedSection | None = None
    has_results: bool = False

    @property
    def nct_id(self) -> str:
        return self.protocol_section.identification_module.nct_id


class SearchPage(ApiModel):
    """A page of /api/v2/studies results."""

    studies: list[StudyRecord] = []
    total_count: int | None = None
    next_page_token: str | None = None


class LegacyHit(ApiModel):
    id: str = ""
    study: StudyRecord = StudyRecord()


class LegacySearchPage(ApiModel):
    """A page of /api/int/studies results."""

    total: int = 0
    hits: list[LegacyHit] = []
