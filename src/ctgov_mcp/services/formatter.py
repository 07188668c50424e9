"""
Markdown rendering of ClinicalTrials.gov responses.

Every function here is pure: the same input always yields byte-identical
output. Optional sections are omitted when their data is absent, so no empty
headers are ever emitted.
"""

from __future__ import annotations

import base64
import json
from datetime import date, datetime
from typing import Any

from ctgov_mcp.constants import (
    MAX_PAGE_SIZE,
    STUDY_PAGE_URL,
    SUGGEST_DICTIONARIES,
    SUGGEST_DICTIONARY_NOTES,
    SUGGEST_URL,
)
from ctgov_mcp.helpers.vocabulary import (
    EXPANDED_ACCESS_STATUSES,
    LEGACY_VOCABULARIES,
    V2_VOCABULARIES,
    Vocabulary,
)
from ctgov_mcp.models.requests import (
    LegacySearchRequest,
    SearchFilters,
    SearchRequest,
    SuggestRequest,
)
from ctgov_mcp.models.study import (
    DateStruct,
    LegacySearchPage,
    Outcome,
    SearchPage,
    StudyRecord,
)

INVALID_DATE = "Invalid Date"

# request field -> label in the "Search Criteria" summary
CRITERIA_LABELS: dict[str, str] = {
    "complex_query": "Complex Query",
    "condition": "Condition",
    "term": "Terms",
    "intervention": "Intervention",
    "titles": "Titles",
    "outc": "Outcomes",
    "id": "ID",
    "phase": "Phase",
    "status": "Status",
    "ages": "Ages",
    "age_range": "Age Range",
    "sex": "Sex",
    "location": "Location",
    "lead": "Lead Sponsor",
    "healthy": "Healthy Volunteers",
    "study_type": "Study Type",
    "funder_type": "Funding",
    "results": "Results Available",
    "docs": "Documents",
    "violation": "FDA Violations",
    "allocation": "Allocation",
    "masking": "Masking",
    "assignment": "Assignment",
    "purpose": "Purpose",
    "model": "Model",
    "intervention_type": "Intervention Type",
    "time_perspective": "Time Perspective",
    "who_masked": "Who Masked",
    "start": "Start Date",
    "prim_comp": "Primary Completion",
    "first_post": "First Posted",
    "res_first_post": "Results Posted",
    "last_upd_post": "Last Updated",
    "study_comp": "Study Completion",
    "sort": "Sort",
}

# date-range field -> phrase used in the legacy "Temporal Filtering" note
TEMPORAL_PHRASES: dict[str, str] = {
    "start": "Studies starting",
    "prim_comp": "Primary completion",
    "first_post": "First posted",
    "res_first_post": "Results first posted",
    "last_upd_post": "Last updated",
    "study_comp": "Study completion",
}

DOCUMENT_NOTES: dict[str, str] = {
    "prot": "Protocol documents provide detailed study procedures and methodology",
    "sap": "Statistical Analysis Plans outline how study data will be analyzed",
    "icf": "Informed Consent Forms show what participants are told about the study",
}

STUDY_TYPE_NOTES: dict[str, str] = {
    "int": "Interventional studies test new treatments, drugs, or medical devices",
    "obs": "Observational studies observe participants without providing treatment",
    "obs_patreg": "Patient registry studies collect data about participants over time",
    "exp": (
        "Expanded access studies provide experimental treatments to patients "
        "with serious conditions"
    ),
    "exp_indiv": "Individual patient expanded access programs",
    "exp_inter": "Intermediate-size expanded access programs",
    "exp_treat": "Treatment expanded access programs",
}


# ------------------------------------------------------------------
# Value helpers
# ------------------------------------------------------------------


def format_enum_value(value: str | None) -> str:
    """``ACTIVE_NOT_RECRUITING`` -> ``Active Not Recruiting``."""
    if not value:
        return ""
    return " ".join(word[:1].upper() + word[1:].lower() for word in value.split("_"))


def _parse_date(value: str) -> date | None:
    for fmt in ("%Y-%m-%d", "%Y-%m", "%Y"):
        try:
            return datetime.strptime(value, fmt).date()
        except ValueError:
            continue
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
    except ValueError:
        return None


def format_date(value: str | None) -> str:
    """``2024-01-15`` -> ``January 15, 2024``; unparseable input -> ``Invalid Date``."""
    parsed = _parse_date(value.strip()) if value else None
    if parsed is None:
        return INVALID_DATE
    return f"{parsed:%B} {parsed.day}, {parsed.year}"


def format_number(value: int) -> str:
    return f"{value:,}"


def study_link(nct_id: str) -> str:
    return f"{STUDY_PAGE_URL}/{nct_id}"


def _yes_no(flag: bool) -> str:
    return "Yes" if flag else "No"


def _date_struct(label: str, struct: DateStruct | None) -> str | None:
    if struct is None or not struct.date:
        return None
    line = f"**{label}:** {format_date(struct.date)}"
    if struct.type:
        line += f" ({format_enum_value(struct.type)})"
    return line


# ------------------------------------------------------------------
# Search criteria summary
# ------------------------------------------------------------------


def describe_criteria(
    request: SearchFilters, vocabularies: dict[str, Vocabulary]
) -> list[str]:
    """``Label: value`` for every supplied filter, enum codes described."""
    lines: list[str] = []
    for field, label in CRITERIA_LABELS.items():
        value = getattr(request, field, None)
        if value is None:
            continue
        vocabulary = vocabularies.get(field)
        if vocabulary is not None:
            value = vocabulary.describe(value)
        elif field == "sort":
            value = value.replace("@", "")
        lines.append(f"{label}: {value}")
    return lines


# ------------------------------------------------------------------
# Search (/api/v2/studies)
# ------------------------------------------------------------------


def _study_summary(index: int, study: StudyRecord) -> list[str]:
    protocol = study.protocol_section
    ident = protocol.identification_module
    status = protocol.status_module
    design = protocol.design_module
    conditions = protocol.conditions_module
    sponsor = protocol.sponsor_collaborators_module

    lines = [
        f"### {index}. {ident.brief_title or ident.nct_id}",
        f"**NCT ID:** [{ident.nct_id}]({study_link(ident.nct_id)})",
    ]
    if status.overall_status:
        lines.append(f"**Status:** {format_enum_value(status.overall_status)}")
    if design is not None:
        if design.phases:
            phases = ", ".join(format_enum_value(p) for p in design.phases)
            lines.append(f"**Phase:** {phases}")
        if design.study_type:
            lines.append(f"**Study Type:** {format_enum_value(design.study_type)}")
        if design.enrollment_info and design.enrollment_info.count:
            count = format_number(design.enrollment_info.count)
            lines.append(f"**Enrollment:** {count} participants")
    if conditions is not None and conditions.conditions:
        shown = ", ".join(conditions.conditions[:3])
        extra = len(conditions.conditions) - 3
        more = f" (+{extra} more)" if extra > 0 else ""
        lines.append(f"**Conditions:** {shown}{more}")
    if sponsor is not None and sponsor.lead_sponsor is not None:
        lines.append(f"**Lead Sponsor:** {sponsor.lead_sponsor.name}")
    if status.why_stopped:
        lines.append(f"**Why Stopped:** {status.why_stopped}")
    if status.status_verified_date:
        lines.append(f"**Status Verified:** {format_date(status.status_verified_date)}")
    if status.study_first_submit_date:
        lines.append(f"**Posted:** {format_date(status.study_first_submit_date)}")
    return lines


def next_page_example(request: SearchRequest, page_token: str) -> dict[str, Any]:
    """Arguments for the call that fetches the page after this one."""
    return {
        "method": "search",
        **request.criteria(),
        "pageSize": request.effective_page_size,
        "pageToken": page_token,
    }


def format_search_results(page: SearchPage, request: SearchRequest) -> str:
    page_size = request.effective_page_size
    studies = page.studies
    shown = min(len(studies), page_size)

    lines = ["# Clinical Trials Search Results", "", "**Search Criteria:**"]
    criteria = describe_criteria(request, V2_VOCABULARIES)
    if criteria:
        lines.extend(f"- {c}" for c in criteria)
    else:
        lines.append("- No specific filters applied")
    if request.complex_query:
        lines.append("- Note: the complex query supersedes the individual filters")
    lines.append("")

    if page.total_count is not None:
        total = page.total_count
        lines.append(
            f"**Results:** {shown} of {format_number(total)} studies found"
        )
    else:
        total = None
        lines.append(
            f"**Results:** {shown} studies returned (total count not requested)"
        )
    lines.append("")

    if not studies:
        lines += [
            "No clinical trials found matching your criteria.",
            "",
            "**Suggestions:**",
            "- Try broader search terms",
            "- Remove some filters",
            "- Check spelling of condition or intervention names",
            "- Use the suggest method to find proper terminology",
        ]
        return "\n".join(lines) + "\n"

    lines += ["## Studies", ""]
    for index, study in enumerate(studies, start=1):
        lines += _study_summary(index, study)
        lines.append("")
        if index < len(studies):
            lines += ["---", ""]

    if page.next_page_token:
        example = json.dumps(next_page_example(request, page.next_page_token), indent=2)
        lines += [
            "---",
            "",
            "**Next Page Available**",
            f'To get the next page, use: `pageToken: "{page.next_page_token}"`',
            "",
            "**Example next page request:**",
            "```json",
            example,
            "```",
            "",
        ]
    elif total is not None and total > page_size:
        lines += [
            "---",
            "",
            f"**Showing {len(studies)} of {format_number(total)} total results**",
            "",
            "**Tip:** To see more results, you can:",
            f"- Increase the `pageSize` parameter (max {MAX_PAGE_SIZE})",
            "- Use more specific search criteria to narrow results",
            "- Use the `sort` parameter to change result ordering",
            "",
        ]

    lines += [
        "**API Information:**",
        "- Search performed against ClinicalTrials.gov API v2",
        "- Data includes all registered studies regardless of status",
        "- Results are updated daily from the official registry",
    ]
    return "\n".join(lines) + "\n"


# ------------------------------------------------------------------
# Search (/api/int/studies, legacy tool)
# ------------------------------------------------------------------


def _legacy_notes(request: LegacySearchRequest) -> list[str]:
    notes: list[str] = []

    if request.status:
        tokens = LEGACY_VOCABULARIES["status"].parse(request.status).tokens
        if EXPANDED_ACCESS_STATUSES.intersection(tokens):
            notes.append(
                "**Expanded Access Information:** Some results may include "
                "expanded access programs (compassionate use) - treatments "
                "available outside of clinical trials for patients with serious "
                "conditions who cannot participate in trials."
            )

    if request.healthy == "y":
        notes.append(
            "**Healthy Volunteers:** These studies accept healthy volunteers who "
            "do not have the condition being studied but can help researchers "
            "learn more about how the body works."
        )

    if request.docs:
        tokens = LEGACY_VOCABULARIES["docs"].parse(request.docs).tokens
        described = [DOCUMENT_NOTES[t] for t in tokens if t in DOCUMENT_NOTES]
        if described:
            notes.append(f"**Document Information:** {'. '.join(described)}.")

    if request.violation == "y":
        notes.append(
            "**FDA Compliance:** Results include studies with reported FDA "
            "violations or compliance issues. Review study details carefully."
        )

    if request.study_type:
        tokens = LEGACY_VOCABULARIES["study_type"].parse(request.study_type).tokens
        described = [STUDY_TYPE_NOTES[t] for t in tokens if t in STUDY_TYPE_NOTES]
        if described:
            notes.append(f"**Study Type Information:** {'. '.join(described)}.")

    temporal: list[str] = []
    for field, phrase in TEMPORAL_PHRASES.items():
        value = getattr(request, field)
        if not value:
            continue
        low, _, high = value.partition("_")
        if high:
            temporal.append(f"{phrase} between {low} and {high}")
        else:
            temporal.append(f"{phrase} on or after {low}")
    if temporal:
        notes.append(f"**Temporal Filtering:** {'. '.join(temporal)}.")

    return notes


def format_legacy_search_results(
    page: LegacySearchPage, request: LegacySearchRequest
) -> str:
    lines = ["# Clinical Trials Search Results", ""]

    criteria = describe_criteria(request, LEGACY_VOCABULARIES)
    if criteria:
        lines.append(f"**Search Criteria:** {', '.join(criteria)}")
    total = format_number(page.total)
    lines.append(f"**Total Results:** {total}")
    lines.append(f"**Showing:** {min(len(page.hits), request.limit)} of {total} results")
    lines.append("")

    if not page.hits:
        lines += [
            "## No Studies Found",
            "",
            "No clinical trials match your search criteria. Try:",
            "- Using broader search terms",
            "- Removing some filters",
            "- Checking spelling of medical conditions",
        ]
        return "\n".join(lines) + "\n"

    lines += ["## Studies Found", ""]
    for index, hit in enumerate(page.hits, start=1):
        protocol = hit.study.protocol_section
        nct_id = hit.id or protocol.identification_module.nct_id
        first_posted = protocol.status_module.study_first_submit_date
        lines += [
            f"### {index}. {protocol.identification_module.brief_title}",
            f"- **NCT ID:** [{nct_id}]({study_link(nct_id)})",
            f"- **Status:** {format_enum_value(protocol.status_module.overall_status)}",
            f"- **First Posted:** {format_date(first_posted) if first_posted else 'N/A'}",
            "",
        ]

    lines += [
        "---",
        "",
        "**Note:** This search was conducted using ClinicalTrials.gov API. For "
        "complete study details, eligibility criteria, and contact information, "
        "please visit the individual study pages using the NCT ID links above.",
        "",
    ]
    lines += _legacy_notes(request)
    return "\n".join(lines) + "\n"


# ------------------------------------------------------------------
# Suggest
# ------------------------------------------------------------------


def format_suggest_results(request: SuggestRequest, suggestions: list[str]) -> str:
    label = SUGGEST_DICTIONARIES[request.dictionary]
    lines = [
        "# ClinicalTrials.gov Suggestions",
        "",
        f"**Dictionary:** {label}",
        f'**Search Input:** "{request.input}"',
        f"**Results:** {len(suggestions)} suggestions found",
        "",
    ]

    if not suggestions:
        lines += [
            f'No suggestions found for "{request.input}" in {label} dictionary.',
            "",
            "**Tips:**",
            "- Try a shorter or more general search term",
            "- Check spelling",
            "- Try searching in a different dictionary",
        ]
        return "\n".join(lines) + "\n"

    lines += ["## Suggested Terms", ""]
    lines += [f"{i}. **{s}**" for i, s in enumerate(suggestions, start=1)]
    lines += [
        "",
        "---",
        "",
        "**Tip:** You can use these suggested terms in the search method for "
        "more accurate clinical trial searches.",
        "",
        "**Dictionary Information:**",
    ]
    lines += [f"- {note}" for note in SUGGEST_DICTIONARY_NOTES[request.dictionary]]
    return "\n".join(lines) + "\n"


def format_suggest_error(request: SuggestRequest, error: Exception) -> str:
    """Failure report returned as a successful suggest result."""
    return (
        "# Error: ClinicalTrials.gov Suggest API\n\n"
        "**Failed to get suggestions**\n\n"
        f"**Error:** {error}\n\n"
        "**Request Details:**\n"
        f'- Input: "{request.input}"\n'
        f"- Dictionary: {request.dictionary}\n"
        f"- API URL: {SUGGEST_URL}\n\n"
        "Please try again or check if the ClinicalTrials.gov API is accessible.\n"
    )


# ------------------------------------------------------------------
# Get study
# ------------------------------------------------------------------


def _section(title: str, body: list[str]) -> list[str]:
    """A ``## title`` block, or nothing when ``body`` is empty."""
    if not body:
        return []
    return [f"## {title}", "", *body, ""]


def _outcomes(outcomes: list[Outcome]) -> list[str]:
    lines: list[str] = []
    for index, outcome in enumerate(outcomes, start=1):
        lines.append(f"{index}. **Measure:** {outcome.measure}")
        if outcome.description:
            lines.append(f"   **Description:** {outcome.description}")
        if outcome.time_frame:
            lines.append(f"   **Time Frame:** {outcome.time_frame}")
        lines.append("")
    return lines[:-1]


def format_study_details(study: StudyRecord) -> str:
    protocol = study.protocol_section
    ident = protocol.identification_module
    status = protocol.status_module
    sponsor = protocol.sponsor_collaborators_module
    oversight = protocol.oversight_module
    description = protocol.description_module
    conditions = protocol.conditions_module
    design = protocol.design_module
    arms = protocol.arms_interventions_module
    outcomes = protocol.outcomes_module
    eligibility = protocol.eligibility_module
    contacts = protocol.contacts_locations_module
    references = protocol.references_module
    derived = study.derived_section
    nct_id = ident.nct_id

    lines = [f"# Clinical Trial Details: {nct_id}", ""]

    # Header block
    lines.append(f"**Study Title:** {ident.brief_title}")
    if ident.official_title and ident.official_title != ident.brief_title:
        lines.append(f"**Official Title:** {ident.official_title}")
    if ident.acronym:
        lines.append(f"**Acronym:** {ident.acronym}")
    if status.overall_status:
        lines.append(f"**Status:** {format_enum_value(status.overall_status)}")
    if status.why_stopped:
        lines.append(f"**Why Stopped:** {status.why_stopped}")
    if status.status_verified_date:
        lines.append(f"**Status Verified:** {format_date(status.status_verified_date)}")
    if design is not None:
        if design.study_type:
            lines.append(f"**Study Type:** {format_enum_value(design.study_type)}")
        if design.phases:
            phases = ", ".join(format_enum_value(p) for p in design.phases)
            lines.append(f"**Phase:** {phases}")
    lines.append("")

    # Brief summary
    if description is not None and description.brief_summary:
        lines += _section("Brief Summary", [description.brief_summary])

    # Overview
    overview: list[str] = []
    if sponsor is not None and sponsor.lead_sponsor is not None:
        lead = sponsor.lead_sponsor
        line = f"**Lead Sponsor:** {lead.name}"
        if lead.sponsor_class:
            line += f" ({format_enum_value(lead.sponsor_class)})"
        overview.append(line)
    if sponsor is not None and sponsor.collaborators:
        names = ", ".join(c.name for c in sponsor.collaborators)
        overview.append(f"**Collaborators:** {names}")
    for label, struct in (
        ("Study Start", status.start_date_struct),
        ("Primary Completion", status.primary_completion_date_struct),
        ("Study Completion", status.completion_date_struct),
    ):
        line = _date_struct(label, struct)
        if line:
            overview.append(line)
    if oversight is not None:
        flags = [
            (label, value)
            for label, value in (
                ("Data Monitoring Committee", oversight.oversight_has_dmc),
                ("FDA Regulated Drug", oversight.is_fda_regulated_drug),
                ("FDA Regulated Device", oversight.is_fda_regulated_device),
                ("Unapproved Device", oversight.is_unapproved_device),
            )
            if value is not None
        ]
        if flags:
            overview.append(
                "**Oversight:** "
                + ", ".join(f"{label}: {_yes_no(value)}" for label, value in flags)
            )
    lines += _section("Study Overview", overview)

    # Design
    design_lines: list[str] = []
    if design is not None:
        info = design.design_info
        if info is not None:
            if info.allocation:
                design_lines.append(
                    f"- **Allocation:** {format_enum_value(info.allocation)}"
                )
            if info.intervention_model:
                design_lines.append(
                    f"- **Intervention Model:** {format_enum_value(info.intervention_model)}"
                )
            if info.observational_model:
                design_lines.append(
                    f"- **Observational Model:** {format_enum_value(info.observational_model)}"
                )
            if info.time_perspective:
                design_lines.append(
                    f"- **Time Perspective:** {format_enum_value(info.time_perspective)}"
                )
            if info.primary_purpose:
                design_lines.append(
                    f"- **Primary Purpose:** {format_enum_value(info.primary_purpose)}"
                )
            masking = info.masking_info
            if masking is not None and masking.masking:
                line = f"- **Masking:** {format_enum_value(masking.masking)}"
                if masking.who_masked:
                    who = ", ".join(format_enum_value(w) for w in masking.who_masked)
                    line += f" ({who})"
                design_lines.append(line)
        enrollment = design.enrollment_info
        if enrollment is not None and enrollment.count is not None:
            line = f"- **Enrollment:** {format_number(enrollment.count)} participants"
            if enrollment.type:
                line += f" ({format_enum_value(enrollment.type)})"
            design_lines.append(line)
    lines += _section("Study Design", design_lines)

    # Conditions and MeSH
    if conditions is not None:
        lines += _section("Conditions", [f"- {c}" for c in conditions.conditions])
    if derived is not None:
        for title, browse in (
            ("MeSH Terms (Conditions)", derived.condition_browse_module),
            ("MeSH Terms (Interventions)", derived.intervention_browse_module),
        ):
            if browse is not None:
                lines += _section(
                    title, [f"- {m.term} ({m.id})" for m in browse.meshes]
                )

    # Arms and interventions
    if arms is not None:
        arm_lines: list[str] = []
        for arm in arms.arm_groups:
            heading = f"### {arm.label}"
            if arm.type:
                heading += f" ({format_enum_value(arm.type)})"
            arm_lines.append(heading)
            if arm.description:
                arm_lines.append(arm.description)
            if arm.intervention_names:
                arm_lines.append(f"**Interventions:** {', '.join(arm.intervention_names)}")
            arm_lines.append("")
        lines += _section("Arm Groups", arm_lines[:-1])

        intervention_lines: list[str] = []
        for intervention in arms.interventions:
            intervention_lines.append(
                f"### {format_enum_value(intervention.type)}: {intervention.name}"
            )
            if intervention.description:
                intervention_lines.append(intervention.description)
            if intervention.arm_group_labels:
                intervention_lines.append(
                    f"**Used in:** {', '.join(intervention.arm_group_labels)}"
                )
            intervention_lines.append("")
        lines += _section("Interventions", intervention_lines[:-1])

    # Outcomes
    if outcomes is not None:
        lines += _section("Primary Outcomes", _outcomes(outcomes.primary_outcomes))
        lines += _section("Secondary Outcomes", _outcomes(outcomes.secondary_outcomes))

    # Eligibility
    if eligibility is not None:
        elig: list[str] = []
        if eligibility.sex:
            elig.append(f"**Sex:** {format_enum_value(eligibility.sex)}")
        if eligibility.minimum_age or eligibility.maximum_age:
            low = eligibility.minimum_age or "No minimum"
            high = eligibility.maximum_age or "No maximum"
            elig.append(f"**Age Range:** {low} to {high}")
        if eligibility.healthy_volunteers is not None:
            elig.append(
                f"**Healthy Volunteers:** {_yes_no(eligibility.healthy_volunteers)}"
            )
        if eligibility.eligibility_criteria:
            elig += ["", "**Criteria:**", eligibility.eligibility_criteria]
        lines += _section("Eligibility Criteria", elig)

    # Locations and officials
    if contacts is not None:
        location_lines: list[str] = []
        for location in contacts.locations:
            line = f"- **Facility:** {location.facility or 'Unknown facility'}"
            place = [p for p in (location.city, location.state, location.country) if p]
            if place:
                line += f", {', '.join(place)}"
            if location.status:
                line += f" ({format_enum_value(location.status)})"
            location_lines.append(line)
        lines += _section("Locations", location_lines)

        official_lines: list[str] = []
        for official in contacts.overall_officials:
            line = f"- **{official.name}**"
            if official.role:
                line += f", {format_enum_value(official.role)}"
            if official.affiliation:
                line += f" ({official.affiliation})"
            official_lines.append(line)
        lines += _section("Study Officials", official_lines)

    # References
    if references is not None:
        ref_lines: list[str] = []
        for ref in references.references:
            line = f"- {ref.citation}"
            if ref.pmid:
                line += f" [PMID {ref.pmid}](https://pubmed.ncbi.nlm.nih.gov/{ref.pmid}/)"
            ref_lines.append(line)
        lines += _section("References", ref_lines)

    lines.append(f"**ClinicalTrials.gov Link:** [{nct_id}]({study_link(nct_id)})")
    return "\n".join(lines)


def format_raw_study(nct_id: str, fmt: str, body: str) -> str:
    """Non-JSON study download wrapped in a fenced block."""
    return (
        f"# Clinical Trial Data: {nct_id}\n\n"
        f"**Format:** {fmt.upper()}\n\n"
        f"```\n{body}\n```\n\n"
        f"**ClinicalTrials.gov Link:** [{nct_id}]({study_link(nct_id)})"
    )


def format_archive_study(nct_id: str, fmt: str, content: bytes) -> str:
    """Binary study download: size note plus the archive as base64."""
    encoded = base64.b64encode(content).decode("ascii")
    return (
        f"# Clinical Trial Data: {nct_id}\n\n"
        f"**Format:** {fmt.upper()}\n"
        f"**Size:** {format_number(len(content))} bytes (base64-encoded below)\n\n"
        f"```\n{encoded}\n```\n\n"
        f"**ClinicalTrials.gov Link:** [{nct_id}]({study_link(nct_id)})"
    )
