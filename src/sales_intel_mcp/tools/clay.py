"""Clay tools: person and company enrichment, webhook table enrichment."""

from __future__ import annotations

import json
from typing import Any, Dict, Optional

from pydantic import Field

from sales_intel_mcp.adapters import Backends
from sales_intel_mcp.core.errors import ValidationError
from sales_intel_mcp.core.result import Err
from sales_intel_mcp.dispatcher import NotFound, Outcome, Rendered, ToolParams, ToolSpec
from sales_intel_mcp.models import parse_payload
from sales_intel_mcp.models.clay import ClayCompanyEnrichment, ClayPersonEnrichment
from sales_intel_mcp.tools.formatting import block, clip, json_text, thousands

SERVICE = "Clay"


class EnrichPersonParams(ToolParams):
    email: Optional[str] = Field(default=None, description="Person's email address (primary lookup key)")
    linkedin_url: Optional[str] = Field(default=None, description="Person's LinkedIn profile URL")
    first_name: Optional[str] = Field(default=None, description="First name (used with last_name for fuzzy match)")
    last_name: Optional[str] = Field(default=None, description="Last name")
    company_domain: Optional[str] = Field(default=None, description="Company domain for disambiguation")


class EnrichCompanyParams(ToolParams):
    domain: Optional[str] = Field(default=None, description="Company website domain (primary lookup key)")
    company_name: Optional[str] = Field(default=None, description="Company name (used if domain is not available)")


class TriggerEnrichmentParams(ToolParams):
    webhook_url: str = Field(pattern=r"^https?://\S+$", description="The Clay webhook URL for the target table")
    data: Dict[str, Any] = Field(description="Key-value data to send to the webhook")


def format_person_markdown(p: ClayPersonEnrichment) -> str:
    return block(
        [
            f"## {p.display_name}",
            f"- **Title**: {p.job_title}" if p.job_title else None,
            f"- **Company**: {p.company}" if p.company else None,
            f"- **Email**: {p.email}" if p.email else None,
            f"- **Phone**: {p.phone}" if p.phone else None,
            f"- **LinkedIn**: {p.linked_in_url}" if p.linked_in_url else None,
            f"- **Location**: {p.location}" if p.location else None,
            f"- **Bio**: {clip(p.bio, 300)}" if p.bio else None,
        ]
    )


def format_company_markdown(c: ClayCompanyEnrichment) -> str:
    return block(
        [
            f"## {c.name or 'Unknown Company'}",
            f"- **Domain**: {c.domain}" if c.domain else None,
            f"- **Industry**: {c.industry}" if c.industry else None,
            f"- **Employees**: {thousands(c.employee_count)}" if c.employee_count else None,
            f"- **Revenue**: {c.revenue}" if c.revenue else None,
            f"- **Founded**: {c.founded_year}" if c.founded_year else None,
            f"- **Location**: {c.location}" if c.location else None,
            f"- **Total Funding**: {c.funding_total}" if c.funding_total else None,
            f"- **Last Round**: {c.last_funding_round}" if c.last_funding_round else None,
            f"- **Description**: {clip(c.description, 300)}" if c.description else None,
            f"- **Tech Stack**: {', '.join(c.tech_stack)}" if c.tech_stack else None,
        ]
    )


async def enrich_person(backends: Backends, params: EnrichPersonParams) -> Outcome:
    if not params.email and not params.linkedin_url and not (params.first_name and params.last_name):
        return Err(ValidationError("Provide at least email, linkedin_url, or first_name + last_name."))

    body: dict = {}
    if params.email:
        body["email"] = params.email
    if params.linkedin_url:
        body["linkedinUrl"] = params.linkedin_url
    if params.first_name:
        body["firstName"] = params.first_name
    if params.last_name:
        body["lastName"] = params.last_name
    if params.company_domain:
        body["companyDomain"] = params.company_domain

    res = await backends.clay.post("/people/enrich", body)
    if isinstance(res, Err):
        return res

    person = parse_payload(ClayPersonEnrichment, res.value)
    if isinstance(person, Err):
        return person
    if person.is_empty():
        return NotFound("No enrichment data found for this person.")

    if params.wants_json:
        return Rendered(json_text(person.dump()))
    return Rendered(f"# Person Enrichment\n\n{format_person_markdown(person)}")


async def enrich_company(backends: Backends, params: EnrichCompanyParams) -> Outcome:
    if not params.domain and not params.company_name:
        return Err(ValidationError("Provide either domain or company_name."))

    body: dict = {}
    if params.domain:
        body["domain"] = params.domain
    if params.company_name:
        body["companyName"] = params.company_name

    res = await backends.clay.post("/companies/enrich", body)
    if isinstance(res, Err):
        return res

    company = parse_payload(ClayCompanyEnrichment, res.value)
    if isinstance(company, Err):
        return company
    if company.is_empty():
        return NotFound("No enrichment data found for this company.")

    if params.wants_json:
        return Rendered(json_text(company.dump()))
    return Rendered(f"# Company Enrichment\n\n{format_company_markdown(company)}")


async def trigger_enrichment(backends: Backends, params: TriggerEnrichmentParams) -> Outcome:
    res = await backends.clay.webhook_post(params.webhook_url, params.data)
    if isinstance(res, Err):
        return res

    if params.wants_json:
        return Rendered(
            json_text(
                {"status": "submitted", "webhook": params.webhook_url, "data": params.data, "response": res.value}
            )
        )

    return Rendered(
        "\n".join(
            [
                "# Clay Enrichment Triggered\n",
                f"**Webhook**: {params.webhook_url}",
                f"**Data Sent**: {json.dumps(params.data, ensure_ascii=False, default=str)}",
                "",
                "Data has been submitted to the Clay table. Enrichment runs asynchronously; "
                "check your Clay table for results.",
            ]
        )
    )


TOOLS = [
    ToolSpec(
        name="clay_enrich_person",
        title="Enrich Person with Clay",
        description=(
            "Enrich a person's profile with Clay: title, company, email, phone, LinkedIn, location and bio. "
            "Provide email, linkedin_url, or first_name + last_name (company_domain helps disambiguate)."
        ),
        service=SERVICE,
        params=EnrichPersonParams,
        handler=enrich_person,
    ),
    ToolSpec(
        name="clay_enrich_company",
        title="Enrich Company with Clay",
        description=(
            "Enrich a company profile with Clay: industry, employees, revenue, funding, tech stack and "
            "description. Provide domain (preferred) or company_name."
        ),
        service=SERVICE,
        params=EnrichCompanyParams,
        handler=enrich_company,
    ),
    ToolSpec(
        name="clay_trigger_enrichment",
        title="Trigger Clay Table Enrichment",
        description=(
            "Send key-value data to a Clay table webhook to start that table's enrichment workflow. "
            "Enrichment runs asynchronously; results appear in the Clay table."
        ),
        service=SERVICE,
        params=TriggerEnrichmentParams,
        handler=trigger_enrichment,
        read_only=False,
    ),
]
