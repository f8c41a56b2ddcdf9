"""ZoomInfo tools: company and contact search, org charts and tech stacks."""

from __future__ import annotations

from typing import Optional

from pydantic import Field

from sales_intel_mcp.adapters import Backends
from sales_intel_mcp.constants import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from sales_intel_mcp.core.errors import ValidationError
from sales_intel_mcp.core.result import Err
from sales_intel_mcp.dispatcher import NotFound, Outcome, Rendered, ToolParams, ToolSpec
from sales_intel_mcp.models import parse_payload
from sales_intel_mcp.models.zoominfo import (
    CompanySearchPage,
    ContactSearchPage,
    OrgChartPage,
    TechStackPage,
    ZoomInfoCompany,
    ZoomInfoContact,
)
from sales_intel_mcp.tools.formatting import NA, block, clip, join_present, json_text, thousands

SERVICE = "ZoomInfo"


class PagedParams(ToolParams):
    limit: int = Field(
        default=DEFAULT_PAGE_SIZE,
        ge=1,
        le=MAX_PAGE_SIZE,
        description=f"Maximum results to return (default: {DEFAULT_PAGE_SIZE}, max: {MAX_PAGE_SIZE})",
    )
    page: int = Field(default=1, ge=1, description="Page number for pagination")


class SearchCompanyParams(PagedParams):
    company_name: Optional[str] = Field(default=None, description="Company name to search for (partial match)")
    domain: Optional[str] = Field(default=None, description="Company website domain (e.g. 'acme.com')")
    industry: Optional[str] = Field(default=None, description="Industry filter (e.g. 'Technology', 'Healthcare')")
    min_employees: Optional[int] = Field(default=None, description="Minimum employee count")
    max_employees: Optional[int] = Field(default=None, description="Maximum employee count")
    min_revenue: Optional[float] = Field(default=None, description="Minimum annual revenue in USD")
    country: Optional[str] = Field(default=None, description="Country filter (e.g. 'US', 'United Kingdom')")


class SearchContactParams(PagedParams):
    first_name: Optional[str] = Field(default=None, description="Contact's first name")
    last_name: Optional[str] = Field(default=None, description="Contact's last name")
    email: Optional[str] = Field(default=None, description="Contact email address")
    job_title: Optional[str] = Field(default=None, description="Job title keyword (e.g. 'VP Sales', 'CTO')")
    management_level: Optional[str] = Field(
        default=None,
        description="Management level: 'c-level', 'vp-level', 'director', 'manager', 'staff'",
    )
    department: Optional[str] = Field(default=None, description="Department filter (e.g. 'Sales', 'Engineering')")
    company_name: Optional[str] = Field(default=None, description="Company name to scope the contact search")
    company_domain: Optional[str] = Field(default=None, description="Company domain to scope the contact search")


class OrgChartParams(ToolParams):
    company_id: int = Field(description="ZoomInfo company ID (get it from zoominfo_search_company first)")
    department: Optional[str] = Field(default=None, description="Optional department filter")


class TechStackParams(ToolParams):
    company_id: Optional[int] = Field(default=None, description="ZoomInfo company ID")
    domain: Optional[str] = Field(default=None, description="Company domain (e.g. 'acme.com')")


def _search_body(params: PagedParams, mapping: dict[str, str]) -> dict:
    """Request body with paging plus every set parameter under its vendor name."""
    body: dict = {"rpp": params.limit, "page": params.page}
    for param_name, vendor_name in mapping.items():
        value = getattr(params, param_name)
        if value:
            body[vendor_name] = value
    return body


def _revenue(c: ZoomInfoCompany) -> str:
    if c.revenue:
        return f"${c.revenue / 1e6:.1f}M"
    return c.revenue_range or NA


def format_company_markdown(c: ZoomInfoCompany) -> str:
    industry = c.industry or NA
    if c.sub_industry:
        industry = f"{industry} / {c.sub_industry}"
    return block(
        [
            f"### {c.name} (ID: {c.id})",
            f"- **Website**: {c.website or NA}",
            f"- **Industry**: {industry}",
            f"- **Employees**: {thousands(c.employees) or NA}",
            f"- **Revenue**: {_revenue(c)}",
            f"- **Location**: {join_present([c.city, c.state, c.country]) or NA}",
            f"- **Founded**: {c.founded_year or NA}",
            f"- **Description**: {clip(c.description, 200, ellipsis='...')}" if c.description else None,
        ]
    )


def format_contact_markdown(c: ZoomInfoContact) -> str:
    return block(
        [
            f"### {c.first_name} {c.last_name} (ID: {c.id})",
            f"- **Title**: {c.job_title or NA}",
            f"- **Company**: {c.company_name or NA}",
            f"- **Email**: {c.email or NA}",
            f"- **Phone**: {c.direct_phone or c.phone or NA}",
            f"- **Department**: {c.department or NA}",
            f"- **Level**: {c.management_level or NA}",
            f"- **Location**: {join_present([c.city, c.state, c.country]) or NA}",
            f"- **LinkedIn**: {c.linked_in_url}" if c.linked_in_url else None,
        ]
    )


async def search_company(backends: Backends, params: SearchCompanyParams) -> Outcome:
    body = _search_body(
        params,
        {
            "company_name": "companyName",
            "domain": "websiteURL",
            "industry": "industry",
            "min_employees": "employeeCountMin",
            "max_employees": "employeeCountMax",
            "min_revenue": "revenueMin",
            "country": "country",
        },
    )
    res = await backends.zoominfo.post("/search/company", body)
    if isinstance(res, Err):
        return res

    page = parse_payload(CompanySearchPage, res.value)
    if isinstance(page, Err):
        return page
    if not page.data:
        return NotFound("No companies found matching your criteria.")

    total = page.max_results or len(page.data)
    if params.wants_json:
        return Rendered(
            json_text(
                {"total": total, "count": len(page.data), "page": params.page, "companies": [c.dump() for c in page.data]}
            )
        )

    lines = [
        "# ZoomInfo Company Search",
        f"Found **{total}** companies (page {params.page}).\n",
        *(format_company_markdown(c) for c in page.data),
    ]
    return Rendered("\n".join(lines))


async def search_contact(backends: Backends, params: SearchContactParams) -> Outcome:
    body = _search_body(
        params,
        {
            "first_name": "firstName",
            "last_name": "lastName",
            "email": "emailAddress",
            "job_title": "jobTitle",
            "management_level": "managementLevel",
            "department": "department",
            "company_name": "companyName",
            "company_domain": "websiteURL",
        },
    )
    res = await backends.zoominfo.post("/search/contact", body)
    if isinstance(res, Err):
        return res

    page = parse_payload(ContactSearchPage, res.value)
    if isinstance(page, Err):
        return page
    if not page.data:
        return NotFound("No contacts found matching your criteria.")

    total = page.max_results or len(page.data)
    if params.wants_json:
        return Rendered(
            json_text(
                {"total": total, "count": len(page.data), "page": params.page, "contacts": [c.dump() for c in page.data]}
            )
        )

    lines = [
        "# ZoomInfo Contact Search",
        f"Found **{total}** contacts (page {params.page}).\n",
        *(format_contact_markdown(c) for c in page.data),
    ]
    return Rendered("\n".join(lines))


async def get_org_chart(backends: Backends, params: OrgChartParams) -> Outcome:
    body: dict = {"companyId": params.company_id}
    if params.department:
        body["department"] = params.department

    res = await backends.zoominfo.post("/lookup/orgchart", body)
    if isinstance(res, Err):
        return res

    page = parse_payload(OrgChartPage, res.value)
    if isinstance(page, Err):
        return page
    entries = page.data
    if not entries:
        return NotFound(f"No org chart data found for company {params.company_id}.")

    if params.wants_json:
        return Rendered(json_text({"companyId": params.company_id, "entries": [e.dump() for e in entries]}))

    lines = [f"# Org Chart — Company {params.company_id}", f"{len(entries)} people found.\n"]
    for e in entries:
        reports = f" ({e.direct_reports} direct reports)" if e.direct_reports else ""
        lines.append(f"- **{e.first_name} {e.last_name}** — {e.job_title or NA}{reports}")
        lines.append(f"  Department: {e.department or NA} | Level: {e.management_level or NA}")
    return Rendered("\n".join(lines))


async def get_tech_stack(backends: Backends, params: TechStackParams) -> Outcome:
    if not params.company_id and not params.domain:
        return Err(ValidationError("Provide either company_id or domain."))

    body: dict = {}
    if params.company_id:
        body["companyId"] = params.company_id
    if params.domain:
        body["websiteURL"] = params.domain

    res = await backends.zoominfo.post("/lookup/technology", body)
    if isinstance(res, Err):
        return res

    page = parse_payload(TechStackPage, res.value)
    if isinstance(page, Err):
        return page
    techs = page.data
    if not techs:
        return NotFound("No tech stack data available for this company.")

    if params.wants_json:
        return Rendered(json_text({"technologies": [t.dump() for t in techs]}))

    grouped: dict[str, list[str]] = {}
    for t in techs:
        grouped.setdefault(t.category or "Other", []).append(t.technology)

    lines = ["# Tech Stack\n"]
    for category, items in grouped.items():
        lines.append(f"## {category}")
        lines.extend(f"- {item}" for item in items)
        lines.append("")
    return Rendered("\n".join(lines))


TOOLS = [
    ToolSpec(
        name="zoominfo_search_company",
        title="Search ZoomInfo Companies",
        description=(
            "Search ZoomInfo for companies by name, domain, industry, size, revenue or country. "
            "Returns firmographics; use the company ID with zoominfo_get_org_chart or zoominfo_get_tech_stack."
        ),
        service=SERVICE,
        params=SearchCompanyParams,
        handler=search_company,
    ),
    ToolSpec(
        name="zoominfo_search_contact",
        title="Search ZoomInfo Contacts",
        description=(
            "Search ZoomInfo for contacts by name, title, department, management level or company. "
            "Returns title, email, phone, company, location and LinkedIn URL."
        ),
        service=SERVICE,
        params=SearchContactParams,
        handler=search_contact,
    ),
    ToolSpec(
        name="zoominfo_get_org_chart",
        title="Get ZoomInfo Org Chart",
        description="Get a company's org chart from ZoomInfo: people, titles, departments, levels and direct reports.",
        service=SERVICE,
        params=OrgChartParams,
        handler=get_org_chart,
    ),
    ToolSpec(
        name="zoominfo_get_tech_stack",
        title="Get ZoomInfo Tech Stack",
        description="Get the technologies a company uses, grouped by category. Provide company_id or domain.",
        service=SERVICE,
        params=TechStackParams,
        handler=get_tech_stack,
    ),
]
