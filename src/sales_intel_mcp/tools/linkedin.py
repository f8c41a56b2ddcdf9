"""LinkedIn tools: lead search, profile lookup and company search."""

from __future__ import annotations

import re
from typing import Optional

from pydantic import Field

from sales_intel_mcp.adapters import Backends
from sales_intel_mcp.constants import DEFAULT_PAGE_SIZE, LINKEDIN_MAX_PAGE_SIZE
from sales_intel_mcp.core.errors import ValidationError
from sales_intel_mcp.core.result import Err
from sales_intel_mcp.dispatcher import NotFound, Outcome, Rendered, ToolParams, ToolSpec
from sales_intel_mcp.models.linkedin import (
    LinkedInCompany,
    LinkedInProfile,
    map_company,
    map_profile,
    search_result_entities,
    search_total,
)
from sales_intel_mcp.tools.formatting import block, clip, json_text, thousands

SERVICE = "LinkedIn"

PROFILE_PROJECTION = (
    "(id,localizedFirstName,localizedLastName,localizedHeadline,vanityName,"
    "profilePicture,positions,location,industryName,summary)"
)

_VANITY_RE = re.compile(r"linkedin\.com/in/([^/?#]+)")


class SearchParams(ToolParams):
    keywords: Optional[str] = Field(default=None, description="Keyword search (e.g. 'VP Engineering')")
    limit: int = Field(default=DEFAULT_PAGE_SIZE, ge=1, le=LINKEDIN_MAX_PAGE_SIZE, description="Max results")
    offset: int = Field(default=0, ge=0, description="Pagination offset")


class SearchLeadsParams(SearchParams):
    first_name: Optional[str] = Field(default=None, description="First name filter")
    last_name: Optional[str] = Field(default=None, description="Last name filter")
    title: Optional[str] = Field(default=None, description="Current job title (e.g. 'Chief Technology Officer')")
    company_name: Optional[str] = Field(default=None, description="Current company name")
    industry: Optional[str] = Field(default=None, description="Industry code or name")
    geography: Optional[str] = Field(default=None, description="Geographic region (e.g. 'San Francisco Bay Area')")
    seniority: Optional[str] = Field(
        default=None,
        description="Seniority level: 'owner', 'cxo', 'vp', 'director', 'manager', 'senior', 'entry'",
    )


class GetProfileParams(ToolParams):
    linkedin_url: Optional[str] = Field(
        default=None, description="LinkedIn profile URL (e.g. 'https://linkedin.com/in/johndoe')"
    )
    member_id: Optional[str] = Field(default=None, description="LinkedIn member ID (if known)")


class SearchCompaniesParams(SearchParams):
    company_name: Optional[str] = Field(default=None, description="Company name")
    industry: Optional[str] = Field(default=None, description="Industry filter")
    min_employees: Optional[int] = Field(default=None, description="Minimum employee count")
    max_employees: Optional[int] = Field(default=None, description="Maximum employee count")
    geography: Optional[str] = Field(default=None, description="Headquarters geography")


def build_query(*parts: Optional[str]) -> str:
    return " ".join(p for p in parts if p)


def vanity_name_from_url(url: str) -> Optional[str]:
    match = _VANITY_RE.search(url)
    return match.group(1) if match else None


def format_profile_markdown(p: LinkedInProfile) -> str:
    return block(
        [
            f"### {p.first_name} {p.last_name}".rstrip(),
            f"*{p.headline}*" if p.headline else None,
            f"- **Title**: {p.current_title}" if p.current_title else None,
            f"- **Company**: {p.current_company}" if p.current_company else None,
            f"- **Location**: {p.location}" if p.location else None,
            f"- **Industry**: {p.industry}" if p.industry else None,
            f"- **Profile**: {p.profile_url}" if p.profile_url else None,
            f"- **Summary**: {clip(p.summary, 250, ellipsis='...')}" if p.summary else None,
        ]
    )


def format_company_markdown(c: LinkedInCompany) -> str:
    return block(
        [
            f"### {c.name}",
            f"- **Industry**: {c.industry}" if c.industry else None,
            f"- **Employees**: {thousands(c.employee_count)}" if c.employee_count else None,
            f"- **HQ**: {c.headquarters}" if c.headquarters else None,
            f"- **Website**: {c.website}" if c.website else None,
            f"- **Founded**: {c.founded}" if c.founded else None,
            f"- **Specialties**: {', '.join(c.specialties)}" if c.specialties else None,
            f"- **About**: {clip(c.description, 250, ellipsis='...')}" if c.description else None,
        ]
    )


def within_employee_range(c: LinkedInCompany, minimum: Optional[int], maximum: Optional[int]) -> bool:
    # companies with unknown size are kept
    if not c.employee_count:
        return True
    if minimum and c.employee_count < minimum:
        return False
    if maximum and c.employee_count > maximum:
        return False
    return True


async def search_leads(backends: Backends, params: SearchLeadsParams) -> Outcome:
    query = build_query(
        params.keywords,
        params.first_name,
        params.last_name,
        params.title,
        params.company_name,
        params.seniority,
        params.geography,
        params.industry,
    )
    if not query:
        return Err(ValidationError("Provide at least one search criteria (keywords, name, title, company, etc.)."))

    res = await backends.linkedin.get(
        "/v2/search/dash/people",
        {"q": "search", "query": query, "count": params.limit, "start": params.offset},
    )
    if isinstance(res, Err):
        return res

    leads = [
        p for p in (map_profile(e) for e in search_result_entities(res.value)) if not p.is_empty()
    ]
    if not leads:
        return NotFound(
            "No leads found matching your criteria. "
            "Tip: Try broader keywords, or use ZoomInfo/Clay tools for deeper lead search."
        )

    total = search_total(res.value, len(leads))
    if params.wants_json:
        return Rendered(
            json_text(
                {
                    "total": total,
                    "count": len(leads),
                    "offset": params.offset,
                    "leads": [p.model_dump(exclude_none=True) for p in leads],
                }
            )
        )

    lines = ["# LinkedIn Lead Search", f"Found **{total}** leads.\n", *(format_profile_markdown(p) for p in leads)]
    return Rendered("\n".join(lines))


async def get_profile(backends: Backends, params: GetProfileParams) -> Outcome:
    if params.member_id:
        path = f"/v2/people/(id:{params.member_id})"
    elif params.linkedin_url:
        vanity = vanity_name_from_url(params.linkedin_url)
        if not vanity:
            return Err(
                ValidationError(
                    "Could not extract a profile vanity name from the LinkedIn URL. "
                    "Expected format: https://linkedin.com/in/username"
                )
            )
        path = f"/v2/people/(vanityName:{vanity})"
    else:
        # no identifier: the authenticated member's own profile
        path = "/v2/me"

    res = await backends.linkedin.get(path, {"projection": PROFILE_PROJECTION})
    if isinstance(res, Err):
        return res

    profile = map_profile(res.value if isinstance(res.value, dict) else {})
    if profile.is_empty():
        return NotFound("No profile data found.")

    if params.wants_json:
        return Rendered(json_text(profile.model_dump(exclude_none=True)))
    return Rendered(f"# LinkedIn Profile\n\n{format_profile_markdown(profile)}")


async def search_companies(backends: Backends, params: SearchCompaniesParams) -> Outcome:
    query = build_query(params.keywords, params.company_name, params.industry, params.geography)
    if not query:
        return Err(
            ValidationError("Provide at least one search criteria (keywords, company_name, industry, or geography).")
        )

    res = await backends.linkedin.get(
        "/v2/search/dash/companies",
        {"q": "search", "query": query, "count": params.limit, "start": params.offset},
    )
    if isinstance(res, Err):
        return res

    mapped = [map_company(e) for e in search_result_entities(res.value)]
    total = search_total(res.value, len(mapped))
    companies = [c for c in mapped if within_employee_range(c, params.min_employees, params.max_employees)]
    if not companies:
        return NotFound("No companies found matching your criteria.")

    if params.wants_json:
        return Rendered(
            json_text(
                {
                    "total": total,
                    "count": len(companies),
                    "offset": params.offset,
                    "companies": [c.model_dump(exclude_none=True) for c in companies],
                }
            )
        )

    lines = [
        "# LinkedIn Company Search",
        f"Found **{total}** companies.\n",
        *(format_company_markdown(c) for c in companies),
    ]
    return Rendered("\n".join(lines))


TOOLS = [
    ToolSpec(
        name="linkedin_search_leads",
        title="Search LinkedIn Leads",
        description=(
            "Search LinkedIn for people by keywords, name, title, company, industry, geography or seniority. "
            "Works with a standard LinkedIn developer token; for deeper lead research combine with ZoomInfo or Clay."
        ),
        service=SERVICE,
        params=SearchLeadsParams,
        handler=search_leads,
    ),
    ToolSpec(
        name="linkedin_get_profile",
        title="Get LinkedIn Profile",
        description=(
            "Get a LinkedIn profile by profile URL or member ID. "
            "With neither, returns the authenticated member's own profile."
        ),
        service=SERVICE,
        params=GetProfileParams,
        handler=get_profile,
    ),
    ToolSpec(
        name="linkedin_search_companies",
        title="Search LinkedIn Companies",
        description="Search LinkedIn for companies by keywords, name, industry, size or headquarters geography.",
        service=SERVICE,
        params=SearchCompaniesParams,
        handler=search_companies,
    ),
]
