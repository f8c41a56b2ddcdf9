from __future__ import annotations

from typing import List, Optional, Union

from sales_intel_mcp.models import VendorModel


class ClayPersonEnrichment(VendorModel):
    full_name: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    job_title: Optional[str] = None
    company: Optional[str] = None
    company_domain: Optional[str] = None
    linked_in_url: Optional[str] = None
    location: Optional[str] = None
    bio: Optional[str] = None

    @property
    def display_name(self) -> str:
        if self.full_name:
            return self.full_name
        return " ".join(p for p in (self.first_name, self.last_name) if p) or "Unknown"

    def is_empty(self) -> bool:
        return not self.full_name and not self.email


class ClayCompanyEnrichment(VendorModel):
    name: Optional[str] = None
    domain: Optional[str] = None
    industry: Optional[str] = None
    employee_count: Optional[int] = None
    revenue: Optional[Union[str, float]] = None
    description: Optional[str] = None
    founded_year: Optional[int] = None
    location: Optional[str] = None
    tech_stack: Optional[List[str]] = None
    funding_total: Optional[Union[str, float]] = None
    last_funding_round: Optional[str] = None

    def is_empty(self) -> bool:
        return not self.name and not self.domain
