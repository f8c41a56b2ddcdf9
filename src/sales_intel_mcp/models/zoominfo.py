from __future__ import annotations

from typing import List, Optional

from pydantic import Field

from sales_intel_mcp.models import VendorModel


class ZoomInfoCompany(VendorModel):
    id: Optional[int] = None
    name: str = ""
    website: Optional[str] = None
    industry: Optional[str] = None
    sub_industry: Optional[str] = None
    employees: Optional[int] = None
    revenue: Optional[float] = None
    revenue_range: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    description: Optional[str] = None
    founded_year: Optional[int] = None
    phone: Optional[str] = None
    ticker: Optional[str] = None


class ZoomInfoContact(VendorModel):
    id: Optional[int] = None
    first_name: str = ""
    last_name: str = ""
    email: Optional[str] = None
    phone: Optional[str] = None
    direct_phone: Optional[str] = None
    mobile_phone: Optional[str] = None
    job_title: Optional[str] = None
    management_level: Optional[str] = None
    department: Optional[str] = None
    company_id: Optional[int] = None
    company_name: Optional[str] = None
    linked_in_url: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None


class ZoomInfoOrgChartEntry(VendorModel):
    contact_id: Optional[int] = None
    first_name: str = ""
    last_name: str = ""
    job_title: Optional[str] = None
    direct_reports: Optional[int] = None
    reports_to: Optional[int] = None
    department: Optional[str] = None
    management_level: Optional[str] = None


class ZoomInfoTechnology(VendorModel):
    category: Optional[str] = None
    technology: str = ""
    first_detected: Optional[str] = None


class CompanySearchPage(VendorModel):
    data: List[ZoomInfoCompany] = Field(default_factory=list)
    max_results: Optional[int] = None


class ContactSearchPage(VendorModel):
    data: List[ZoomInfoContact] = Field(default_factory=list)
    max_results: Optional[int] = None


class OrgChartPage(VendorModel):
    data: List[ZoomInfoOrgChartEntry] = Field(default_factory=list)


class TechStackPage(VendorModel):
    data: List[ZoomInfoTechnology] = Field(default_factory=list)
