import json

import httpx
import pytest

from sales_intel_mcp.dispatcher import Dispatcher
from sales_intel_mcp.tools import all_tools
from tests.helpers.vendors import VendorStub


def _stub(routes: dict) -> VendorStub:
    return VendorStub({("POST", "/authenticate"): {"jwt": "zi-jwt"}, **routes})


def _dispatcher(stub: VendorStub) -> Dispatcher:
    return Dispatcher(stub.backends(), all_tools())


@pytest.mark.asyncio
async def test_company_search_maps_filters_and_renders(all_credentials):
    stub = _stub(
        {
            ("POST", "/search/company"): {
                "maxResults": 40,
                "data": [
                    {
                        "id": 77,
                        "name": "Acme",
                        "website": "acme.com",
                        "industry": "Software",
                        "subIndustry": "CRM",
                        "employees": 1200,
                        "revenue": 12500000,
                        "city": "Austin",
                        "country": "US",
                        "description": "d" * 250,
                    }
                ],
            }
        }
    )

    res = await _dispatcher(stub).invoke(
        "zoominfo_search_company",
        {"company_name": "Acme", "min_employees": 100, "country": "US", "limit": 5, "page": 2},
    )

    assert not res.is_error
    assert "Found **40** companies (page 2)." in res.text
    assert "### Acme (ID: 77)" in res.text
    assert "- **Industry**: Software / CRM" in res.text
    assert "- **Employees**: 1,200" in res.text
    assert "- **Revenue**: $12.5M" in res.text
    assert "- **Location**: Austin, US" in res.text
    assert "d" * 200 + "..." in res.text
    assert stub.json_body() == {"rpp": 5, "page": 2, "companyName": "Acme", "employeeCountMin": 100, "country": "US"}
    assert stub.requests[-1].headers["Authorization"] == "Bearer zi-jwt"


@pytest.mark.asyncio
async def test_page_size_is_bounded():
    stub = VendorStub()
    res = await _dispatcher(stub).invoke("zoominfo_search_company", {"limit": 101})
    assert res.is_error
    assert "'limit'" in res.text


@pytest.mark.asyncio
async def test_contact_search_json(all_credentials):
    stub = _stub(
        {
            ("POST", "/search/contact"): {
                "data": [{"id": 5, "firstName": "Grace", "lastName": "Hopper", "jobTitle": "CTO", "directPhone": "+1"}]
            }
        }
    )

    res = await _dispatcher(stub).invoke(
        "zoominfo_search_contact",
        {"job_title": "CTO", "company_domain": "acme.com", "response_format": "json"},
    )
    payload = json.loads(res.text)

    assert payload["total"] == 1
    assert payload["contacts"][0]["jobTitle"] == "CTO"
    assert stub.json_body() == {"rpp": 20, "page": 1, "jobTitle": "CTO", "websiteURL": "acme.com"}


@pytest.mark.asyncio
async def test_contact_search_empty(all_credentials):
    stub = _stub({("POST", "/search/contact"): {"data": []}})
    res = await _dispatcher(stub).invoke("zoominfo_search_contact", {"last_name": "Nobody"})
    assert not res.is_error
    assert res.text == "No contacts found matching your criteria."


@pytest.mark.asyncio
async def test_org_chart(all_credentials):
    stub = _stub(
        {
            ("POST", "/lookup/orgchart"): {
                "data": [
                    {"firstName": "Ann", "lastName": "Lee", "jobTitle": "CEO", "directReports": 6, "managementLevel": "C-Level"},
                    {"firstName": "Raj", "lastName": "Patel", "department": "Sales"},
                ]
            }
        }
    )

    res = await _dispatcher(stub).invoke("zoominfo_get_org_chart", {"company_id": 77, "department": "Sales"})

    assert res.text.startswith("# Org Chart — Company 77")
    assert "- **Ann Lee** — CEO (6 direct reports)" in res.text
    assert "  Department: Sales | Level: N/A" in res.text
    assert stub.json_body() == {"companyId": 77, "department": "Sales"}


@pytest.mark.asyncio
async def test_tech_stack_grouped_by_category(all_credentials):
    stub = _stub(
        {
            ("POST", "/lookup/technology"): {
                "data": [
                    {"category": "CRM", "technology": "Salesforce"},
                    {"category": "Cloud", "technology": "AWS"},
                    {"category": "CRM", "technology": "HubSpot"},
                    {"technology": "Mystery"},
                ]
            }
        }
    )

    res = await _dispatcher(stub).invoke("zoominfo_get_tech_stack", {"domain": "acme.com"})

    assert "## CRM\n- Salesforce\n- HubSpot" in res.text
    assert "## Other\n- Mystery" in res.text
    assert stub.json_body() == {"websiteURL": "acme.com"}


@pytest.mark.asyncio
async def test_tech_stack_needs_an_identifier():
    stub = VendorStub()
    res = await _dispatcher(stub).invoke("zoominfo_get_tech_stack", {})
    assert res.is_error
    assert res.text == "Error: Provide either company_id or domain."
    assert stub.requests == []


@pytest.mark.asyncio
async def test_token_is_shared_across_tools(all_credentials):
    stub = _stub(
        {
            ("POST", "/lookup/technology"): {"data": []},
            ("POST", "/lookup/orgchart"): lambda r: httpx.Response(200, json={"data": []}),
        }
    )
    dispatcher = _dispatcher(stub)

    await dispatcher.invoke("zoominfo_get_tech_stack", {"company_id": 1})
    await dispatcher.invoke("zoominfo_get_org_chart", {"company_id": 1})

    assert stub.paths() == ["/authenticate", "/lookup/technology", "/lookup/orgchart"]


@pytest.mark.asyncio
async def test_null_vendor_fields_fall_back_to_defaults(all_credentials):
    stub = _stub(
        {
            ("POST", "/search/company"): {"data": [{"id": 9, "name": None, "industry": "Software"}, {"id": 10, "name": "Beta"}]},
            ("POST", "/search/contact"): {"data": [{"id": 5, "firstName": "Grace", "lastName": None, "jobTitle": None}]},
            ("POST", "/lookup/technology"): {"data": [{"category": None, "technology": None}, {"technology": "AWS"}]},
        }
    )
    dispatcher = _dispatcher(stub)

    companies = await dispatcher.invoke("zoominfo_search_company", {"company_name": "Acme"})
    contacts = await dispatcher.invoke("zoominfo_search_contact", {"job_title": "CTO"})
    techs = await dispatcher.invoke("zoominfo_get_tech_stack", {"company_id": 9})

    assert not companies.is_error
    assert "### Beta (ID: 10)" in companies.text
    assert not contacts.is_error
    assert "Grace" in contacts.text
    assert not techs.is_error
    assert "- AWS" in techs.text
