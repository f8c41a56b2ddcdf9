from sales_intel_mcp.models.linkedin import (
    company_employee_count,
    company_founded,
    company_headquarters,
    company_name,
    map_company,
    map_profile,
    person_current_position,
    person_location,
    search_result_entities,
    search_total,
)


def test_profile_prefers_localized_names_and_falls_back_to_headline():
    profile = map_profile(
        {
            "localizedFirstName": "Ada",
            "firstName": "ignored",
            "lastName": "Lovelace",
            "headline": "Analyst at Engine",
            "vanityName": "ada",
            "industryName": "Computing",
        }
    )
    assert profile.first_name == "Ada"
    assert profile.last_name == "Lovelace"
    assert profile.current_title == "Analyst at Engine"
    assert profile.current_company is None
    assert profile.industry == "Computing"
    assert profile.profile_url == "https://www.linkedin.com/in/ada"


def test_current_position_skips_ended_roles():
    raw = {
        "positions": {
            "elements": [
                {"title": "Intern", "companyName": "Old Co", "endMonthYear": {"year": 2019}},
                {"title": "CTO", "company": {"name": "New Co"}},
            ]
        }
    }
    assert person_current_position(raw) == ("CTO", "New Co")
    assert person_current_position({"positions": "garbage"}) == (None, None)


def test_location_fallback():
    assert person_location({"location": {"name": "Berlin"}}) == "Berlin"
    assert person_location({"location": {"basicLocation": {"country": "DE"}}}) == "DE"
    assert person_location({}) is None


def test_search_entities_flatten_items_and_bare_elements():
    body = {
        "elements": [
            {"items": [{"entity": {"firstName": "A"}}, {"firstName": "B"}, "junk"]},
            {"firstName": "C"},
        ]
    }
    assert [e["firstName"] for e in search_result_entities(body)] == ["A", "B", "C"]
    assert search_result_entities({"elements": None}) == []
    assert search_result_entities(None) == []


def test_search_total():
    assert search_total({"paging": {"total": 87}}, 3) == 87
    assert search_total({"paging": {"total": 0}}, 3) == 3
    assert search_total({}, 3) == 3


def test_company_fallbacks():
    assert company_name({"localizedName": "Acme"}) == "Acme"
    assert company_name({"name": {"localized": {"en_US": "x"}}}) == "Unknown"
    assert company_name({"name": "Plain"}) == "Plain"
    assert company_employee_count({"staffCount": 40}) == 40
    assert company_employee_count({"staffCountRange": {"start": 51, "end": 200}}) == 126
    assert company_employee_count({"staffCountRange": {"start": 10001}}) == 10001
    assert company_employee_count({}) is None
    assert company_founded({"foundedOn": {"year": 1999}}) == 1999
    assert company_founded({"foundedOn": 2004}) == 2004


def test_headquarters_prefers_hq_location():
    raw = {
        "locations": {
            "elements": [
                {"locationType": "OTHER", "address": {"city": "Paris", "country": "FR"}},
                {"locationType": "HEADQUARTERS", "address": {"city": "Austin", "geographicArea": "TX", "country": "US"}},
            ]
        }
    }
    assert company_headquarters(raw) == "Austin, TX, US"
    assert company_headquarters({"locations": {"elements": [{"address": {"city": "Oslo"}}]}}) == "Oslo"


def test_map_company():
    company = map_company(
        {
            "localizedName": "Acme",
            "localizedIndustry": "Software",
            "staffCount": 300,
            "localizedWebsite": "https://acme.com",
            "specialties": ["CRM", "", 7],
        }
    )
    assert company.name == "Acme"
    assert company.industry == "Software"
    assert company.website == "https://acme.com"
    assert company.specialties == ["CRM"]
