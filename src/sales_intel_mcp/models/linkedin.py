"""
LinkedIn payload mapping.

The REST API returns different person/organization shapes depending on the
endpoint (``/v2/me``, ``/v2/people``, search results). Every fallback rule
is a named step below so each can be tested on its own.
"""

from __future__ import annotations

from typing import Any, List, Mapping, Optional

from pydantic import BaseModel, Field

PROFILE_BASE_URL = "https://www.linkedin.com/in/"


class LinkedInProfile(BaseModel):
    first_name: str = ""
    last_name: str = ""
    headline: Optional[str] = None
    location: Optional[str] = None
    industry: Optional[str] = None
    current_company: Optional[str] = None
    current_title: Optional[str] = None
    summary: Optional[str] = None
    profile_url: Optional[str] = None

    def is_empty(self) -> bool:
        return not self.first_name and not self.last_name


class LinkedInCompany(BaseModel):
    name: str = "Unknown"
    industry: Optional[str] = None
    employee_count: Optional[int] = None
    headquarters: Optional[str] = None
    description: Optional[str] = None
    website: Optional[str] = None
    specialties: List[str] = Field(default_factory=list)
    founded: Optional[int] = None


def _str(value: Any) -> Optional[str]:
    return value if isinstance(value, str) and value else None


def _dict(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def _elements(value: Any) -> list[Mapping[str, Any]]:
    items = _dict(value).get("elements")
    if not isinstance(items, list):
        return []
    return [e for e in items if isinstance(e, Mapping)]


# -- person ------------------------------------------------------------------


def person_first_name(raw: Mapping[str, Any]) -> str:
    """localizedFirstName, then firstName."""
    return _str(raw.get("localizedFirstName")) or _str(raw.get("firstName")) or ""


def person_last_name(raw: Mapping[str, Any]) -> str:
    """localizedLastName, then lastName."""
    return _str(raw.get("localizedLastName")) or _str(raw.get("lastName")) or ""


def person_headline(raw: Mapping[str, Any]) -> Optional[str]:
    """localizedHeadline, then headline."""
    return _str(raw.get("localizedHeadline")) or _str(raw.get("headline"))


def person_location(raw: Mapping[str, Any]) -> Optional[str]:
    """location.name, then location.basicLocation.country."""
    loc = _dict(raw.get("location"))
    return _str(loc.get("name")) or _str(_dict(loc.get("basicLocation")).get("country"))


def person_current_position(raw: Mapping[str, Any]) -> tuple[Optional[str], Optional[str]]:
    """(title, company) of the first position without an end date."""
    for position in _elements(raw.get("positions")):
        if position.get("endMonthYear") or position.get("endDate"):
            continue
        company = _str(_dict(position.get("company")).get("name")) or _str(position.get("companyName"))
        return _str(position.get("title")), company
    return None, None


def person_industry(raw: Mapping[str, Any]) -> Optional[str]:
    """industryName, then industry."""
    return _str(raw.get("industryName")) or _str(raw.get("industry"))


def person_profile_url(raw: Mapping[str, Any]) -> Optional[str]:
    vanity = _str(raw.get("vanityName"))
    return f"{PROFILE_BASE_URL}{vanity}" if vanity else None


def map_profile(raw: Mapping[str, Any]) -> LinkedInProfile:
    headline = person_headline(raw)
    title, company = person_current_position(raw)
    return LinkedInProfile(
        first_name=person_first_name(raw),
        last_name=person_last_name(raw),
        headline=headline,
        location=person_location(raw),
        industry=person_industry(raw),
        # the headline stands in for a missing current title
        current_title=title or headline,
        current_company=company,
        summary=_str(raw.get("summary")),
        profile_url=person_profile_url(raw),
    )


def search_result_entities(body: Any) -> list[Mapping[str, Any]]:
    """
    Flatten ``elements[].items[].entity`` from a dash search response.

    An element without ``items`` is itself the result; an item without
    ``entity`` is itself the entity.
    """
    out: list[Mapping[str, Any]] = []
    for element in _elements(body):
        items = element.get("items")
        if not isinstance(items, list):
            items = [element]
        for item in items:
            if not isinstance(item, Mapping):
                continue
            entity = item.get("entity")
            out.append(entity if isinstance(entity, Mapping) else item)
    return out


def search_total(body: Any, fallback: int) -> int:
    """paging.total, then the number of mapped results."""
    total = _dict(_dict(body).get("paging")).get("total")
    return total if isinstance(total, int) and total > 0 else fallback


# -- organization --------------------------------------------------------------


def company_name(raw: Mapping[str, Any]) -> str:
    """localizedName, then name.localized, then name as a plain string."""
    name = raw.get("name")
    return (
        _str(raw.get("localizedName"))
        or _str(_dict(name).get("localized"))
        or _str(name)
        or "Unknown"
    )


def company_employee_count(raw: Mapping[str, Any]) -> Optional[int]:
    """staffCount, then the midpoint of staffCountRange."""
    staff = raw.get("staffCount")
    if isinstance(staff, int) and staff > 0:
        return staff
    rng = raw.get("staffCountRange")
    if isinstance(rng, Mapping):
        start = rng.get("start") if isinstance(rng.get("start"), int) else 0
        end = rng.get("end") if isinstance(rng.get("end"), int) else start
        return round((start + end) / 2)
    return None


def company_headquarters(raw: Mapping[str, Any]) -> Optional[str]:
    """Address of the HEADQUARTERS location, else of the first location."""
    locations = _elements(raw.get("locations"))
    if not locations:
        return None
    hq = next((loc for loc in locations if loc.get("locationType") == "HEADQUARTERS"), locations[0])
    addr = _dict(hq.get("address"))
    parts = [_str(addr.get(k)) for k in ("city", "geographicArea", "country")]
    return ", ".join(p for p in parts if p) or None


def company_founded(raw: Mapping[str, Any]) -> Optional[int]:
    """foundedOn as a year, then foundedOn.year."""
    founded = raw.get("foundedOn")
    if isinstance(founded, int):
        return founded
    year = _dict(founded).get("year")
    return year if isinstance(year, int) else None


def company_specialties(raw: Mapping[str, Any]) -> List[str]:
    specialties = raw.get("specialties")
    if not isinstance(specialties, list):
        return []
    return [s for s in specialties if isinstance(s, str) and s]


def map_company(raw: Mapping[str, Any]) -> LinkedInCompany:
    return LinkedInCompany(
        name=company_name(raw),
        industry=_str(raw.get("localizedIndustry")) or _str(raw.get("industryName")),
        employee_count=company_employee_count(raw),
        headquarters=company_headquarters(raw),
        description=_str(raw.get("localizedDescription")),
        website=_str(raw.get("localizedWebsite")) or _str(raw.get("websiteUrl")),
        specialties=company_specialties(raw),
        founded=company_founded(raw),
    )
