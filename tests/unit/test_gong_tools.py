import json

import pytest

from sales_intel_mcp.dispatcher import Dispatcher
from sales_intel_mcp.models.gong import GongCallsPage
from sales_intel_mcp.tools import all_tools
from sales_intel_mcp.tools.gong import call_stats
from tests.helpers.vendors import VendorStub

WINDOW = {"from_date": "2024-01-01T00:00:00Z", "to_date": "2024-02-01T00:00:00Z"}

CALLS = {
    "records": {"totalRecords": 12, "currentPageSize": 2, "cursor": "c2"},
    "calls": [
        {
            "id": "101",
            "title": "Discovery call",
            "started": "2024-01-05T15:00:00Z",
            "duration": 1805,
            "direction": "Outbound",
            "url": "https://app.gong.io/call?id=101",
            "parties": [
                {"name": "Ada Rep", "affiliation": "Internal", "title": "AE", "emailAddress": "ada@seller.io"},
                {"name": "Bo Buyer", "emailAddress": "bo@buyer.com"},
            ],
        },
        {
            "id": "102",
            "title": "Demo",
            "duration": 600,
            "direction": "Inbound",
            "parties": [{"name": "Ada Rep", "emailAddress": "ada@seller.io"}],
        },
    ],
}


def _dispatcher(stub: VendorStub) -> Dispatcher:
    return Dispatcher(stub.backends(), all_tools())


@pytest.mark.asyncio
async def test_search_calls_markdown(all_credentials):
    stub = VendorStub({("POST", "/v2/calls"): CALLS})

    res = await _dispatcher(stub).invoke("gong_search_calls", {**WINDOW, "workspace_id": "w1", "cursor": "c1"})

    assert not res.is_error
    assert "Found **12** calls." in res.text
    assert "### Discovery call" in res.text
    assert "- **Duration**: 30m 5s" in res.text
    assert "Ada Rep (Internal) — AE, Bo Buyer (external)" in res.text
    assert "Use cursor:* `c2`" in res.text
    assert stub.json_body() == {
        "filter": {
            "fromDateTime": WINDOW["from_date"],
            "toDateTime": WINDOW["to_date"],
            "workspaceId": "w1",
        },
        "cursor": "c1",
    }


@pytest.mark.asyncio
async def test_search_calls_json(all_credentials):
    stub = VendorStub({("POST", "/v2/calls"): CALLS})

    res = await _dispatcher(stub).invoke("gong_search_calls", {**WINDOW, "response_format": "json"})
    payload = json.loads(res.text)

    assert payload["total"] == 12
    assert payload["count"] == 2
    assert payload["next_cursor"] == "c2"
    assert payload["calls"][0]["parties"][0]["emailAddress"] == "ada@seller.io"


@pytest.mark.asyncio
async def test_transcript_groups_consecutive_sentences(all_credentials):
    stub = VendorStub(
        {
            ("POST", "/v2/calls/transcript"): {
                "callTranscripts": [
                    {
                        "callId": "101",
                        "transcript": [
                            {"speakerId": "s1", "start": 0, "end": 2000, "text": "Hi there."},
                            {"speakerId": "s1", "start": 2000, "end": 4000, "text": "Thanks for joining."},
                            {"speakerId": "s2", "start": 65000, "end": 70000, "text": "Happy to."},
                        ],
                    }
                ]
            }
        }
    )

    res = await _dispatcher(stub).invoke("gong_get_transcript", {"call_id": "101"})

    assert res.text.count("Speaker s1:") == 1
    assert "**[1m 5s] Speaker s2:**" in res.text
    assert "Thanks for joining." in res.text
    assert stub.json_body() == {"filter": {"callIds": ["101"]}}


@pytest.mark.asyncio
async def test_transcript_missing(all_credentials):
    stub = VendorStub({("POST", "/v2/calls/transcript"): {"callTranscripts": []}})
    res = await _dispatcher(stub).invoke("gong_get_transcript", {"call_id": "9"})
    assert not res.is_error
    assert res.text == "No transcript available for call 9."


@pytest.mark.asyncio
async def test_call_details_sections(all_credentials):
    stub = VendorStub(
        {
            ("POST", "/v2/calls/extensive"): {
                "calls": [
                    {
                        "metaData": {"id": "101", "title": "Discovery call", "duration": 120},
                        "content": {
                            "topics": [{"name": "Pricing", "duration": 90}],
                            "trackers": [{"name": "Competitors", "count": 3}],
                            "pointsOfInterest": {"actionItems": [{"snippet": "Send proposal", "speakerId": "s1"}]},
                        },
                        "interaction": {
                            "speakers": [{"id": "s1", "talkTime": 75}],
                            "interactionStats": [{"name": "Interactivity", "value": 6.2}],
                        },
                    }
                ]
            }
        }
    )

    res = await _dispatcher(stub).invoke("gong_get_call_details", {"call_id": "101"})

    assert res.text.startswith("# Call Details — Discovery call")
    assert "- **Pricing** (1m 30s)" in res.text
    assert "- **Competitors**: 3 occurrences" in res.text
    assert "- Send proposal *(Speaker s1)*" in res.text
    assert "- **Speaker s1**: 1m 15s talk time" in res.text
    assert "- **Interactivity**: 6.2" in res.text
    body = stub.json_body()
    assert body["contentSelector"]["exposedFields"]["interaction"] == {"interactionStats": True, "speakers": True}


@pytest.mark.asyncio
async def test_participant_search(all_credentials):
    stub = VendorStub({("POST", "/v2/calls"): CALLS})

    res = await _dispatcher(stub).invoke("gong_search_calls_by_participant", {**WINDOW, "email": "bo@buyer.com"})

    assert res.text.startswith("# Calls with bo@buyer.com")
    assert stub.json_body()["filter"]["callParticipantsEmailAddresses"] == ["bo@buyer.com"]


@pytest.mark.asyncio
async def test_participant_email_must_look_like_an_address(all_credentials):
    stub = VendorStub()
    res = await _dispatcher(stub).invoke("gong_search_calls_by_participant", {**WINDOW, "email": "bo"})
    assert res.is_error
    assert "'email'" in res.text
    assert stub.requests == []


def test_call_stats_aggregates_page():
    stats = call_stats(GongCallsPage.model_validate(CALLS), "a", "b")

    assert stats["totalCalls"] == 12
    assert stats["callsInPage"] == 2
    assert stats["totalDurationSeconds"] == 2405
    assert stats["averageDurationSeconds"] == 1202
    assert stats["directionBreakdown"] == {"Outbound": 1, "Inbound": 1}
    assert stats["topParticipants"][0] == {"email": "ada@seller.io", "callCount": 2}


@pytest.mark.asyncio
async def test_call_stats_markdown(all_credentials):
    stub = VendorStub({("POST", "/v2/calls"): CALLS})
    res = await _dispatcher(stub).invoke("gong_get_call_stats", WINDOW)
    assert "**Total Calls**: 12" in res.text
    assert "1. **ada@seller.io** — 2 calls" in res.text


@pytest.mark.asyncio
async def test_null_call_fields_do_not_fail_the_page(all_credentials):
    page = {"records": None, "calls": [{"id": "103", "title": None, "duration": None, "parties": None}]}
    stub = VendorStub({("POST", "/v2/calls"): page})

    res = await _dispatcher(stub).invoke("gong_search_calls", {**WINDOW, "response_format": "json"})

    assert not res.is_error
    assert json.loads(res.text)["calls"][0]["id"] == "103"
