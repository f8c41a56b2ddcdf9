"""Gong tools: call search, transcripts, call analytics and activity stats."""

from __future__ import annotations

from collections import Counter
from typing import Optional

from pydantic import Field

from sales_intel_mcp.adapters import Backends
from sales_intel_mcp.core.result import Err
from sales_intel_mcp.dispatcher import NotFound, Outcome, Rendered, ToolParams, ToolSpec
from sales_intel_mcp.models import parse_payload
from sales_intel_mcp.models.gong import (
    GongCall,
    GongCallDetails,
    GongCallsPage,
    GongExtensivePage,
    GongTranscriptsPage,
)
from sales_intel_mcp.tools.formatting import NA, format_duration, json_text

SERVICE = "Gong"

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class SearchCallsParams(ToolParams):
    from_date: str = Field(description="Start date in ISO 8601 format (e.g. '2024-01-01T00:00:00Z')")
    to_date: str = Field(description="End date in ISO 8601 format (e.g. '2024-02-01T00:00:00Z')")
    workspace_id: Optional[str] = Field(default=None, description="Optional Gong workspace ID to scope results")
    cursor: Optional[str] = Field(default=None, description="Pagination cursor from a previous response")


class CallIdParams(ToolParams):
    call_id: str = Field(description="The Gong call ID")


class SearchByParticipantParams(ToolParams):
    email: str = Field(pattern=EMAIL_PATTERN, description="Email address of the participant to search for")
    from_date: str = Field(description="Start date in ISO 8601 format")
    to_date: str = Field(description="End date in ISO 8601 format")


class CallStatsParams(ToolParams):
    from_date: str = Field(description="Start date in ISO 8601 format")
    to_date: str = Field(description="End date in ISO 8601 format")


def format_call_markdown(call: GongCall) -> str:
    parties = ", ".join(
        f"{p.name or 'Unknown'} ({p.affiliation or 'external'})" + (f" — {p.title}" if p.title else "")
        for p in call.parties
    )
    return "\n".join(
        [
            f"### {call.title or 'Untitled Call'}",
            f"- **ID**: {call.id}",
            f"- **Date**: {call.started or NA}",
            f"- **Duration**: {format_duration(call.duration)}",
            f"- **Direction**: {call.direction or NA}",
            f"- **Participants**: {parties or NA}",
            f"- **URL**: {call.url or NA}",
            "",
        ]
    )


async def search_calls(backends: Backends, params: SearchCallsParams) -> Outcome:
    call_filter: dict = {"fromDateTime": params.from_date, "toDateTime": params.to_date}
    if params.workspace_id:
        call_filter["workspaceId"] = params.workspace_id
    body: dict = {"filter": call_filter}
    if params.cursor:
        body["cursor"] = params.cursor

    res = await backends.gong.post("/calls", body)
    if isinstance(res, Err):
        return res

    page = parse_payload(GongCallsPage, res.value)
    if isinstance(page, Err):
        return page
    if not page.calls:
        return NotFound("No calls found in the specified date range.")

    if params.wants_json:
        return Rendered(
            json_text(
                {
                    "total": page.total,
                    "count": len(page.calls),
                    "next_cursor": page.cursor,
                    "calls": [c.dump() for c in page.calls],
                }
            )
        )

    lines = [
        f"# Gong Calls ({params.from_date} to {params.to_date})",
        f"Found **{page.total}** calls.\n",
        *(format_call_markdown(c) for c in page.calls),
    ]
    if page.cursor:
        lines.append(f"\n---\n*More results available. Use cursor:* `{page.cursor}`")
    return Rendered("\n".join(lines))


async def get_transcript(backends: Backends, params: CallIdParams) -> Outcome:
    res = await backends.gong.post("/calls/transcript", {"filter": {"callIds": [params.call_id]}})
    if isinstance(res, Err):
        return res

    page = parse_payload(GongTranscriptsPage, res.value)
    if isinstance(page, Err):
        return page
    sentences = page.call_transcripts[0].transcript if page.call_transcripts else []
    if not sentences:
        return NotFound(f"No transcript available for call {params.call_id}.")

    if params.wants_json:
        return Rendered(json_text({"callId": params.call_id, "sentences": [s.dump() for s in sentences]}))

    lines = [f"# Transcript — Call {params.call_id}\n"]
    last_speaker = None
    for s in sentences:
        speaker = s.speaker_id or "Unknown"
        if speaker != last_speaker:
            lines.append(f"\n**[{format_duration(s.start // 1000)}] Speaker {speaker}:**")
            last_speaker = speaker
        lines.append(s.text)
    return Rendered("\n".join(lines))


def format_call_details_markdown(call_id: str, details: GongCallDetails) -> str:
    meta = details.meta_data
    lines = [
        f"# Call Details — {(meta.title if meta else None) or call_id}",
        f"- **Date**: {(meta.started if meta else None) or NA}",
        f"- **Duration**: {format_duration(meta.duration) if meta else NA}",
        "",
    ]

    content = details.content
    interaction = details.interaction

    if content and content.topics:
        lines.append("## Topics Discussed")
        lines.extend(f"- **{t.name}** ({format_duration(t.duration)})" for t in content.topics)
        lines.append("")

    if content and content.trackers:
        lines.append("## Trackers Triggered")
        lines.extend(f"- **{t.name}**: {t.count} occurrences" for t in content.trackers)
        lines.append("")

    action_items = content.points_of_interest.action_items if content and content.points_of_interest else []
    if action_items:
        lines.append("## Action Items")
        lines.extend(f"- {a.snippet} *(Speaker {a.speaker_id or 'Unknown'})*" for a in action_items)
        lines.append("")

    if interaction and interaction.speakers:
        lines.append("## Speaker Breakdown")
        lines.extend(
            f"- **Speaker {s.id or 'Unknown'}**: {format_duration(s.talk_time)} talk time" for s in interaction.speakers
        )
        lines.append("")

    if interaction and interaction.interaction_stats:
        lines.append("## Interaction Stats")
        lines.extend(f"- **{s.name}**: {s.value}" for s in interaction.interaction_stats)
        lines.append("")

    return "\n".join(lines)


async def get_call_details(backends: Backends, params: CallIdParams) -> Outcome:
    res = await backends.gong.post(
        "/calls/extensive",
        {
            "filter": {"callIds": [params.call_id]},
            "contentSelector": {
                "exposedFields": {
                    "content": {"topics": True, "trackers": True, "pointsOfInterest": True},
                    "interaction": {"interactionStats": True, "speakers": True},
                },
            },
        },
    )
    if isinstance(res, Err):
        return res

    page = parse_payload(GongExtensivePage, res.value)
    if isinstance(page, Err):
        return page
    if not page.calls:
        return NotFound(f"No details found for call {params.call_id}.")

    details = page.calls[0]
    if params.wants_json:
        return Rendered(json_text(details.dump()))
    return Rendered(format_call_details_markdown(params.call_id, details))


async def search_calls_by_participant(backends: Backends, params: SearchByParticipantParams) -> Outcome:
    res = await backends.gong.post(
        "/calls",
        {
            "filter": {
                "fromDateTime": params.from_date,
                "toDateTime": params.to_date,
                "callParticipantsEmailAddresses": [params.email],
            },
        },
    )
    if isinstance(res, Err):
        return res

    page = parse_payload(GongCallsPage, res.value)
    if isinstance(page, Err):
        return page
    if not page.calls:
        return NotFound(f"No calls found with participant {params.email} in the specified date range.")

    if params.wants_json:
        return Rendered(json_text({"total": len(page.calls), "calls": [c.dump() for c in page.calls]}))

    lines = [
        f"# Calls with {params.email}",
        f"Found **{len(page.calls)}** calls.\n",
        *(format_call_markdown(c) for c in page.calls),
    ]
    return Rendered("\n".join(lines))


def call_stats(page: GongCallsPage, from_date: str, to_date: str) -> dict:
    calls = page.calls
    total_duration = sum(c.duration for c in calls)
    avg_duration = round(total_duration / len(calls)) if calls else 0

    directions = Counter(c.direction or "unknown" for c in calls)
    participants = Counter(p.email_address for c in calls for p in c.parties if p.email_address)

    return {
        "period": {"from": from_date, "to": to_date},
        "totalCalls": page.total,
        "callsInPage": len(calls),
        "totalDurationSeconds": total_duration,
        "averageDurationSeconds": avg_duration,
        "directionBreakdown": dict(directions),
        "topParticipants": [{"email": e, "callCount": n} for e, n in participants.most_common(10)],
    }


async def get_call_stats(backends: Backends, params: CallStatsParams) -> Outcome:
    res = await backends.gong.post(
        "/calls",
        {"filter": {"fromDateTime": params.from_date, "toDateTime": params.to_date}},
    )
    if isinstance(res, Err):
        return res

    page = parse_payload(GongCallsPage, res.value)
    if isinstance(page, Err):
        return page
    stats = call_stats(page, params.from_date, params.to_date)

    if params.wants_json:
        return Rendered(json_text(stats))

    lines = [
        "# Gong Call Statistics\n",
        f"**Period**: {params.from_date} to {params.to_date}",
        f"**Total Calls**: {stats['totalCalls']}",
        f"**Average Duration**: {format_duration(stats['averageDurationSeconds'])}",
        f"**Total Talk Time**: {format_duration(stats['totalDurationSeconds'])}\n",
        "## Direction Breakdown",
        *(f"- **{d}**: {n} calls" for d, n in stats["directionBreakdown"].items()),
        "",
        "## Most Active Participants",
        *(f"{i}. **{p['email']}** — {p['callCount']} calls" for i, p in enumerate(stats["topParticipants"], 1)),
    ]
    return Rendered("\n".join(lines))


TOOLS = [
    ToolSpec(
        name="gong_search_calls",
        title="Search Gong Calls",
        description=(
            "Search for recorded calls in Gong within a date range. Returns title, date, duration, "
            "direction, participants and Gong URL for each call. Use gong_get_call_details or "
            "gong_get_transcript on the returned IDs for deeper analysis."
        ),
        service=SERVICE,
        params=SearchCallsParams,
        handler=search_calls,
    ),
    ToolSpec(
        name="gong_get_transcript",
        title="Get Gong Call Transcript",
        description=(
            "Retrieve the full transcript of a Gong call as timestamped sentences grouped by speaker. "
            "Use gong_search_calls first to find call IDs."
        ),
        service=SERVICE,
        params=CallIdParams,
        handler=get_transcript,
    ),
    ToolSpec(
        name="gong_get_call_details",
        title="Get Gong Call Details",
        description=(
            "Get analytics for a Gong call: topics discussed, trackers triggered, action items, "
            "speaker talk time and interaction stats."
        ),
        service=SERVICE,
        params=CallIdParams,
        handler=get_call_details,
    ),
    ToolSpec(
        name="gong_search_calls_by_participant",
        title="Search Gong Calls by Participant",
        description="Find Gong calls in a date range where a person, identified by email address, participated.",
        service=SERVICE,
        params=SearchByParticipantParams,
        handler=search_calls_by_participant,
    ),
    ToolSpec(
        name="gong_get_call_stats",
        title="Get Gong Call Statistics",
        description=(
            "Aggregate call statistics for a date range: total calls, average duration, "
            "direction breakdown and the most active participants."
        ),
        service=SERVICE,
        params=CallStatsParams,
        handler=get_call_stats,
    ),
]
