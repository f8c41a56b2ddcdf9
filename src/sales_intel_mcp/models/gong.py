from __future__ import annotations

from typing import List, Optional

from pydantic import Field

from sales_intel_mcp.models import VendorModel


class GongParty(VendorModel):
    id: Optional[str] = None
    email_address: Optional[str] = None
    name: Optional[str] = None
    title: Optional[str] = None
    speaker_id: Optional[str] = None
    affiliation: Optional[str] = None
    phone_number: Optional[str] = None


class GongCall(VendorModel):
    id: str = ""
    title: Optional[str] = None
    started: Optional[str] = None
    duration: int = 0
    url: Optional[str] = None
    direction: Optional[str] = None
    scope: Optional[str] = None
    parties: List[GongParty] = Field(default_factory=list)


class GongRecords(VendorModel):
    total_records: Optional[int] = None
    current_page_size: Optional[int] = None
    cursor: Optional[str] = None


class GongCallsPage(VendorModel):
    calls: List[GongCall] = Field(default_factory=list)
    records: Optional[GongRecords] = None

    @property
    def total(self) -> int:
        if self.records and self.records.total_records:
            return self.records.total_records
        return len(self.calls)

    @property
    def cursor(self) -> Optional[str]:
        return self.records.cursor if self.records else None


class TranscriptSentence(VendorModel):
    start: int = 0
    end: Optional[int] = None
    text: str = ""
    speaker_id: Optional[str] = None


class CallTranscript(VendorModel):
    call_id: Optional[str] = None
    transcript: List[TranscriptSentence] = Field(default_factory=list)


class GongTranscriptsPage(VendorModel):
    call_transcripts: List[CallTranscript] = Field(default_factory=list)


class GongTopic(VendorModel):
    name: str = ""
    duration: int = 0


class GongTracker(VendorModel):
    name: str = ""
    count: int = 0


class GongActionItem(VendorModel):
    snippet: str = ""
    speaker_id: Optional[str] = None


class GongPointsOfInterest(VendorModel):
    action_items: List[GongActionItem] = Field(default_factory=list)


class GongCallContent(VendorModel):
    topics: List[GongTopic] = Field(default_factory=list)
    trackers: List[GongTracker] = Field(default_factory=list)
    points_of_interest: Optional[GongPointsOfInterest] = None


class GongSpeaker(VendorModel):
    id: Optional[str] = None
    talk_time: int = 0
    user_id: Optional[str] = None


class GongInteractionStat(VendorModel):
    name: str = ""
    value: Optional[float] = None


class GongInteraction(VendorModel):
    interaction_stats: List[GongInteractionStat] = Field(default_factory=list)
    speakers: List[GongSpeaker] = Field(default_factory=list)


class GongCallDetails(VendorModel):
    meta_data: Optional[GongCall] = None
    content: Optional[GongCallContent] = None
    interaction: Optional[GongInteraction] = None


class GongExtensivePage(VendorModel):
    calls: List[GongCallDetails] = Field(default_factory=list)
