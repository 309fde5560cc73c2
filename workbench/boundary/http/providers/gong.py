"""
Gong call transcripts.

Calls are listed from /calls in the lookback window. A transcript is
rebuilt from /calls/transcript as one "Speaker: sentence" line per
monologue, using /calls/extensive to resolve speaker names and the title.

Dependencies: httpx
System role: Transcript provider
"""

from typing import Any

from workbench.boundary.db.models import TranscriptsConfigurationModel
from workbench.boundary.http.providers.base import BaseTranscriptsProvider
from workbench.models.transcript import TranscriptContent

UNKNOWN_SPEAKER = "Unknown speaker"


class GongTranscriptsProvider(BaseTranscriptsProvider):
    """Gong transcript provider."""

    name = "gong"

    async def list_transcript_ids(self, configuration: TranscriptsConfigurationModel) -> list[str]:
        headers = await self._auth_headers(configuration)
        params: dict[str, Any] = {
            "fromDateTime": self.lookback_start().strftime("%Y-%m-%dT%H:%M:%SZ"),
        }

        call_ids: list[str] = []
        while True:
            response = await self._call("GET", "calls", headers, params=params)
            payload = response.json()
            call_ids.extend(str(call["id"]) for call in payload.get("calls", []))

            cursor = payload.get("records", {}).get("cursor")
            if not cursor:
                return call_ids
            params = {**params, "cursor": cursor}

    async def fetch_transcript(
        self,
        configuration: TranscriptsConfigurationModel,
        file_id: str,
    ) -> TranscriptContent:
        headers = await self._auth_headers(configuration)
        call_filter = {"filter": {"callIds": [file_id]}}

        extensive = await self._call(
            "POST",
            "calls/extensive",
            headers,
            json={**call_filter, "contentSelector": {"exposedFields": {"parties": True}}},
        )
        calls = extensive.json().get("calls", [])
        call = calls[0] if calls else {}
        title = call.get("metaData", {}).get("title", "")
        speakers = {
            party["speakerId"]: party.get("name") or UNKNOWN_SPEAKER
            for party in call.get("parties", [])
            if party.get("speakerId")
        }

        transcript = await self._call("POST", "calls/transcript", headers, json=call_filter)
        call_transcripts = transcript.json().get("callTranscripts", [])
        if not call_transcripts:
            return TranscriptContent(title=title, content="")

        return TranscriptContent(
            title=title,
            content=format_monologues(call_transcripts[0].get("transcript", []), speakers),
        )


def format_monologues(monologues: list[dict[str, Any]], speakers: dict[str, str]) -> str:
    """Join monologues into "Speaker: text" lines."""
    lines = []
    for monologue in monologues:
        speaker = speakers.get(monologue.get("speakerId"), UNKNOWN_SPEAKER)
        text = " ".join(s.get("text", "") for s in monologue.get("sentences", []))
        if text:
            lines.append(f"{speaker}: {text}")
    return "\n".join(lines)
