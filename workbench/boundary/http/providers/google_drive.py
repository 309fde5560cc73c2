"""
Google Meet transcripts stored in Google Drive.

Meet saves transcripts as Google Docs named "<meeting> - Transcript" in the
organizer's Drive. Listing uses the Drive files.list query API; content is
exported as text/plain.

Dependencies: httpx
System role: Transcript provider
"""

from workbench.boundary.db.models import TranscriptsConfigurationModel
from workbench.boundary.http.providers.base import BaseTranscriptsProvider
from workbench.models.transcript import TranscriptContent

GOOGLE_DOC_MIME_TYPE = "application/vnd.google-apps.document"
TRANSCRIPT_NAME_MARKER = "- Transcript"


class GoogleDriveTranscriptsProvider(BaseTranscriptsProvider):
    """Google Drive transcript provider."""

    name = "google_drive"

    def build_query(self) -> str:
        created_after = self.lookback_start().strftime("%Y-%m-%dT%H:%M:%S")
        return (
            f"name contains '{TRANSCRIPT_NAME_MARKER}' "
            f"and mimeType = '{GOOGLE_DOC_MIME_TYPE}' "
            f"and createdTime > '{created_after}' "
            "and trashed = false"
        )

    async def list_transcript_ids(self, configuration: TranscriptsConfigurationModel) -> list[str]:
        headers = await self._auth_headers(configuration)
        params = {
            "q": self.build_query(),
            "fields": "nextPageToken, files(id, name)",
            "pageSize": 100,
        }

        file_ids: list[str] = []
        while True:
            response = await self._call("GET", "files", headers, params=params)
            payload = response.json()
            file_ids.extend(f["id"] for f in payload.get("files", []))

            next_page_token = payload.get("nextPageToken")
            if not next_page_token:
                return file_ids
            params = {**params, "pageToken": next_page_token}

    async def fetch_transcript(
        self,
        configuration: TranscriptsConfigurationModel,
        file_id: str,
    ) -> TranscriptContent:
        headers = await self._auth_headers(configuration)

        metadata = await self._call("GET", f"files/{file_id}", headers, params={"fields": "name"})
        exported = await self._call(
            "GET",
            f"files/{file_id}/export",
            headers,
            params={"mimeType": "text/plain"},
        )
        return TranscriptContent(title=metadata.json().get("name", ""), content=exported.text)
