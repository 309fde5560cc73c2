"""
Data source domain models.

Dependencies: pydantic
System role: Document sync contracts
"""

from pydantic import BaseModel, Field


class DataSourceConfig(BaseModel):
    """Target data source of a connector, with the key used to write to it."""

    workspace_id: str = Field(description="Public id of the workspace owning the data source")
    workspace_api_key: str = Field(description="Workspace API key sent as bearer token")
    data_source_name: str = Field(description="Data source name as shown in the workspace")


class UpsertDocumentPayload(BaseModel):
    """JSON body of a document upsert."""

    text: str
    source_url: str | None = None
    timestamp: int | None = Field(default=None, description="Document timestamp in ms since epoch")
    tags: list[str] | None = None
