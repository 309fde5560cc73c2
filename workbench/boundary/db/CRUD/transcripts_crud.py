"""
Transcript configuration and history CRUD operations.

Dependencies: sqlalchemy, workbench.boundary.db.models
System role: Transcript pipeline persistence operations
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from workbench.boundary.db.models.transcripts_model import (
    TranscriptsConfigurationModel,
    TranscriptsHistoryModel,
    TranscriptsProvider,
)
from workbench.boundary.db.CRUD.base_crud import BaseCRUD


class TranscriptsConfigurationCRUD(BaseCRUD[TranscriptsConfigurationModel]):
    """
    CRUD operations for TranscriptsConfigurationModel.

    History rows are handled here too since they only exist under a
    configuration.
    """

    def __init__(self) -> None:
        """Initialize with TranscriptsConfigurationModel."""
        super().__init__(TranscriptsConfigurationModel)

    async def make_new(
        self,
        session: AsyncSession,
        user_id: UUID,
        workspace_id: UUID,
        provider: TranscriptsProvider,
        connection_id: str,
        agent_configuration_id: str | None = None,
        is_active: bool = False,
    ) -> TranscriptsConfigurationModel:
        """Create a transcript configuration for a user."""
        return await self.create(
            session,
            user_id=user_id,
            workspace_id=workspace_id,
            provider=provider,
            connection_id=connection_id,
            agent_configuration_id=agent_configuration_id,
            is_active=is_active,
        )

    async def fetch_by_user_id(
        self,
        session: AsyncSession,
        user_id: UUID,
        provider: TranscriptsProvider | None = None,
    ) -> TranscriptsConfigurationModel | None:
        """Retrieve the user's configuration, optionally for one provider."""
        stmt = select(TranscriptsConfigurationModel).where(
            TranscriptsConfigurationModel.user_id == user_id
        )
        if provider is not None:
            stmt = stmt.where(TranscriptsConfigurationModel.provider == provider)
        result = await session.execute(stmt.limit(1))
        return result.scalar_one_or_none()

    async def list_active(self, session: AsyncSession) -> Sequence[TranscriptsConfigurationModel]:
        """List configurations picked up by periodic sync."""
        stmt = select(TranscriptsConfigurationModel).where(
            TranscriptsConfigurationModel.is_active.is_(True)
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def fetch_history_for_file(
        self,
        session: AsyncSession,
        configuration_id: UUID,
        file_id: str,
    ) -> TranscriptsHistoryModel | None:
        """
        Retrieve the history record of a file.

        Returns:
            TranscriptsHistoryModel if the file was already handled, None otherwise
        """
        stmt = select(TranscriptsHistoryModel).where(
            TranscriptsHistoryModel.configuration_id == configuration_id,
            TranscriptsHistoryModel.file_id == file_id,
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def record_history(
        self,
        session: AsyncSession,
        configuration_id: UUID,
        file_id: str,
        file_name: str,
        conversation_id: str | None,
    ) -> TranscriptsHistoryModel:
        """Record that a file was handled, with its conversation if any."""
        history = TranscriptsHistoryModel(
            configuration_id=configuration_id,
            file_id=file_id,
            file_name=file_name,
            conversation_id=conversation_id,
        )
        session.add(history)
        await session.flush()
        return history

    async def list_history(
        self,
        session: AsyncSession,
        configuration_id: UUID,
        limit: int | None = None,
    ) -> Sequence[TranscriptsHistoryModel]:
        """List history records, newest first."""
        stmt = (
            select(TranscriptsHistoryModel)
            .where(TranscriptsHistoryModel.configuration_id == configuration_id)
            .order_by(TranscriptsHistoryModel.created_at.desc())
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await session.execute(stmt)
        return result.scalars().all()

    async def list_history_file_ids(
        self,
        session: AsyncSession,
        configuration_id: UUID,
    ) -> set[str]:
        """Return the ids of every file already handled for a configuration."""
        stmt = select(TranscriptsHistoryModel.file_id).where(
            TranscriptsHistoryModel.configuration_id == configuration_id
        )
        result = await session.execute(stmt)
        return set(result.scalars().all())

    async def delete_configuration(
        self,
        session: AsyncSession,
        configuration_id: UUID,
    ) -> bool:
        """
        Delete a configuration and its history.

        Returns:
            True if the configuration row was deleted
        """
        await session.execute(
            delete(TranscriptsHistoryModel).where(
                TranscriptsHistoryModel.configuration_id == configuration_id
            )
        )
        return await self.delete_by_id(session, configuration_id)


transcripts_configuration_crud = TranscriptsConfigurationCRUD()
