"""
Microsoft connector CRUD operations.

Configuration rows are keyed by connector id. Deleting a configuration
removes nodes, deltas and roots first, then the configuration itself.

Dependencies: sqlalchemy, workbench.boundary.db.models
System role: Connector state persistence operations
"""

from typing import Sequence

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from workbench.boundary.db.models.microsoft_model import (
    MicrosoftConfigurationModel,
    MicrosoftDeltaModel,
    MicrosoftNodeModel,
    MicrosoftRootModel,
)
from workbench.boundary.db.CRUD.base_crud import BaseCRUD


class MicrosoftConfigurationCRUD(BaseCRUD[MicrosoftConfigurationModel]):
    """CRUD operations for MicrosoftConfigurationModel."""

    def __init__(self) -> None:
        """Initialize with MicrosoftConfigurationModel."""
        super().__init__(MicrosoftConfigurationModel)

    async def make_new(
        self,
        session: AsyncSession,
        connector_id: int,
        **kwargs,
    ) -> MicrosoftConfigurationModel:
        """Create the configuration row of a connector."""
        return await self.create(session, connector_id=connector_id, **kwargs)

    async def fetch_by_connector_id(
        self,
        session: AsyncSession,
        connector_id: int,
    ) -> MicrosoftConfigurationModel | None:
        """
        Retrieve configuration by connector id.

        Returns:
            MicrosoftConfigurationModel if found, None otherwise
        """
        stmt = select(MicrosoftConfigurationModel).where(
            MicrosoftConfigurationModel.connector_id == connector_id
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def delete_for_connector(self, session: AsyncSession, connector_id: int) -> None:
        """
        Delete all Microsoft state of a connector.

        Child rows go first (nodes, deltas, roots), then the configuration,
        all within the caller's transaction.

        Args:
            session: Async database session
            connector_id: Connector whose state is removed
        """
        for model in (
            MicrosoftNodeModel,
            MicrosoftDeltaModel,
            MicrosoftRootModel,
            MicrosoftConfigurationModel,
        ):
            await session.execute(delete(model).where(model.connector_id == connector_id))


class MicrosoftRootCRUD(BaseCRUD[MicrosoftRootModel]):
    """CRUD operations for MicrosoftRootModel."""

    def __init__(self) -> None:
        """Initialize with MicrosoftRootModel."""
        super().__init__(MicrosoftRootModel)

    async def make_new(
        self,
        session: AsyncSession,
        connector_id: int,
        node_id: str,
        node_type: str,
    ) -> MicrosoftRootModel:
        """Create one root."""
        return await self.create(
            session,
            connector_id=connector_id,
            node_id=node_id,
            node_type=node_type,
        )

    async def batch_make_new(
        self,
        session: AsyncSession,
        roots: list[dict],
    ) -> list[MicrosoftRootModel]:
        """Create several roots at once."""
        return await self.bulk_create(session, roots)

    async def batch_delete(
        self,
        session: AsyncSession,
        connector_id: int,
        node_ids: list[str],
    ) -> int:
        """
        Delete roots of a connector by node id.

        Returns:
            int: Number of deleted rows
        """
        if not node_ids:
            return 0
        result = await session.execute(
            delete(MicrosoftRootModel).where(
                MicrosoftRootModel.connector_id == connector_id,
                MicrosoftRootModel.node_id.in_(node_ids),
            )
        )
        return result.rowcount

    async def list_by_connector_id(
        self,
        session: AsyncSession,
        connector_id: int,
    ) -> Sequence[MicrosoftRootModel]:
        """List roots selected for a connector."""
        stmt = select(MicrosoftRootModel).where(
            MicrosoftRootModel.connector_id == connector_id
        )
        result = await session.execute(stmt)
        return result.scalars().all()


class MicrosoftNodeCRUD(BaseCRUD[MicrosoftNodeModel]):
    """CRUD operations for MicrosoftNodeModel."""

    def __init__(self) -> None:
        """Initialize with MicrosoftNodeModel."""
        super().__init__(MicrosoftNodeModel)

    async def fetch_by_internal_id(
        self,
        session: AsyncSession,
        connector_id: int,
        internal_id: str,
    ) -> MicrosoftNodeModel | None:
        """Retrieve a node by its internal id."""
        stmt = select(MicrosoftNodeModel).where(
            MicrosoftNodeModel.connector_id == connector_id,
            MicrosoftNodeModel.internal_id == internal_id,
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def upsert(
        self,
        session: AsyncSession,
        connector_id: int,
        internal_id: str,
        **fields,
    ) -> MicrosoftNodeModel:
        """
        Create the node, or update the given fields if it already exists.

        Returns:
            MicrosoftNodeModel: Created or updated node
        """
        node = await self.fetch_by_internal_id(session, connector_id, internal_id)
        if node is None:
            return await self.create(
                session,
                connector_id=connector_id,
                internal_id=internal_id,
                **fields,
            )
        for key, value in fields.items():
            setattr(node, key, value)
        await session.flush()
        return node

    async def list_by_connector_id(
        self,
        session: AsyncSession,
        connector_id: int,
    ) -> Sequence[MicrosoftNodeModel]:
        """List every node stored for a connector."""
        stmt = select(MicrosoftNodeModel).where(
            MicrosoftNodeModel.connector_id == connector_id
        )
        result = await session.execute(stmt)
        return result.scalars().all()


class MicrosoftDeltaCRUD(BaseCRUD[MicrosoftDeltaModel]):
    """CRUD operations for MicrosoftDeltaModel."""

    def __init__(self) -> None:
        """Initialize with MicrosoftDeltaModel."""
        super().__init__(MicrosoftDeltaModel)

    async def fetch_by_node_id(
        self,
        session: AsyncSession,
        connector_id: int,
        node_id: str,
    ) -> MicrosoftDeltaModel | None:
        """Retrieve the stored delta link of a drive or folder."""
        stmt = select(MicrosoftDeltaModel).where(
            MicrosoftDeltaModel.connector_id == connector_id,
            MicrosoftDeltaModel.node_id == node_id,
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def upsert(
        self,
        session: AsyncSession,
        connector_id: int,
        node_id: str,
        delta_link: str,
    ) -> MicrosoftDeltaModel:
        """Store the latest delta link of a drive or folder."""
        delta = await self.fetch_by_node_id(session, connector_id, node_id)
        if delta is None:
            return await self.create(
                session,
                connector_id=connector_id,
                node_id=node_id,
                delta_link=delta_link,
            )
        delta.delta_link = delta_link
        await session.flush()
        return delta

    async def list_by_connector_id(
        self,
        session: AsyncSession,
        connector_id: int,
    ) -> Sequence[MicrosoftDeltaModel]:
        """List delta links stored for a connector."""
        stmt = select(MicrosoftDeltaModel).where(
            MicrosoftDeltaModel.connector_id == connector_id
        )
        result = await session.execute(stmt)
        return result.scalars().all()


microsoft_configuration_crud = MicrosoftConfigurationCRUD()
microsoft_root_crud = MicrosoftRootCRUD()
microsoft_node_crud = MicrosoftNodeCRUD()
microsoft_delta_crud = MicrosoftDeltaCRUD()
