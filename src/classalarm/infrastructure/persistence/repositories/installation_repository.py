"""Repository for push installation operations."""

from __future__ import annotations

import uuid

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from classalarm.domain.entities import Installation
from classalarm.domain.stores import InstallationStore, StoreError
from classalarm.infrastructure.persistence.models import InstallationModel


class InstallationRepository(InstallationStore):
    """Installation store backed by the installations table."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def upsert(self, installation: Installation) -> Installation:
        """Bind a device token to an account.

        A token re-registered by another account moves to that account.
        """
        try:
            result = await self.session.execute(
                select(InstallationModel).where(
                    InstallationModel.device_token == installation.device_token
                )
            )
            model = result.scalar_one_or_none()
            if model is None:
                model = InstallationModel(
                    id=str(uuid.uuid4()),
                    device_token=installation.device_token,
                )
                self.session.add(model)
            model.user_id = installation.user_id
            model.platform = installation.platform
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise StoreError("Installation upsert failed") from e
        return installation

    async def list_tokens_for_users(self, user_ids: list[str]) -> list[str]:
        if not user_ids:
            return []
        try:
            result = await self.session.execute(
                select(InstallationModel.device_token).where(
                    InstallationModel.user_id.in_(user_ids)
                )
            )
        except SQLAlchemyError as e:
            raise StoreError("Installation lookup failed") from e
        return list(result.scalars().all())
