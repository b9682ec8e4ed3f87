"""Repository for device account operations."""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from classalarm.domain.entities import DeviceAccount
from classalarm.domain.stores import DeviceAccountStore, RecordExistsError, StoreError
from classalarm.infrastructure.persistence.models import DeviceAccountModel


def _to_entity(model: DeviceAccountModel) -> DeviceAccount:
    return DeviceAccount(
        id=model.id,
        username=model.username,
        secret_hash=model.secret_hash,
        created_at=model.created_at or datetime.now(timezone.utc),
        last_login=model.last_login,
    )


class DeviceAccountRepository(DeviceAccountStore):
    """Device account store backed by the device_accounts table."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def create(self, account: DeviceAccount) -> DeviceAccount:
        """Insert a new account.

        Raises:
            RecordExistsError: If the username (or derived id) is taken.
        """
        model = DeviceAccountModel(
            id=account.id,
            username=account.username,
            secret_hash=account.secret_hash,
            created_at=account.created_at,
            last_login=account.last_login,
        )
        try:
            self.session.add(model)
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            raise RecordExistsError("Device account already exists") from e
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise StoreError("Device account create failed") from e
        return account

    async def get_by_username(self, username: str) -> DeviceAccount | None:
        try:
            result = await self.session.execute(
                select(DeviceAccountModel).where(DeviceAccountModel.username == username)
            )
        except SQLAlchemyError as e:
            raise StoreError("Device account lookup failed") from e
        model = result.scalar_one_or_none()
        return _to_entity(model) if model is not None else None

    async def touch_login(self, account: DeviceAccount) -> None:
        now = datetime.now(timezone.utc)
        try:
            await self.session.execute(
                update(DeviceAccountModel)
                .where(DeviceAccountModel.id == account.id)
                .values(last_login=now)
            )
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise StoreError("Device account update failed") from e
        account.last_login = now
