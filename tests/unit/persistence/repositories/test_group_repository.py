"""Unit tests for GroupRepository and LegacyGroupRepository."""

import sqlite3
from datetime import datetime
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from classalarm.domain.entities import EPOCH, Group, LegacyGroupRecord
from classalarm.domain.stores import RecordExistsError, StoreError
from classalarm.infrastructure.persistence.models import GroupModel, LegacyGroupModel
from classalarm.infrastructure.persistence.repositories import (
    GroupRepository,
    LegacyGroupRepository,
)


@pytest.fixture
def mock_session():
    """Create a mock database session."""
    session = AsyncMock(spec=AsyncSession)
    return session


@pytest.fixture
def group_repo(mock_session):
    return GroupRepository(mock_session)


@pytest.fixture
def legacy_repo(mock_session):
    return LegacyGroupRepository(mock_session)


def _missing_table(name: str) -> OperationalError:
    return OperationalError("SELECT", {}, sqlite3.OperationalError(f"no such table: {name}"))


@pytest.mark.asyncio
async def test_find_returns_entity(group_repo, mock_session):
    mock_result = MagicMock()
    mock_result.scalar_one_or_none.return_value = GroupModel(
        id="g1", code="QWERTY", members=["u1", "u2"], member_count=2, last_alarm_at=None, schema_version=2
    )
    mock_session.execute.return_value = mock_result

    group = await group_repo.find("QWERTY")

    assert group.code == "QWERTY"
    assert group.members == ["u1", "u2"]
    assert group.last_alarm_at == EPOCH
    mock_session.execute.assert_called_once()


@pytest.mark.asyncio
async def test_find_not_found(group_repo, mock_session):
    mock_result = MagicMock()
    mock_result.scalar_one_or_none.return_value = None
    mock_session.execute.return_value = mock_result

    assert await group_repo.find("QWERTY") is None


@pytest.mark.asyncio
async def test_find_missing_table_is_not_found(group_repo, mock_session):
    mock_session.execute.side_effect = _missing_table("class_groups")

    assert await group_repo.find("QWERTY") is None
    mock_session.rollback.assert_awaited_once()


@pytest.mark.asyncio
async def test_find_driver_failure_raises_store_error(group_repo, mock_session):
    mock_session.execute.side_effect = OperationalError(
        "SELECT", {}, sqlite3.OperationalError("database is locked")
    )

    with pytest.raises(StoreError):
        await group_repo.find("QWERTY")


@pytest.mark.asyncio
async def test_create_adds_and_commits(group_repo, mock_session):
    group = await group_repo.create(Group(code="QWERTY", members=["u1"]))

    assert group.id is not None
    assert group.member_count == 1
    mock_session.add.assert_called_once()
    model = mock_session.add.call_args[0][0]
    assert isinstance(model, GroupModel)
    assert model.code == "QWERTY"
    mock_session.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_create_duplicate_code(group_repo, mock_session):
    mock_session.commit.side_effect = IntegrityError(
        "INSERT", {}, sqlite3.IntegrityError("UNIQUE constraint failed: class_groups.code")
    )

    with pytest.raises(RecordExistsError):
        await group_repo.create(Group(code="QWERTY", members=["u1"]))

    mock_session.rollback.assert_awaited_once()


@pytest.mark.asyncio
async def test_save_overwrites_and_commits(group_repo, mock_session):
    mock_result = MagicMock()
    mock_result.rowcount = 1
    mock_session.execute.return_value = mock_result
    group = Group(code="QWERTY", members=["u1", "u2"])

    saved = await group_repo.save(group)

    assert saved.member_count == 2
    mock_session.execute.assert_called_once()
    mock_session.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_delete_commits(group_repo, mock_session):
    await group_repo.delete(Group(code="QWERTY", members=["u1"]))

    mock_session.execute.assert_called_once()
    mock_session.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_legacy_find_maps_old_fields(legacy_repo, mock_session):
    mock_result = MagicMock()
    mock_result.scalar_one_or_none.return_value = LegacyGroupModel(
        object_id="obj1",
        class_code="AB12CD",
        members=["u1", "u2"],
        member_count=None,
        last_alarm_time=datetime(2023, 5, 1, 9, 30),
    )
    mock_session.execute.return_value = mock_result

    record = await legacy_repo.find("AB12CD")

    assert record.object_id == "obj1"
    assert record.class_code == "AB12CD"
    assert record.member_count is None
    assert record.last_alarm_time.tzinfo is not None


@pytest.mark.asyncio
async def test_legacy_find_missing_table(legacy_repo, mock_session):
    mock_session.execute.side_effect = _missing_table("Class")

    assert await legacy_repo.find("AB12CD") is None


@pytest.mark.asyncio
async def test_legacy_delete_failure_raises_store_error(legacy_repo, mock_session):
    mock_session.commit.side_effect = OperationalError(
        "DELETE", {}, sqlite3.OperationalError("disk I/O error")
    )

    with pytest.raises(StoreError):
        await legacy_repo.delete(LegacyGroupRecord(object_id="obj1", class_code="AB12CD"))
