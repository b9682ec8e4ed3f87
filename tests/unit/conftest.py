"""Pytest configuration for unit tests.

Domain services are exercised against in-memory stores that behave like
the SQL adapters: every call is one round trip, records are copied in and
out, and ``create`` enforces a unique key.
"""

import copy

import pytest

from classalarm.domain.entities import DeviceAccount, Group, Installation, LegacyGroupRecord
from classalarm.domain.stores import (
    DeviceAccountStore,
    GroupStore,
    InstallationStore,
    LegacyGroupStore,
    RecordExistsError,
    StoreError,
)
from classalarm.infrastructure.services.push import LogPushProvider


class InMemoryGroupStore(GroupStore):
    def __init__(self) -> None:
        self.records: dict[str, Group] = {}
        self.saves = 0

    async def find(self, code: str) -> Group | None:
        group = self.records.get(code)
        return copy.deepcopy(group) if group is not None else None

    async def create(self, group: Group) -> Group:
        if group.code in self.records:
            raise RecordExistsError(group.code)
        self.records[group.code] = copy.deepcopy(group)
        return copy.deepcopy(group)

    async def save(self, group: Group) -> Group:
        self.saves += 1
        if group.code in self.records:
            self.records[group.code] = copy.deepcopy(group)
        return group

    async def delete(self, group: Group) -> None:
        self.records.pop(group.code, None)


class InMemoryLegacyGroupStore(LegacyGroupStore):
    def __init__(self) -> None:
        self.records: dict[str, LegacyGroupRecord] = {}
        self.fail_delete = False
        self.finds = 0

    async def find(self, code: str) -> LegacyGroupRecord | None:
        self.finds += 1
        record = self.records.get(code)
        return copy.deepcopy(record) if record is not None else None

    async def delete(self, record: LegacyGroupRecord) -> None:
        if self.fail_delete:
            raise StoreError("legacy store unavailable")
        self.records.pop(record.class_code, None)


class InMemoryDeviceAccountStore(DeviceAccountStore):
    def __init__(self) -> None:
        self.accounts: dict[str, DeviceAccount] = {}

    async def create(self, account: DeviceAccount) -> DeviceAccount:
        if account.username in self.accounts:
            raise RecordExistsError(account.username)
        self.accounts[account.username] = account
        return account

    async def get_by_username(self, username: str) -> DeviceAccount | None:
        return self.accounts.get(username)

    async def touch_login(self, account: DeviceAccount) -> None:
        self.accounts[account.username].last_login = account.last_login


class InMemoryInstallationStore(InstallationStore):
    def __init__(self) -> None:
        self.installations: dict[str, Installation] = {}

    async def upsert(self, installation: Installation) -> Installation:
        self.installations[installation.device_token] = installation
        return installation

    async def list_tokens_for_users(self, user_ids: list[str]) -> list[str]:
        return [
            token
            for token, installation in self.installations.items()
            if installation.user_id in user_ids
        ]


@pytest.fixture
def group_store() -> InMemoryGroupStore:
    return InMemoryGroupStore()


@pytest.fixture
def legacy_store() -> InMemoryLegacyGroupStore:
    return InMemoryLegacyGroupStore()


@pytest.fixture
def account_store() -> InMemoryDeviceAccountStore:
    return InMemoryDeviceAccountStore()


@pytest.fixture
def installation_store() -> InMemoryInstallationStore:
    return InMemoryInstallationStore()


@pytest.fixture
def push_provider() -> LogPushProvider:
    return LogPushProvider()
