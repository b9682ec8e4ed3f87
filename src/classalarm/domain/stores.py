"""Store interfaces the domain services depend on.

Durable state lives behind these interfaces. Implementations perform one
request/response round trip per call and commit it, so every mutating call
is durable once it returns.

``GroupStore.save`` is a plain overwrite (last writer wins). Two callers
that read the same record and save it concurrently can lose one update;
an implementation that needs linearizable membership or cooldown updates
should turn ``save`` into a conditional update on ``member_count`` and
``last_alarm_at`` (or run it in a transaction) behind this same signature.
"""

from abc import ABC, abstractmethod

from classalarm.domain.entities import DeviceAccount, Group, Installation, LegacyGroupRecord


class StoreError(Exception):
    """Raised when a store cannot complete a request (outage, timeout, driver error)."""

    pass


class RecordExistsError(Exception):
    """Raised by ``create`` when the record's unique key is already taken."""

    pass


class GroupStore(ABC):
    """Current-schema group records keyed by code."""

    @abstractmethod
    async def find(self, code: str) -> Group | None:
        """Return the group for ``code`` or None.

        A missing backing table is reported as None, not as an error.
        """
        pass

    @abstractmethod
    async def create(self, group: Group) -> Group:
        """Persist a new group.

        Raises:
            RecordExistsError: If a group with the same code already exists.
        """
        pass

    @abstractmethod
    async def save(self, group: Group) -> Group:
        """Overwrite an existing group's members, count and alarm time."""
        pass

    @abstractmethod
    async def delete(self, group: Group) -> None:
        """Delete a group record."""
        pass


class LegacyGroupStore(ABC):
    """Read-and-delete access to records still in the pre-migration shape."""

    @abstractmethod
    async def find(self, code: str) -> LegacyGroupRecord | None:
        """Return the legacy record for ``code`` or None.

        A missing legacy table is reported as None, not as an error.
        """
        pass

    @abstractmethod
    async def delete(self, record: LegacyGroupRecord) -> None:
        """Delete a legacy record."""
        pass


class DeviceAccountStore(ABC):
    """Accounts keyed by username."""

    @abstractmethod
    async def create(self, account: DeviceAccount) -> DeviceAccount:
        """Persist a new account.

        Raises:
            RecordExistsError: If the username is already registered.
        """
        pass

    @abstractmethod
    async def get_by_username(self, username: str) -> DeviceAccount | None:
        pass

    @abstractmethod
    async def touch_login(self, account: DeviceAccount) -> None:
        """Record a successful login."""
        pass


class InstallationStore(ABC):
    """Push targets owned by accounts."""

    @abstractmethod
    async def upsert(self, installation: Installation) -> Installation:
        """Bind a device token to an account, replacing any previous owner."""
        pass

    @abstractmethod
    async def list_tokens_for_users(self, user_ids: list[str]) -> list[str]:
        """Return the device tokens of every installation owned by ``user_ids``."""
        pass
