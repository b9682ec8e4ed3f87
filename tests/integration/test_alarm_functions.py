"""Integration tests for the ClassAlarm operations against SQLite."""

from unittest.mock import AsyncMock

import pytest
import pytest_asyncio

from classalarm.application.services import AlarmFunctions
from classalarm.core.exceptions import (
    CapacityExceededError,
    DependencyFailureError,
    DuplicateCodeError,
    ForbiddenError,
    GroupNotFoundError,
    InvalidInputError,
    RateLimitedError,
    UnauthenticatedError,
)
from classalarm.domain.services.alert_composer import CHECKIN_MESSAGE, GENERIC_MESSAGE
from classalarm.domain.stores import StoreError
from classalarm.infrastructure.persistence.repositories import GroupRepository
from classalarm.infrastructure.services.push import (
    LogPushProvider,
    PushDeliveryError,
    PushProvider,
)


@pytest.fixture
def push_provider() -> LogPushProvider:
    return LogPushProvider()


@pytest.fixture
def functions(db, test_settings, push_provider, clock) -> AlarmFunctions:
    return AlarmFunctions(db=db, push_provider=push_provider, settings=test_settings, clock=clock)


@pytest_asyncio.fixture
async def sessions(functions):
    """Logged-in session credentials for three devices, each with an installation."""
    tokens = {}
    for name in ("alice", "bob", "carol"):
        login = await functions.register_or_login(f"device-{name}")
        await functions.register_installation(login.session_credential, f"apns-{name}")
        tokens[name] = login.session_credential
    return tokens


@pytest.mark.asyncio
async def test_register_or_login_is_stable(functions):
    first = await functions.register_or_login("device-1")
    second = await functions.register_or_login("device-1")
    other = await functions.register_or_login("device-2")

    assert first.account_id == second.account_id
    assert other.account_id != first.account_id
    assert first.model_dump(by_alias=True).keys() == {"accountId", "sessionCredential"}


@pytest.mark.asyncio
async def test_register_or_login_requires_device_id(functions):
    with pytest.raises(InvalidInputError):
        await functions.register_or_login("")


@pytest.mark.asyncio
async def test_group_lifecycle(functions, sessions, push_provider, clock):
    alice, bob, carol = sessions["alice"], sessions["bob"], sessions["carol"]

    created = await functions.create_group(alice, "QWERTY")
    assert created.member_count == 1

    assert (await functions.join_group(bob, "QWERTY")).member_count == 2
    assert (await functions.join_group(carol, "QWERTY")).member_count == 3
    assert (await functions.join_group(carol, "QWERTY")).member_count == 3

    result = await functions.send_alarm(alice, "QWERTY", "checkin")
    assert result.count == 2
    assert result.member_count == 3
    tokens, payload = push_provider.sent[-1]
    assert sorted(tokens) == ["apns-bob", "apns-carol"]
    assert payload["alert"] == CHECKIN_MESSAGE

    with pytest.raises(RateLimitedError) as exc_info:
        await functions.send_alarm(bob, "QWERTY")
    assert 0 < exc_info.value.retry_after_seconds <= 60

    info = await functions.get_group_info(bob, "QWERTY")
    assert info.is_member is True
    assert info.cooldown_remaining == 60

    clock.advance(61)
    result = await functions.send_alarm(bob, "QWERTY")
    assert result.count == 2
    assert push_provider.sent[-1][1]["alert"] == GENERIC_MESSAGE
    assert sorted(push_provider.sent[-1][0]) == ["apns-alice", "apns-carol"]

    assert (await functions.leave_group(alice, "QWERTY")).deleted is False
    assert (await functions.leave_group(bob, "QWERTY")).member_count == 1
    left = await functions.leave_group(carol, "QWERTY")
    assert left.deleted is True

    with pytest.raises(GroupNotFoundError):
        await functions.join_group(alice, "QWERTY")

    # The code is free again
    assert (await functions.create_group(bob, "QWERTY")).member_count == 1


@pytest.mark.asyncio
async def test_duplicate_create(functions, sessions):
    await functions.create_group(sessions["alice"], "QWERTY")

    with pytest.raises(DuplicateCodeError):
        await functions.create_group(sessions["bob"], "QWERTY")


@pytest.mark.asyncio
async def test_capacity(functions, test_settings):
    owner = await functions.register_or_login("device-0")
    await functions.create_group(owner.session_credential, "FULL01")
    for i in range(1, test_settings.max_members):
        login = await functions.register_or_login(f"device-{i}")
        await functions.join_group(login.session_credential, "FULL01")

    late = await functions.register_or_login("device-late")
    with pytest.raises(CapacityExceededError):
        await functions.join_group(late.session_credential, "FULL01")

    # An existing member rejoining a full group is still a no-op
    result = await functions.join_group(owner.session_credential, "FULL01")
    assert result.member_count == 20


@pytest.mark.asyncio
async def test_non_member_cannot_send(functions, sessions):
    await functions.create_group(sessions["alice"], "QWERTY")

    with pytest.raises(ForbiddenError):
        await functions.send_alarm(sessions["bob"], "QWERTY")

    info = await functions.get_group_info(sessions["bob"], "QWERTY")
    assert info.is_member is False
    assert info.cooldown_remaining == 0


@pytest.mark.asyncio
async def test_sole_member_alarm_counts_zero(functions, sessions, push_provider):
    await functions.create_group(sessions["alice"], "QWERTY")

    result = await functions.send_alarm(sessions["alice"], "QWERTY")

    assert result.count == 0
    assert push_provider.sent == []


@pytest.mark.asyncio
@pytest.mark.parametrize("token", [None, "", "Bearer garbage"])
async def test_unauthenticated(functions, token):
    with pytest.raises(UnauthenticatedError):
        await functions.create_group(token, "QWERTY")


@pytest.mark.asyncio
async def test_authentication_checked_before_validation(functions):
    with pytest.raises(UnauthenticatedError):
        await functions.join_group(None, "QWE")


@pytest.mark.asyncio
@pytest.mark.parametrize("code", [None, "", "QWE", "QWERTYU", 123456])
async def test_invalid_code(functions, sessions, code):
    with pytest.raises(InvalidInputError):
        await functions.create_group(sessions["alice"], code)


@pytest.mark.asyncio
async def test_store_failure_is_dependency_failure(functions, sessions, monkeypatch):
    monkeypatch.setattr(GroupRepository, "find", AsyncMock(side_effect=StoreError("store down")))

    with pytest.raises(DependencyFailureError) as exc_info:
        await functions.join_group(sessions["alice"], "QWERTY")

    assert "store down" not in exc_info.value.message


@pytest.mark.asyncio
async def test_push_failure_still_consumes_cooldown(db, test_settings, clock, sessions, functions):
    await functions.create_group(sessions["alice"], "QWERTY")
    await functions.join_group(sessions["bob"], "QWERTY")

    failing_provider = AsyncMock(spec=PushProvider)
    failing_provider.send.side_effect = PushDeliveryError("gateway down")
    failing = AlarmFunctions(db=db, push_provider=failing_provider, settings=test_settings, clock=clock)

    with pytest.raises(DependencyFailureError):
        await failing.send_alarm(sessions["alice"], "QWERTY")

    info = await functions.get_group_info(sessions["alice"], "QWERTY")
    assert info.cooldown_remaining == 60
    with pytest.raises(RateLimitedError):
        await functions.send_alarm(sessions["bob"], "QWERTY")


@pytest.mark.asyncio
async def test_push_timeout_still_consumes_cooldown(db, test_settings, clock, sessions, functions):
    await functions.create_group(sessions["alice"], "QWERTY")
    await functions.join_group(sessions["bob"], "QWERTY")

    slow_provider = AsyncMock(spec=PushProvider)
    slow_provider.send.side_effect = TimeoutError()
    slow = AlarmFunctions(db=db, push_provider=slow_provider, settings=test_settings, clock=clock)

    with pytest.raises(DependencyFailureError):
        await slow.send_alarm(sessions["alice"], "QWERTY")

    info = await functions.get_group_info(sessions["alice"], "QWERTY")
    assert info.cooldown_remaining == 60


@pytest.mark.asyncio
async def test_store_timeout_is_dependency_failure(functions, sessions, monkeypatch):
    monkeypatch.setattr(GroupRepository, "find", AsyncMock(side_effect=TimeoutError()))

    with pytest.raises(DependencyFailureError):
        await functions.get_group_info(sessions["alice"], "QWERTY")
