"""Unit tests for the Group entity."""

from datetime import datetime, timezone

import pytest

from classalarm.domain.entities import EPOCH, Group


def test_new_group_defaults():
    group = Group(code="QWERTY", members=["u1"])

    assert group.member_count == 1
    assert group.last_alarm_at == EPOCH
    assert group.schema_version == 2


def test_duplicate_members_are_collapsed():
    group = Group(code="QWERTY", members=["u1", "u2", "u1"], member_count=3)

    assert group.members == ["u1", "u2"]
    assert group.member_count == 2


def test_add_and_remove_keep_count_in_sync():
    group = Group(code="QWERTY", members=["u1"])

    group.add_member("u2")
    group.add_member("u2")
    assert group.member_count == 2

    group.remove_member("u1")
    group.remove_member("missing")
    assert group.members == ["u2"]
    assert group.member_count == 1
    assert not group.is_empty

    group.remove_member("u2")
    assert group.is_empty


def test_naive_alarm_time_is_treated_as_utc():
    group = Group(code="QWERTY", members=["u1"], last_alarm_at=datetime(2024, 1, 1, 12, 0))

    assert group.last_alarm_at.tzinfo is timezone.utc


def test_code_is_required():
    with pytest.raises(ValueError, match="code is required"):
        Group(code="")
