"""Per-group rate limit on alarm broadcasts.

A group may broadcast once per window. The window is measured from the
last *accepted* broadcast, in whole elapsed seconds.
"""

import math
from datetime import datetime

from classalarm.core.config import get_settings
from classalarm.core.exceptions import RateLimitedError
from classalarm.domain.entities import Group


class CooldownGate:
    """Computes and enforces the broadcast cooldown of a group."""

    def __init__(self, window_seconds: int | None = None) -> None:
        """Initialize the gate.

        Args:
            window_seconds: Cooldown window. Defaults to the configured
                ``cooldown_seconds`` (60).
        """
        if window_seconds is None:
            window_seconds = get_settings().cooldown_seconds
        self.window_seconds = window_seconds

    def remaining(self, group: Group, now: datetime) -> int:
        """Seconds left before ``group`` may broadcast again.

        A group that has never broadcast has zero remaining cooldown. The
        result never exceeds the window, even if ``now`` is behind the
        stored timestamp.
        """
        elapsed = math.floor((now - group.last_alarm_at).total_seconds())
        return min(self.window_seconds, max(0, self.window_seconds - elapsed))

    def try_accept(self, group: Group, now: datetime) -> None:
        """Accept a broadcast for ``group`` at ``now``.

        On acceptance ``group.last_alarm_at`` is advanced to ``now``; the
        caller must persist the group before attempting delivery.

        Raises:
            RateLimitedError: If the group is still cooling down.
        """
        remaining = self.remaining(group, now)
        if remaining > 0:
            raise RateLimitedError(retry_after_seconds=remaining)
        # last_alarm_at never moves backwards
        group.last_alarm_at = max(group.last_alarm_at, now)
