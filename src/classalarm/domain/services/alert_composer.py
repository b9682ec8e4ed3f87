"""Alert payloads for alarm broadcasts."""

from dataclasses import dataclass
from typing import Any

from classalarm.core.config import get_settings

ALARM_TYPE_CHECKIN = "checkin"
ALARM_TYPE_ROLLCALL = "rollcall"

CHECKIN_MESSAGE = "班级有同学签到，速来！"
ROLLCALL_MESSAGE = "老师开始点名，速来！"
GENERIC_MESSAGE = "快来教室，有情况！"

_MESSAGES = {
    ALARM_TYPE_CHECKIN: CHECKIN_MESSAGE,
    ALARM_TYPE_ROLLCALL: ROLLCALL_MESSAGE,
}


@dataclass(frozen=True)
class AlertPayload:
    """Push payload delivered to every recipient device."""

    alert: str
    sound: str
    badge: str
    alarm_type: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data = {"alert": self.alert, "sound": self.sound, "badge": self.badge}
        if self.alarm_type:
            data["alarmType"] = self.alarm_type
        return data


def compose_alert(alarm_type: Any = None) -> AlertPayload:
    """Map a caller-supplied alarm tag to its alert payload.

    Unknown, missing and non-string tags all get the generic message.
    """
    settings = get_settings()
    tag = alarm_type if isinstance(alarm_type, str) else None
    return AlertPayload(
        alert=_MESSAGES.get(tag, GENERIC_MESSAGE),
        sound=settings.alarm_sound,
        badge=settings.alarm_badge,
        alarm_type=tag,
    )
