"""Application services."""

from classalarm.application.services.alarm_functions import AlarmFunctions

__all__ = ["AlarmFunctions"]
