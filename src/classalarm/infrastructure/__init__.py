"""Infrastructure layer for ClassAlarm."""
