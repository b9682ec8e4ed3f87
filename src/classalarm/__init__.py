"""ClassAlarm - group "come here now" alarms for classroom devices.

Group membership with capacity limits, a per-group broadcast cooldown,
push fan-out to the other members, and lazy migration of legacy group
records.
"""

__version__ = "0.1.0"
