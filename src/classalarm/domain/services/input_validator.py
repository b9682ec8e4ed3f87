"""Validation of caller-supplied operation parameters.

All checks raise InvalidInputError before any store access, so a
rejected call has no side effect.
"""

from typing import Any

from classalarm.core.config import get_settings
from classalarm.core.exceptions import InvalidInputError


class InputValidator:
    """Validates group codes and device identifiers.

    The code length defaults to the configured ``group_code_length`` (6).
    """

    def __init__(self, code_length: int | None = None) -> None:
        self._code_length = code_length

    @property
    def code_length(self) -> int:
        if self._code_length is None:
            return get_settings().group_code_length
        return self._code_length

    def validate_group_code(self, code: Any) -> str:
        """Check that ``code`` is a string of exactly ``code_length`` characters.

        Returns:
            The code, unchanged.

        Raises:
            InvalidInputError: If the code is missing, not a string or the wrong length.
        """
        if not isinstance(code, str) or not code:
            raise InvalidInputError("Group code is required.")
        if len(code) != self.code_length:
            raise InvalidInputError(
                f"Group code must be exactly {self.code_length} characters."
            )
        return code

    def validate_device_id(self, device_id: Any) -> str:
        if not isinstance(device_id, str) or not device_id.strip():
            raise InvalidInputError("Device identifier is required.")
        return device_id

    def validate_device_token(self, device_token: Any) -> str:
        if not isinstance(device_token, str) or not device_token.strip():
            raise InvalidInputError("Device token is required.")
        return device_token


default_input_validator = InputValidator()
