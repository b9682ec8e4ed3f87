"""Turns a presented session credential into a caller identity."""

from classalarm.core.exceptions import UnauthenticatedError
from classalarm.core.logging import get_logger
from classalarm.domain.entities import CallerContext
from classalarm.infrastructure.auth.jwt_service import JWTError, JWTService, jwt_service

logger = get_logger(__name__)


class Authenticator:
    """Validates session tokens issued by register-or-login."""

    def __init__(self, token_service: JWTService | None = None) -> None:
        self.token_service = token_service or jwt_service

    def authenticate(self, session_token: str | None) -> CallerContext:
        """Resolve the caller for ``session_token``.

        Accepts the raw token or an ``Authorization`` header value
        ("Bearer <token>").

        Raises:
            UnauthenticatedError: If the token is missing, malformed or expired.
        """
        if not session_token or not isinstance(session_token, str):
            raise UnauthenticatedError()

        token = session_token
        if token.lower().startswith("bearer "):
            token = token[7:].strip()

        try:
            payload = self.token_service.decode_token(token)
        except JWTError as e:
            logger.info("Rejected session token", reason=str(e))
            raise UnauthenticatedError() from e

        return CallerContext(user_id=payload["sub"], username=payload.get("username"))
