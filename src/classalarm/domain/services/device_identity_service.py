"""Register-or-login for device accounts."""

from dataclasses import dataclass
from datetime import datetime, timezone

from classalarm.core.exceptions import DependencyFailureError
from classalarm.core.logging import get_logger
from classalarm.domain.entities import DeviceAccount, Installation
from classalarm.domain.services.device_credentials import DeviceCredentialDeriver
from classalarm.domain.services.input_validator import InputValidator, default_input_validator
from classalarm.domain.stores import DeviceAccountStore, InstallationStore, RecordExistsError
from classalarm.infrastructure.auth import JWTService, hash_secret, jwt_service, verify_secret

logger = get_logger(__name__)


@dataclass(frozen=True)
class SessionGrant:
    """Account id and session credential returned by register-or-login."""

    account_id: str
    session_credential: str


class DeviceIdentityService:
    """Turns a device identifier into a durable account and a session."""

    def __init__(
        self,
        account_store: DeviceAccountStore,
        deriver: DeviceCredentialDeriver | None = None,
        token_service: JWTService | None = None,
        validator: InputValidator | None = None,
    ) -> None:
        self.account_store = account_store
        self.deriver = deriver or DeviceCredentialDeriver()
        self.token_service = token_service or jwt_service
        self.validator = validator or default_input_validator

    async def register_or_login(self, device_id: str) -> SessionGrant:
        """Create the device's account, or log into it if it already exists.

        Calling this repeatedly with the same device id always yields the
        same account id.

        Raises:
            InvalidInputError: If the device id is missing.
            DependencyFailureError: If the existing account rejects the derived secret.
        """
        self.validator.validate_device_id(device_id)
        credentials = self.deriver.derive(device_id)

        try:
            account = await self.account_store.create(
                DeviceAccount(
                    id=credentials.account_id,
                    username=credentials.username,
                    secret_hash=hash_secret(credentials.secret),
                    last_login=datetime.now(timezone.utc),
                )
            )
            logger.info("Device account registered", user_id=account.id)
        except RecordExistsError:
            account = await self.account_store.get_by_username(credentials.username)
            if account is None or not verify_secret(credentials.secret, account.secret_hash):
                logger.error(
                    "Existing device account rejected derived credential",
                    user_id=credentials.account_id,
                )
                raise DependencyFailureError("Login failed, please try again later.")
            await self.account_store.touch_login(account)
            logger.info("Device account logged in", user_id=account.id)

        token = self.token_service.create_session_token(account.id, account.username)
        return SessionGrant(account_id=account.id, session_credential=token)


class InstallationService:
    """Registers the push installation of the calling device."""

    def __init__(
        self,
        installation_store: InstallationStore,
        validator: InputValidator | None = None,
    ) -> None:
        self.installation_store = installation_store
        self.validator = validator or default_input_validator

    async def register(self, user_id: str, device_token: str, platform: str | None = None) -> Installation:
        self.validator.validate_device_token(device_token)
        installation = await self.installation_store.upsert(
            Installation(user_id=user_id, device_token=device_token, platform=platform or "ios")
        )
        logger.info("Installation registered", user_id=user_id, platform=installation.platform)
        return installation
