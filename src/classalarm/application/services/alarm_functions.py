"""Externally invoked ClassAlarm operations.

Each method is one independent unit of work: it authenticates the caller,
validates parameters, opens its own database session and runs one domain
service call. Store and push failures are logged here with the operation,
group code and caller id, then re-raised as DependencyFailureError without
the collaborator's detail. Nothing is rolled back beyond what the failed
store call itself did not commit.
"""

from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from classalarm.application.schemas import (
    CreateGroupResult,
    GroupInfoResult,
    InstallationResult,
    JoinGroupResult,
    LeaveGroupResult,
    LoginResult,
    SendAlarmResult,
)
from classalarm.core.config import Settings, get_settings
from classalarm.core.exceptions import ClassAlarmError, DependencyFailureError
from classalarm.core.logging import LoggingContext, get_logger
from classalarm.domain.entities import CallerContext
from classalarm.domain.services import (
    BroadcastDispatcher,
    CooldownGate,
    DeviceCredentialDeriver,
    DeviceIdentityService,
    GroupDirectory,
    InputValidator,
    InstallationService,
    MembershipManager,
)
from classalarm.domain.stores import StoreError
from classalarm.infrastructure.auth import Authenticator, JWTService
from classalarm.infrastructure.persistence.database import DatabaseManager, get_db_manager
from classalarm.infrastructure.persistence.repositories import (
    DeviceAccountRepository,
    GroupRepository,
    InstallationRepository,
    LegacyGroupRepository,
)
from classalarm.infrastructure.services.push import PushDeliveryError, PushProvider
from classalarm.infrastructure.services.push_service import get_push_provider

logger = get_logger(__name__)

_DEPENDENCY_ERRORS = (StoreError, SQLAlchemyError, PushDeliveryError, TimeoutError)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class AlarmFunctions:
    """The operation surface: register-or-login, group membership and alarms."""

    def __init__(
        self,
        db: DatabaseManager | None = None,
        push_provider: PushProvider | None = None,
        token_service: JWTService | None = None,
        settings: Settings | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        """Initialize the operation surface.

        Args:
            db: Database manager. Defaults to the global manager.
            push_provider: Push provider. Defaults to the configured one.
            token_service: Issues and validates session credentials. Defaults
                to one signed with the configured secret key.
            settings: Settings for limits; defaults to the global settings.
            clock: Source of "now" for cooldown decisions.
        """
        self.settings = settings or get_settings()
        self.db = db or get_db_manager()
        self.push_provider = push_provider or get_push_provider(self.settings)
        self.token_service = token_service or JWTService(self.settings.secret_key)
        self.authenticator = Authenticator(self.token_service)
        self.deriver = DeviceCredentialDeriver(self.settings.device_secret_salt)
        self.validator = InputValidator(self.settings.group_code_length)
        self.clock = clock

    @asynccontextmanager
    async def _operation(
        self,
        operation: str,
        caller: CallerContext | None = None,
        group_code: str | None = None,
    ) -> AsyncIterator[AsyncSession]:
        """Session scope and error boundary for one operation."""
        with LoggingContext(
            operation=operation,
            group_code=group_code,
            user_id=caller.user_id if caller else None,
        ):
            try:
                async with self.db.session() as session:
                    yield session
            except ClassAlarmError as e:
                logger.info("Operation rejected", error_code=e.code)
                raise
            except _DEPENDENCY_ERRORS as e:
                logger.error(
                    "Operation failed on a dependency",
                    error_type=type(e).__name__,
                    error=str(e),
                )
                raise DependencyFailureError() from e

    def _directory(self, session: AsyncSession) -> GroupDirectory:
        return GroupDirectory(GroupRepository(session), LegacyGroupRepository(session))

    def _cooldown_gate(self) -> CooldownGate:
        return CooldownGate(self.settings.cooldown_seconds)

    def _membership(self, session: AsyncSession) -> MembershipManager:
        return MembershipManager(
            directory=self._directory(session),
            group_store=GroupRepository(session),
            cooldown_gate=self._cooldown_gate(),
            max_members=self.settings.max_members,
            validator=self.validator,
        )

    def _dispatcher(self, session: AsyncSession) -> BroadcastDispatcher:
        return BroadcastDispatcher(
            directory=self._directory(session),
            group_store=GroupRepository(session),
            installation_store=InstallationRepository(session),
            push_provider=self.push_provider,
            cooldown_gate=self._cooldown_gate(),
        )

    async def register_or_login(self, device_id: Any) -> LoginResult:
        """Anonymous: create or log into the account of a device.

        Raises:
            InvalidInputError: If the device id is missing.
            DependencyFailureError: On store or credential failure.
        """
        self.validator.validate_device_id(device_id)
        async with self._operation("register_or_login") as session:
            service = DeviceIdentityService(
                DeviceAccountRepository(session),
                deriver=self.deriver,
                token_service=self.token_service,
                validator=self.validator,
            )
            grant = await service.register_or_login(device_id)
        return LoginResult(account_id=grant.account_id, session_credential=grant.session_credential)

    async def register_installation(
        self,
        session_token: str | None,
        device_token: Any,
        platform: str | None = None,
    ) -> InstallationResult:
        """Bind the caller's push device token to their account."""
        caller = self.authenticator.authenticate(session_token)
        self.validator.validate_device_token(device_token)
        async with self._operation("register_installation", caller) as session:
            service = InstallationService(InstallationRepository(session), validator=self.validator)
            installation = await service.register(caller.user_id, device_token, platform)
        return InstallationResult(device_token=installation.device_token, platform=installation.platform)

    async def create_group(self, session_token: str | None, code: Any) -> CreateGroupResult:
        """Create a group with the caller as its only member.

        Raises:
            UnauthenticatedError, InvalidInputError, DuplicateCodeError,
            DependencyFailureError.
        """
        caller = self.authenticator.authenticate(session_token)
        self.validator.validate_group_code(code)
        async with self._operation("create_group", caller, code) as session:
            group = await self._membership(session).create_group(code, caller.user_id)
        return CreateGroupResult(code=group.code, member_count=group.member_count)

    async def join_group(self, session_token: str | None, code: Any) -> JoinGroupResult:
        """Join a group. Joining a group one already belongs to is a no-op.

        Raises:
            UnauthenticatedError, InvalidInputError, GroupNotFoundError,
            CapacityExceededError, DependencyFailureError.
        """
        caller = self.authenticator.authenticate(session_token)
        self.validator.validate_group_code(code)
        async with self._operation("join_group", caller, code) as session:
            group = await self._membership(session).join_group(code, caller.user_id)
        return JoinGroupResult(code=group.code, member_count=group.member_count, joined=True)

    async def leave_group(self, session_token: str | None, code: Any) -> LeaveGroupResult:
        """Leave a group; the group is deleted when its last member leaves."""
        caller = self.authenticator.authenticate(session_token)
        self.validator.validate_group_code(code)
        async with self._operation("leave_group", caller, code) as session:
            outcome = await self._membership(session).leave_group(code, caller.user_id)
        return LeaveGroupResult(
            code=outcome.group.code,
            deleted=outcome.deleted,
            member_count=outcome.group.member_count,
        )

    async def get_group_info(self, session_token: str | None, code: Any) -> GroupInfoResult:
        """Member count, caller membership and remaining cooldown of a group."""
        caller = self.authenticator.authenticate(session_token)
        self.validator.validate_group_code(code)
        async with self._operation("get_group_info", caller, code) as session:
            info = await self._membership(session).get_info(code, caller.user_id, self.clock())
        return GroupInfoResult(
            code=info.code,
            member_count=info.member_count,
            is_member=info.is_member,
            cooldown_remaining=info.cooldown_remaining,
        )

    async def send_alarm(
        self,
        session_token: str | None,
        code: Any,
        alarm_type: Any = None,
    ) -> SendAlarmResult:
        """Broadcast an alarm to every other member of the caller's group.

        Raises:
            UnauthenticatedError, InvalidInputError, GroupNotFoundError,
            ForbiddenError, RateLimitedError, DependencyFailureError.
        """
        caller = self.authenticator.authenticate(session_token)
        self.validator.validate_group_code(code)
        async with self._operation("send_alarm", caller, code) as session:
            result = await self._dispatcher(session).send_alarm(
                code, alarm_type, caller.user_id, self.clock()
            )
        logger.info("Alarm sent", group_code=code, user_id=caller.user_id, count=result.count)
        return SendAlarmResult(count=result.count, member_count=result.member_count)
