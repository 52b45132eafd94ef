"""
User service — registration, login and the account lifecycle rules.

This module contains the authentication/authorization core, separated
from HTTP concerns. Routers build a UserService per request (see
pet_tracker.dependencies) and translate its return values into responses;
domain errors propagate to the exception handlers in pet_tracker.exceptions.

Every operation follows the same shape:
  1. Load the target (NotFound if missing)
  2. Check the caller's role/ownership (Forbidden if not allowed)
  3. Validate the input
  4. Write through the store

Steps 1-3 all happen before any write, so a rejected request never leaves
a partial mutation behind.

Authorization matrix (caller → target):

    operation        USER            MODERATOR     ADMIN
    get_by_id        self only       anyone        anyone
    list_all         —               yes           yes
    delete_by_id     self only       self only     anyone
    set_enabled      —               anyone        anyone
    update_profile   self only       self only     anyone

Security notes:
  - Login returns the same error for "no such account" and "wrong
    password" to prevent username enumeration
  - The password is checked before the enabled/locked flags, so those
    flags are only revealed to someone who knows the password
  - Passwords and tokens are never logged
"""

import enum
import uuid
from dataclasses import dataclass

from loguru import logger

from pet_tracker.exceptions import (
    AccountDisabledError,
    AccountLockedError,
    BadActionError,
    BlankFieldError,
    DuplicateEmailError,
    DuplicateUsernameError,
    ForbiddenError,
    InvalidCredentialsError,
    InvalidEmailError,
    InvalidTokenError,
    NotFoundError,
    WeakPasswordError,
)
from pet_tracker.models.user import Role, User
from pet_tracker.repositories.user_repository import UserStore
from pet_tracker.security import TokenIssuer, hash_password, verify_password
from pet_tracker.validators import (
    get_password_requirements,
    is_valid_email_pattern,
    is_valid_password_pattern,
)


class AccountAction(str, enum.Enum):
    """Actions accepted by set_enabled (matched case-insensitively)."""
    ENABLE = "enable"
    DISABLE = "disable"


@dataclass
class RegistrationData:
    email: str
    username: str
    password: str
    first_name: str | None = None
    last_name: str | None = None


@dataclass
class LoginResult:
    token: str
    user: User


class UserService:
    """
    Orchestrates the user lifecycle on top of a UserStore.

    Args:
        store: Persistence boundary for User records.
        token_issuer: Signs tokens at login and verifies them on
            authenticated requests.
    """

    def __init__(self, store: UserStore, token_issuer: TokenIssuer):
        self.store = store
        self.token_issuer = token_issuer

    # -----------------------------------------------------------------------
    # Registration and login
    # -----------------------------------------------------------------------

    async def register(self, data: RegistrationData) -> User:
        """
        Register a new account with the USER role.

        Checks run in a fixed order so the reported error is deterministic:
        username uniqueness, email uniqueness, password strength, email
        shape, then first/last name blankness.

        Returns:
            The persisted User (enabled, not locked, password hashed).

        Raises:
            DuplicateUsernameError, DuplicateEmailError, WeakPasswordError,
            InvalidEmailError, BlankFieldError
        """
        if await self.store.find_by_username(data.username) is not None:
            logger.warning(f"Registration rejected: username {data.username!r} taken")
            raise DuplicateUsernameError(data.username)

        if await self.store.find_by_email(data.email) is not None:
            logger.warning("Registration rejected: email already registered")
            raise DuplicateEmailError(data.email)

        if not is_valid_password_pattern(data.password):
            raise WeakPasswordError(get_password_requirements())

        if not is_valid_email_pattern(data.email):
            raise InvalidEmailError()

        if data.first_name is not None and not data.first_name.strip():
            raise BlankFieldError("firstname")

        if data.last_name is not None and not data.last_name.strip():
            raise BlankFieldError("lastname")

        user = User(
            email=data.email,
            username=data.username,
            hashed_password=hash_password(data.password),
            first_name=data.first_name,
            last_name=data.last_name,
            role=Role.USER,
            enabled=True,
            locked=False,
        )
        user = await self.store.save(user)
        logger.info(f"Registered user {user.id} ({user.username})")
        return user

    async def login(self, username_or_email: str, password: str) -> LoginResult:
        """
        Authenticate with a username or an email address and a password.

        An identifier shaped like an email is looked up by email,
        anything else by username (both case-insensitive).

        Raises:
            InvalidCredentialsError: No such account, or wrong password.
            AccountDisabledError: The account has been banned.
            AccountLockedError: The account is locked.
        """
        if is_valid_email_pattern(username_or_email):
            user = await self.store.find_by_email(username_or_email)
        else:
            user = await self.store.find_by_username(username_or_email)

        if user is None:
            logger.warning("Login failed: unknown account")
            raise InvalidCredentialsError()

        if not verify_password(password, user.hashed_password):
            logger.warning(f"Login failed: wrong password for user {user.id}")
            raise InvalidCredentialsError()

        if not user.enabled:
            logger.warning(f"Login refused: user {user.id} is disabled")
            raise AccountDisabledError()

        if user.locked:
            logger.warning(f"Login refused: user {user.id} is locked")
            raise AccountLockedError()

        token = self.token_issuer.issue(user)
        logger.info(f"User {user.id} logged in")
        return LoginResult(token=token, user=user)

    async def authenticate_token(self, token: str) -> User:
        """
        Resolve a bearer token to the account it was issued for.

        The account is re-read from the store on every call, so a ban or
        deletion takes effect immediately even for unexpired tokens.

        Raises:
            TokenExpiredError: The token is past its expiry.
            InvalidTokenError: The token is invalid, or its account no longer
                exists or may not log in.
        """
        claims = self.token_issuer.verify(token)
        user = await self.store.find_by_id(claims.user_id)
        if user is None or not user.enabled or user.locked:
            raise InvalidTokenError()
        return user

    # -----------------------------------------------------------------------
    # Account management
    # -----------------------------------------------------------------------

    async def _get_target(self, target_id: uuid.UUID) -> User:
        target = await self.store.find_by_id(target_id)
        if target is None:
            raise NotFoundError(f"User {target_id} not found")
        return target

    async def get_by_id(self, target_id: uuid.UUID, caller: User) -> User:
        """Return an account visible to the caller (self, or any account for staff)."""
        target = await self._get_target(target_id)

        if caller.is_same_user(target) or caller.is_staff():
            return target
        raise ForbiddenError()

    async def list_all(self, caller: User) -> list[User]:
        """List every account. Admins and moderators only."""
        if not caller.is_staff():
            raise ForbiddenError()
        return await self.store.find_all()

    async def delete_by_id(self, target_id: uuid.UUID, caller: User) -> None:
        """
        Permanently remove an account. Admins may delete anyone; every
        other role may only delete itself.
        """
        target = await self._get_target(target_id)

        if not (caller.is_admin() or caller.is_same_user(target)):
            raise ForbiddenError()

        await self.store.delete_by_id(target.id)
        logger.info(f"User {target_id} deleted by {caller.id}")

    async def set_enabled(
        self,
        target_id: uuid.UUID,
        caller: User,
        action: str | None,
    ) -> User:
        """
        Ban or unban an account.

        Args:
            target_id: The account to change.
            caller: Must be an admin or a moderator.
            action: "enable" or "disable", any case.

        Raises:
            NotFoundError, ForbiddenError, BadActionError
        """
        target = await self._get_target(target_id)

        if not caller.is_staff():
            raise ForbiddenError("Only an admin or Moderator is allowed to do this")

        if action is None or not action.strip():
            raise BadActionError("Action must be provided")

        try:
            parsed = AccountAction(action.strip().lower())
        except ValueError:
            raise BadActionError("Invalid action.")

        target.enabled = parsed is AccountAction.ENABLE
        target = await self.store.save(target)
        logger.info(f"User {target.id} {parsed.value}d by {caller.id}")
        return target

    async def update_profile(
        self,
        target_id: uuid.UUID,
        caller: User,
        first_name: str | None = None,
        last_name: str | None = None,
    ) -> User:
        """
        Overwrite the provided name fields of an account.

        Allowed for the account owner or an admin. Only non-None fields
        are written; unlike registration, blank values are accepted.
        """
        target = await self._get_target(target_id)

        if not (caller.is_same_user(target) or caller.is_admin()):
            raise ForbiddenError()

        if first_name is not None:
            target.first_name = first_name
        if last_name is not None:
            target.last_name = last_name

        target = await self.store.save(target)
        logger.info(f"User {target.id} profile updated by {caller.id}")
        return target
