"""
Auth Service.

Registration, login, and email verification.

Accounts start unverified. A numeric code is stored with an expiry and
mailed to the user; verifying it flips the account to verified and
hands out the first bearer token. Until then login only re-issues the
code.
"""

from dataclasses import dataclass

from fastapi import BackgroundTasks
from sqlalchemy.ext.asyncio import AsyncSession

from beyondnp.backend.core.exceptions import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from beyondnp.backend.core.security import (
    create_user_token,
    generate_verification_code,
    hash_password,
    verification_expiry,
    verify_password,
)
from beyondnp.backend.core.utils import utc_now
from beyondnp.backend.models.user import User
from beyondnp.backend.repositories.user import UserRepository
from beyondnp.backend.schemas.user import (
    LoginRequest,
    RegisterRequest,
    ResendVerificationRequest,
    VerifyEmailRequest,
)
from beyondnp.backend.services.base import BaseService
from beyondnp.backend.services.email import EmailService


@dataclass
class LoginOutcome:
    """Result of a login attempt with valid credentials."""

    user: User
    token: str | None = None

    @property
    def requires_verification(self) -> bool:
        return self.token is None


class AuthService(BaseService):
    """
    Service for account authentication.

    Emails are queued on the request's BackgroundTasks, so they go out
    after the response and only once the state change has succeeded.
    """

    def __init__(self, session: AsyncSession, tasks: BackgroundTasks) -> None:
        super().__init__(session)
        self.repo = UserRepository(session)
        self.tasks = tasks

    def _dispatch_verification_email(self, user: User) -> None:
        self.tasks.add_task(
            EmailService().send_verification,
            user.email,
            user.name,
            user.email_verification_code,
        )

    def _dispatch_welcome_email(self, user: User) -> None:
        self.tasks.add_task(EmailService().send_welcome, user.email, user.name)

    async def _issue_code(self, user: User) -> User:
        """Replace the user's verification code and restart its expiry."""
        return await self._execute_db_operation(
            "issue_verification_code",
            self.repo.apply(
                user,
                email_verification_code=generate_verification_code(),
                email_verification_expires=verification_expiry(),
            ),
        )

    async def register(self, data: RegisterRequest) -> User:
        """
        Create an unverified account and mail its verification code.

        Raises:
            ConflictError: If the email is already registered
        """
        if await self.repo.get_by_email(data.email) is not None:
            raise ConflictError("User already exists")

        self._log_operation("Registering user", email=data.email)

        user = await self._execute_db_operation(
            "register_user",
            self.repo.create(
                name=data.name,
                email=data.email,
                hashed_password=hash_password(data.password),
                email_verification_code=generate_verification_code(),
                email_verification_expires=verification_expiry(),
            ),
        )

        self._dispatch_verification_email(user)
        self._log_debug("User registered", user_id=user.id)
        return user

    async def login(self, data: LoginRequest) -> LoginOutcome:
        """
        Check credentials.

        An unverified account gets a fresh code instead of a token.

        Raises:
            AuthenticationError: If the email is unknown or the password is wrong
        """
        user = await self.repo.get_by_email(data.email)
        if user is None or not verify_password(data.password, user.hashed_password):
            self._log_debug("Login rejected", email=data.email)
            raise AuthenticationError("Invalid email or password")

        if not user.is_email_verified:
            self._log_operation("Login pending verification", user_id=user.id)
            user = await self._issue_code(user)
            self._dispatch_verification_email(user)
            return LoginOutcome(user=user)

        user = await self._execute_db_operation(
            "record_login",
            self.repo.apply(user, last_login=utc_now()),
        )
        self._log_operation("User logged in", user_id=user.id)
        return LoginOutcome(user=user, token=create_user_token(user.id))

    async def verify_email(self, data: VerifyEmailRequest) -> LoginOutcome:
        """
        Verify an account with its current code and log it in.

        The code is cleared on success, so it works exactly once.

        Raises:
            ValidationError: If a field is missing or the code is wrong or expired
        """
        self._validate_required(
            data.model_dump(),
            ["email", "verification_code"],
            message="Email and verification code are required",
        )

        user = await self.repo.get_by_email(data.email)
        if user is None or not user.verification_code_matches(
            data.verification_code, utc_now()
        ):
            raise ValidationError("Invalid or expired verification code")

        user = await self._execute_db_operation(
            "verify_email",
            self.repo.apply(
                user,
                is_email_verified=True,
                email_verification_code=None,
                email_verification_expires=None,
            ),
        )

        self._dispatch_welcome_email(user)
        self._log_operation("Email verified", user_id=user.id)
        return LoginOutcome(user=user, token=create_user_token(user.id))

    async def resend_verification(self, data: ResendVerificationRequest) -> None:
        """
        Issue and mail a new verification code.

        Raises:
            ValidationError: If the email is missing or already verified
            NotFoundError: If no account uses the email
        """
        self._validate_required(data.model_dump(), ["email"], message="Email is required")

        user = await self.repo.get_by_email(data.email)
        if user is None:
            raise NotFoundError("User not found")
        if user.is_email_verified:
            raise ValidationError("Email is already verified")

        user = await self._issue_code(user)
        self._dispatch_verification_email(user)
        self._log_operation("Verification code reissued", user_id=user.id)
