"""Account registration and session handling."""

import hashlib
import hmac
import logging
import secrets
from datetime import timedelta
from pathlib import Path

from ..config import MIN_PASSWORD_LENGTH, PASSWORD_HASH_ITERATIONS, SESSION_TTL_DAYS
from ..db.repositories import ProfileRepository, SessionRepository
from ..errors import AuthError, ConflictError, ValidationError
from ..models.profile import Profile, Session
from ..utils.helpers import slugify_handle, utc_now

logger = logging.getLogger(__name__)


def hash_password(password: str, salt: str | None = None) -> str:
    """Hash a password as ``salt$hex`` using PBKDF2-SHA256."""
    salt = salt or secrets.token_hex(16)
    digest = hashlib.pbkdf2_hmac(
        "sha256", password.encode(), salt.encode(), PASSWORD_HASH_ITERATIONS
    )
    return f"{salt}${digest.hex()}"


def verify_password(password: str, stored: str) -> bool:
    """Check a password against a stored ``salt$hex`` hash."""
    salt, _, _ = stored.partition("$")
    return hmac.compare_digest(hash_password(password, salt), stored)


def normalize_email(email: str) -> str:
    return email.strip().lower()


class AuthService:
    """Sign up, sign in and session lookup."""

    def __init__(self, db_path: Path | None = None):
        self.profiles = ProfileRepository(db_path)
        self.sessions = SessionRepository(db_path)

    async def sign_up(self, email: str, password: str, full_name: str) -> Profile:
        """Register a new account.

        Raises:
            ValidationError: Malformed email, empty name or short password
            ConflictError: The email is already registered
        """
        email = normalize_email(email)
        full_name = full_name.strip()

        if "@" not in email or email.startswith("@") or email.endswith("@"):
            raise ValidationError("Please enter a valid email address")
        if not full_name:
            raise ValidationError("Full name is required")
        if len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
            )
        if await self.profiles.get_by_email(email):
            raise ConflictError("An account with this email already exists")

        profile = Profile(
            email=email,
            full_name=full_name,
            handle=await self._unique_handle(email),
        )
        profile.id = await self.profiles.create(profile, hash_password(password))
        logger.info("Registered profile %s (@%s)", profile.id, profile.handle)
        return await self.profiles.get(profile.id)

    async def sign_in(self, email: str, password: str) -> str:
        """Check credentials and open a session.

        Returns:
            The new session token
        """
        credentials = await self.profiles.get_credentials(normalize_email(email))
        if credentials is None or not verify_password(password, credentials[1]):
            raise AuthError("Invalid email or password")

        profile = credentials[0]
        now = utc_now()
        session = Session(
            token=secrets.token_urlsafe(32),
            user_id=profile.id,
            expires_at=now + timedelta(days=SESSION_TTL_DAYS),
            created_at=now,
        )
        await self.sessions.delete_expired(now)
        await self.sessions.create(session)
        return session.token

    async def sign_out(self, token: str) -> None:
        """End a session."""
        await self.sessions.delete(token)

    async def get_user_for_token(self, token: str | None) -> Profile | None:
        """Resolve a session token to its profile; expired sessions are removed."""
        if not token:
            return None
        session = await self.sessions.get(token)
        if session is None:
            return None
        if session.is_expired(utc_now()):
            await self.sessions.delete(token)
            return None
        return await self.profiles.get(session.user_id)

    async def _unique_handle(self, email: str) -> str:
        base = slugify_handle(email)
        handle = base
        suffix = 1
        while await self.profiles.handle_exists(handle):
            suffix += 1
            handle = f"{base}{suffix}"
        return handle
