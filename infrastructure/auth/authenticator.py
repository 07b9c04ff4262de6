from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import JWTError, jwt
from passlib.context import CryptContext

from utils.logging_config import setup_logger
from core.interface import AuthenticationInterface, TokenBlacklistRepository
from core.entities import UserEntity, TokenEntity, TokenDataEntity


class Authenticator(AuthenticationInterface):
    """
    Implementation of the AuthenticationInterface.

    Access and refresh tokens are signed with separate secrets. Refresh tokens
    carry tokenType "refresh" so one can never be used in place of the other.
    """

    def __init__(
        self,
        secret_key: str,
        refresh_secret_key: str,
        algorithm: str = "HS256",
        access_token_expire_minutes: int = 15,
        refresh_token_expire_days: int = 1,
        remember_me_expire_days: int = 30,
        bcrypt_rounds: int = 12,
        token_blacklist_repository: Optional[TokenBlacklistRepository] = None,
    ):
        self.secret_key = secret_key
        self.refresh_secret_key = refresh_secret_key
        self.algorithm = algorithm
        self.access_token_expire_minutes = access_token_expire_minutes
        self.refresh_token_expire_days = refresh_token_expire_days
        self.remember_me_expire_days = remember_me_expire_days
        self.token_blacklist_repository = token_blacklist_repository
        self.password_context = CryptContext(
            schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=bcrypt_rounds
        )
        self.logger = setup_logger("infrastructure.auth", "auth.log")

    async def hash_password(self, password: str) -> str:
        """
        Securely hash a password using bcrypt.
        """
        return self.password_context.hash(password)

    async def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        """
        Verify a password against its hash.
        """
        if not hashed_password:
            return False
        try:
            is_valid = self.password_context.verify(plain_password, hashed_password)
        except ValueError as e:
            self.logger.error(f"Password hash could not be verified: {e}")
            return False
        self.logger.debug(f"Password verification returned {is_valid}")
        return is_valid

    def _encode(self, claims: Dict[str, Any], secret: str, expire: datetime) -> str:
        return jwt.encode({**claims, "exp": expire}, secret, algorithm=self.algorithm)

    async def create_tokens(self, user: UserEntity, remember_me: bool = False) -> TokenEntity:
        """
        Create an access and refresh token pair for an authenticated user.
        """
        now = datetime.now(timezone.utc)
        access_expire = now + timedelta(minutes=self.access_token_expire_minutes)
        refresh_days = self.remember_me_expire_days if remember_me else self.refresh_token_expire_days
        refresh_expire = now + timedelta(days=refresh_days)

        access_token = self._encode(
            {"userId": user.id, "email": user.email, "role": user.role},
            self.secret_key,
            access_expire,
        )
        refresh_token = self._encode(
            {"userId": user.id, "email": user.email, "tokenType": "refresh"},
            self.refresh_secret_key,
            refresh_expire,
        )
        self.logger.info(f"Tokens created for user: {user.username}")

        return TokenEntity(
            access_token=access_token,
            refresh_token=refresh_token,
            token_type="bearer",
            expires_at=access_expire,
        )

    def _decode(self, token: str, secret: str) -> Optional[Dict[str, Any]]:
        try:
            payload = jwt.decode(token, secret, algorithms=[self.algorithm])
        except JWTError as e:
            self.logger.warning(f"JWT verification error: {e}")
            return None
        if not payload.get("userId") or not payload.get("exp"):
            return None
        return payload

    async def verify_access_token(self, token: str) -> Optional[TokenDataEntity]:
        """
        Verify and decode an access token, rejecting revoked tokens.
        """
        if self.token_blacklist_repository and await self.token_blacklist_repository.is_blacklisted(token):
            self.logger.warning("Attempt to use blacklisted token")
            return None

        payload = self._decode(token, self.secret_key)
        if not payload or payload.get("tokenType") == "refresh":
            return None

        return TokenDataEntity(
            user_id=payload["userId"],
            email=payload.get("email"),
            role=payload.get("role"),
            token_type="access",
            exp=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
        )

    async def verify_refresh_token(self, token: str) -> Optional[TokenDataEntity]:
        """
        Verify and decode a refresh token.
        """
        payload = self._decode(token, self.refresh_secret_key)
        if not payload or payload.get("tokenType") != "refresh":
            return None

        return TokenDataEntity(
            user_id=payload["userId"],
            email=payload.get("email"),
            token_type="refresh",
            exp=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
        )

    async def revoke_token(self, token: str) -> bool:
        """
        Invalidate an access token (add to blacklist).
        """
        if not self.token_blacklist_repository:
            return True

        token_data = await self.verify_access_token(token)
        if not token_data:
            return False

        return await self.token_blacklist_repository.add_to_blacklist(token, token_data.exp)
