# authsvc/services/auth/service.py
from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from authsvc.services._shared.base import BaseService
from authsvc.services._shared.errors import (
    ConflictError,
    InvalidCredentialsError,
    NotFoundError,
    RevocationStoreError,
    TokenInvalidError,
    TokenRevokedError,
    UserStoreError,
)
from authsvc.services._shared.ports import (
    NewUser,
    NullRevocationStore,
    PasswordHasher,
    RevocationStore,
    TokenClaims,
    TokenCodec,
    UserRecord,
    UserStore,
)
from authsvc.services.auth.dto import (
    LoginIn,
    LogoutIn,
    RefreshIn,
    RegisterIn,
    TokenPairOut,
    UserPublicOut,
)

log = logging.getLogger(__name__)


class AuthService(BaseService):
    """
    Authentication lifecycle service (register / login / refresh / logout / me).

    Tokens are issued and verified through a pluggable :class:`TokenCodec`.
    Early invalidation relies on a :class:`RevocationStore`; when none is
    configured a :class:`NullRevocationStore` stands in and logout becomes a
    no-op (tokens then live until their natural expiry).

    The service holds no mutable state of its own; one instance is shared
    across requests.
    """

    def __init__(
        self,
        *,
        users: UserStore,
        hasher: PasswordHasher,
        tokens: TokenCodec,
        revocations: RevocationStore | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """
        Initialize the service with its collaborators.

        :param users: Identity store (create / lookup).
        :param hasher: Password hashing and verification.
        :param tokens: Token issuing and verification.
        :param revocations: Denylist for presented tokens; ``None`` runs degraded.
        :param clock: Time source used for revocation TTLs.
        """
        super().__init__(clock=clock)
        self.users = users
        self.hasher = hasher
        self.tokens = tokens
        self.revocations: RevocationStore = revocations or NullRevocationStore()

    # ------------------------------------------------------------------ #
    # Register
    # ------------------------------------------------------------------ #

    def register(self, dto: RegisterIn) -> UserPublicOut:
        """
        Create a user unless the email is already taken.

        :param dto: Registration input.
        :returns: Public view of the created user.
        :raises ConflictError: If the email already exists (never overwritten).
        :raises UserStoreError: If the store cannot answer the uniqueness check.
        """
        email = dto.email.lower().strip()

        # A backend failure here propagates: proceeding would race past the
        # uniqueness check.
        if self.users.get_by_email(email) is not None:
            raise ConflictError("User", "email already exists")

        record = self.users.create(
            NewUser(
                email=email,
                password_hash=self.hasher.hash(dto.password),
                name=(dto.name or "").strip(),
            )
        )
        log.info("auth.register.ok", extra={"user_id": record.id})
        return UserPublicOut.from_record(record)

    # ------------------------------------------------------------------ #
    # Login
    # ------------------------------------------------------------------ #

    def login(self, dto: LoginIn) -> TokenPairOut:
        """
        Authenticate credentials and issue a fresh token pair.

        Unknown email, wrong password and an unreachable store all raise the
        same :class:`InvalidCredentialsError`.

        :param dto: Login input.
        :returns: Access/refresh token pair.
        """
        try:
            user = self.users.get_by_email(dto.email)
        except UserStoreError as exc:
            log.warning("auth.login.failed", extra={"reason": "user store unavailable"})
            raise InvalidCredentialsError(reason="user store unavailable") from exc

        if user is None:
            log.info("auth.login.failed", extra={"reason": "unknown email"})
            raise InvalidCredentialsError(reason="unknown email")

        if not self.hasher.verify(user.password_hash, dto.password):
            log.info("auth.login.failed", extra={"reason": "password mismatch", "user_id": user.id})
            raise InvalidCredentialsError(reason="password mismatch")

        log.info("auth.login.ok", extra={"user_id": user.id})
        return self._issue_pair(user)

    # ------------------------------------------------------------------ #
    # Refresh with rotation
    # ------------------------------------------------------------------ #

    def refresh(self, dto: RefreshIn) -> TokenPairOut:
        """
        Exchange a refresh token for a new pair and retire the presented one.

        Security
        --------
        - The presented string must not be on the denylist.
        - It must verify as a **refresh** token.
        - Rotation is unconditional. The old token is claimed on the denylist
          for the rest of its lifetime before the new pair is minted, so two
          concurrent refreshes of one token cannot both succeed.
        - The claim is best-effort: if the store write fails the new pair is
          still returned and the old token simply lives until it expires.
        - A user-store failure is reported as an invalid token.

        :raises TokenRevokedError: If the token was already used or logged out.
        :raises TokenInvalidError: If the token does not verify or the user
            store is unavailable.
        :raises NotFoundError: If the subject no longer exists.
        """
        rt = dto.refresh_token

        if self.revocations.is_revoked(rt):
            log.info("auth.refresh.revoked")
            raise TokenRevokedError(reason="refresh token on denylist")

        claims = self._verify(rt, expect_refresh=True)

        try:
            user = self.users.get_by_id(claims.user_id)
        except UserStoreError as exc:
            log.warning("auth.refresh.failed", extra={"reason": "user store unavailable"})
            raise TokenInvalidError(reason="user store unavailable") from exc
        if user is None:
            raise NotFoundError("User", claims.user_id)

        if not self._claim_quietly(rt, claims):
            log.info("auth.refresh.revoked", extra={"user_id": claims.user_id})
            raise TokenRevokedError(reason="refresh token claimed concurrently")

        pair = self._issue_pair(user)
        log.info("auth.refresh.ok", extra={"user_id": user.id})
        return pair

    # ------------------------------------------------------------------ #
    # Logout
    # ------------------------------------------------------------------ #

    def logout(self, dto: LogoutIn) -> None:
        """
        Revoke both tokens of a session.

        Each token is verified on its own to learn its expiry, then revoked
        for its remaining lifetime. Tokens that fail verification are
        skipped silently: logout always succeeds, so callers cannot learn
        which token was already invalid.
        """
        if not self.revocations.enabled:
            return

        for token, expect_refresh in ((dto.access_token, False), (dto.refresh_token, True)):
            try:
                claims = self.tokens.verify(token, expect_refresh=expect_refresh)
            except TokenInvalidError as exc:
                log.debug("auth.logout.skip", extra={"reason": exc.reason})
                continue
            self._revoke_quietly(token, claims)

    # ------------------------------------------------------------------ #
    # Identity
    # ------------------------------------------------------------------ #

    def get_me(self, user_id: int) -> UserPublicOut:
        """
        Return the user behind an authenticated request.

        :raises NotFoundError: If the user does not exist.
        """
        user = self.users.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User", user_id)
        return UserPublicOut.from_record(user)

    def authenticate(self, access_token: str) -> TokenClaims:
        """
        Validate a bearer access token for a protected request.

        :raises TokenRevokedError: If the token was logged out.
        :raises TokenInvalidError: If it does not verify as an access token.
        """
        if self.revocations.is_revoked(access_token):
            raise TokenRevokedError(reason="access token on denylist")
        return self._verify(access_token, expect_refresh=False)

    # ------------------------------------------------------------------ #
    # Utilities
    # ------------------------------------------------------------------ #

    def _issue_pair(self, user: UserRecord) -> TokenPairOut:
        return TokenPairOut(
            access_token=self.tokens.issue_access(user.id),
            refresh_token=self.tokens.issue_refresh(user.id),
        )

    def _verify(self, token: str, *, expect_refresh: bool) -> TokenClaims:
        try:
            return self.tokens.verify(token, expect_refresh=expect_refresh)
        except TokenInvalidError as exc:
            log.info("auth.token.rejected", extra={"reason": exc.reason})
            raise

    def _claim_quietly(self, token: str, claims: TokenClaims) -> bool:
        """Claim ``token`` for single use; ``False`` only when another caller won."""
        ttl = claims.expiry - self.now_utc()
        try:
            return self.revocations.claim(token, ttl)
        except RevocationStoreError:
            log.warning(
                "revocation.write_failed",
                extra={"user_id": claims.user_id},
                exc_info=True,
            )
            return True

    def _revoke_quietly(self, token: str, claims: TokenClaims) -> None:
        """Revoke ``token`` until its own expiry; store failures are logged only."""
        ttl = claims.expiry - self.now_utc()
        try:
            self.revocations.revoke(token, ttl)
        except RevocationStoreError:
            log.warning(
                "revocation.write_failed",
                extra={"user_id": claims.user_id},
                exc_info=True,
            )
