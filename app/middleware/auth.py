"""
Supabase access-token verification

Sign-in happens against Supabase Auth. The API only checks the access token
it issued: the signature against the project's published JWKS, then
audience, issuer and expiry. The ``sub`` claim is the owner id every thought
and profile query is scoped by.
"""
import logging
import time
from typing import Callable, List, Optional

import httpx
from fastapi import Depends, Header, HTTPException, Request
from jose import jwk, jwt
from jose.exceptions import ExpiredSignatureError, JOSEError, JWTClaimsError, JWTError

logger = logging.getLogger(__name__)

JWKS_CACHE_DURATION = 60 * 60  # 1 hour in seconds
JWKS_MIN_REFRESH_INTERVAL = 60
JWT_AUDIENCE = "authenticated"
JWT_ALGORITHMS = ["ES256", "RS256"]


class AuthError(Exception):
    """A request could not be authenticated; ``detail`` is safe to return"""

    def __init__(self, detail: str, status_code: int = 401):
        super().__init__(detail)
        self.detail = detail
        self.status_code = status_code


def _select_key(jwks: dict, kid: str) -> Optional[dict]:
    keys: List[dict] = jwks.get("keys", [])
    return next((key for key in keys if key.get("kid") == kid), None)


class JWKSCache:
    """
    The project's public signing keys, fetched over HTTP and kept for ``ttl``
    seconds.

    If a refresh fails, the last keys fetched are used until one succeeds.
    """

    def __init__(
        self,
        url: str,
        ttl: float = JWKS_CACHE_DURATION,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.url = url
        self._ttl = ttl
        self._transport = transport
        self._clock = clock
        self._keys: Optional[dict] = None
        self._fetched_at = 0.0

    async def get(self, force: bool = False) -> dict:
        if not force and self._keys is not None and self._clock() - self._fetched_at < self._ttl:
            return self._keys

        logger.info(f"Fetching JWKS from Supabase: {self.url}")
        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                response = await client.get(self.url, timeout=10.0)
                response.raise_for_status()
                keys = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Failed to fetch JWKS: {e}")
            if self._keys is not None:
                logger.warning("Using previously fetched JWKS due to fetch failure")
                return self._keys
            raise AuthError("Failed to fetch authentication keys", status_code=503) from None

        self._keys = keys
        self._fetched_at = self._clock()
        return keys

    async def find_key(self, kid: str) -> Optional[dict]:
        """
        Key with the given id, or None.

        An unknown id triggers one refresh in case the project rotated its
        keys, at most once per JWKS_MIN_REFRESH_INTERVAL.
        """
        key = _select_key(await self.get(), kid)
        if key is None and self._clock() - self._fetched_at >= JWKS_MIN_REFRESH_INTERVAL:
            logger.info(f"Key '{kid}' not in cached JWKS, refreshing")
            key = _select_key(await self.get(force=True), kid)
        return key


class TokenVerifier:
    """Verifies access tokens issued by one Supabase project"""

    def __init__(
        self,
        supabase_url: Optional[str],
        jwks: Optional[JWKSCache] = None,
        audience: str = JWT_AUDIENCE,
    ):
        self._base_url = supabase_url.rstrip("/") if supabase_url else None
        if jwks is None and self._base_url:
            jwks = JWKSCache(f"{self.issuer}/.well-known/jwks.json")
        self._jwks = jwks
        self.audience = audience

    @property
    def issuer(self) -> str:
        return f"{self._base_url}/auth/v1"

    async def verify(self, token: str) -> dict:
        """
        Check a token's signature and claims.

        Returns:
            The decoded JWT payload

        Raises:
            AuthError: 401 for any rejected token, 503 when keys are unavailable
        """
        if self._jwks is None:
            logger.error("SUPABASE_URL is not set, cannot verify tokens")
            raise AuthError("Authentication is not configured", status_code=503)

        try:
            kid = jwt.get_unverified_header(token).get("kid")
        except JWTError as e:
            raise AuthError(f"Invalid token: {e}") from None
        if not kid:
            raise AuthError("Token missing key ID (kid)")

        key_data = await self._jwks.find_key(kid)
        if key_data is None:
            raise AuthError(f"Key with ID '{kid}' not found in JWKS")

        try:
            return jwt.decode(
                token,
                jwk.construct(key_data),
                algorithms=JWT_ALGORITHMS,
                audience=self.audience,
                issuer=self.issuer,
            )
        except ExpiredSignatureError:
            raise AuthError("Token has expired") from None
        except JWTClaimsError as e:
            raise AuthError(f"Token validation failed: {e}") from None
        except JOSEError as e:
            raise AuthError(f"Invalid token: {e}") from None

    async def user_id(self, token: str) -> str:
        payload = await self.verify(token)
        user_id = payload.get("sub")
        if not user_id:
            raise AuthError("Invalid token: no user ID")
        return user_id


def get_token_verifier(request: Request) -> TokenVerifier:
    return request.app.state.token_verifier


def _bearer_token(authorization: Optional[str]) -> str:
    if not authorization:
        raise HTTPException(status_code=401, detail="Authorization header missing")

    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise HTTPException(
            status_code=401,
            detail="Invalid authorization header format. Expected 'Bearer <token>'"
        )
    return token.strip()


async def get_current_user_id(
    authorization: Optional[str] = Header(None),
    verifier: TokenVerifier = Depends(get_token_verifier),
) -> str:
    """FastAPI dependency: the verified owner id from the Authorization header"""
    token = _bearer_token(authorization)
    try:
        return await verifier.user_id(token)
    except AuthError as e:
        raise HTTPException(status_code=e.status_code, detail=e.detail)
