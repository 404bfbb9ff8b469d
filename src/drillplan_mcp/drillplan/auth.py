"""Coach identity via Firebase email/password authentication."""

import httpx
from datetime import datetime, timedelta, timezone

from drillplan_mcp.drillplan.exceptions import AuthenticationError, TokenExpiredError
from drillplan_mcp.drillplan.models import User

FIREBASE_AUTH_URL = "https://identitytoolkit.googleapis.com/v1/accounts"
FIREBASE_TOKEN_URL = "https://securetoken.googleapis.com/v1/token"


class FirebaseAuth:
    """Firebase authentication handler. Without a signed-in user the coach is a guest."""

    def __init__(self, api_key: str, transport: httpx.AsyncBaseTransport | None = None):
        self.api_key = api_key
        self._transport = transport
        self.id_token: str | None = None
        self.refresh_token: str | None = None
        self.user: User | None = None
        self.token_expiry: datetime | None = None

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    @property
    def is_authenticated(self) -> bool:
        return self.id_token is not None and self.user is not None

    @property
    def user_id(self) -> str | None:
        return self.user.uid if self.user else None

    @property
    def is_token_expired(self) -> bool:
        if not self.token_expiry:
            return True
        return datetime.now(timezone.utc) >= (self.token_expiry - timedelta(minutes=5))

    async def login(self, email: str, password: str) -> User:
        if not self.is_configured:
            raise AuthenticationError("Firebase is not configured.")

        async with httpx.AsyncClient(timeout=30, transport=self._transport) as client:
            response = await client.post(
                f"{FIREBASE_AUTH_URL}:signInWithPassword",
                params={"key": self.api_key},
                json={
                    "email": email,
                    "password": password,
                    "returnSecureToken": True,
                },
            )

            if response.status_code != 200:
                error_data = response.json()
                error_message = error_data.get("error", {}).get("message", "Authentication failed")
                raise AuthenticationError(f"Login failed: {error_message}")

            data = response.json()
            self._update_tokens(data)
            return self.user

    async def refresh(self) -> None:
        if not self.refresh_token:
            raise AuthenticationError("No refresh token available")

        async with httpx.AsyncClient(timeout=30, transport=self._transport) as client:
            response = await client.post(
                FIREBASE_TOKEN_URL,
                params={"key": self.api_key},
                data={
                    "grant_type": "refresh_token",
                    "refresh_token": self.refresh_token,
                },
            )

            if response.status_code != 200:
                raise TokenExpiredError("Failed to refresh token")

            data = response.json()
            self.id_token = data["id_token"]
            self.refresh_token = data["refresh_token"]
            expires_in = int(data.get("expires_in", 3600))
            self.token_expiry = datetime.now(timezone.utc) + timedelta(seconds=expires_in)

    async def ensure_fresh(self) -> None:
        if not self.is_authenticated:
            raise AuthenticationError("Not signed in.")
        if self.is_token_expired:
            await self.refresh()

    def sign_out(self) -> None:
        self.id_token = None
        self.refresh_token = None
        self.user = None
        self.token_expiry = None

    def _update_tokens(self, data: dict) -> None:
        self.id_token = data["idToken"]
        self.refresh_token = data["refreshToken"]
        self.user = User(
            uid=data["localId"],
            display_name=data.get("displayName") or None,
            email=data.get("email"),
            photo_url=data.get("profilePicture"),
        )
        expires_in = int(data.get("expiresIn", 3600))
        self.token_expiry = datetime.now(timezone.utc) + timedelta(seconds=expires_in)

    def get_auth_header(self) -> dict[str, str]:
        if not self.id_token:
            raise AuthenticationError("Not authenticated")
        return {"Authorization": f"Bearer {self.id_token}"}
