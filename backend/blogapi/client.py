"""Thin ``requests`` wrapper around the blog API with silent token refresh.

Tokens are kept outside process memory through a :class:`TokenStorage`
(by default a JSON file), so a new client picks up the session of the last
one. Any request answered with 401 while a refresh token is held triggers
one refresh and one retry of the original request.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Protocol

import requests

log = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10


class ApiError(Exception):
    """Non-2xx response; ``message`` is the server's ``error`` field when present."""

    def __init__(self, message: str, status_code: int, payload: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.payload = payload or {}


class AuthenticationFailed(ApiError):
    """The session could not be recovered; the caller must log in again."""


class TokenStorage(Protocol):
    def load(self) -> dict[str, str | None]: ...

    def save(self, access_token: str | None, refresh_token: str | None) -> None: ...

    def clear(self) -> None: ...


class MemoryTokenStorage:
    def __init__(self) -> None:
        self._tokens: dict[str, str | None] = {"access_token": None, "refresh_token": None}

    def load(self) -> dict[str, str | None]:
        return dict(self._tokens)

    def save(self, access_token: str | None, refresh_token: str | None) -> None:
        self._tokens = {"access_token": access_token, "refresh_token": refresh_token}

    def clear(self) -> None:
        self.save(None, None)


class FileTokenStorage:
    """Persist the token pair as JSON at ``path``."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def load(self) -> dict[str, str | None]:
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {"access_token": None, "refresh_token": None}
        except json.JSONDecodeError:
            log.warning("client.token_file_corrupt", extra={"event": "token_file_corrupt"})
            return {"access_token": None, "refresh_token": None}
        return {
            "access_token": data.get("access_token"),
            "refresh_token": data.get("refresh_token"),
        }

    def save(self, access_token: str | None, refresh_token: str | None) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = {"access_token": access_token, "refresh_token": refresh_token}
        self.path.write_text(json.dumps(payload), encoding="utf-8")

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)


class BlogApiClient:
    """
    Client for the blog API.

    :param base_url: API root, e.g. ``"http://localhost:8000/api"``.
    :param storage: Token persistence; in-memory when omitted.
    :param session: Optional pre-configured :class:`requests.Session`.
    :param timeout: Per-request timeout in seconds.
    """

    def __init__(
        self,
        base_url: str,
        *,
        storage: TokenStorage | None = None,
        session: requests.Session | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.storage = storage or MemoryTokenStorage()
        self.session = session or requests.Session()
        self.timeout = timeout
        tokens = self.storage.load()
        self.access_token = tokens.get("access_token")
        self.refresh_token = tokens.get("refresh_token")

    # ------------------------------------------------------------------ #
    # Token state
    # ------------------------------------------------------------------ #

    @property
    def is_authenticated(self) -> bool:
        return bool(self.access_token)

    def set_tokens(self, access_token: str, refresh_token: str | None = None) -> None:
        self.access_token = access_token
        if refresh_token:
            self.refresh_token = refresh_token
        self.storage.save(self.access_token, self.refresh_token)

    def clear_tokens(self) -> None:
        self.access_token = None
        self.refresh_token = None
        self.storage.clear()

    # ------------------------------------------------------------------ #
    # Transport
    # ------------------------------------------------------------------ #

    def _send(self, method: str, path: str, token: str | None, **kwargs: Any) -> requests.Response:
        headers = {"Content-Type": "application/json", **kwargs.pop("headers", {})}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return self.session.request(
            method, f"{self.base_url}{path}", headers=headers, timeout=self.timeout, **kwargs
        )

    @staticmethod
    def _raise_for_status(response: requests.Response, cls: type[ApiError] = ApiError) -> None:
        if response.ok:
            return
        try:
            payload = response.json()
        except ValueError:
            payload = {}
        message = payload.get("error") or f"API Error: {response.status_code} {response.reason}"
        raise cls(message, response.status_code, payload)

    def request(self, method: str, path: str, **kwargs: Any) -> Any:
        """
        Send an authenticated request, refreshing once on 401.

        :returns: Decoded JSON body, or ``None`` for 204 responses.
        :raises AuthenticationFailed: The refresh after a 401 failed.
        :raises ApiError: Any other non-2xx response.
        """
        response = self._send(method, path, self.access_token, **kwargs)
        if response.status_code == 401 and self.refresh_token:
            try:
                self.refresh()
            except ApiError as exc:
                self.clear_tokens()
                raise AuthenticationFailed(
                    "Authentication failed. Please login again.", exc.status_code, exc.payload
                ) from exc
            response = self._send(method, path, self.access_token, **kwargs)

        self._raise_for_status(response)
        return None if response.status_code == 204 else response.json()

    # ------------------------------------------------------------------ #
    # Authentication
    # ------------------------------------------------------------------ #

    def login(self, identifier: str, password: str) -> dict[str, Any]:
        response = self._send(
            "POST", "/auth/login", None, json={"identifier": identifier, "password": password}
        )
        self._raise_for_status(response)
        data = response.json()
        self.set_tokens(data["accessToken"], data["refreshToken"])
        return data

    def refresh(self) -> dict[str, Any]:
        """Rotate the stored refresh token; both new tokens replace the old pair."""
        if not self.refresh_token:
            raise AuthenticationFailed("No refresh token available", 401)
        response = self._send(
            "POST", "/auth/refresh", None, json={"refreshToken": self.refresh_token}
        )
        if not response.ok:
            self.clear_tokens()
        self._raise_for_status(response)
        data = response.json()
        self.set_tokens(data["accessToken"], data["refreshToken"])
        return data

    def logout(self) -> None:
        try:
            if self.refresh_token:
                self._send("POST", "/auth/logout", None, json={"refreshToken": self.refresh_token})
        finally:
            self.clear_tokens()

    def logout_all(self) -> None:
        self.request("POST", "/auth/logout-all")
        self.clear_tokens()

    def verify(self) -> dict[str, Any]:
        return self.request("GET", "/auth/verify")

    # ------------------------------------------------------------------ #
    # Resources
    # ------------------------------------------------------------------ #

    def me(self) -> dict[str, Any]:
        return self.request("GET", "/me")

    def users(self, **params: Any) -> dict[str, Any]:
        return self.request("GET", "/users", params=params)

    def user(self, user_id: str) -> dict[str, Any]:
        return self.request("GET", f"/users/{user_id}")

    def follow(self, user_id: str) -> dict[str, Any]:
        return self.request("POST", f"/users/{user_id}/follow")

    def unfollow(self, user_id: str) -> None:
        self.request("DELETE", f"/users/{user_id}/follow")

    def posts(self, **params: Any) -> dict[str, Any]:
        return self.request("GET", "/posts", params=params)

    def post(self, post_id: str) -> dict[str, Any]:
        return self.request("GET", f"/posts/{post_id}")

    def create_post(self, **fields: Any) -> dict[str, Any]:
        return self.request("POST", "/posts", json=fields)

    def update_post(self, post_id: str, **fields: Any) -> dict[str, Any]:
        return self.request("PATCH", f"/posts/{post_id}", json=fields)

    def delete_post(self, post_id: str) -> None:
        self.request("DELETE", f"/posts/{post_id}")

    def like_post(self, post_id: str) -> dict[str, Any]:
        return self.request("POST", f"/posts/{post_id}/like")

    def post_stats(self, post_id: str) -> dict[str, Any]:
        return self.request("GET", f"/posts/{post_id}/stats")

    def comments(self, post_id: str, **params: Any) -> dict[str, Any]:
        return self.request("GET", f"/posts/{post_id}/comments", params=params)

    def create_comment(
        self, post_id: str, content: str, parent_comment_id: str | None = None
    ) -> dict[str, Any]:
        body: dict[str, Any] = {"content": content}
        if parent_comment_id:
            body["parentCommentId"] = parent_comment_id
        return self.request("POST", f"/posts/{post_id}/comments", json=body)

    def update_comment(self, comment_id: str, content: str) -> dict[str, Any]:
        return self.request("PATCH", f"/comments/{comment_id}", json={"content": content})

    def delete_comment(self, comment_id: str) -> None:
        self.request("DELETE", f"/comments/{comment_id}")

    def like_comment(self, comment_id: str) -> dict[str, Any]:
        return self.request("POST", f"/comments/{comment_id}/like")

    def tags(self, search: str | None = None) -> list[dict[str, Any]]:
        params = {"search": search} if search else {}
        return self.request("GET", "/tags", params=params)

    def tag_posts(self, slug: str, **params: Any) -> dict[str, Any]:
        return self.request("GET", f"/tags/{slug}/posts", params=params)
