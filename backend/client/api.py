# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""
Thin HTTP client for the Midnight Blog REST API.

Every call goes through one ``requests.Session``.  When a token is set it is
sent as ``Authorization: Bearer <token>``.  Any response with status >= 400
raises :class:`ApiError`; nothing is retried.

The session is injectable: anything with a requests-compatible
``request(method, url, params=, json=, headers=)`` works, which is how the
tests drive the real app through FastAPI's TestClient.
"""

import logging
from typing import Any, Dict, List, Optional

import requests

logger = logging.getLogger("midnight.client")


class ApiError(Exception):
    """Non-2xx response.  ``errors`` holds per-field messages on 400s."""

    def __init__(self, status_code: int, detail: str, errors: Optional[List[Dict[str, str]]] = None):
        super().__init__(f"HTTP {status_code}: {detail}")
        self.status_code = status_code
        self.detail = detail
        self.errors = errors or []


class MidnightClient:
    def __init__(self, base_url: str = "", session=None, token: Optional[str] = None):
        self.base_url = base_url.rstrip("/")
        self.session = session if session is not None else requests.Session()
        self.token = token

    # -- plumbing ----------------------------------------------------------

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def _request(self, method: str, path: str, **kwargs) -> Any:
        response = self.session.request(
            method,
            f"{self.base_url}{path}",
            headers=self._headers(),
            **kwargs,
        )
        if response.status_code >= 400:
            try:
                body = response.json()
            except ValueError:
                body = {}
            detail = body.get("detail") if isinstance(body, dict) else None
            logger.debug("%s %s -> %d %s", method, path, response.status_code, detail)
            raise ApiError(
                response.status_code,
                detail or response.text or "Request failed",
                body.get("errors") if isinstance(body, dict) else None,
            )
        return response.json()

    # -- auth --------------------------------------------------------------

    def signup(self, username: str, email: str, password: str) -> Dict:
        return self._request(
            "POST", "/api/auth/signup",
            json={"username": username, "email": email, "password": password},
        )

    def signin(self, email: str, password: str) -> Dict:
        return self._request("POST", "/api/auth/signin", json={"email": email, "password": password})

    def me(self) -> Dict:
        return self._request("GET", "/api/auth/me")

    # -- blogs -------------------------------------------------------------

    def list_blogs(self, page: int = 1, limit: int = 10) -> Dict:
        return self._request("GET", "/api/blogs", params={"page": page, "limit": limit})

    def get_blog(self, blog_id: int) -> Dict:
        return self._request("GET", f"/api/blogs/{blog_id}")

    def get_blog_by_slug(self, slug: str) -> Dict:
        return self._request("GET", f"/api/blogs/slug/{slug}")

    def create_blog(self, payload: Dict) -> Dict:
        return self._request("POST", "/api/blogs", json=payload)

    def update_blog(self, blog_id: int, payload: Dict) -> Dict:
        return self._request("PUT", f"/api/blogs/{blog_id}", json=payload)

    def delete_blog(self, blog_id: int) -> Dict:
        return self._request("DELETE", f"/api/blogs/{blog_id}")

    # -- admin -------------------------------------------------------------

    def admin_list_users(self, page: int = 1) -> Dict:
        return self._request("GET", "/api/admin/users", params={"page": page})

    def admin_create_user(self, username: str, email: str, password: str, role: str = "user") -> Dict:
        return self._request(
            "POST", "/api/admin/users",
            json={"username": username, "email": email, "password": password, "role": role},
        )

    def admin_update_user(self, user_id: int, payload: Dict) -> Dict:
        return self._request("PUT", f"/api/admin/users/{user_id}", json=payload)

    def admin_delete_user(self, user_id: int) -> Dict:
        return self._request("DELETE", f"/api/admin/users/{user_id}")

    def admin_list_blogs(self, page: int = 1) -> Dict:
        return self._request("GET", "/api/admin/blogs", params={"page": page})

    def admin_delete_blog(self, blog_id: int) -> Dict:
        return self._request("DELETE", f"/api/admin/blogs/{blog_id}")

    def admin_dashboard_stats(self) -> Dict:
        return self._request("GET", "/api/admin/dashboard-stats")
