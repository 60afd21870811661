# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""
Client-side state: who is signed in, and the current page of posts.

Both stores are plain objects built around an injected :class:`MidnightClient`
so several independent instances can live side by side.  Listeners added
with ``subscribe`` are called with the store after every state change.

Cache policy is invalidate-and-reload: after any successful create, update
or delete the store refetches the page it is showing.  There is no
optimistic update and no retry; a failure sets ``error``, is logged, and the
``ApiError`` propagates to the caller once.
"""

import logging
from typing import Callable, Dict, List, Optional

from client.api import ApiError, MidnightClient

logger = logging.getLogger("midnight.client")

GENERIC_ERROR = "Something went wrong. Please try again."


class Store:
    """Minimal observable: subscribe / notify."""

    def __init__(self):
        self._listeners: List[Callable] = []

    def subscribe(self, listener: Callable) -> Callable[[], None]:
        """Register *listener*; the returned callable removes it again."""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)


# ---------------------------------------------------------------------------
# Auth
# ---------------------------------------------------------------------------


class AuthStore(Store):
    def __init__(self, api: MidnightClient):
        super().__init__()
        self.api = api
        self.token: Optional[str] = api.token
        self.current_user: Optional[Dict] = None

    @property
    def is_logged_in(self) -> bool:
        return self.token is not None

    @property
    def is_admin(self) -> bool:
        return bool(self.current_user and self.current_user.get("role") == "admin")

    def _apply(self, data: Dict) -> Dict:
        self.token = data["token"]
        self.api.token = self.token
        self.current_user = {k: data[k] for k in ("id", "username", "email", "role")}
        self._notify()
        return self.current_user

    def signup(self, username: str, email: str, password: str) -> Dict:
        """Register and stay signed in with the returned token."""
        return self._apply(self.api.signup(username, email, password))

    def login(self, email: str, password: str) -> Dict:
        return self._apply(self.api.signin(email, password))

    def logout(self) -> None:
        self.token = None
        self.api.token = None
        self.current_user = None
        self._notify()

    def restore(self, token: str) -> Optional[Dict]:
        """
        Resume a session from a saved token.  The server has the last word:
        a token it rejects (expired, user deleted) signs the store out.
        """
        self.api.token = token
        try:
            user = self.api.me()
        except ApiError as exc:
            if exc.status_code != 401:
                raise
            logger.info("saved token rejected, signing out")
            self.logout()
            return None
        self.token = token
        self.current_user = user
        self._notify()
        return user


# ---------------------------------------------------------------------------
# Blogs
# ---------------------------------------------------------------------------


class BlogStore(Store):
    def __init__(self, api: MidnightClient, page_size: int = 10):
        super().__init__()
        self.api = api
        self.page_size = page_size
        self.blogs: List[Dict] = []
        self.page = 1
        self.pages = 0
        self.total = 0
        self.loading = False
        self.error: Optional[str] = None

    def _fail(self, action: str, exc: ApiError) -> None:
        logger.error("%s failed: %s", action, exc)
        self.error = GENERIC_ERROR
        self.loading = False
        self._notify()

    def fetch_page(self, page: Optional[int] = None) -> List[Dict]:
        """Load *page* (default: the page currently shown)."""
        page = page or self.page
        self.loading = True
        self._notify()
        try:
            data = self.api.list_blogs(page=page, limit=self.page_size)
        except ApiError as exc:
            self._fail("fetch_page", exc)
            raise
        self.blogs = data["blogs"]
        self.page = data["page"]
        self.pages = data["pages"]
        self.total = data["total"]
        self.loading = False
        self.error = None
        self._notify()
        return self.blogs

    def _refetch(self) -> None:
        self.fetch_page(self.page)
        # The page we were on may have emptied; land on the last one left.
        if not self.blogs and self.page > 1:
            self.fetch_page(max(self.pages, 1))

    def _mutate(self, action: str, call: Callable, *args):
        try:
            result = call(*args)
        except ApiError as exc:
            self._fail(action, exc)
            raise
        self._refetch()
        return result

    def create(self, payload: Dict) -> Dict:
        return self._mutate("create", self.api.create_blog, payload)

    def update(self, blog_id: int, payload: Dict) -> Dict:
        return self._mutate("update", self.api.update_blog, blog_id, payload)

    def delete(self, blog_id: int) -> Dict:
        return self._mutate("delete", self.api.delete_blog, blog_id)

    def get(self, identifier) -> Optional[Dict]:
        """Look a post up on the loaded page by id or slug."""
        for blog in self.blogs:
            if str(blog["id"]) == str(identifier) or blog["slug"] == identifier:
                return blog
        return None
