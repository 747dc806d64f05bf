"""Explicit authentication session.

The stores that mutate per-user state receive an `AuthSession` in their
constructor instead of reaching for ambient process-wide state. Subscribers
are told whenever the signed-in user changes.
"""

from collections.abc import Callable

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.auth.profile import Profile
from storefront.auth.registration import RegisterProfile
from storefront.shared.errors import Unauthenticated
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

SessionListener = Callable[["AuthSession"], None]


class AuthSession:
    def __init__(self, user_id: str | None = None, email: str | None = None):
        self.user_id = user_id
        self.email = email
        self._listeners: list[SessionListener] = []

    @property
    def is_authenticated(self) -> bool:
        return self.user_id is not None

    def require_user(self, message: str = "Please sign in to continue") -> str:
        if self.user_id is None:
            raise Unauthenticated(message)
        return self.user_id

    def subscribe(self, listener: SessionListener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: SessionListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def sign_in(self, user_id: str, email: str | None = None) -> None:
        self.user_id = user_id
        self.email = email
        logger.info("session.signed_in", user_id=user_id)
        self._notify()

    def sign_up(self, user_id: str, email: str, full_name: str | None = None) -> None:
        current_domain.process(
            RegisterProfile(user_id=user_id, email=email, full_name=full_name),
            asynchronous=False,
        )
        self.sign_in(user_id, email=email)

    def sign_out(self) -> None:
        previous = self.user_id
        self.user_id = None
        self.email = None
        logger.info("session.signed_out", user_id=previous)
        self._notify()

    def is_admin(self) -> bool:
        """Whether the signed-in user's profile carries the admin flag."""
        if self.user_id is None:
            return False
        try:
            profile = current_domain.repository_for(Profile).get(self.user_id)
        except ObjectNotFoundError:
            return False
        return bool(profile.is_admin)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)
