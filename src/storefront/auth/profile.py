"""Profile aggregate: per-user record carrying the back-office flag."""

from datetime import UTC, datetime

from protean.fields import Boolean, DateTime, Identifier, String

from storefront.auth.events import AdminAccessGranted, ProfileRegistered
from storefront.domain import storefront


@storefront.aggregate
class Profile:
    user_id = Identifier(identifier=True, required=True)
    email = String(max_length=255)
    full_name = String(max_length=255)
    is_admin = Boolean(default=False)
    created_at = DateTime()

    @classmethod
    def register(cls, user_id, email=None, full_name=None):
        now = datetime.now(UTC)
        profile = cls(
            user_id=user_id,
            email=email,
            full_name=full_name,
            is_admin=False,
            created_at=now,
        )
        profile.raise_(
            ProfileRegistered(
                user_id=str(user_id),
                email=email,
                registered_at=now,
            )
        )
        return profile

    def grant_admin(self):
        if self.is_admin:
            return
        self.is_admin = True
        self.raise_(
            AdminAccessGranted(
                user_id=str(self.user_id),
                granted_at=datetime.now(UTC),
            )
        )
