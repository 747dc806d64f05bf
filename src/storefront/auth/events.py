"""Domain events for the Profile aggregate."""

from protean.fields import DateTime, Identifier, String

from storefront.domain import storefront


@storefront.event(part_of="Profile")
class ProfileRegistered:
    """A shopper signed up and a profile was created for them."""

    __version__ = 1

    user_id = Identifier(required=True)
    email = String(max_length=255)
    registered_at = DateTime(required=True)


@storefront.event(part_of="Profile")
class AdminAccessGranted:
    """A profile was given access to the admin back-office."""

    __version__ = 1

    user_id = Identifier(required=True)
    granted_at = DateTime(required=True)
