"""Profile registration and admin grants: commands and handler."""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.auth.profile import Profile
from storefront.domain import storefront


@storefront.command(part_of="Profile")
class RegisterProfile:
    """Create the profile for a newly signed-up user."""

    user_id = Identifier(required=True)
    email = String(max_length=255)
    full_name = String(max_length=255)


@storefront.command(part_of="Profile")
class GrantAdmin:
    user_id = Identifier(required=True)


@storefront.command_handler(part_of=Profile)
class ProfileHandler:
    @handle(RegisterProfile)
    def register_profile(self, command):
        repo = current_domain.repository_for(Profile)
        try:
            existing = repo.get(command.user_id)
        except ObjectNotFoundError:
            existing = None

        if existing is not None:
            return str(existing.user_id)

        profile = Profile.register(
            user_id=command.user_id,
            email=command.email,
            full_name=command.full_name,
        )
        repo.add(profile)
        return str(profile.user_id)

    @handle(GrantAdmin)
    def grant_admin(self, command):
        repo = current_domain.repository_for(Profile)
        profile = repo.get(command.user_id)
        profile.grant_admin()
        repo.add(profile)
