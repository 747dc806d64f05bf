"""Domain events for the BlogPost aggregate."""

from protean.fields import DateTime, Identifier, String

from storefront.domain import storefront


@storefront.event(part_of="BlogPost")
class BlogPostDrafted:
    __version__ = 1

    post_id = Identifier(required=True)
    slug = String(required=True)
    author_id = Identifier(required=True)


@storefront.event(part_of="BlogPost")
class BlogPostPublished:
    """A post became visible on the public blog."""

    __version__ = 1

    post_id = Identifier(required=True)
    slug = String(required=True)
    published_at = DateTime(required=True)
