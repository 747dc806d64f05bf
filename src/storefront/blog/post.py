"""BlogPost aggregate: drafted and published by admins."""

from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Identifier, String, Text

from storefront.blog.events import BlogPostDrafted, BlogPostPublished
from storefront.domain import storefront


@storefront.aggregate
class BlogPost:
    title = String(required=True, max_length=255)
    slug = String(required=True, max_length=200, unique=True)
    excerpt = Text()
    content = Text(required=True)
    featured_image = String(max_length=500)
    author_id = Identifier(required=True)
    is_published = Boolean(default=False)
    published_at = DateTime()
    created_at = DateTime()

    @classmethod
    def draft(cls, title, slug, content, author_id, excerpt=None, featured_image=None):
        post = cls(
            title=title,
            slug=slug,
            content=content,
            author_id=author_id,
            excerpt=excerpt,
            featured_image=featured_image,
            is_published=False,
            created_at=datetime.now(UTC),
        )
        post.raise_(BlogPostDrafted(post_id=str(post.id), slug=slug, author_id=str(author_id)))
        return post

    def publish(self, published_at=None):
        if self.is_published:
            raise ValidationError({"is_published": ["Post is already published"]})

        self.is_published = True
        self.published_at = published_at or datetime.now(UTC)
        self.raise_(BlogPostPublished(post_id=str(self.id), slug=self.slug, published_at=self.published_at))
