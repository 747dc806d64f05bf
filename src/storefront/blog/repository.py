from storefront.blog.post import BlogPost
from storefront.domain import storefront


@storefront.repository(part_of=BlogPost)
class BlogPostRepository:
    def find_published(self) -> list[BlogPost]:
        """Published posts, most recent first."""
        posts = self._dao.query.filter(is_published=True).all().items
        return sorted(posts, key=lambda p: p.published_at, reverse=True)

    def find_published_by_slug(self, slug: str) -> BlogPost | None:
        post = self.find_by_slug(slug)
        return post if post and post.is_published else None

    def find_by_slug(self, slug: str) -> BlogPost | None:
        matches = self._dao.query.filter(slug=slug).all().items
        return matches[0] if matches else None
