"""Public blog reads."""

from protean.utils.globals import current_domain

from storefront.blog.post import BlogPost
from storefront.shared.result import Err, ErrorKind, Ok, Result
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class BlogStore:
    def list_posts(self) -> Result[list[BlogPost]]:
        try:
            return Ok(current_domain.repository_for(BlogPost).find_published())
        except Exception as exc:
            logger.error("blog.list_failed", error=str(exc), exc_info=True)
            return Err(ErrorKind.BACKEND, str(exc))

    def get_post(self, slug: str) -> Result[BlogPost]:
        try:
            post = current_domain.repository_for(BlogPost).find_published_by_slug(slug)
        except Exception as exc:
            logger.error("blog.get_failed", slug=slug, error=str(exc), exc_info=True)
            return Err(ErrorKind.BACKEND, str(exc))

        if post is None:
            return Err(ErrorKind.NOT_FOUND, f"Post '{slug}' not found")
        return Ok(post)
