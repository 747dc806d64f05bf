"""Blog back-office: commands and handler."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from storefront.blog.post import BlogPost
from storefront.domain import storefront


@storefront.command(part_of="BlogPost")
class DraftBlogPost:
    title = String(required=True, max_length=255)
    slug = String(required=True, max_length=200)
    content = Text(required=True)
    author_id = Identifier(required=True)
    excerpt = Text()
    featured_image = String(max_length=500)


@storefront.command(part_of="BlogPost")
class PublishBlogPost:
    post_id = Identifier(required=True)


@storefront.command_handler(part_of=BlogPost)
class ManageBlogHandler:
    @handle(DraftBlogPost)
    def draft_post(self, command):
        repo = current_domain.repository_for(BlogPost)
        if repo.find_by_slug(command.slug) is not None:
            raise ValidationError({"slug": [f"A post with slug '{command.slug}' already exists"]})

        post = BlogPost.draft(
            title=command.title,
            slug=command.slug,
            content=command.content,
            author_id=command.author_id,
            excerpt=command.excerpt,
            featured_image=command.featured_image,
        )
        repo.add(post)
        return str(post.id)

    @handle(PublishBlogPost)
    def publish_post(self, command):
        repo = current_domain.repository_for(BlogPost)
        post = repo.get(command.post_id)
        post.publish()
        repo.add(post)
