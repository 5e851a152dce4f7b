import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from blogadmin.models.post import Post
from blogadmin.schemas.blog import TablePostIn

logger = logging.getLogger(__name__)


class TablePostsRepo:
    """Posts kept as rows of the Posts table, keyed by numeric id."""

    def __init__(self, db: Session):
        self.db = db

    def list(self) -> List[Post]:
        return (
            self.db.query(Post).order_by(Post.published_at.desc(), Post.id.desc()).all()
        )

    def read(self, post_id: int) -> Optional[Post]:
        return self.db.get(Post, post_id)

    def create(self, data: TablePostIn) -> Post:
        post = Post(title=data.title, slug=data.slug, content=data.content)
        self.db.add(post)
        self.db.commit()
        self.db.refresh(post)
        logger.info(f"Created table post {post.id} ({post.slug})")
        return post

    def update(self, post_id: int, data: TablePostIn) -> Optional[Post]:
        post = self.db.get(Post, post_id)
        if post is None:
            return None
        post.title = data.title
        post.slug = data.slug
        post.content = data.content
        self.db.commit()
        self.db.refresh(post)
        logger.info(f"Updated table post {post_id}")
        return post

    def delete(self, post_id: int) -> None:
        deleted = self.db.query(Post).filter(Post.id == post_id).delete()
        self.db.commit()
        logger.info(f"Deleted {deleted} table post(s) with id {post_id}")
