from sqlalchemy import Column, DateTime, Integer, String, Text, func

from blogadmin.db.base import Base


class Post(Base):
    __tablename__ = "Posts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(512), nullable=False)
    slug = Column(String(512), nullable=False)
    content = Column(Text, nullable=False)
    published_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
