"""
Posts API: Post SQLAlchemy Model
==================================

What:  ORM model representing the `posts` table.
How:   Inherits from DeclarativeBase; `create_tables()` reads it from Base.metadata.
Who:   TableQuery is built over `Post.__table__`; the service never holds
       Post instances between requests.

Table Design:
    - Integer autoincrement primary key: assigned by the store on INSERT,
      returned via RETURNING, never written by the application afterwards
    - title: short client-supplied string
    - contents: unbounded client-supplied text
    - Both NOT NULL: a create request missing either field fails in the
      store (500), there is no separate request validation
"""

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from posts_api.database import Base


class Post(Base):
    """
    A titled piece of content.

    Lifecycle:
        1. Created by POST /posts (store assigns id)
        2. title/contents overwritten by PUT /posts/{id}; id never changes
        3. Removed by DELETE /posts/{id}
    """

    __tablename__ = "posts"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    contents: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<Post(id={self.id}, title='{self.title}')>"
