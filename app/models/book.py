# app/models/book.py
import enum
from sqlalchemy import Column, Integer, String, DateTime, func
from sqlalchemy.orm import relationship
from app.db.base import Base


class CommentStatus(str, enum.Enum):
    OPEN = "open"
    CLOSED = "closed"
    REGISTERED_ONLY = "registered_only"
    GROUP_ONLY = "group_only"


class Book(Base):
    __tablename__ = "books"
    book_id = Column(Integer, primary_key=True, index=True)
    book_name = Column(String(500), nullable=False)
    comment_status = Column(String(20), nullable=False, default=CommentStatus.OPEN.value)
    created_at = Column(DateTime, server_default=func.now())
    documents = relationship("Document", back_populates="book")
