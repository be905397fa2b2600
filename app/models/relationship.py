# app/models/relationship.py
# member <-> book association carrying the member's role in that book
import enum
from sqlalchemy import Column, Integer, ForeignKey, UniqueConstraint
from app.db.base import Base


class BookRole(enum.IntEnum):
    FOUNDER = 0
    ADMIN = 1
    EDITOR = 2
    OBSERVER = 3


class Relationship(Base):
    __tablename__ = "relationships"
    __table_args__ = (UniqueConstraint("member_id", "book_id", name="uq_relationship_member_book"),)

    relationship_id = Column(Integer, primary_key=True, index=True)
    member_id = Column(Integer, ForeignKey("members.member_id"), nullable=False, index=True)
    book_id = Column(Integer, ForeignKey("books.book_id"), nullable=False, index=True)
    role_id = Column(Integer, nullable=False, default=BookRole.OBSERVER)
