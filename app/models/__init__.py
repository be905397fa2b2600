# app/models/__init__.py
from app.models.book import Book, CommentStatus
from app.models.document import Document
from app.models.member import Member, MemberStatus
from app.models.relationship import Relationship, BookRole
from app.models.chat_message import ChatMessage, ApprovedStatus

__all__ = [
    "Book", "CommentStatus",
    "Document",
    "Member", "MemberStatus",
    "Relationship", "BookRole",
    "ChatMessage", "ApprovedStatus",
]
