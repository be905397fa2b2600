# app/services/permission_service.py
import logging
from typing import Optional
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from app.models import ChatMessage, Relationship, BookRole

logger = logging.getLogger(__name__)

DELETE_ROLES = (BookRole.FOUNDER, BookRole.ADMIN)


def can_delete(message: ChatMessage, viewer_member_id: int, viewer_role: Optional[BookRole]) -> bool:
    """
    The author may delete their own message; book founders and admins may
    delete any message. member_id 0 is anonymous and never matches as author.
    """
    if viewer_member_id and viewer_member_id > 0 and viewer_member_id == message.member_id:
        return True
    return viewer_role in DELETE_ROLES


class PermissionService:
    def __init__(self, db: Session):
        self.db = db

    def _find_relationship(self, book_id: int, member_id: int) -> Optional[Relationship]:
        return (
            self.db.query(Relationship)
            .filter(Relationship.book_id == book_id, Relationship.member_id == member_id)
            .first()
        )

    def resolve_role(self, book_id: int, member_id: int) -> Optional[BookRole]:
        # a failed lookup means "no elevated role", it must not fail the request
        if not member_id or member_id <= 0:
            return None
        try:
            rel = self._find_relationship(book_id, member_id)
        except SQLAlchemyError as e:
            logger.warning("role lookup failed book_id=%s member_id=%s: %s", book_id, member_id, e)
            self.db.rollback()
            return None
        if rel is None:
            return None
        try:
            return BookRole(rel.role_id)
        except ValueError:
            logger.warning("unknown role_id %s for member %s in book %s", rel.role_id, member_id, book_id)
            return None

    def is_participant(self, book_id: int, member_id: int) -> bool:
        if not member_id or member_id <= 0:
            return False
        return self._find_relationship(book_id, member_id) is not None

    def can_delete(self, message: ChatMessage, viewer_member_id: int, book_id: int = None) -> bool:
        role = self.resolve_role(book_id if book_id is not None else message.book_id, viewer_member_id)
        return can_delete(message, viewer_member_id, role)
