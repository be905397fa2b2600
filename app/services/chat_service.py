# app/services/chat_service.py
import logging
import math
from datetime import datetime
from typing import List, Optional, Sequence, Tuple

from sqlalchemy import inspect, update
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from app.core.exceptions import NotFound, PermissionDenied, StorageError, ValidationError
from app.models import Book, ChatMessage, CommentStatus, Document, Member
from app.models.chat_message import (
    ANONYMOUS_AUTHOR,
    AUTHOR_MAX_LENGTH,
    CONTENT_MAX_LENGTH,
    IP_ADDRESS_MAX_LENGTH,
    RESPONSE_MAX_LENGTH,
    USER_AGENT_MAX_LENGTH,
)
from app.services.permission_service import PermissionService, can_delete

logger = logging.getLogger(__name__)

# free-text columns that are cut to size rather than rejected
TRUNCATED_FIELDS = {
    "author": AUTHOR_MAX_LENGTH,
    "ip_address": IP_ADDRESS_MAX_LENGTH,
    "user_agent": USER_AGENT_MAX_LENGTH,
    "response": RESPONSE_MAX_LENGTH,
}


def _truncate(field: str, value):
    limit = TRUNCATED_FIELDS.get(field)
    if limit is None or value is None or len(value) <= limit:
        return value
    logger.warning("%s is %d chars, truncated to %d", field, len(value), limit)
    return value[:limit]


class ChatMessageService:
    """Persistence for document chat messages."""

    def __init__(self, db: Session):
        self.db = db
        self.permissions = PermissionService(db)

    def get_document(self, document_id: int) -> Document:
        doc = self.db.get(Document, document_id) if document_id and document_id > 0 else None
        if not doc:
            raise NotFound("document not found")
        return doc

    def _check_comment_policy(self, book: Book, member_id: int):
        status = book.comment_status
        if status == CommentStatus.CLOSED.value:
            raise PermissionDenied("comments are closed for this book")
        if status == CommentStatus.REGISTERED_ONLY.value and member_id <= 0:
            raise PermissionDenied("only registered members may comment")
        if status == CommentStatus.GROUP_ONLY.value:
            if member_id <= 0 or not self.permissions.is_participant(book.book_id, member_id):
                raise PermissionDenied("only book participants may comment")

    def insert(self, message: ChatMessage) -> int:
        if not message.content:
            raise ValidationError("message content must not be empty")
        if len(message.content) > CONTENT_MAX_LENGTH:
            raise ValidationError(f"message content exceeds {CONTENT_MAX_LENGTH} characters")

        member_id = message.member_id or 0

        if message.parent_id and message.parent_id > 0:
            if not self.db.get(ChatMessage, message.parent_id):
                raise NotFound("parent message not found")

        doc = self.get_document(message.document_id)
        book = self.db.get(Book, doc.book_id)
        if not book:
            raise NotFound("book not found")

        self._check_comment_policy(book, member_id)

        if member_id > 0:
            member = self.db.get(Member, member_id)
            if not member:
                raise NotFound("member does not exist")
            if member.is_disabled:
                raise PermissionDenied("member is disabled")
        elif not message.author:
            message.author = ANONYMOUS_AUTHOR

        message.member_id = member_id
        message.book_id = book.book_id
        if message.date is None:
            message.date = datetime.now()
        for field in TRUNCATED_FIELDS:
            value = getattr(message, field)
            if value is not None:
                setattr(message, field, _truncate(field, value))

        try:
            self.db.add(message)
            self.db.commit()
            self.db.refresh(message)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("failed to insert chat message: %s", e)
            raise StorageError("failed to save message") from e
        return message.message_id

    def update_partial(self, message: ChatMessage, field_names: Sequence[str]) -> ChatMessage:
        """
        Write only ``field_names`` of an already stored message.

        Other unsaved attribute changes on ``message`` are discarded and the
        instance reloads from the database on next access.
        """
        if not message.message_id:
            raise ValidationError("message has no id")
        columns = ChatMessage.__table__.columns
        unknown = [f for f in field_names if f not in columns.keys() or f == "message_id"]
        if unknown:
            raise ValidationError(f"unknown message fields: {', '.join(unknown)}")
        if not field_names:
            return message

        message_id = message.message_id
        values = {f: _truncate(f, getattr(message, f)) for f in field_names}
        state = inspect(message)
        if state.persistent and state.session is self.db:
            self.db.expire(message)

        try:
            result = self.db.execute(
                update(ChatMessage)
                .where(ChatMessage.message_id == message_id)
                .values(**values)
                .execution_options(synchronize_session=False)
            )
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("failed to update chat message %s: %s", message_id, e)
            raise StorageError("failed to update message") from e
        if result.rowcount == 0:
            raise NotFound("message not found")
        if not state.persistent:
            for f, v in values.items():
                setattr(message, f, v)
        return message

    def find(self, message_id: int) -> ChatMessage:
        m = self.db.get(ChatMessage, message_id)
        if not m:
            raise NotFound("message not found")
        return m

    def delete(self, message: ChatMessage):
        try:
            self.db.delete(message)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("failed to delete chat message %s: %s", message.message_id, e)
            raise StorageError("failed to delete message") from e

    def delete_by_id(self, message_id: int):
        self.delete(self.find(message_id))

    def query_by_document(
        self,
        document_id: int,
        page: int,
        page_size: int,
        viewer: Optional[Member] = None,
    ) -> Tuple[List[ChatMessage], int, int]:
        """
        One page of a document's messages, oldest first.

        ``page == -1`` asks for the last page. Returns the messages, the total
        count for the document and the page actually served.
        """
        if page_size < 1:
            raise ValidationError("page size must be positive")
        if page < 1 and page != -1:
            raise ValidationError("page must be -1 or a positive number")

        doc = self.get_document(document_id)

        base = self.db.query(ChatMessage).filter(ChatMessage.document_id == document_id)
        count = base.count()
        if page == -1:
            page = max(1, math.ceil(count / page_size))

        messages = (
            base.order_by(ChatMessage.date.asc(), ChatMessage.message_id.asc())
            .offset((page - 1) * page_size)
            .limit(page_size)
            .all()
        )

        role = None
        if viewer is not None:
            role = self.permissions.resolve_role(doc.book_id, viewer.member_id)
        for i, m in enumerate(messages):
            m.index = (i + 1) + (page - 1) * page_size
            if viewer is not None:
                m.show_del = can_delete(m, viewer.member_id, role)
        return messages, count, page

