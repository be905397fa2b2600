# app/models/chat_message.py
import enum
from sqlalchemy import Column, Integer, String, DateTime
from app.db.base import Base

# column sizes, also enforced by ChatMessageService before writing
AUTHOR_MAX_LENGTH = 100
IP_ADDRESS_MAX_LENGTH = 100
CONTENT_MAX_LENGTH = 2000
RESPONSE_MAX_LENGTH = 2000
USER_AGENT_MAX_LENGTH = 500

ANONYMOUS_AUTHOR = "[Anonymous]"


class ApprovedStatus(enum.IntEnum):
    PENDING = 0
    APPROVED = 1
    SPAM = 2
    DELETED = 3


class ChatMessage(Base):
    __tablename__ = "aigc_chat_messages"

    message_id = Column(Integer, primary_key=True, index=True)
    floor = Column(Integer, nullable=False, default=0)
    # copied from the document on insert
    book_id = Column(Integer, nullable=False, index=True)
    document_id = Column(Integer, nullable=False, index=True)
    author = Column(String(AUTHOR_MAX_LENGTH), nullable=False, default="")
    member_id = Column(Integer, nullable=False, default=0)  # 0 = anonymous
    ip_address = Column(String(IP_ADDRESS_MAX_LENGTH), nullable=False, default="")
    date = Column(DateTime, nullable=False)
    content = Column(String(CONTENT_MAX_LENGTH), nullable=False)
    response = Column(String(RESPONSE_MAX_LENGTH), nullable=False, default="")
    approved = Column(Integer, nullable=False, default=ApprovedStatus.PENDING)
    user_agent = Column(String(USER_AGENT_MAX_LENGTH), nullable=False, default="")
    parent_id = Column(Integer, nullable=False, default=0)
    agree_count = Column(Integer, nullable=False, default=0)
    against_count = Column(Integer, nullable=False, default=0)

    # not persisted, filled in by ChatMessageService.query_by_document
    index = 0
    show_del = False
