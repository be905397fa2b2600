# app/schemas/chat.py
from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime

class ChatMessageOut(BaseModel):
    message_id: int
    floor: int
    book_id: int
    document_id: int
    author: str
    member_id: int
    ip_address: str
    date: datetime
    content: str
    response: str
    approved: int
    user_agent: str
    parent_id: int
    agree_count: int
    against_count: int
    index: int = 0
    show_del: bool = False

    class Config:
        from_attributes = True

class MessagePage(BaseModel):
    page_no: int
    page_size: int
    total_page: int
    total_count: int
    first_page: bool
    last_page: bool
    list: List[ChatMessageOut]

class MessageListOut(BaseModel):
    doc_id: int
    page: MessagePage

class DocChatRequest(BaseModel):
    doc_id: int
    prompt: str = ""
    # inference sub-path, defaults to the question-answering api
    api: Optional[str] = None

class DocAnalyzeRequest(BaseModel):
    doc_id: int
    api: str = Field("", description="inference sub-path, e.g. /api/summary")
