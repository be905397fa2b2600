# app/models/document.py
from sqlalchemy import Column, Integer, String, Text, ForeignKey, DateTime, func
from sqlalchemy.orm import relationship
from app.db.base import Base


class Document(Base):
    __tablename__ = "documents"
    document_id = Column(Integer, primary_key=True, index=True)
    book_id = Column(Integer, ForeignKey("books.book_id"), nullable=False, index=True)
    document_name = Column(String(500), nullable=False)
    markdown = Column(Text, nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    book = relationship("Book", back_populates="documents")
