"""
Pytest configuration: in-memory database, seed data, stubbed inference
server and a TestClient wired to both.
"""

from datetime import datetime, timedelta
from typing import Generator
from unittest.mock import Mock

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.dependencies import get_db, get_inference_service
from app.db.init_db import init_tables
from app.main import app
from app.models import (
    Book, BookRole, ChatMessage, CommentStatus, Document, Member, MemberStatus, Relationship,
)
from app.services.inference_service import InferenceService


# ==================== database ====================

@pytest.fixture(scope="function")
def test_db_engine():
    """Fresh in-memory database per test, shared by every session."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_tables(engine)
    yield engine
    engine.dispose()


@pytest.fixture(scope="function")
def test_db_session(test_db_engine) -> Generator[Session, None, None]:
    TestSession = sessionmaker(bind=test_db_engine, autoflush=False, autocommit=False)
    with TestSession() as session:
        yield session


# ==================== seed data ====================

@pytest.fixture(scope="function")
def books(test_db_session: Session) -> dict:
    rows = {
        "open": Book(book_id=1, book_name="Open book", comment_status=CommentStatus.OPEN.value),
        "group": Book(book_id=2, book_name="Team handbook", comment_status=CommentStatus.GROUP_ONLY.value),
        "closed": Book(book_id=3, book_name="Archive", comment_status=CommentStatus.CLOSED.value),
        "registered": Book(book_id=4, book_name="Members wiki", comment_status=CommentStatus.REGISTERED_ONLY.value),
    }
    test_db_session.add_all(rows.values())
    test_db_session.commit()
    return rows


@pytest.fixture(scope="function")
def documents(test_db_session: Session, books) -> dict:
    rows = {
        "open": Document(document_id=1, book_id=1, document_name="Intro", markdown="# Intro"),
        "group": Document(document_id=5, book_id=2, document_name="X", markdown="X is Y"),
        "closed": Document(document_id=6, book_id=3, document_name="Old", markdown="old"),
        "registered": Document(document_id=7, book_id=4, document_name="Wiki", markdown="wiki"),
    }
    test_db_session.add_all(rows.values())
    test_db_session.commit()
    return rows


@pytest.fixture(scope="function")
def members(test_db_session: Session, books) -> dict:
    rows = {
        "founder": Member(member_id=1, account="founder", real_name="Ada Founder"),
        "admin": Member(member_id=2, account="admin", real_name=""),
        "editor": Member(member_id=3, account="editor", real_name="Ed"),
        "outsider": Member(member_id=7, account="outsider"),
        "asker": Member(member_id=9, account="asker", real_name="Ask Er"),
        "disabled": Member(member_id=11, account="gone", status=MemberStatus.DISABLED),
    }
    test_db_session.add_all(rows.values())
    for book_id in (1, 2, 3, 4):
        test_db_session.add_all([
            Relationship(member_id=1, book_id=book_id, role_id=BookRole.FOUNDER),
            Relationship(member_id=2, book_id=book_id, role_id=BookRole.ADMIN),
            Relationship(member_id=3, book_id=book_id, role_id=BookRole.EDITOR),
        ])
    test_db_session.add(Relationship(member_id=9, book_id=2, role_id=BookRole.OBSERVER))
    test_db_session.commit()
    return rows


@pytest.fixture(scope="function")
def make_messages(test_db_session: Session):
    """Insert ``count`` messages on a document, one minute apart."""
    def _make(document_id: int, book_id: int, count: int, member_id: int = 3) -> list:
        start = datetime(2024, 1, 1, 9, 0, 0)
        rows = []
        for i in range(count):
            m = ChatMessage(
                document_id=document_id,
                book_id=book_id,
                member_id=member_id,
                author="Ed",
                content=f"question {i + 1}",
                response=f"answer {i + 1}",
                date=start + timedelta(minutes=i),
            )
            test_db_session.add(m)
            rows.append(m)
        test_db_session.commit()
        return rows
    return _make


# ==================== inference ====================

@pytest.fixture(scope="function")
def mock_inference():
    """Stands in for the inference server; no network traffic."""
    mock = Mock(spec=InferenceService)
    mock.ask.return_value = "Mock answer"
    mock.analyze.return_value = "Mock analysis"
    return mock


# ==================== api ====================

@pytest.fixture(scope="function")
def client(test_db_engine, mock_inference):
    TestSession = sessionmaker(bind=test_db_engine, autoflush=False, autocommit=False)

    def override_get_db():
        db = TestSession()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_inference_service] = lambda: mock_inference
    yield TestClient(app)
    app.dependency_overrides.clear()


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "api: Route tests")
