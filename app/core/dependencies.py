# app/core/dependencies.py
from typing import Generator, Optional
from fastapi import Depends, Header
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.exceptions import PermissionDenied
from app.db.session import SessionLocal
from app.models import Member
from app.services.inference_service import InferenceService


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_current_member(
    memberid: Optional[int] = Header(None),
    db: Session = Depends(get_db),
) -> Optional[Member]:
    """
    Member of the current session, or None for anonymous callers.

    Authentication happens upstream, which forwards the logged-in member id
    in the ``memberid`` header. Unknown members count as not logged in.
    """
    if not memberid or memberid <= 0:
        return None
    member = db.get(Member, memberid)
    return member


def require_member(member: Optional[Member] = Depends(get_current_member)) -> Member:
    if member is None:
        raise PermissionDenied("please log in first")
    if member.is_disabled:
        raise PermissionDenied("member is disabled")
    return member


def get_chat_member(member: Optional[Member] = Depends(get_current_member)) -> Optional[Member]:
    # anonymous chat is allowed only when login enforcement is switched off
    if member is None and settings.AIGC_REQUIRE_LOGIN:
        raise PermissionDenied("please log in first")
    return member


def get_inference_service() -> InferenceService:
    return InferenceService(settings.INFERENCE_SERVER_HOST)
