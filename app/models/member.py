# app/models/member.py
import enum
from sqlalchemy import Column, Integer, String, DateTime, func
from app.db.base import Base


class MemberStatus(enum.IntEnum):
    ACTIVE = 0
    DISABLED = 1


class Member(Base):
    __tablename__ = "members"
    member_id = Column(Integer, primary_key=True, index=True)
    account = Column(String(100), unique=True, nullable=False, index=True)
    real_name = Column(String(255), nullable=True)
    status = Column(Integer, nullable=False, default=MemberStatus.ACTIVE)
    created_at = Column(DateTime, server_default=func.now())

    @property
    def display_name(self) -> str:
        # real name wins over the account handle
        return self.real_name or self.account

    @property
    def is_disabled(self) -> bool:
        return self.status == MemberStatus.DISABLED
