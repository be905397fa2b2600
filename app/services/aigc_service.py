# app/services/aigc_service.py
import logging
from datetime import datetime
from typing import Optional, Tuple

from sqlalchemy.orm import Session

from app.core.exceptions import InferenceError, PermissionDenied, ValidationError
from app.models import ChatMessage, Document, Member
from app.services.chat_service import ChatMessageService
from app.services.inference_service import InferenceService
from app.services.permission_service import PermissionService
from app.utils.network import strip_port

logger = logging.getLogger(__name__)


class AigcService:
    """
    Chat turns against a document.

    A turn is stored before the inference server is called and the answer is
    attached afterwards, so the member's prompt survives a failed call.
    """

    def __init__(self, db: Session, inference: InferenceService):
        self.db = db
        self.inference = inference
        self.messages = ChatMessageService(db)
        self.permissions = PermissionService(db)

    def _check_api(self, api: str):
        # a path on the inference server, never a host or a relative path
        if not api.startswith("/") or api.startswith("//") or "@" in api or "\\" in api:
            raise ValidationError("api must be a path starting with /")

    def _new_message(
        self,
        doc: Document,
        content: str,
        member: Optional[Member],
        remote_addr: str,
        user_agent: str,
    ) -> ChatMessage:
        m = ChatMessage(
            document_id=doc.document_id,
            content=content,
            ip_address=strip_port(remote_addr or ""),
            user_agent=user_agent or "",
            date=datetime.now(),
        )
        if member is not None:
            m.author = member.display_name
            m.member_id = member.member_id
        else:
            m.author = ""
            m.member_id = 0
        return m

    def _converse(self, m: ChatMessage, call) -> ChatMessage:
        self.messages.insert(m)
        try:
            m.response = call()
        except InferenceError:
            logger.error("inference failed for message %s, stored without response", m.message_id)
            raise
        self.messages.update_partial(m, ["response"])
        return m

    def chat(
        self,
        doc_id: int,
        prompt: str,
        member: Optional[Member],
        remote_addr: str = "",
        user_agent: str = "",
        api: Optional[str] = None,
    ) -> ChatMessage:
        logger.info("chat prompt %r doc_id %s", prompt, doc_id)
        if api:
            self._check_api(api)
        doc = self.messages.get_document(doc_id)
        m = self._new_message(doc, prompt, member, remote_addr, user_agent)
        return self._converse(m, lambda: self.inference.ask(doc.markdown, prompt, api=api))

    def analyze(
        self,
        doc_id: int,
        api: str,
        member: Optional[Member],
        remote_addr: str = "",
        user_agent: str = "",
    ) -> ChatMessage:
        if not api:
            raise ValidationError("please specify the analysis api")
        self._check_api(api)
        logger.info("analyze api %s doc_id %s", api, doc_id)
        doc = self.messages.get_document(doc_id)
        m = self._new_message(doc, api, member, remote_addr, user_agent)
        return self._converse(m, lambda: self.inference.analyze(doc.markdown, api))

    def list_messages(
        self, doc_id: int, page: int, page_size: int, viewer: Optional[Member]
    ) -> Tuple[list, int, int]:
        return self.messages.query_by_document(doc_id, page, page_size, viewer)

    def delete_message(self, message_id: int, member: Member):
        m = self.messages.find(message_id)
        doc = self.messages.get_document(m.document_id)
        if not self.permissions.can_delete(m, member.member_id, book_id=doc.book_id):
            raise PermissionDenied("no permission to delete this message")
        self.messages.delete(m)
        logger.info("member %s deleted message %s", member.member_id, message_id)
