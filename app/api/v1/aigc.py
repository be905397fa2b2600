# app/api/v1/aigc.py
from typing import Optional
from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.dependencies import (
    get_chat_member,
    get_current_member,
    get_db,
    get_inference_service,
    require_member,
)
from app.models import Member
from app.schemas.chat import ChatMessageOut, DocAnalyzeRequest, DocChatRequest, MessageListOut
from app.schemas.common import JsonResult, json_result
from app.services.aigc_service import AigcService
from app.services.inference_service import InferenceService
from app.utils.pagination import page_util

router = APIRouter(tags=["AIGC"])


def _remote_addr(request: Request) -> str:
    return request.client.host if request.client else ""


@router.get("/messages", response_model=JsonResult)
def list_chat_messages(
    doc_id: int = Query(...),
    page: int = Query(1),
    db: Session = Depends(get_db),
    member: Optional[Member] = Depends(get_current_member),
):
    """
    Messages of a document, oldest first. page=-1 returns the last page.
    """
    svc = AigcService(db, inference=None)
    messages, count, page_no = svc.list_messages(doc_id, page, settings.PAGE_SIZE, member)
    items = [ChatMessageOut.model_validate(m) for m in messages]
    data = MessageListOut(doc_id=doc_id, page=page_util(count, page_no, settings.PAGE_SIZE, items))
    return json_result(data=data)


@router.post("/chat", response_model=JsonResult)
def doc_chat(
    payload: DocChatRequest,
    request: Request,
    db: Session = Depends(get_db),
    member: Optional[Member] = Depends(get_chat_member),
    inference: InferenceService = Depends(get_inference_service),
):
    svc = AigcService(db, inference)
    m = svc.chat(
        doc_id=payload.doc_id,
        prompt=payload.prompt,
        member=member,
        remote_addr=_remote_addr(request),
        user_agent=request.headers.get("user-agent", ""),
        api=payload.api,
    )
    return json_result(data=ChatMessageOut.model_validate(m))


@router.post("/analyze", response_model=JsonResult)
def doc_analyze(
    payload: DocAnalyzeRequest,
    request: Request,
    db: Session = Depends(get_db),
    member: Optional[Member] = Depends(get_chat_member),
    inference: InferenceService = Depends(get_inference_service),
):
    svc = AigcService(db, inference)
    m = svc.analyze(
        doc_id=payload.doc_id,
        api=payload.api,
        member=member,
        remote_addr=_remote_addr(request),
        user_agent=request.headers.get("user-agent", ""),
    )
    return json_result(data=ChatMessageOut.model_validate(m))


@router.delete("/messages/{message_id}", response_model=JsonResult)
def delete_message(
    message_id: int,
    db: Session = Depends(get_db),
    member: Member = Depends(require_member),
):
    svc = AigcService(db, inference=None)
    svc.delete_message(message_id, member)
    return json_result()
