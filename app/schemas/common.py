# app/schemas/common.py
from pydantic import BaseModel
from typing import Any, Optional

class JsonResult(BaseModel):
    """Envelope for every aigc response, errcode 0 means success."""
    errcode: int = 0
    message: str = "ok"
    data: Optional[Any] = None

def json_result(errcode: int = 0, message: str = "ok", data: Any = None) -> JsonResult:
    return JsonResult(errcode=errcode, message=message, data=data)
