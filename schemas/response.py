from pydantic import BaseModel
from typing import Any, Dict, Optional


class ApiResponse(BaseModel):
    """모든 API 공통 응답 형식 {code, msg, data}"""
    code: int
    msg: str
    data: Optional[Any] = None


def success(data: Any = None, msg: str = "success") -> Dict[str, Any]:
    body: Dict[str, Any] = {"code": 200, "msg": msg}
    if data is not None:
        body["data"] = data
    return body


def failure(code: int, msg: str, data: Any = None) -> Dict[str, Any]:
    body: Dict[str, Any] = {"code": code, "msg": msg}
    if data is not None:
        body["data"] = data
    return body
