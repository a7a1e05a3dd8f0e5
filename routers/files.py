"""
업로드 파일 삭제 API
"""

from fastapi import APIRouter, Body, Depends
from typing import Any
import logging

from db.json_store import JsonStore, get_store
from schemas.response import ApiResponse, success, failure

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/delete", tags=["files"])


@router.delete("/file", response_model=ApiResponse, response_model_exclude_unset=True)
def delete_file(
    payload: Any = Body(None),
    store: JsonStore = Depends(get_store)
):
    """
    업로드 파일 삭제 (아이콘/캐러셀/리뷰 이미지/아바타)

    - **filePath**: 웹 상대 경로 (예: uploads/icons/xxx.png)
    """
    file_path = payload.get("filePath") if isinstance(payload, dict) else None
    if not file_path or not isinstance(file_path, str):
        return failure(400, "File path cannot be empty")

    try:
        if store.delete_file(file_path):
            return success({"filePath": file_path}, "File deleted successfully")
        return failure(404, "File does not exist or deletion failed", {"filePath": file_path})
    except Exception as e:
        logger.exception("Delete file API error")
        return failure(500, f"File deletion exception: {str(e)}")
