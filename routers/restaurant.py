"""
매장 프로필 API
"""

from fastapi import APIRouter, Body, Depends
from typing import Any
import logging

from db.json_store import JsonStore, get_store
from crud.crud_restaurant import restaurant as restaurant_crud
from schemas.response import ApiResponse, success, failure

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/restaurant", tags=["restaurant"])


@router.get("", response_model=ApiResponse, response_model_exclude_unset=True)
def get_restaurant(store: JsonStore = Depends(get_store)):
    """매장 프로필 조회 - 파일이 없으면 data = {}"""
    try:
        return success(restaurant_crud.get_profile(store))
    except Exception as e:
        logger.exception("Failed to load restaurant profile")
        return failure(500, f"Failed to load configuration: {str(e)}")


@router.post("", response_model=ApiResponse, response_model_exclude_unset=True)
def save_restaurant(
    payload: Any = Body(None),
    store: JsonStore = Depends(get_store)
):
    """
    매장 프로필 저장 (전체 교체)

    - **deletedImages**: 지울 이미지 경로 목록 (저장 전에 파일 삭제, 문서에는 남기지 않음)
    - 빠진 필드는 기본값으로 채움
    """
    if not isinstance(payload, dict):
        return failure(400, "Configuration data cannot be empty")

    try:
        profile = restaurant_crud.save_profile(store, payload)
        if profile is None:
            return failure(500, "Configuration save failed, please check server permissions")
        return success(profile, "Configuration saved successfully")
    except Exception as e:
        logger.exception("Failed to save restaurant profile")
        return failure(500, f"Configuration save failed: {str(e)}")
