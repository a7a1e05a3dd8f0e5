"""
이미지 업로드 API
아이콘 / 캐러셀 이미지 / 리뷰 작성자 아바타 / 리뷰 이미지
"""

from fastapi import APIRouter, Depends, Request
import logging

from db.json_store import JsonStore, get_store
from services.upload_service import UPLOAD_CATEGORIES, UploadValidationError, store_upload
from schemas.response import ApiResponse, success, failure

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/upload", tags=["upload"])


async def _handle_upload(request: Request, field: str, store: JsonStore):
    category = UPLOAD_CATEGORIES[field]

    try:
        form = await request.form()
    except Exception as e:
        logger.warning(f"Invalid multipart payload for {field}: {e}")
        return failure(400, f"Invalid upload payload: {str(e)}")

    try:
        data = await store_upload(form.multi_items(), field, store.upload_root)
        count = len(data[category.result_key]) if category.multiple else 1
        if category.multiple:
            msg = f"Successfully uploaded {count} {category.label}s"
        else:
            msg = f"{category.label.capitalize()} uploaded successfully"
        return success(data, msg)
    except UploadValidationError as e:
        return failure(400, str(e))
    except Exception as e:
        logger.exception(f"{category.label} upload error")
        return failure(500, f"{category.label.capitalize()} upload failed: {str(e)}")
    finally:
        await form.close()


@router.post("/icon", response_model=ApiResponse, response_model_exclude_unset=True)
async def upload_icon(request: Request, store: JsonStore = Depends(get_store)):
    """매장 아이콘 업로드 (필드: icon, 1개)"""
    return await _handle_upload(request, "icon", store)


@router.post("/images", response_model=ApiResponse, response_model_exclude_unset=True)
async def upload_images(request: Request, store: JsonStore = Depends(get_store)):
    """캐러셀 이미지 업로드 (필드: images, 최대 10개)"""
    return await _handle_upload(request, "images", store)


@router.post("/avatar", response_model=ApiResponse, response_model_exclude_unset=True)
async def upload_avatar(request: Request, store: JsonStore = Depends(get_store)):
    """리뷰 작성자 아바타 업로드 (필드: userAvatar, 1개)"""
    return await _handle_upload(request, "userAvatar", store)


@router.post("/review-images", response_model=ApiResponse, response_model_exclude_unset=True)
async def upload_review_images(request: Request, store: JsonStore = Depends(get_store)):
    """리뷰 이미지 업로드 (필드: reviewImages, 최대 10개)"""
    return await _handle_upload(request, "reviewImages", store)
