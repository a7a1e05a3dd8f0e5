"""
리뷰 API
목록 조회(정렬), 전체 교체, 단건 추가, 위치/id 기준 삭제
"""

from fastapi import APIRouter, Body, Depends, Query
from typing import Any
import logging

from db.json_store import JsonStore, get_store
from crud.crud_comment import comment as comment_crud, InvalidIndexError, CommentNotFoundError, CommentWriteError
from schemas.comment import Comment
from schemas.response import ApiResponse, success, failure

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/comments", tags=["comments"])


@router.get("", response_model=ApiResponse, response_model_exclude_unset=True)
def get_comments(
    sort: str = Query("", description="정렬 방식: time/newest, rating/desc, rating/asc (빈 값이면 저장 순서)"),
    store: JsonStore = Depends(get_store)
):
    try:
        return success(comment_crud.get_comments(store, sort))
    except Exception as e:
        logger.exception("Failed to load comments")
        return failure(500, f"Failed to load comments: {str(e)}")


@router.put("", response_model=ApiResponse, response_model_exclude_unset=True)
def replace_comments(
    payload: Any = Body(None),
    store: JsonStore = Depends(get_store)
):
    """리뷰 목록 전체 교체 - 배열이 아니면 400"""
    if not isinstance(payload, list):
        return failure(400, "Comments data must be an array")
    if not all(isinstance(item, dict) for item in payload):
        return failure(400, "Every comment must be an object")

    try:
        comments = comment_crud.replace_comments(store, payload)
        return success(comments, "Comments updated successfully")
    except CommentWriteError:
        return failure(500, "Comments update failed")
    except Exception as e:
        logger.exception("Failed to replace comments")
        return failure(500, f"Comments update failed: {str(e)}")


@router.post("", response_model=ApiResponse, response_model_exclude_unset=True)
def add_comment(
    payload: Any = Body(None),
    store: JsonStore = Depends(get_store)
):
    """
    리뷰 한 건 추가 (목록 맨 앞)

    - **content**, **rating**: 필수
    - 나머지는 기본값 (name → Guest, time → Just now ...)
    - likeCount/isLiked 는 항상 0/false 로 시작
    """
    if Comment.missing_required(payload):
        return failure(400, "Comment content and rating cannot be empty")

    try:
        created = comment_crud.add_comment(store, payload)
        return success(created, "Comment added successfully")
    except CommentWriteError:
        return failure(500, "Comment save failed")
    except Exception as e:
        logger.exception("Failed to add comment")
        return failure(500, f"Comment save failed: {str(e)}")


@router.delete("/id/{comment_id}", response_model=ApiResponse, response_model_exclude_unset=True)
def delete_comment_by_id(
    comment_id: str,
    store: JsonStore = Depends(get_store)
):
    """id 로 리뷰 삭제 (참조하던 이미지/아바타 파일도 삭제)"""
    try:
        remaining = comment_crud.delete_comment_by_id(store, comment_id)
        return success(remaining, "Comment deleted successfully")
    except CommentNotFoundError:
        return failure(404, "Comment not found")
    except CommentWriteError:
        return failure(500, "Comment deletion failed")
    except Exception as e:
        logger.exception(f"Failed to delete comment {comment_id}")
        return failure(500, f"Comment deletion failed: {str(e)}")


@router.delete("/{index}", response_model=ApiResponse, response_model_exclude_unset=True)
def delete_comment(
    index: str,
    store: JsonStore = Depends(get_store)
):
    """위치(index)로 리뷰 삭제 (참조하던 이미지/아바타 파일도 삭제)"""
    try:
        remaining = comment_crud.delete_comment(store, index)
        return success(remaining, "Comment deleted successfully")
    except InvalidIndexError:
        return failure(400, "Invalid comment index")
    except CommentWriteError:
        return failure(500, "Comment deletion failed")
    except Exception as e:
        logger.exception(f"Failed to delete comment at {index}")
        return failure(500, f"Comment deletion failed: {str(e)}")
