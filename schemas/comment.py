import uuid
from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List

from utils.numbers import parse_int_prefix

DEFAULT_GUEST_NAME = "Guest"
DEFAULT_COUNT = "0"
DEFAULT_RATING = 5
DEFAULT_TIME = "Just now"


def new_comment_id() -> str:
    return uuid.uuid4().hex


def _text(value: Any, default: str) -> str:
    if not value:
        return default
    return value if isinstance(value, str) else str(value)


class Comment(BaseModel):
    """리뷰 한 건"""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(default_factory=new_comment_id)
    name: str = DEFAULT_GUEST_NAME
    user_avatar: str = Field("", alias="userAvatar")
    label: str = ""
    review_count: str = Field(DEFAULT_COUNT, alias="reviewCount")
    photo_count: str = Field(DEFAULT_COUNT, alias="photoCount")
    rating: int = DEFAULT_RATING
    time: str = DEFAULT_TIME
    content: str
    review_images: List[str] = Field(default_factory=list, alias="reviewImages")
    is_user_add: bool = Field(True, alias="isUserAdd")
    like_count: int = Field(0, alias="likeCount")
    is_liked: bool = Field(False, alias="isLiked")

    @staticmethod
    def missing_required(payload: Any) -> bool:
        """content, rating 둘 중 하나라도 비어 있으면 True"""
        if not isinstance(payload, dict):
            return True
        return not payload.get("content") or not payload.get("rating")

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "Comment":
        """
        사용자 작성 리뷰 생성

        - 좋아요 수/상태는 입력과 관계없이 0/False로 초기화
        - 서버에서 추가한 리뷰는 항상 isUserAdd=True
        """
        images = payload.get("reviewImages")

        return cls(
            name=_text(payload.get("name"), DEFAULT_GUEST_NAME),
            user_avatar=_text(payload.get("userAvatar"), ""),
            label=_text(payload.get("label"), ""),
            review_count=_text(payload.get("reviewCount"), DEFAULT_COUNT),
            photo_count=_text(payload.get("photoCount"), DEFAULT_COUNT),
            rating=parse_int_prefix(payload.get("rating")) or DEFAULT_RATING,
            time=_text(payload.get("time"), DEFAULT_TIME),
            content=_text(payload.get("content"), ""),
            review_images=[img for img in images if isinstance(img, str)] if isinstance(images, list) else [],
            is_user_add=True,
            like_count=0,
            is_liked=False,
        )

    def to_document(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


def referenced_files(comment: Dict[str, Any]) -> List[str]:
    """리뷰가 참조하는 업로드 파일 경로 (리뷰 이미지 + 작성자 아바타)"""
    paths = []
    images = comment.get("reviewImages")
    if isinstance(images, list):
        paths.extend(img for img in images if isinstance(img, str) and img)
    avatar = comment.get("userAvatar")
    if isinstance(avatar, str) and avatar:
        paths.append(avatar)
    return paths
