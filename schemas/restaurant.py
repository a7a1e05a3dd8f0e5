from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List

from utils.numbers import parse_float_prefix

DEFAULT_NAME = "The Wine Shop"
DEFAULT_RATING = 4.6
DEFAULT_ADDR = "Bruckenstr. 35, 60364 Frankfurt am Main"
DEFAULT_PHONE = "+089 661 2744"
DEFAULT_REAL_URL = "https://maps.google.com/"
DEFAULT_TYPE = "Wine Shop"
DEFAULT_STATUS = "Closed"
DEFAULT_INTRO = "No introduction available"


def _text(value: Any, default: str) -> str:
    # 빈 값(None, "", 0, False ...)은 기본값으로
    if not value:
        return default
    return value if isinstance(value, str) else str(value)


class RestaurantProfile(BaseModel):
    """매장 프로필 (단일 문서)"""
    model_config = ConfigDict(populate_by_name=True)

    name: str = DEFAULT_NAME
    rating: float = DEFAULT_RATING
    addr: str = DEFAULT_ADDR
    phone: str = DEFAULT_PHONE
    real_url: str = Field(DEFAULT_REAL_URL, alias="realUrl")
    type: str = DEFAULT_TYPE
    status: str = DEFAULT_STATUS
    intro: str = DEFAULT_INTRO
    icon: str = ""
    images: List[str] = Field(default_factory=list)

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "RestaurantProfile":
        """클라이언트 입력 → 프로필 (빠진 필드는 기본값으로 채움)"""
        rating = parse_float_prefix(payload.get("rating"))
        images = payload.get("images")

        return cls(
            name=_text(payload.get("name"), DEFAULT_NAME),
            rating=DEFAULT_RATING if rating is None else rating,
            addr=_text(payload.get("addr"), DEFAULT_ADDR),
            phone=_text(payload.get("phone"), DEFAULT_PHONE),
            real_url=_text(payload.get("realUrl"), DEFAULT_REAL_URL),
            type=_text(payload.get("type"), DEFAULT_TYPE),
            status=_text(payload.get("status"), DEFAULT_STATUS),
            intro=_text(payload.get("intro"), DEFAULT_INTRO),
            icon=_text(payload.get("icon"), ""),
            images=[img for img in images if isinstance(img, str)] if isinstance(images, list) else [],
        )

    def to_document(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)
