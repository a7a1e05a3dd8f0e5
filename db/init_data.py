"""
저장소 초기화
업로드/데이터 디렉터리 생성 + restaurant.json, comments.json 기본 데이터
"""

import logging
from pathlib import Path
from typing import Any, Dict, List

import config
from db.json_store import JsonStore, json_store
from schemas.comment import new_comment_id
from schemas.restaurant import RestaurantProfile
from services.upload_service import category_dirs

logger = logging.getLogger(__name__)

DEFAULT_INTRO = (
    "The Wine Shop sits in the heart of Frankfurt and offers imported wines, craft beers "
    "and signature snacks. The staff are friendly and knowledgeable and happy to give "
    "personal recommendations."
)

PLACEHOLDER_IMAGE = "https://via.placeholder.com/200/333333/ffffff?text={}"


def default_profile() -> Dict[str, Any]:
    return RestaurantProfile(rating=4.6, intro=DEFAULT_INTRO).to_document()


def default_comments() -> List[Dict[str, Any]]:
    return [
        {
            "id": new_comment_id(),
            "name": "Link LL",
            "userAvatar": "",
            "label": "Local Guide",
            "reviewCount": "104 reviews",
            "photoCount": "405 photos",
            "rating": 4,
            "time": "4 weeks ago",
            "content": "Food and beer are OK",
            "reviewImages": [PLACEHOLDER_IMAGE.format(text) for text in ("Food1", "Food2", "Food3", "Beer")],
            "isUserAdd": False,
            "likeCount": 0,
            "isLiked": False,
        },
        {
            "id": new_comment_id(),
            "name": "Lai Hao Sheng",
            "userAvatar": "",
            "label": "",
            "reviewCount": "7 reviews",
            "photoCount": "1 photo",
            "rating": 5,
            "time": "3 years ago",
            "content": "Very nice, the food is delicious and the place is great",
            "reviewImages": [PLACEHOLDER_IMAGE.format("Shop")],
            "isUserAdd": False,
            "likeCount": 0,
            "isLiked": False,
        },
    ]


def ensure_directories(store: JsonStore) -> None:
    for directory in [store.upload_root, *category_dirs(store.upload_root), store.data_dir]:
        directory = Path(directory)
        if not directory.exists():
            # 실패하면 서버를 띄우지 않는다
            directory.mkdir(parents=True, exist_ok=True)
            logger.info(f"Directory created: {directory}")


def init_storage(store: JsonStore = json_store) -> None:
    """서버 시작 시 호출 - 없는 것만 만든다"""
    ensure_directories(store)

    if not store.exists(config.RESTAURANT_FILE):
        store.write(config.RESTAURANT_FILE, default_profile())
        logger.info("Default restaurant profile created")

    if not store.exists(config.COMMENTS_FILE):
        store.write(config.COMMENTS_FILE, default_comments())
        logger.info("Default comments file created")
