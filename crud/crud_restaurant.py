import logging
from typing import Any, Dict, Optional

import config
from db.json_store import JsonStore
from schemas.restaurant import RestaurantProfile

logger = logging.getLogger(__name__)


class CRUDRestaurant:
    def get_profile(self, store: JsonStore) -> Dict[str, Any]:
        """매장 프로필 조회 (파일이 없으면 빈 dict)"""
        profile = store.read(config.RESTAURANT_FILE)
        return profile if isinstance(profile, dict) else {}

    def delete_images(self, store: JsonStore, paths: Any) -> int:
        """삭제 표시된 이미지 파일 정리 - 실제로 지운 개수 반환"""
        if not isinstance(paths, list):
            return 0
        return sum(1 for path in paths if isinstance(path, str) and store.delete_file(path))

    def save_profile(self, store: JsonStore, payload: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """
        매장 프로필 통째로 교체

        - deletedImages 의 파일은 먼저 지우고 문서에서는 제외
        - 빠진 필드는 기본값
        - 쓰기 실패 시 None
        """
        payload = dict(payload)
        deleted = self.delete_images(store, payload.pop("deletedImages", None))
        if deleted:
            logger.info(f"Removed {deleted} replaced profile image(s)")

        profile = RestaurantProfile.from_payload(payload).to_document()

        with store.lock(config.RESTAURANT_FILE):
            if not store.write(config.RESTAURANT_FILE, profile):
                return None
        return profile


restaurant = CRUDRestaurant()
