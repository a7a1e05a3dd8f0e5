import logging
from typing import Any, Dict, List, Optional

import config
from db.json_store import JsonStore
from schemas.comment import Comment, referenced_files
from utils.numbers import parse_int_prefix
from utils.review_sorter import sort_reviews

logger = logging.getLogger(__name__)


class InvalidIndexError(ValueError):
    """리뷰 위치가 정수가 아니거나 범위를 벗어남"""


class CommentNotFoundError(LookupError):
    """해당 id 의 리뷰가 없음"""


class CommentWriteError(IOError):
    """comments.json 쓰기 실패"""


class CRUDComment:
    def _load(self, store: JsonStore) -> List[Dict[str, Any]]:
        comments = store.read(config.COMMENTS_FILE)
        return comments if isinstance(comments, list) else []

    def _save(self, store: JsonStore, comments: List[Dict[str, Any]]) -> None:
        if not store.write(config.COMMENTS_FILE, comments):
            raise CommentWriteError(f"Failed to write {config.COMMENTS_FILE}")

    def get_comments(self, store: JsonStore, sort: str = "") -> List[Dict[str, Any]]:
        """리뷰 목록 조회 (sort 값에 따라 정렬)"""
        return sort_reviews(self._load(store), sort or "")

    def replace_comments(self, store: JsonStore, comments: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """리뷰 목록 통째로 교체 - 받은 순서/내용 그대로 저장"""
        with store.lock(config.COMMENTS_FILE):
            self._save(store, comments)
        return comments

    def add_comment(self, store: JsonStore, payload: Dict[str, Any]) -> Dict[str, Any]:
        """새 리뷰를 맨 앞에 추가"""
        comment = Comment.from_payload(payload).to_document()

        with store.lock(config.COMMENTS_FILE):
            comments = self._load(store)
            comments.insert(0, comment)
            self._save(store, comments)

        logger.info(f"Review added: id={comment['id']} rating={comment['rating']}")
        return comment

    def _remove_at(self, store: JsonStore, comments: List[Dict[str, Any]], index: int) -> List[Dict[str, Any]]:
        removed = comments.pop(index)

        # 파일 삭제 후 문서 저장 - 둘 사이는 원자적이지 않음
        if isinstance(removed, dict):
            for path in referenced_files(removed):
                store.delete_file(path)

        self._save(store, comments)
        return comments

    def delete_comment(self, store: JsonStore, raw_index: Any) -> List[Dict[str, Any]]:
        """
        위치(index)로 리뷰 삭제, 남은 목록 반환
        리뷰 이미지와 작성자 아바타 파일도 함께 지운다
        """
        index = parse_int_prefix(raw_index)

        with store.lock(config.COMMENTS_FILE):
            comments = self._load(store)
            if index is None or index < 0 or index >= len(comments):
                raise InvalidIndexError(f"Invalid comment index: {raw_index}")
            return self._remove_at(store, comments, index)

    def find_index(self, comments: List[Dict[str, Any]], comment_id: str) -> Optional[int]:
        for index, comment in enumerate(comments):
            if isinstance(comment, dict) and comment.get("id") == comment_id:
                return index
        return None

    def delete_comment_by_id(self, store: JsonStore, comment_id: str) -> List[Dict[str, Any]]:
        """id 로 리뷰 삭제 (위치가 바뀌어도 같은 리뷰를 가리킴)"""
        with store.lock(config.COMMENTS_FILE):
            comments = self._load(store)
            index = self.find_index(comments, comment_id)
            if index is None:
                raise CommentNotFoundError(f"Comment not found: {comment_id}")
            return self._remove_at(store, comments, index)


comment = CRUDComment()
