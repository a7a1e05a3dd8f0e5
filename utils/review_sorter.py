"""
리뷰 정렬 유틸
time/newest, rating/desc, rating/asc 지원 (그 외 값은 원래 순서 유지)
"""

import re
from typing import Any, Dict, List

from utils.numbers import parse_float_prefix, parse_int_prefix

SORT_TIME_NEWEST = "time/newest"
SORT_RATING_DESC = "rating/desc"
SORT_RATING_ASC = "rating/asc"

SORT_KEYS = (SORT_TIME_NEWEST, SORT_RATING_DESC, SORT_RATING_ASC)

# 단위별 보너스 - 위에서부터 먼저 일치하는 단위 사용
_UNIT_BONUS = (
    (re.compile(r"week|周", re.IGNORECASE), 100),
    (re.compile(r"month|月", re.IGNORECASE), 50),
    (re.compile(r"year|年", re.IGNORECASE), 0),
)


def time_score(time_text: Any) -> int:
    """
    "4 weeks ago" 같은 자유 형식 시간 문자열의 최신도 점수

    숫자 접두사가 0이 아닌 정수로 읽히면 그 값을 그대로 쓰고,
    읽히지 않을 때만 단위 보너스(주 100, 월 50, 년 0)를 쓴다.
    단위가 없으면 0.
    """
    if not time_text or not isinstance(time_text, str):
        return 0

    for pattern, bonus in _UNIT_BONUS:
        if pattern.search(time_text):
            return parse_int_prefix(time_text) or bonus
    return 0


def _rating_value(review: Dict[str, Any]) -> float:
    value = parse_float_prefix(review.get("rating")) if isinstance(review, dict) else None
    return value if value is not None else 0.0


def _time_value(review: Dict[str, Any]) -> int:
    return time_score(review.get("time")) if isinstance(review, dict) else 0


def sort_reviews(reviews: List[Dict[str, Any]], sort_key: str = "") -> List[Dict[str, Any]]:
    """정렬된 새 리스트 반환 (입력 리스트는 건드리지 않음)"""
    if sort_key == SORT_TIME_NEWEST:
        return sorted(reviews, key=_time_value, reverse=True)
    if sort_key == SORT_RATING_DESC:
        return sorted(reviews, key=_rating_value, reverse=True)
    if sort_key == SORT_RATING_ASC:
        return sorted(reviews, key=_rating_value)
    return list(reviews)
