import math
import re
from typing import Any, Optional

_INT_PREFIX = re.compile(r"^\s*([+-]?\d+)")
_FLOAT_PREFIX = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def parse_int_prefix(value: Any) -> Optional[int]:
    """
    값의 앞부분에서 정수 추출 ("4 weeks ago" → 4, "abc" → None)
    bool은 숫자로 보지 않는다
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            return None
        return int(value)

    match = _INT_PREFIX.match(str(value))
    return int(match.group(1)) if match else None


def parse_float_prefix(value: Any) -> Optional[float]:
    """값의 앞부분에서 실수 추출 ("4.5 stars" → 4.5, "" → None)"""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        match = _FLOAT_PREFIX.match(str(value))
        if not match:
            return None
        number = float(match.group(1))

    if math.isnan(number) or math.isinf(number):
        return None
    return number
