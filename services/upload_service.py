"""
이미지 업로드 서비스
필드명별 저장 디렉터리 분기, 확장자/용량/개수 검증, 고유 파일명 생성
"""

import logging
import re
import time
import uuid
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Any, Dict, List, Tuple

from starlette.concurrency import run_in_threadpool

import config

logger = logging.getLogger(__name__)

# URL 에 그대로 쓸 수 없는 문자 (공백, #, ?, % ...) 는 _ 로 치환
_UNSAFE_NAME_CHARS = re.compile(r"[^\w.\-]+")


class UploadValidationError(ValueError):
    """잘못된 업로드 요청 (필드명/확장자/용량/개수/파일 없음)"""


@dataclass(frozen=True)
class UploadCategory:
    field: str           # multipart 필드명
    directory: str       # uploads/ 아래 저장 디렉터리
    max_count: int       # 한 번에 받을 수 있는 파일 수
    label: str           # 메시지용 이름
    result_key: str      # 응답 data 키

    @property
    def multiple(self) -> bool:
        return self.max_count > 1


UPLOAD_CATEGORIES: Dict[str, UploadCategory] = {
    "icon": UploadCategory("icon", "icons", 1, "icon", "iconPath"),
    "images": UploadCategory("images", "images", config.MAX_FILES, "image", "imagePaths"),
    "userAvatar": UploadCategory("userAvatar", "avatars", 1, "avatar", "avatarPath"),
    "reviewImages": UploadCategory("reviewImages", "review-images", config.MAX_FILES, "review image", "reviewImagePaths"),
}


def category_dirs(upload_root: Path = config.UPLOAD_ROOT) -> List[Path]:
    return [Path(upload_root) / category.directory for category in UPLOAD_CATEGORIES.values()]


def split_filename(original_name: str) -> Tuple[str, str]:
    """원본 파일명 → (확장자 뺀 이름, 소문자 확장자). 경로 부분은 버림"""
    name = PurePosixPath((original_name or "").replace("\\", "/")).name
    suffix = PurePosixPath(name).suffix
    base = name[: -len(suffix)] if suffix else name
    return base, suffix.lower()


def is_allowed_extension(original_name: str) -> bool:
    _, ext = split_filename(original_name)
    return ext in config.ALLOWED_EXTENSIONS


def generate_filename(original_name: str) -> str:
    """<원본이름>-<밀리초 타임스탬프>-<8자리 랜덤>.<확장자>"""
    base, ext = split_filename(original_name)
    base = _UNSAFE_NAME_CHARS.sub("_", base).strip("._") or "file"
    timestamp = int(time.time() * 1000)
    token = uuid.uuid4().hex[:8]
    return f"{base}-{timestamp}-{token}{ext}"


def web_path(category: UploadCategory, filename: str) -> str:
    return str(PurePosixPath(config.UPLOAD_URL_PREFIX, category.directory, filename))


def _too_large(filename: str) -> UploadValidationError:
    limit_mb = config.MAX_FILE_SIZE // (1024 * 1024)
    return UploadValidationError(f"File too large: {filename} exceeds {limit_mb}MB")


def _is_file_part(value: Any) -> bool:
    # starlette UploadFile / 테스트용 파일 객체 모두 filename + read 를 가진다
    return hasattr(value, "filename") and hasattr(value, "read")


async def collect_files(form_items: List[Tuple[str, Any]], category: UploadCategory) -> List[Tuple[str, bytes]]:
    """
    multipart 항목 검증 후 (원본 파일명, 내용) 목록 반환

    하나라도 규칙에 어긋나면 UploadValidationError - 이 단계에서는 디스크에 아무것도 쓰지 않는다
    """
    parts = [(field, value) for field, value in form_items if _is_file_part(value) and value.filename]

    for field, _ in parts:
        if field not in UPLOAD_CATEGORIES:
            raise UploadValidationError(f"Unsupported upload field: {field}")
        if field != category.field:
            raise UploadValidationError(f"Unexpected field: {field}")

    if not parts:
        raise UploadValidationError(f"Please select {category.label} file(s) to upload")

    max_count = min(category.max_count, config.MAX_FILES)
    if len(parts) > max_count:
        raise UploadValidationError(f"Too many files: at most {max_count} {category.label} file(s) per request")

    files = []
    for _, upload in parts:
        if not is_allowed_extension(upload.filename):
            raise UploadValidationError(
                f"Only the following formats are supported: {', '.join(config.ALLOWED_EXTENSIONS)}"
            )

        size = getattr(upload, "size", None)
        if isinstance(size, int) and size > config.MAX_FILE_SIZE:
            raise _too_large(upload.filename)

        # 한도 + 1 바이트까지만 읽는다 (큰 파일을 통째로 메모리에 올리지 않음)
        content = await upload.read(config.MAX_FILE_SIZE + 1)
        if len(content) > config.MAX_FILE_SIZE:
            raise _too_large(upload.filename)

        files.append((upload.filename, content))

    return files


def save_files(files: List[Tuple[str, bytes]], category: UploadCategory, upload_root: Path = config.UPLOAD_ROOT) -> List[str]:
    """
    검증된 파일 저장 후 웹 상대 경로 목록 반환
    중간에 실패하면 이번 요청에서 이미 쓴 파일을 지우고 OSError 를 다시 던진다
    """
    target_dir = Path(upload_root) / category.directory
    written: List[Path] = []

    try:
        target_dir.mkdir(parents=True, exist_ok=True)
        paths = []
        for original_name, content in files:
            filename = generate_filename(original_name)
            target = target_dir / filename
            with open(target, "wb") as f:
                f.write(content)
            written.append(target)
            paths.append(web_path(category, filename))
            logger.info(f"Stored {category.label}: {target} ({len(content)} bytes)")
        return paths
    except OSError:
        for path in written:
            try:
                path.unlink()
            except OSError as cleanup_error:
                logger.error(f"Failed to clean up {path}: {cleanup_error}")
        raise


async def store_upload(form_items: List[Tuple[str, Any]], field: str, upload_root: Path = config.UPLOAD_ROOT) -> Dict[str, Any]:
    """업로드 처리 전체 - 응답 data 로 쓸 dict 반환 ({"iconPath": ...} / {"imagePaths": [...]})"""
    category = UPLOAD_CATEGORIES[field]
    files = await collect_files(form_items, category)
    paths = await run_in_threadpool(save_files, files, category, upload_root)

    if category.multiple:
        return {category.result_key: paths}
    return {category.result_key: paths[0]}
