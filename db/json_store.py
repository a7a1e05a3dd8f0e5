import json
import logging
import os
import tempfile
import threading
from pathlib import Path, PurePosixPath
from typing import Any, Dict, Optional

import config

logger = logging.getLogger(__name__)


class JsonStore:
    """
    JSON 문서 저장소 + 업로드 파일 삭제

    - data_dir 아래의 JSON 파일을 통째로 읽고 쓴다
    - 문서별 락으로 읽기-수정-쓰기 구간을 직렬화한다
    - 웹 상대 경로(uploads/...)를 upload_root 기준으로 해석해 파일을 지운다
    """

    def __init__(self, data_dir: Path, upload_root: Path, url_prefix: str = config.UPLOAD_URL_PREFIX):
        self.data_dir = Path(data_dir)
        self.upload_root = Path(upload_root)
        self.url_prefix = url_prefix.strip("/")
        self._locks: Dict[str, threading.RLock] = {}
        self._locks_guard = threading.Lock()

    def path_for(self, name: str) -> Path:
        return self.data_dir / name

    def lock(self, name: str) -> threading.RLock:
        """
        문서별 락 (같은 문서에 대한 읽기-수정-쓰기는 한 번에 하나만)

        JSON 저장소를 쓰는 라우터는 일반 def 라서 FastAPI 스레드풀에서 돌고,
        여러 요청 스레드가 이 락에서 실제로 서로를 기다린다
        """
        with self._locks_guard:
            if name not in self._locks:
                self._locks[name] = threading.RLock()
            return self._locks[name]

    def exists(self, name: str) -> bool:
        return self.path_for(name).is_file()

    def read(self, name: str) -> Optional[Any]:
        """JSON 문서 읽기 - 파일이 없거나 깨졌으면 None"""
        file_path = self.path_for(name)
        if not file_path.exists():
            return None

        try:
            with open(file_path, "r", encoding="utf-8") as f:
                return json.load(f)
        except (OSError, ValueError) as e:
            logger.error(f"Failed to read {file_path}: {e}")
            return None

    def write(self, name: str, document: Any) -> bool:
        """JSON 문서 쓰기 - 임시 파일에 쓴 뒤 교체"""
        file_path = self.path_for(name)
        tmp_name = None

        try:
            file_path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=file_path.parent, prefix=f".{file_path.name}.", suffix=".tmp")
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(document, f, ensure_ascii=False, indent=2)
            os.replace(tmp_name, file_path)
            return True
        except (OSError, TypeError, ValueError) as e:
            logger.error(f"Failed to write {file_path}: {e}")
            if tmp_name and os.path.exists(tmp_name):
                os.remove(tmp_name)
            return False

    def resolve_upload_path(self, relative_path: str) -> Optional[Path]:
        """웹 상대 경로 → 업로드 루트 안의 절대 경로 (루트 밖이면 None)"""
        if not isinstance(relative_path, str) or not relative_path.strip():
            return None
        if "://" in relative_path:
            return None

        parts = PurePosixPath(relative_path.strip().replace("\\", "/").lstrip("/")).parts
        if parts and parts[0] == self.url_prefix:
            parts = parts[1:]
        if not parts:
            return None

        root = self.upload_root.resolve()
        candidate = root.joinpath(*parts).resolve()
        try:
            candidate.relative_to(root)
        except ValueError:
            return None
        if candidate == root:
            return None
        return candidate

    def delete_file(self, relative_path: str) -> bool:
        """업로드 파일 삭제 - 실제로 지웠으면 True, 없으면 False"""
        target = self.resolve_upload_path(relative_path)
        if target is None:
            logger.warning(f"Refusing to delete path outside upload root: {relative_path!r}")
            return False

        if not target.is_file():
            logger.info(f"File does not exist: {target}")
            return False

        try:
            target.unlink()
            logger.info(f"File deleted: {target}")
            return True
        except OSError as e:
            logger.error(f"Failed to delete {target}: {e}")
            return False


# 전역 저장소 인스턴스
json_store = JsonStore(config.DATA_DIR, config.UPLOAD_ROOT)


def get_store() -> JsonStore:
    return json_store
