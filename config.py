from dotenv import load_dotenv
from pathlib import Path
import os

load_dotenv()  # .env 파일 로드

BASE_DIR = Path(__file__).resolve().parent


def _path_env(name: str, default: Path) -> Path:
    return Path(os.getenv(name, str(default))).resolve()


CONFIGS = {
    "development": {
        "debug": True,
        "backend_host": "0.0.0.0",
        "backend_port": int(os.getenv("BACKEND_PORT", "3000")),
        "log_level": os.getenv("LOG_LEVEL", "DEBUG").upper(),
        "cors_origins": ["*"],

        # 저장소 경로
        "upload_root": _path_env("UPLOAD_ROOT", BASE_DIR / "uploads"),
        "data_dir": _path_env("DATA_DIR", BASE_DIR / "data"),
        "public_dir": _path_env("PUBLIC_DIR", BASE_DIR / "public"),

        # 업로드 제한
        "max_file_size": int(os.getenv("MAX_FILE_SIZE", str(5 * 1024 * 1024))),
        "max_files": int(os.getenv("MAX_FILES", "10")),
    },
    "production": {
        "debug": False,
        "backend_host": "0.0.0.0",
        "backend_port": int(os.getenv("BACKEND_PORT", "80")),
        "log_level": os.getenv("LOG_LEVEL", "INFO").upper(),
        "cors_origins": [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()],
        "upload_root": _path_env("UPLOAD_ROOT", BASE_DIR / "uploads"),
        "data_dir": _path_env("DATA_DIR", BASE_DIR / "data"),
        "public_dir": _path_env("PUBLIC_DIR", BASE_DIR / "public"),
        "max_file_size": int(os.getenv("MAX_FILE_SIZE", str(5 * 1024 * 1024))),
        "max_files": int(os.getenv("MAX_FILES", "10")),
    },
}

CURRENT_ENV = os.getenv("APP_ENV", "development")

config = CONFIGS[CURRENT_ENV]

DEBUG = config["debug"]
BACKEND_HOST = config["backend_host"]
BACKEND_PORT = config["backend_port"]
LOG_LEVEL = config["log_level"]
CORS_ORIGINS = config["cors_origins"]
UPLOAD_ROOT = config["upload_root"]
DATA_DIR = config["data_dir"]
PUBLIC_DIR = config["public_dir"]
MAX_FILE_SIZE = config["max_file_size"]
MAX_FILES = config["max_files"]

ALLOWED_EXTENSIONS = (".jpg", ".jpeg", ".png", ".gif", ".webp")

# 클라이언트에 돌려주는 경로의 접두사 (/uploads 정적 마운트와 일치)
UPLOAD_URL_PREFIX = "uploads"

RESTAURANT_FILE = "restaurant.json"
COMMENTS_FILE = "comments.json"
