from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging
import os
import sys

# 현재 디렉토리를 모듈 경로에 추가
sys.path.append(os.path.dirname(os.path.abspath(__file__)))

from routers import restaurant, comments, uploads, files
import config  # config.py의 설정 불러오기
from db.init_data import init_storage
from db.json_store import json_store
from schemas.response import success, failure

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Storefront Review API",
    description="매장 프로필, 리뷰 목록, 이미지 업로드 API",
    version="1.0.0",
)

# CORS 미들웨어 추가
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)

# 라우터 등록
app.include_router(restaurant.router)
app.include_router(comments.router)
app.include_router(uploads.router)
app.include_router(files.router)


# 애플리케이션 시작 이벤트
@app.on_event("startup")
async def startup_event():
    """서버 시작 시 실행 - 디렉터리/기본 데이터 준비"""
    init_storage(json_store)
    logger.info("Server started")
    logger.info(f"- Upload directory: {json_store.upload_root}")
    logger.info(f"- Data directory: {json_store.data_dir}")


# 검증 에러 핸들러 (깨진 JSON 본문 등)
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.warning(f"Validation error - {request.method} {request.url}: {exc.errors()}")
    errors = "; ".join(error["msg"] for error in exc.errors())
    return JSONResponse(status_code=200, content=failure(400, f"Invalid request: {errors}"))


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content=failure(exc.status_code, str(exc.detail)), headers=exc.headers)


# 핸들러 밖으로 빠져나온 예외 - 스택과 함께 기록
@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled error - {request.method} {request.url}", exc_info=exc)
    return JSONResponse(status_code=500, content=failure(500, f"Internal server error: {str(exc)}"))


@app.get("/api/health")
def health():
    return success({"status": "healthy", "version": "1.0.0"}, "Storefront Review API is running!")


# 업로드 파일 정적 서빙
app.mount("/uploads", StaticFiles(directory=str(config.UPLOAD_ROOT), check_dir=False), name="uploads")

# 프론트엔드 페이지 (public/ 이 있을 때만)
if os.path.isdir(config.PUBLIC_DIR):
    app.mount("/", StaticFiles(directory=str(config.PUBLIC_DIR), html=True), name="public")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host=config.BACKEND_HOST,   # config에서 host 가져오기
        port=config.BACKEND_PORT,   # config에서 port 가져오기
        reload=config.DEBUG,
    )
