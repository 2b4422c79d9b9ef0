# FastAPI 진입점
# - Beanie ODM 초기화 (MongoDB)
# - 라우터 라우팅, 정적 파일(업로드 이미지) 서빙
# - CORS 설정
# - 예외 → {message, code} 응답 변환

import logging
from datetime import datetime, timezone
from typing import Optional

import uvicorn
from beanie import init_beanie
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from .api.auth import router as auth_router
from .api.posts import router as posts_router
from .core.config import Settings, get_settings
from .core.exceptions import BoardError
from .core.retry import create_connect_retry_decorator
from .models.post import Post
from .models.user import User

logger = logging.getLogger(__name__)

DOCUMENT_MODELS = [User, Post]


async def connect_database(settings: Settings) -> AsyncIOMotorDatabase:
    client = AsyncIOMotorClient(settings.MONGODB_URI, serverSelectionTimeoutMS=5000, tz_aware=True)

    @create_connect_retry_decorator(max_attempts=settings.MONGODB_CONNECT_ATTEMPTS)
    async def ping():
        await client.admin.command("ping")

    await ping()
    logger.info("[MongoDB] Connected")
    return client.get_default_database()


async def board_error_handler(request: Request, exc: BoardError):
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.message, "code": exc.code},
        headers=headers,
    )


async def validation_error_handler(request: Request, exc: RequestValidationError):
    # 첫 번째 오류만 사람이 읽을 수 있게 요약 (예: "body.title: Field required")
    errors = exc.errors()
    if errors:
        first = errors[0]
        where = ".".join(str(p) for p in first.get("loc", ()))
        message = f"Invalid request: {where}: {first.get('msg', 'invalid value')}"
    else:
        message = "Invalid request"
    return JSONResponse(status_code=422, content={"message": message, "code": "validation_error"})


async def unhandled_error_handler(request: Request, exc: Exception):
    # 내부 오류 내용은 로그에만 남기고 클라이언트에는 고정 메시지
    logger.error(f"[App] Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(
        status_code=500,
        content={"message": "Internal server error", "code": "internal_error"},
    )


def create_app(settings: Optional[Settings] = None, database: Optional[AsyncIOMotorDatabase] = None) -> FastAPI:
    """애플리케이션을 생성합니다.

    database를 넘기면 MongoDB에 접속하지 않고 그 DB로 Beanie를 초기화합니다
    (테스트에서 mongomock-motor DB를 주입할 때 사용).
    """
    settings = settings or get_settings()
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(
        title="캠퍼스 게시판 API",
        description="회원가입/로그인, 이미지 첨부 게시글 작성 및 목록 조회",
        version=settings.APP_VERSION,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins or ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(BoardError, board_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    # Beanie 초기화 (앱 시작 시 1회). 연결 실패 시 서버는 시작되지 않음
    @app.on_event("startup")
    async def app_init():
        db = database if database is not None else await connect_database(settings)
        await init_beanie(database=db, document_models=DOCUMENT_MODELS)

    @app.get("/health")
    async def health_check():
        return {
            "status": "ok",
            "app": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "time": datetime.now(tz=timezone.utc).isoformat(),
        }

    app.include_router(auth_router, prefix="/api")
    app.include_router(posts_router, prefix="/api")

    # 업로드 이미지는 읽기 전용 정적 파일로 제공
    settings.UPLOAD_DIR.mkdir(parents=True, exist_ok=True)
    app.mount(settings.UPLOAD_URL_PREFIX, StaticFiles(directory=settings.UPLOAD_DIR), name="uploads")

    return app


def run():
    settings = get_settings()
    uvicorn.run("app.main:create_app", factory=True, host=settings.HOST, port=settings.PORT)
