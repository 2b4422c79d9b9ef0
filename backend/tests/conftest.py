# 공용 테스트 픽스처
# - MongoDB 대신 mongomock-motor 인메모리 DB 사용
# - 업로드 디렉토리는 tmp_path

import asyncio
from datetime import datetime, timedelta

import pytest
from beanie import init_beanie
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

from app.core.config import Settings
from app.main import DOCUMENT_MODELS, create_app
from app.models.post import Post
from app.models.user import User

TEST_SECRET = "test-secret-key-for-signing-session-tokens"


@pytest.fixture
def settings(tmp_path):
    return Settings(
        _env_file=None,
        JWT_SECRET_KEY=TEST_SECRET,
        BCRYPT_ROUNDS=4,
        UPLOAD_DIR=tmp_path / "uploads",
        PUBLIC_BASE_URL="http://testserver",
        LOG_LEVEL="DEBUG",
    )


@pytest.fixture
def db():
    database = AsyncMongoMockClient()["board_test"]
    asyncio.run(init_beanie(database=database, document_models=DOCUMENT_MODELS))
    return database


@pytest.fixture
def client(settings):
    app = create_app(settings, database=AsyncMongoMockClient()["board_api_test"])
    with TestClient(app) as c:
        yield c


def register_and_login(client, username="alice", password="pw-alice"):
    assert client.post("/api/register", json={"username": username, "password": password}).status_code == 201
    resp = client.post("/api/login", json={"username": username, "password": password})
    assert resp.status_code == 200
    return resp.json()


async def seed_posts(author: User, category: str, count: int, start: datetime) -> list:
    """start부터 1분 간격으로 게시글을 만들고, 생성 순서대로 반환합니다."""
    posts = []
    for i in range(count):
        post = Post(
            title=f"{category} #{i}",
            content="body",
            category=category,
            author_id=author.id,
            created_at=start + timedelta(minutes=i),
        )
        posts.append(await post.insert())
    return posts
