"""
pytest 픽스처 정의
"""

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.db.database import DatabaseSessionManager
from app.main import app


@pytest.fixture
def database_url(tmp_path) -> str:
    """테스트마다 분리된 임시 SQLite 파일 URL"""
    return f"sqlite+aiosqlite:///{tmp_path / 'test_products.db'}"


@pytest.fixture
def settings(database_url):
    """테스트용 설정 객체 픽스처"""
    return Settings(
        database_url=database_url,
        app_env="test",
        log_level="DEBUG",
    )


@pytest_asyncio.fixture
async def test_db(database_url):
    """
    테스트용 비동기 DB 세션 픽스처

    각 테스트 함수마다 새로운 데이터베이스 파일에 테이블을 생성하고,
    테스트 종료 후 커넥션 풀을 정리합니다.
    """
    manager = DatabaseSessionManager(database_url)
    await manager.create_tables()

    session = manager.session()
    try:
        yield session
    finally:
        await session.close()
        await manager.close()


@pytest.fixture
def test_client(database_url, monkeypatch):
    """
    FastAPI TestClient 픽스처

    lifespan이 DATABASE_URL 환경 변수를 읽어 임시 DB로 초기화합니다.
    """
    monkeypatch.setenv("DATABASE_URL", database_url)
    monkeypatch.setenv("APP_ENV", "test")

    with TestClient(app) as client:
        yield client
