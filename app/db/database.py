"""
SQLAlchemy 비동기 데이터베이스 설정

비동기 엔진, 세션 팩토리, Base 클래스를 정의합니다.
엔진은 import 시점이 아니라 lifespan에서 init_db()로 생성됩니다.
"""

import logging
from typing import AsyncGenerator, Optional

from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """모든 ORM 모델의 Base 클래스"""


class DatabaseSessionManager:
    """비동기 엔진과 세션 팩토리를 소유하는 매니저"""

    def __init__(self, database_url: str, echo: bool = False):
        self.engine = create_async_engine(database_url, echo=echo)
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            autoflush=False,
            expire_on_commit=False,  # async 환경에서 lazy-load 방지
        )

    def session(self) -> AsyncSession:
        return self._session_factory()

    async def create_tables(self) -> None:
        """등록된 모든 모델의 테이블을 생성합니다 (이미 있으면 무시)."""
        # 모델을 import해야 Base.metadata에 테이블이 등록됨
        import app.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def close(self) -> None:
        await self.engine.dispose()


db_manager: Optional[DatabaseSessionManager] = None


async def init_db(database_url: str, echo: bool = False) -> DatabaseSessionManager:
    """
    전역 세션 매니저를 초기화하고 테이블을 생성합니다.

    Args:
        database_url: async 드라이버 URL (예: sqlite+aiosqlite:///./products.db)
        echo: SQL 로그 출력 여부

    Returns:
        초기화된 DatabaseSessionManager
    """
    global db_manager
    db_manager = DatabaseSessionManager(database_url, echo=echo)
    await db_manager.create_tables()
    logger.info("Database initialized: %s", db_manager.engine.url.render_as_string())
    return db_manager


async def close_db() -> None:
    """전역 세션 매니저의 커넥션 풀을 정리합니다."""
    global db_manager
    if db_manager is not None:
        await db_manager.close()
        db_manager = None


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI 의존성 주입용 데이터베이스 세션 제너레이터

    예외 발생 시 롤백하고 세션을 닫습니다.

    사용 예:
        @router.get("/items/")
        async def read_items(db: AsyncSession = Depends(get_db)):
            result = await db.execute(select(Item))
            return result.scalars().all()
    """
    if db_manager is None:
        raise RuntimeError("Database is not initialized. Call init_db() first.")

    session = db_manager.session()
    try:
        yield session
    except Exception:
        await session.rollback()
        raise
    finally:
        await session.close()
