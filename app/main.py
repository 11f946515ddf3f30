import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.routes import products
from app.core.config import get_settings
from app.core.logging_config import setup_logging
from app.db.database import close_db, init_db

logger = logging.getLogger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """시작 시 로깅과 DB를 초기화하고, 종료 시 커넥션 풀을 정리합니다."""
    # 테스트에서 환경 변수를 바꿀 수 있도록 시작 시점에 다시 읽음
    runtime_settings = get_settings()
    setup_logging(runtime_settings.log_level, runtime_settings.log_format)
    await init_db(runtime_settings.database_url, echo=runtime_settings.database_echo)
    logger.info("Product Catalog API started (env=%s)", runtime_settings.app_env)
    yield
    await close_db()
    logger.info("Product Catalog API shutting down")


app = FastAPI(
    title="Product Catalog API",
    description="상품(products) 리소스 CRUD API",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# 라우터 등록
app.include_router(products.router, prefix=settings.api_prefix, tags=["products"])


@app.get("/")
async def root():
    """루트 엔드포인트"""
    return {
        "message": "Product Catalog API",
        "status": "running",
        "docs": "/docs",
    }


@app.get("/health")
async def health_check():
    """헬스체크 엔드포인트 (Docker 헬스체크용)"""
    return {"status": "healthy"}
