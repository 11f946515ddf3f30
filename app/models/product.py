"""
Product 모델
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Float, Index, Integer, String, Text
from sqlalchemy.types import TypeDecorator

from app.db.database import Base


def _new_product_id() -> str:
    return uuid.uuid4().hex


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UTCDateTime(TypeDecorator):
    """
    UTC로 저장하고 항상 UTC aware datetime으로 읽어오는 타입

    SQLite는 타임존 정보를 저장하지 않으므로 읽을 때 UTC를 다시 붙입니다.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is not None and value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value

    def process_result_value(self, value, dialect):
        if value is not None and value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value


class Product(Base):
    """
    상품 모델

    Attributes:
        id: 상품 고유 ID (UUID hex 32자, 생성 시 자동 할당)
        name: 상품명 (2-100자, 저장 시 첫 글자만 대문자)
        description: 상품 설명 (10-500자)
        price: 가격 (0 이상, 소수점 2자리로 반올림)
        stock: 재고 수량 (0 이상의 정수, 기본값 0)
        created_at: 생성 일시 (생성 시 한 번만 설정)
        updated_at: 수정 일시 (변경될 때마다 갱신)

    필드 검증과 정규화는 app.models.product_rules에서 명시적으로 수행합니다.
    """

    __tablename__ = "products"

    id = Column(String(32), primary_key=True, default=_new_product_id)
    name = Column(String(100), nullable=False, index=True)
    description = Column(Text, nullable=False)
    price = Column(Float, nullable=False, index=True)
    stock = Column(Integer, nullable=False, default=0)
    created_at = Column(UTCDateTime, default=utcnow, nullable=False)
    updated_at = Column(
        UTCDateTime, default=utcnow, onupdate=utcnow, nullable=False
    )

    __table_args__ = (Index("ix_products_created_at_desc", created_at.desc()),)

    @property
    def total_value(self) -> float:
        """재고 총 가치 (price × stock, 저장하지 않는 파생 값)"""
        return self.price * self.stock

    @property
    def is_available(self) -> bool:
        """재고가 1개 이상이면 판매 가능"""
        return self.stock > 0

    def __repr__(self) -> str:
        """Product 객체의 문자열 표현"""
        return f"<Product(id={self.id}, name='{self.name}', price={self.price})>"

    def __str__(self) -> str:
        return f"Product: {self.name}"
