"""상품 저장소 서비스."""

import logging
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import (
    ProductNotFoundException,
    ProductValidationException,
)
from app.models import Product
from app.models.product import utcnow
from app.models.product_rules import (
    DEFAULT_STOCK,
    PRODUCT_FIELDS,
    normalize_fields,
    parse_product_id,
    validate_fields,
)

logger = logging.getLogger(__name__)


def _pick_product_fields(fields: dict[str, Any]) -> dict[str, Any]:
    """스키마에 정의된 필드만 남깁니다."""
    return {key: fields[key] for key in PRODUCT_FIELDS if key in fields}


class ProductService:
    """상품 조회, 생성, 수정, 삭제 서비스."""

    @staticmethod
    async def find_all(db: AsyncSession) -> list[Product]:
        """저장된 모든 상품을 조회합니다 (정렬 보장 없음)."""
        result = await db.execute(select(Product))
        return list(result.scalars().all())

    @staticmethod
    async def find_available(db: AsyncSession) -> list[Product]:
        """재고가 1개 이상인 상품만 조회합니다."""
        result = await db.execute(select(Product).where(Product.stock > 0))
        return list(result.scalars().all())

    @staticmethod
    async def find_by_id(product_id: str, db: AsyncSession) -> Product:
        """
        ID로 상품을 조회합니다.

        Raises:
            InvalidProductIdException: ID 형식이 올바르지 않은 경우
            ProductNotFoundException: 해당 ID의 상품이 없는 경우
        """
        product = await db.get(Product, parse_product_id(product_id))
        if product is None:
            raise ProductNotFoundException(product_id)
        return product

    @staticmethod
    async def create(fields: dict[str, Any], db: AsyncSession) -> Product:
        """
        상품을 검증, 정규화한 뒤 저장합니다.

        Args:
            fields: name, description, price (필수), stock (선택, 기본값 0)
            db: DB 세션

        Returns:
            생성된 Product 객체 (id, created_at, updated_at 할당됨)

        Raises:
            ProductValidationException: 필드가 누락되었거나 제약 조건을 위반한 경우
        """
        candidate = _pick_product_fields(fields)
        violations = validate_fields(candidate)
        if violations:
            raise ProductValidationException(violations)

        data = normalize_fields(candidate)
        data.setdefault("stock", DEFAULT_STOCK)

        now = utcnow()
        product = Product(**data, created_at=now, updated_at=now)
        db.add(product)
        await db.commit()
        await db.refresh(product)

        logger.info("Product created", extra={"product_id": product.id})
        return product

    @staticmethod
    async def update_by_id(
        product_id: str, fields: dict[str, Any], db: AsyncSession
    ) -> Product:
        """
        전달된 필드만 검증, 정규화하여 수정합니다.

        검증이 모두 끝난 뒤에만 DB를 조회하고 변경합니다.

        Raises:
            InvalidProductIdException: ID 형식이 올바르지 않은 경우
            ProductValidationException: 전달된 필드가 제약 조건을 위반한 경우
            ProductNotFoundException: 해당 ID의 상품이 없는 경우
        """
        candidate = _pick_product_fields(fields)
        violations = validate_fields(candidate, partial=True)
        if violations:
            raise ProductValidationException(violations)

        data = normalize_fields(candidate)
        product = await ProductService.find_by_id(product_id, db)

        for key, value in data.items():
            setattr(product, key, value)
        product.updated_at = utcnow()

        await db.commit()
        await db.refresh(product)

        logger.info(
            "Product updated (%s)",
            ", ".join(sorted(data)),
            extra={"product_id": product.id},
        )
        return product

    @staticmethod
    async def delete_by_id(product_id: str, db: AsyncSession) -> Product:
        """
        상품을 삭제하고 삭제된 객체를 반환합니다.

        Raises:
            InvalidProductIdException: ID 형식이 올바르지 않은 경우
            ProductNotFoundException: 해당 ID의 상품이 없는 경우
        """
        product = await ProductService.find_by_id(product_id, db)
        await db.delete(product)
        await db.commit()

        logger.info("Product deleted", extra={"product_id": product.id})
        return product
