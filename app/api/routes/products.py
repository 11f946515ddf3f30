"""
상품 CRUD API 엔드포인트

상품 목록 조회, 상세 조회, 생성, 수정, 삭제 기능을 제공합니다.
모든 응답은 {success, data, message, error, count} envelope 형태이며,
처리되지 않은 예외는 500 envelope로 변환되어 전송 계층으로 전파되지 않습니다.
"""

import logging
from numbers import Real
from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ProductNotFoundException
from app.db.database import get_db
from app.schemas.product import (
    ApiResponse,
    ProductCreateRequest,
    ProductUpdateRequest,
    parse_request_body,
    serialize_product,
)
from app.services.product_service import ProductService

logger = logging.getLogger(__name__)

router = APIRouter()

MSG_ID_REQUIRED = "ID del producto es requerido"
MSG_NOT_FOUND = "Producto no encontrado"
MSG_FIELDS_REQUIRED = "Todos los campos (name, description, price) son requeridos"
MSG_INVALID_PRICE = "El precio debe ser un número positivo"
MSG_EMPTY_UPDATE = "Debe proporcionar al menos un campo para actualizar"

UPDATABLE_FIELDS = ("name", "description", "price")


def _envelope(
    status_code: int,
    success: bool,
    data: Any = None,
    message: Optional[str] = None,
    error: Optional[str] = None,
    count: Optional[int] = None,
) -> JSONResponse:
    body = ApiResponse(
        success=success, data=data, message=message, error=error, count=count
    )
    return JSONResponse(
        status_code=status_code, content=body.model_dump(mode="json", exclude_none=True)
    )


def _server_error(message: str, exc: Exception) -> JSONResponse:
    logger.exception(message)
    return _envelope(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        success=False,
        message=message,
        error=str(exc),
    )


def _bad_request(message: str) -> JSONResponse:
    return _envelope(status.HTTP_400_BAD_REQUEST, success=False, message=message)


def _not_found() -> JSONResponse:
    return _envelope(status.HTTP_404_NOT_FOUND, success=False, message=MSG_NOT_FOUND)


def _is_valid_price(price: Any) -> bool:
    """숫자 타입(bool 제외)이고 음수가 아니면 유효"""
    if not isinstance(price, Real) or isinstance(price, bool):
        return False
    # NaN은 여기서 거르지 않고 모델 검증에 맡김
    return not price < 0


@router.get("/products")
async def list_products(db: AsyncSession = Depends(get_db)):
    """
    모든 상품 목록을 조회합니다.

    Example:
        Response (200):
        ```json
        {"success": true, "data": [{"id": "...", "name": "Tv", ...}], "count": 1}
        ```
    """
    try:
        products = await ProductService.find_all(db)
        return _envelope(
            status.HTTP_200_OK,
            success=True,
            data=[serialize_product(product) for product in products],
            count=len(products),
        )
    except Exception as e:
        return _server_error("Error al obtener los productos", e)


@router.get("/products/{product_id}")
async def get_product(product_id: str, db: AsyncSession = Depends(get_db)):
    """
    특정 상품의 상세 정보를 조회합니다.

    Returns:
        200: 상품 정보
        400: ID 누락
        404: 상품을 찾을 수 없는 경우
        500: ID 형식 오류 등 저장소 오류
    """
    try:
        if not product_id:
            return _bad_request(MSG_ID_REQUIRED)

        product = await ProductService.find_by_id(product_id, db)
        return _envelope(
            status.HTTP_200_OK, success=True, data=serialize_product(product)
        )
    except ProductNotFoundException:
        return _not_found()
    except Exception as e:
        return _server_error("Error al obtener el producto", e)


@router.post("/products")
async def create_product(
    body: Any = Body(None), db: AsyncSession = Depends(get_db)
):
    """
    새 상품을 생성합니다.

    Example:
        Request:
        ```json
        {"name": "tv", "description": "a flat screen tv", "price": 199.999}
        ```

        Response (201):
        ```json
        {
            "success": true,
            "message": "Producto creado exitosamente",
            "data": {"id": "...", "name": "Tv", "price": 200.0, "stock": 0, ...}
        }
        ```
    """
    try:
        payload = parse_request_body(ProductCreateRequest, body)
        provided = payload.model_fields_set
        name, description, price = payload.name, payload.description, payload.price

        if not name or not description or "price" not in provided:
            return _bad_request(MSG_FIELDS_REQUIRED)

        if not _is_valid_price(price):
            return _bad_request(MSG_INVALID_PRICE)

        fields = {"name": name, "description": description, "price": price}
        if "stock" in provided:
            fields["stock"] = payload.stock

        product = await ProductService.create(fields, db)
        return _envelope(
            status.HTTP_201_CREATED,
            success=True,
            message="Producto creado exitosamente",
            data=serialize_product(product),
        )
    except Exception as e:
        return _server_error("Error al crear el producto", e)


@router.api_route("/products/{product_id}", methods=["PUT", "PATCH"])
async def update_product(
    product_id: str,
    body: Any = Body(None),
    db: AsyncSession = Depends(get_db),
):
    """
    상품의 일부 필드(name, description, price)를 수정합니다.

    본문에 포함된 필드만 수정하며, 가격이 잘못되었거나 수정할 필드가 없으면
    저장소를 호출하지 않고 400을 반환합니다.
    """
    try:
        if not product_id:
            return _bad_request(MSG_ID_REQUIRED)

        payload = parse_request_body(ProductUpdateRequest, body)
        update_fields = {
            key: getattr(payload, key)
            for key in UPDATABLE_FIELDS
            if key in payload.model_fields_set
        }

        if "price" in update_fields and not _is_valid_price(update_fields["price"]):
            return _bad_request(MSG_INVALID_PRICE)

        if not update_fields:
            return _bad_request(MSG_EMPTY_UPDATE)

        product = await ProductService.update_by_id(product_id, update_fields, db)
        return _envelope(
            status.HTTP_200_OK,
            success=True,
            message="Producto actualizado exitosamente",
            data=serialize_product(product),
        )
    except ProductNotFoundException:
        return _not_found()
    except Exception as e:
        return _server_error("Error al actualizar el producto", e)


@router.delete("/products/{product_id}")
async def delete_product(product_id: str, db: AsyncSession = Depends(get_db)):
    """
    상품을 삭제하고 삭제된 상품 정보를 반환합니다.

    Returns:
        200: 삭제된 상품 정보
        400: ID 누락
        404: 상품을 찾을 수 없는 경우
    """
    try:
        if not product_id:
            return _bad_request(MSG_ID_REQUIRED)

        product = await ProductService.delete_by_id(product_id, db)
        return _envelope(
            status.HTTP_200_OK,
            success=True,
            message="Producto eliminado exitosamente",
            data=serialize_product(product),
        )
    except ProductNotFoundException:
        return _not_found()
    except Exception as e:
        return _server_error("Error al eliminar el producto", e)
