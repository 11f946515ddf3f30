"""
상품 관련 Pydantic 스키마

API 응답 모델과 공통 응답 envelope를 정의합니다.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import AliasGenerator, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ProductUpdateRequest(BaseModel):
    """
    상품 수정 요청 스키마

    타입/범위 검사는 하지 않고 값만 받습니다 (가격 형식은 핸들러,
    나머지 제약 조건은 모델 규칙에서 검사). 전달 여부는 model_fields_set으로
    판단하므로 생략된 필드와 null로 전달된 필드를 구분합니다.

    Example:
        {
            "price": 149.99
        }
    """

    model_config = ConfigDict(extra="ignore")

    name: Any = Field(None, description="상품명", examples=["tv"])
    description: Any = Field(
        None, description="상품 설명", examples=["a flat screen tv"]
    )
    price: Any = Field(None, description="상품 가격 (0 이상)", examples=[199.99])


class ProductCreateRequest(ProductUpdateRequest):
    """
    상품 생성 요청 스키마

    Example:
        {
            "name": "tv",
            "description": "a flat screen tv",
            "price": 199.999,
            "stock": 3
        }
    """

    stock: Any = Field(None, description="초기 재고 수량 (선택, 기본값 0)", examples=[3])


def parse_request_body(schema: type[BaseModel], body: Any) -> BaseModel:
    """JSON 객체가 아닌 본문은 빈 객체로 취급하여 스키마로 변환합니다."""
    return schema.model_validate(body if isinstance(body, dict) else {})


class ProductResponse(BaseModel):
    """
    상품 정보 응답 스키마 (camelCase로 직렬화)

    Example:
        {
            "id": "3f2b9c0e8a4d4b6f9e1c2d3a4b5c6d7e",
            "name": "Tv",
            "description": "a flat screen tv",
            "price": 200.0,
            "stock": 0,
            "createdAt": "2026-10-19T10:30:00Z",
            "updatedAt": "2026-10-19T10:30:00Z",
            "totalValue": 0.0
        }
    """

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=AliasGenerator(serialization_alias=to_camel),
    )

    id: str = Field(..., description="상품 ID")
    name: str = Field(..., description="상품명")
    description: str = Field(..., description="상품 설명")
    price: float = Field(..., description="상품 가격")
    stock: int = Field(..., description="재고 수량")
    created_at: datetime = Field(..., description="상품 생성 일시")
    updated_at: datetime = Field(..., description="상품 수정 일시")
    total_value: float = Field(..., description="재고 총 가치 (price × stock)")


class ApiResponse(BaseModel):
    """
    모든 엔드포인트가 공통으로 사용하는 응답 envelope

    값이 없는 키는 직렬화 시 생략됩니다.

    Example:
        {"success": true, "data": [...], "count": 2}
        {"success": false, "message": "Producto no encontrado"}
    """

    success: bool
    data: Optional[Any] = None
    message: Optional[str] = None
    error: Optional[str] = None
    count: Optional[int] = None


def serialize_product(product: Any) -> dict[str, Any]:
    """ORM Product 객체를 JSON 직렬화 가능한 dict로 변환합니다."""
    return ProductResponse.model_validate(product).model_dump(
        mode="json", by_alias=True
    )
