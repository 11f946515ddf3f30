"""
Product 필드 검증 및 정규화 규칙

저장 전에 항상 validate_fields() → normalize_fields() 순서로 호출됩니다.
생성과 수정 모두 같은 필드 검증 스키마(ProductFields)를 사용합니다.
"""

import uuid
from decimal import ROUND_HALF_UP, Decimal
from numbers import Real
from typing import Annotated, Any, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictStr,
    ValidationError,
    ValidationInfo,
    field_validator,
)

from app.core.exceptions import InvalidProductIdException

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 100
DESCRIPTION_MIN_LENGTH = 10
DESCRIPTION_MAX_LENGTH = 500
DEFAULT_STOCK = 0
STOCK_MAX = 2**63 - 1  # SQLite INTEGER 상한

# 2^52 이상의 float은 소수부가 없으므로 반올림할 필요가 없음
_PRICE_EXACT_LIMIT = 2**52
_CENTS = Decimal("0.01")

# 저장 가능한 필드 (strict 스키마: 그 외 필드는 무시)
PRODUCT_FIELDS = ("name", "description", "price", "stock")
REQUIRED_ON_CREATE = ("name", "description", "price")

_REQUIRED_MESSAGES = {
    "name": "El nombre es requerido",
    "description": "La descripción es requerida",
    "price": "El precio es requerido",
    "stock": "El stock es requerido",
}

_TEXT_LABELS = {"name": "El nombre", "description": "La descripción"}
_TEXT_LIMITS = {
    "name": (NAME_MIN_LENGTH, NAME_MAX_LENGTH),
    "description": (DESCRIPTION_MIN_LENGTH, DESCRIPTION_MAX_LENGTH),
}

MSG_PRICE_INVALID = "El precio debe ser un número válido mayor o igual a 0"
MSG_PRICE_NEGATIVE = "El precio debe ser mayor o igual a 0"
MSG_STOCK_NOT_INTEGER = "El stock debe ser un número entero"
MSG_STOCK_NEGATIVE = "El stock debe ser mayor o igual a 0"
MSG_STOCK_TOO_LARGE = f"El stock no puede exceder {STOCK_MAX}"


class ProductFields(BaseModel):
    """
    상품 필드 제약 조건 스키마

    모든 필드는 선택적이며, 필수 여부는 validate_fields()에서 판단합니다.
    문자열은 앞뒤 공백을 제거한 뒤 길이를 검사합니다.
    """

    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    name: Optional[
        Annotated[
            StrictStr, Field(min_length=NAME_MIN_LENGTH, max_length=NAME_MAX_LENGTH)
        ]
    ] = Field(None, description="상품명 (2-100자)")
    description: Optional[
        Annotated[
            StrictStr,
            Field(
                min_length=DESCRIPTION_MIN_LENGTH, max_length=DESCRIPTION_MAX_LENGTH
            ),
        ]
    ] = Field(None, description="상품 설명 (10-500자)")
    price: Optional[Annotated[float, Field(ge=0, allow_inf_nan=False)]] = Field(
        None, description="가격 (0 이상의 유한한 숫자)"
    )
    stock: Optional[Annotated[int, Field(ge=0, le=STOCK_MAX)]] = Field(
        None, description="재고 수량 (0 이상의 정수)"
    )

    @field_validator("price", "stock", mode="before")
    @classmethod
    def reject_non_numbers(cls, value: Any, info: ValidationInfo) -> Any:
        # bool은 int의 하위 클래스, 숫자 문자열은 lax 모드에서 변환되므로 직접 거부
        if isinstance(value, bool) or not isinstance(value, Real):
            raise ValueError("not a number")
        if info.field_name == "price":
            try:
                float(value)
            except OverflowError:
                raise ValueError("price out of float range")
        return value


def _violation_message(field: str, error_type: str) -> str:
    if field in _TEXT_LABELS:
        label = _TEXT_LABELS[field]
        min_length, max_length = _TEXT_LIMITS[field]
        if error_type == "string_too_short":
            return f"{label} debe tener al menos {min_length} caracteres"
        if error_type == "string_too_long":
            return f"{label} no puede exceder {max_length} caracteres"
        return f"{label} debe ser texto"

    if field == "price":
        if error_type == "greater_than_equal":
            return MSG_PRICE_NEGATIVE
        return MSG_PRICE_INVALID

    if error_type == "greater_than_equal":
        return MSG_STOCK_NEGATIVE
    if error_type == "less_than_equal":
        return MSG_STOCK_TOO_LARGE
    return MSG_STOCK_NOT_INTEGER


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def validate_fields(fields: dict[str, Any], partial: bool = False) -> list[str]:
    """
    상품 필드의 제약 조건 위반 목록을 반환합니다.

    Args:
        fields: 검증할 필드 (PRODUCT_FIELDS 이외의 키는 무시)
        partial: True이면 전달된 필드만 검증 (수정),
                 False이면 필수 필드 누락도 위반으로 처리 (생성)

    Returns:
        위반 메시지 목록 (필드 순서대로, 비어 있으면 유효)
    """
    messages: dict[str, str] = {}
    present = {}
    for field in PRODUCT_FIELDS:
        if field not in fields:
            if not partial and field in REQUIRED_ON_CREATE:
                messages[field] = _REQUIRED_MESSAGES[field]
        elif _is_blank(fields[field]):
            messages[field] = _REQUIRED_MESSAGES[field]
        else:
            present[field] = fields[field]

    try:
        ProductFields.model_validate(present)
    except ValidationError as e:
        for error in e.errors():
            field = error["loc"][0]
            messages.setdefault(field, _violation_message(field, error["type"]))

    return [messages[field] for field in PRODUCT_FIELDS if field in messages]


def capitalize_name(name: str) -> str:
    """첫 글자는 대문자, 나머지는 소문자로 변환 ("tV sET" → "Tv set")"""
    return name[:1].upper() + name[1:].lower()


def round_price(price: float) -> float:
    """소수점 2자리로 반올림 (0.5는 항상 올림)"""
    if price >= _PRICE_EXACT_LIMIT:
        return float(price)
    return float(Decimal(repr(float(price))).quantize(_CENTS, rounding=ROUND_HALF_UP))


def normalize_fields(fields: dict[str, Any]) -> dict[str, Any]:
    """
    검증을 통과한 필드를 저장 형태로 변환합니다.

    입력 dict는 수정하지 않고 새 dict를 반환합니다.
    전달되지 않은 필드는 결과에도 포함되지 않습니다.
    """
    normalized = {}
    if "name" in fields:
        normalized["name"] = capitalize_name(fields["name"].strip())
    if "description" in fields:
        normalized["description"] = fields["description"].strip()
    if "price" in fields:
        normalized["price"] = round_price(fields["price"])
    if "stock" in fields:
        normalized["stock"] = int(fields["stock"])
    return normalized


def parse_product_id(raw_id: Any) -> str:
    """
    상품 ID를 저장 형식 (UUID hex 32자)으로 변환합니다.

    Raises:
        InvalidProductIdException: UUID 형식이 아닌 경우
    """
    if not isinstance(raw_id, str):
        raise InvalidProductIdException(str(raw_id))
    try:
        return uuid.UUID(raw_id).hex
    except ValueError:
        raise InvalidProductIdException(raw_id)
