"""
Pydantic 스키마 모듈

API 요청/응답 데이터 검증 및 직렬화를 위한 스키마들을 정의합니다.
"""

from app.schemas.product import ApiResponse, ProductResponse, serialize_product

__all__ = ["ApiResponse", "ProductResponse", "serialize_product"]
