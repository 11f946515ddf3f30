"""
커스텀 예외 정의

애플리케이션 전역에서 사용되는 커스텀 예외 클래스들입니다.
"""


class ProductNotFoundException(Exception):
    """
    상품을 찾을 수 없을 때 발생하는 예외

    HTTP Status Code: 404 Not Found
    """

    def __init__(self, product_id: str):
        self.product_id = product_id
        self.message = f"Product with id {product_id} not found"
        super().__init__(self.message)


class InvalidProductIdException(Exception):
    """
    상품 ID 형식이 올바르지 않을 때 발생하는 예외

    HTTP Status Code: 500 Internal Server Error
    (저장소 드라이버 오류와 동일하게 취급)
    """

    def __init__(self, product_id: str):
        self.product_id = product_id
        self.message = f"Invalid product id: '{product_id}'"
        super().__init__(self.message)


class ProductValidationException(Exception):
    """
    상품 필드가 제약 조건을 위반할 때 발생하는 예외

    HTTP Status Code: 500 Internal Server Error
    (핸들러의 사전 검증을 통과한 경우에만 여기까지 도달)
    """

    def __init__(self, violations: list[str]):
        self.violations = violations
        self.message = "Products validation failed: " + ", ".join(violations)
        super().__init__(self.message)
