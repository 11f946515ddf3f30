"""
로깅 설정 테스트
"""

import json
import logging

import pytest

from app.core.logging_config import JSONFormatter, setup_logging


@pytest.fixture
def clean_root_logger():
    """테스트 동안 루트 로거 상태를 보존하고 복원합니다."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    root.handlers = handlers
    root.setLevel(level)


def test_setup_logging_is_idempotent(clean_root_logger):
    setup_logging("DEBUG", "text")
    setup_logging("DEBUG", "text")

    named = [h for h in clean_root_logger.handlers if h.get_name() == "product_api"]
    assert len(named) == 1
    assert clean_root_logger.level == logging.DEBUG


def test_json_formatter_includes_product_id():
    record = logging.LogRecord(
        name="app.services.product_service",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="Product created",
        args=(),
        exc_info=None,
    )
    record.product_id = "abc123"

    log = json.loads(JSONFormatter().format(record))

    assert log["level"] == "INFO"
    assert log["logger"] == "app.services.product_service"
    assert log["message"] == "Product created"
    assert log["product_id"] == "abc123"
