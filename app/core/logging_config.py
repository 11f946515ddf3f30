"""
로깅 설정

개발 환경에서는 사람이 읽기 쉬운 텍스트 포맷,
운영 환경에서는 JSON 포맷으로 로그를 출력합니다.
"""

import json
import logging
from datetime import datetime, timezone

_TEXT_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
_HANDLER_NAME = "product_api"


class JSONFormatter(logging.Formatter):
    """로그 레코드를 한 줄 JSON으로 변환하는 포매터"""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        product_id = record.__dict__.get("product_id")
        if product_id is not None:
            log["product_id"] = product_id
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


def setup_logging(level: str = "INFO", fmt: str = "text") -> None:
    """
    루트 로거에 핸들러를 설치합니다.

    lifespan에서 여러 번 호출되어도 (테스트 등) 핸들러가 중복되지 않습니다.

    Args:
        level: 로그 레벨 이름 (DEBUG, INFO, ...)
        fmt: "json" 또는 "text"
    """
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    if any(h.get_name() == _HANDLER_NAME for h in root.handlers):
        return

    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(_TEXT_FORMAT, datefmt=_DATE_FORMAT))
    root.addHandler(handler)
