from contextvars import ContextVar
from datetime import datetime
from enum import StrEnum
import logging
import os
import sys
from typing import TYPE_CHECKING
import zoneinfo

from loguru import logger as loguru_logger


if TYPE_CHECKING:
    from loguru import Logger as LoguruLogger

from src.platform.config.core_setting import settings
from src.platform.constant.path import LOG_DIR
from src.platform.logging.service_context import get_service_context


# Tests redirect file output away from the project log directory
LOG_DIR = os.environ.get('TEST_LOG_DIR', LOG_DIR)

MASK = '********'
SENSITIVE_KEYWORDS = {
    'password',
    'token',
    'secret',
    'authorization',
    'idempotency_key',
}
DEPTH_LINE = '─'

chain_start_time_var: ContextVar[float] = ContextVar('chain_start_time_var', default=0)
call_depth_var: ContextVar[int] = ContextVar('call_depth_var', default=0)


class ExtraField(StrEnum):
    SERVICE_CONTEXT = 'service_context'
    CHAIN_START_TIME = 'chain_start_time'
    CALL_TARGET = 'call_target'


def _default_extra() -> dict[str, str]:
    return {
        ExtraField.SERVICE_CONTEXT: get_service_context(),
        ExtraField.CHAIN_START_TIME: '',
        ExtraField.CALL_TARGET: '',
    }


class InterceptHandler(logging.Handler):
    """Route stdlib logging (uvicorn, sqlalchemy, alembic) into loguru"""

    def emit(self, record: logging.LogRecord) -> None:
        message = record.getMessage()
        if record.levelno <= logging.DEBUG and 'Using selector:' in message:
            return

        try:
            level: str | int = loguru_logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back  # type: ignore
            depth += 1

        loguru_logger.bind(**_default_extra()).opt(depth=depth, exception=record.exc_info).log(
            level, message
        )


io_log_format = ' | '.join(
    (
        f'<c>{{extra[{ExtraField.SERVICE_CONTEXT}]}}</>',
        '<lvl>{level:<8}</>',
        f'<c>{{file}}::{{function}}:{{line}}</>=><y>{{extra[{ExtraField.CALL_TARGET}]}}</>',
        '{message}',
        '<lk>{elapsed}</>',
        f'<lk>{{extra[{ExtraField.CHAIN_START_TIME}]:<18}}</>',
    )
)


loguru_logger.remove()
custom_logger: 'LoguruLogger' = loguru_logger.bind(**_default_extra())

min_log_level = 'DEBUG' if settings.DEBUG else 'INFO'

custom_logger.add(sys.stdout, format=io_log_format, level=min_log_level, enqueue=True)

# Production ships stdout only
if settings.DEBUG:
    now_local = datetime.now(zoneinfo.ZoneInfo(settings.VENUE_TIMEZONE))
    prefix = 'test_' if os.environ.get('TEST_LOG_DIR') else ''
    custom_logger.add(
        f'{LOG_DIR}/{prefix}{now_local.strftime("%Y-%m-%d_%H")}.log',
        format=io_log_format,
        rotation='1 hour',
        retention='7 days',
        compression='gz',
        enqueue=True,
        level=min_log_level,
    )

logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
