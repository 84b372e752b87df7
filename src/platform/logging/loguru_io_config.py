from contextvars import ContextVar
from datetime import datetime, timezone
from enum import StrEnum
import logging
import os
import sys
from typing import TYPE_CHECKING

from loguru import logger as loguru_logger


if TYPE_CHECKING:
    from loguru import Logger as LoguruLogger

from src.platform.config.core_setting import settings
from src.platform.constant.path import LOG_DIR
from src.platform.logging.service_context import get_service_context


# Use test log directory if in test environment
LOG_DIR = os.environ.get('TEST_LOG_DIR', LOG_DIR)

TRUNCATE_LIMIT = 1000

chain_start_time_var: ContextVar[float] = ContextVar('first_time_var', default=0)
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
    """Route stdlib logging (uvicorn, sqlalchemy, alembic) into loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = loguru_logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Find caller from where originated the logged message
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back  # type: ignore
            depth += 1

        loguru_logger.bind(**_default_extra()).opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


# Log format for LoguruIO decorated functions
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


# Configure logger
loguru_logger.remove()  # Remove default handler to avoid duplicate output and use custom format
custom_logger: 'LoguruLogger' = loguru_logger.bind(**_default_extra())

min_log_level = 'DEBUG' if settings.DEBUG else 'INFO'

custom_logger.add(sys.stdout, format=io_log_format, level=min_log_level, enqueue=True)

# File output only in DEBUG mode; production collects stdout
if settings.DEBUG:
    now_utc = datetime.now(timezone.utc)
    log_filename = (
        f'test_{now_utc.strftime("%Y-%m-%d_%H")}.log'
        if os.environ.get('TEST_LOG_DIR')
        else f'{now_utc.strftime("%Y-%m-%d_%H")}.log'
    )
    custom_logger.add(
        f'{LOG_DIR}/{log_filename}',
        format=io_log_format,
        rotation='1 hour',
        retention='7 days',
        compression='gz',
        enqueue=True,
        level=min_log_level,
    )

logging.basicConfig(handlers=[InterceptHandler()], level=logging.INFO, force=True)
