"""Centralized loguru configuration for the ledger service."""

import sys

from loguru import logger as loguru_logger

from reservation_ledger.config import settings


log_format = ' | '.join(
    (
        '<lk>{time:YYYY-MM-DD HH:mm:ss.SSS}</>',
        '<lvl>{level:<8}</>',
        '<c>{name}::{function}:{line}</>',
        '{message}',
        '<lk>{extra}</>',
    )
)

# Remove default handler to avoid duplicate output
loguru_logger.remove()
logger = loguru_logger

logger.add(sys.stdout, format=log_format, level=settings.LOG_LEVEL)

if settings.LOG_DIR:
    logger.add(
        f'{settings.LOG_DIR}/{{time:YYYY-MM-DD}}.log',
        format=log_format,
        level=settings.LOG_LEVEL,
        rotation='1 day',
        retention='30 days',
        compression='zip',
        enqueue=True,
    )
