from fastapi import Request
from fastapi.responses import JSONResponse

from reservation_ledger.exceptions import InternalInvariantViolation, LedgerError
from reservation_ledger.logger_config import logger


async def ledger_error_handler(request: Request, exc: LedgerError) -> JSONResponse:
    logger.warning(f'{request.method} {request.url.path} rejected ({exc.code}): {exc.message}')
    return JSONResponse(
        status_code=exc.status_code, content={'detail': exc.message, 'code': exc.code}
    )


async def invariant_violation_handler(
    request: Request, exc: InternalInvariantViolation
) -> JSONResponse:
    logger.bind(invariant=exc.invariant, **exc.context).error(
        f'{request.method} {request.url.path} aborted: {exc.message}'
    )
    return JSONResponse(
        status_code=exc.status_code, content={'detail': exc.message, 'code': exc.code}
    )


EXCEPTION_HANDLERS = {
    LedgerError: ledger_error_handler,
    InternalInvariantViolation: invariant_violation_handler,
}


def register_exception_handlers(app):
    for exception_class, handler in EXCEPTION_HANDLERS.items():
        app.add_exception_handler(exception_class, handler)
