from fastapi import Request, status
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from qaskills.handlers.env_handler import env
from qaskills.utils.str import get_random_rate_limit_warning

limiter = Limiter(key_func=get_remote_address, enabled=env.state["rate_limit_enabled"])

async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    response = JSONResponse(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        content={"error": get_random_rate_limit_warning(), "limit": str(exc.detail)},
    )
    return request.app.state.limiter._inject_headers(response, request.state.view_rate_limit)
