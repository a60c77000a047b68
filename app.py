import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from mailjet_rest import Client
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from qaskills.clients.cache_client import CacheClient
from qaskills.clients.mongo_client import MongoClient
from qaskills.handlers.auth_handler import new_session_verifier
from qaskills.handlers.dependency_handler import wire_services
from qaskills.handlers.env_handler import env
from qaskills.handlers.rate_limit_handler import limiter, rate_limit_exceeded_handler
from qaskills.routes import (
    cron_router,
    preferences_router,
    seo_router,
    skills_router,
    unsubscribe_router,
    webhook_router,
)

logger = logging.getLogger(__name__)
logging.basicConfig(level=getattr(logging, env.state["log_level"], logging.INFO))

BASE_URL = env.state["base_url"]
CLIENT_LOCAL = env.state["client_local"]
CLIENT_PROD = env.state["client_prod"]
ALLOW_HEADERS = env.auth["allow_headers"]
INVALID_REQUEST = "Invalid request"

@asynccontextmanager
async def lifespan(app: FastAPI):
    mongo_client = MongoClient(env.mongo["uri"], env.mongo["db"])
    db = await mongo_client.ping()
    await mongo_client.ensure_indexes(db)

    mailjet = None
    if env.mailjet_configured():
        mailjet = Client(auth=(env.mailjet["api_key"], env.mailjet["secret_key"]), version="v3.1")
    else:
        logger.warning("MAILJET_API_KEY not set, emails will be skipped")

    cache = CacheClient.from_url(env.redis["url"])
    wire_services(
        app,
        db=db,
        mailjet=mailjet,
        cache=cache,
        session_verifier=new_session_verifier(env.clerk["jwt_key"], env.clerk["algorithm"]),
        base_url=BASE_URL,
        sender_email=env.state["sender"],
        sender_name=env.state["sender_name"],
    )
    logger.info("QASkills API started | email=%s | cache=%s",
        "enabled" if mailjet else "disabled",
        "enabled" if cache.redis is not None else "disabled",
    )
    yield
    await cache.close()
    mongo_client.close()


app = FastAPI(title="QASkills Directory API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[CLIENT_LOCAL, CLIENT_PROD],
    allow_headers=ALLOW_HEADERS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PATCH", "OPTIONS"],
)

# Rate limiting configuration
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
app.add_middleware(SlowAPIMiddleware)

@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )

@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.debug("Rejected request to %s: %s", request.url.path, exc.errors())
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": INVALID_REQUEST},
    )

app.include_router(unsubscribe_router.router)
app.include_router(preferences_router.router)
app.include_router(webhook_router.router)
app.include_router(cron_router.router)
app.include_router(skills_router.router)
app.include_router(seo_router.router)

@app.get("/")
@limiter.limit("10/minute")
async def root_endpoint(request: Request):
    return JSONResponse(content={
        "ping": "pong",
        "message": "QASkills API pinged successfully :)"
    })
