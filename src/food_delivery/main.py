import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from food_delivery.api import health, users
from food_delivery.api.routes import agents, auth, cart, menu, orders, restaurants, reviews
from food_delivery.config import settings
from food_delivery.exceptions import AccessDeniedError, AuthenticationError, BusinessRuleError, NotFoundError

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="[%(levelname)s] %(asctime)s %(name)s: %(message)s",
)
logger = logging.getLogger("food_delivery")

app = FastAPI(title="Food Delivery API")

# Подключаем роуты
app.include_router(health.router)
for module in (auth, users, restaurants, menu, cart, orders, reviews, agents):
    app.include_router(module.router, prefix="/api")


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message})


@app.exception_handler(AuthenticationError)
@app.exception_handler(AccessDeniedError)
@app.exception_handler(NotFoundError)
@app.exception_handler(BusinessRuleError)
async def domain_error_handler(request: Request, exc: Exception):
    if exc.status_code == 400:
        logger.warning("%s %s rejected: %s", request.method, request.url.path, exc)
    return error_response(exc.status_code, str(exc))


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return error_response(exc.status_code, str(exc.detail))


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    error = exc.errors()[0]
    location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
    message = f"{location}: {error['msg']}" if location else error["msg"]
    return error_response(400, message)


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return error_response(500, str(exc))


@app.on_event("startup")
async def on_startup():
    logger.info("Application started")

@app.on_event("shutdown")
async def on_shutdown():
    logger.info("Application stopped")
