import logging
import os

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from pymongo.database import Database
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import get_settings, setup_logging
from database import close_db, get_db
from errors import ServiceError, describe_validation_error, envelope
from routers import admin, auth, carts, categories, orders, products, ratings, testimonials

log = logging.getLogger(__name__)

app = FastAPI(title="Storefront API")


# Must be registered before CORSMiddleware, which then wraps it.
@app.middleware("http")
async def catch_unexpected_errors(request: Request, call_next):
    try:
        return await call_next(request)
    except Exception:
        log.exception("Unhandled error on %s %s", request.method, request.url.path)
        return _error(500, "Internal server error")


app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth.router)
app.include_router(categories.router)
app.include_router(products.router)
app.include_router(carts.router)
app.include_router(orders.router)
app.include_router(ratings.router)
app.include_router(testimonials.router)
app.include_router(admin.router)
app.include_router(testimonials.router, prefix="/admin")


@app.on_event("startup")
def startup():
    # Missing DATABASE_URL or JWT_SECRET stops the process here.
    settings = get_settings()
    setup_logging(settings.log_level)
    log.info("Storefront API starting")


@app.on_event("shutdown")
def shutdown():
    close_db()


# ----------------------- Error mapping -----------------------
def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=envelope(message))


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError):
    return _error(exc.status_code, exc.message)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return _error(exc.status_code, str(exc.detail))


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    return _error(400, "Invalid request body")


@app.exception_handler(ValidationError)
async def storage_validation_handler(request: Request, exc: ValidationError):
    return _error(400, describe_validation_error(exc))


# ----------------------- Health -----------------------
@app.get("/")
def root():
    return {"message": "Storefront API is running"}


@app.get("/test")
def test_database(db: Database = Depends(get_db)):
    response = {
        "backend": "Running",
        "database": "Not Available",
        "database_url": "Set" if os.getenv("DATABASE_URL") else "Not Set",
        "database_name": db.name,
        "connection_status": "Not Connected",
        "collections": [],
    }
    try:
        response["collections"] = db.list_collection_names()[:10]
        response["database"] = "Connected & Working"
        response["connection_status"] = "Connected"
    except Exception as e:
        log.warning("Database check failed: %s", e)
        response["database"] = f"Error: {str(e)[:80]}"
    return response


if __name__ == "__main__":
    import uvicorn
    port = int(os.getenv("PORT", 8000))
    uvicorn.run(app, host="0.0.0.0", port=port)
