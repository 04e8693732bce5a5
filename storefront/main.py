# Main application file



import logging
import time
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from storefront.init_db import init_db
from storefront.core.config import settings
from storefront.core.errors import register_exception_handlers
from storefront.core.rate_limiter import limiter
from storefront.core.storage import PUBLIC_URL_PREFIX
from storefront.routers import (
    admin,
    dashboard,
    inquiries,
    products,
    reviews,
    sales,
    seller,
)

API_PREFIX = "/api"


# LOGGING CONFIGURATION

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)s | %(message)s",
)

logger = logging.getLogger("storefront")


# APP INIT

@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    logger.info(f"Storefront API ready ({settings.ENV}) on port {settings.PORT}")
    yield


app = FastAPI(
    title="Storefront API",
    description="Catalog, inquiries, sales and reviews for a single-seller gadget store",
    version="1.0.0",
    lifespan=lifespan,
)


# CORS (Token-based auth)

allowed_origins = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
]
if settings.FRONTEND_URL:
    allowed_origins.append(settings.FRONTEND_URL)

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=False,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["Authorization", "Content-Type"],
)


# RATE LIMITING

app.state.limiter = limiter
app.add_exception_handler(
    RateLimitExceeded,
    _rate_limit_exceeded_handler
)


# ERROR HANDLING

register_exception_handlers(app)


# REQUEST LOGGING MIDDLEWARE

@app.middleware("http")
async def log_requests(request: Request, call_next):
    start_time = time.time()

    response = await call_next(request)

    duration = round((time.time() - start_time) * 1000, 2)

    logger.info(
        f"{request.method} {request.url.path} "
        f"Status: {response.status_code} "
        f"Time: {duration}ms"
    )

    return response


# ROUTERS

app.include_router(products.router, prefix=API_PREFIX)
app.include_router(inquiries.router, prefix=API_PREFIX)
app.include_router(sales.router, prefix=API_PREFIX)
app.include_router(dashboard.router, prefix=API_PREFIX)
app.include_router(reviews.router, prefix=API_PREFIX)
app.include_router(seller.router, prefix=API_PREFIX)
app.include_router(admin.router, prefix=API_PREFIX)


# UPLOADED IMAGES

Path(settings.UPLOAD_DIR).mkdir(parents=True, exist_ok=True)
app.mount(PUBLIC_URL_PREFIX, StaticFiles(directory=settings.UPLOAD_DIR), name="uploads")


# ROOT

@app.get("/")
def root():
    logger.info("Health check endpoint called")
    return {"message": "Storefront API is running"}


@app.get("/health")
def health():
    return {"status": "ok", "message": "Storefront API is running"}
