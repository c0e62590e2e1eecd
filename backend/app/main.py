from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.auth import router as auth_router
from app.api.errors import register_exception_handlers
from app.api.health import router as health_router
from app.api.routes_products import router as products_router
from app.config import settings
from app.db import init_db
from app.utils.logs import get_logger

log = get_logger("http")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # schema sync must finish before traffic; init_db raises on failure
    init_db(reset=settings.RESET_DB)
    log.info("Ready to accept requests.")
    yield


app = FastAPI(title="Big Biz Product Catalog API", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.FRONTEND_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(health_router)

app.include_router(auth_router)

app.include_router(products_router)


def run():
    uvicorn.run(app, host=settings.APP_HOST, port=settings.APP_PORT)


if __name__ == "__main__":
    run()
