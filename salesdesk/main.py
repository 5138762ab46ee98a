from fastapi import FastAPI

from salesdesk.api.routes import api_router
from salesdesk.api.v1 import v1_router
from salesdesk.api.v1.errors import register_exception_handlers
from salesdesk.core.config import settings
from salesdesk.core.db import engine
from salesdesk.core.logging_config import setup_logging
from salesdesk.infrastructure.db import models  # noqa: F401  (registers tables)
from salesdesk.infrastructure.db.base import Base

setup_logging()

app = FastAPI(title=settings.APP_NAME, debug=settings.DEBUG)


@app.on_event("startup")
async def startup():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


register_exception_handlers(app)
app.include_router(api_router)
app.include_router(v1_router)
