import logging
import os

from fastapi import FastAPI

from fixwise.base.errors import register_exception_handlers
from fixwise.maintenance.router import router as maintenance_router

logging.basicConfig(
    level=os.environ.get("FIXWISE_LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title="Fixwise")
app.include_router(maintenance_router)
register_exception_handlers(app)


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}
