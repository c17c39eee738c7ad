# main.py (raíz)
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
import uvicorn

from employee_cache.app_state import AppState
from employee_cache.config.settings import load_settings
from employee_cache.api.routes.employee_routes import router as employee_router
from employee_cache.api.middleware.error_handlers import register_error_handlers
from employee_cache.utils.logging_config import configure_logging

settings = load_settings()
configure_logging(settings.log_level)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    state = AppState.build(settings)
    app.state.app_state = state
    state.startup()
    yield
    state.shutdown()


app = FastAPI(title="Employee Cache API", version="1.0.0",
              description="Caché consultable (Redis) delante de la API externa de empleados.",
              lifespan=lifespan)

register_error_handlers(app)


@app.get("/", tags=["Health"])
async def root():
    return {"message": "✅ Employee Cache API is up and running."}

app.include_router(employee_router, prefix="/api/v1")


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=settings.api_port)
