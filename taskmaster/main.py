from fastapi import FastAPI

from taskmaster.config import settings
from taskmaster.errors import register_exception_handlers
from taskmaster.logging_setup import setup_logging
from taskmaster.routes.auth import router as auth_router
from taskmaster.routes.health import router as health_router
from taskmaster.routes.history import router as history_router
from taskmaster.routes.tasks import router as tasks_router
from taskmaster.routes.users import router as users_router

def create_app() -> FastAPI:
    setup_logging(settings.log_level)

    app = FastAPI(title="taskmaster-api", version="0.1.0")
    register_exception_handlers(app)
    app.include_router(health_router)
    app.include_router(auth_router)
    app.include_router(tasks_router)
    app.include_router(history_router)
    app.include_router(users_router)
    return app

app = create_app()
