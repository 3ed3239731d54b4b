from __future__ import annotations

import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from auth import router as auth_router
from core import db as core_db
from core import errors, log, schema
from lists import router as lists_router
from users import router as users_router

DEFAULT_CORS_ORIGINS = (
    "http://localhost:3000",
    "http://127.0.0.1:3000",
    "http://localhost:5173",
    "http://127.0.0.1:5173",
)


def cors_origins() -> list[str]:
    raw = os.environ.get("CORS_ORIGINS", "").strip()
    if not raw:
        return list(DEFAULT_CORS_ORIGINS)
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def create_app(database: core_db.Database | None = None) -> FastAPI:
    log.configure_logging()
    database = database if database is not None else core_db.Database()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # One pool per process, owned by this app instance.
        await database.connect()
        try:
            if core_db.auto_migrate_enabled():
                await schema.apply_schema(database)
            yield
        finally:
            await database.close()

    app = FastAPI(title="todo-lists api", lifespan=lifespan)
    app.state.db = database

    # Allow the local frontend dev server to call this API from the browser.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    errors.install_exception_handlers(app)

    app.include_router(lists_router.router, tags=["lists"])
    app.include_router(users_router.router, tags=["users"])
    app.include_router(auth_router.router, tags=["auth"])

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    @app.get("/")
    def root() -> dict:
        return {"message": "todo-lists api"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=os.environ.get("HOST", "0.0.0.0"),
        port=int(os.environ.get("PORT", "8080")),
    )
