from fastapi import FastAPI

from .audit import router as audit_router


def create_app() -> FastAPI:
    app = FastAPI(title="Fiscal audit")
    app.include_router(audit_router)
    return app
