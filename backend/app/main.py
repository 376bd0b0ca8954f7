from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.auth import router as auth_router
from app.api.chat import router as chat_router
from app.api.deployments import router as deployments_router
from app.api.files import router as files_router
from app.api.projects import router as projects_router
from app.api.suggestions import router as suggestions_router
from app.config import settings
from app.database import engine, init_db
from app.errors import AppError
from app.logger import configure_logging
from app.services.suggestions import SuggestionCatalog


@asynccontextmanager
async def lifespan(app: FastAPI):
    from sqlmodel import Session

    configure_logging(settings.log_level)
    init_db()
    with Session(engine) as session:
        SuggestionCatalog(session).seed_defaults()
    yield


app = FastAPI(title="AppForge", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    return JSONResponse(status_code=exc.status_code, content={"detail": str(exc)})


app.include_router(auth_router, prefix="/api")
app.include_router(projects_router, prefix="/api")
app.include_router(files_router, prefix="/api")
app.include_router(chat_router, prefix="/api")
app.include_router(deployments_router, prefix="/api")
app.include_router(suggestions_router, prefix="/api")


@app.get("/health")
async def health():
    return {"status": "ok"}


def run():
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
