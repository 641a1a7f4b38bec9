import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response

from hub.config import settings
from hub.db import SessionLocal, init_db
from hub.env import describe
from hub.errors import HubError
from hub.routers import ai, ats, documents, habits, job_applications, profile, resumes, support
from hub.scheduler import start_scheduler
from hub.services.gateway import GatewayClient

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
log = logging.getLogger("hub")

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
}

app = FastAPI(title="AI Productivity Hub")
# Credential is read once here and handed to the client explicitly.
app.state.gateway = GatewayClient.from_settings(settings)


@app.middleware("http")
async def cors(request: Request, call_next):
    if request.method == "OPTIONS":
        return Response(status_code=200, headers=CORS_HEADERS)
    response = await call_next(request)
    response.headers.update(CORS_HEADERS)
    return response


@app.exception_handler(HubError)
async def hub_error_handler(request: Request, exc: HubError):
    log.error("%s %s -> %s: %s", request.method, request.url.path, exc.status_code, exc.message)
    return JSONResponse({"error": exc.message}, status_code=exc.status_code)


app.include_router(ai.router)
app.include_router(profile.router)
app.include_router(resumes.router)
app.include_router(job_applications.router)
app.include_router(habits.router)
app.include_router(ats.router)
app.include_router(support.router)
app.include_router(documents.router)


@app.on_event("startup")
async def _startup():
    log.info("[startup] %s", describe())
    init_db()


@app.on_event("startup")
async def _on_startup():
    app.state.scheduler = start_scheduler(settings, SessionLocal, app.state.gateway)


@app.get("/healthz")
def health():
    return {"status": "ok", "ai_configured": app.state.gateway.configured}


def serve() -> None:
    import uvicorn

    uvicorn.run("hub.main:app", host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    serve()
