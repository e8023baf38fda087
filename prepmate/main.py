# prepmate/main.py
import logging
from datetime import datetime

from fastapi import FastAPI

from prepmate.api.v1.auth import router as auth_router
from prepmate.api.v1.challenges import router as challenges_router
from prepmate.api.v1.generate import router as generate_router
from prepmate.api.v1.insights import router as insights_router
from prepmate.api.v1.progress import router as progress_router
from prepmate.api.v1.resources import router as resources_router
from prepmate.api.v1.resume_improver import router as resume_improver_router
from prepmate.api.v1.resumes import router as resumes_router
from prepmate.core.config import settings
from prepmate.db.mongo import close_db, init_db

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="PrepMate API")

app.include_router(auth_router)
app.include_router(resumes_router)
app.include_router(generate_router)
app.include_router(resume_improver_router)
app.include_router(resources_router)
app.include_router(progress_router)
app.include_router(challenges_router)
app.include_router(insights_router)


@app.get("/api/health")
async def health():
    return {"status": "OK", "timestamp": datetime.utcnow().isoformat()}


@app.on_event("startup")
async def startup_event():
    await init_db()
    logger.info("PrepMate API started (env=%s, llm adapter=%s)", settings.APP_ENV, settings.LLM_ADAPTER)


@app.on_event("shutdown")
async def shutdown_event():
    close_db()
