import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# ✅ Import All API Routes
from jobportal.api.routes import (
    admin,
    applications,
    auth,
    companies,
    company_applications,
    health,
    jobs,
    notifications,
    profile,
    system,
)
from jobportal.core.config import FRONTEND_URL, LOG_LEVEL, RUN_MIGRATIONS
from jobportal.core.errors import register_error_handlers
from jobportal.core.logging_config import setup_logging

setup_logging(LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if RUN_MIGRATIONS:
        from jobportal.db.migrate import run_migrations
        run_migrations()
    else:
        from jobportal.db.init_db import init_db
        init_db()
    logger.info("Job Portal API started")
    yield


# ============================================
# ✅ FASTAPI APP INIT
# ============================================

app = FastAPI(title="Job Portal API", lifespan=lifespan)

# ✅ CORS - only the configured frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        FRONTEND_URL,
        "http://127.0.0.1:3000",
    ],
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
    allow_headers=["Authorization", "Content-Type"],
)

register_error_handlers(app)


# ============================================
# ✅ REGISTER ALL ROUTERS
# ============================================

app.include_router(auth.router)
app.include_router(profile.router)
app.include_router(companies.router)
app.include_router(company_applications.router)
app.include_router(jobs.router)
app.include_router(applications.router)
app.include_router(notifications.router)
app.include_router(admin.router)
app.include_router(health.router)
app.include_router(system.router)


@app.get("/")
def root():
    return {"status": "Job Portal API running"}
