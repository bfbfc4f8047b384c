# ========================================
# workboard/main.py - application entry point
# ========================================

import logging
import os

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from workboard.database import connect_to_mongo, close_mongo_connection

from workboard.routes.user import router as user_router
from workboard.routes.job import router as job_router
from workboard.routes.application import router as application_router
from workboard.routes.recruiter_dashboard import router as recruiter_dashboard_router
from workboard.routes.document import router as document_router
from workboard.routes.identity import router as identity_router

load_dotenv()

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

API_VERSION = "1.0.0"

# ===========================
# CREATE FASTAPI APP
# ===========================

app = FastAPI(
    title="Workboard API",
    description="Job board backend: postings, document-backed applications and hiring-funnel tracking",
    version=API_VERSION,
    docs_url="/docs",
    redoc_url="/redoc"
)

# ===========================
# CORS MIDDLEWARE
# ===========================
raw_origins = os.getenv("ALLOWED_ORIGINS", "")
origins = [o.strip() for o in raw_origins.split(",") if o.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ===========================
# DATABASE EVENTS
# ===========================

@app.on_event("startup")
async def start_db():
    """Connect to MongoDB on startup"""
    await connect_to_mongo()

@app.on_event("shutdown")
async def stop_db():
    """Close MongoDB connection on shutdown"""
    await close_mongo_connection()

# ===========================
# REGISTER ROUTERS
# ===========================

app.include_router(user_router, tags=["Users"])
app.include_router(job_router, tags=["Jobs"])
app.include_router(application_router, tags=["Applications"])
app.include_router(recruiter_dashboard_router, tags=["Employer Dashboard"])
app.include_router(document_router, tags=["Documents"])
app.include_router(identity_router, tags=["Identity"])

# ===========================
# ROOT ENDPOINTS
# ===========================

@app.get("/")
async def root():
    """API root endpoint with a map of the routes"""
    return {
        "status": "Workboard API running",
        "version": API_VERSION,
        "documentation": "/docs",
        "endpoints": {
            "authentication": ["/users/register", "/users/login", "/users/profile"],
            "candidate": [
                "/jobs",
                "/jobs/{job_id}/check-application",
                "/documents",
                "/verify-identity",
                "/applications (POST)",
                "/my-applications"
            ],
            "employer": [
                "/jobs (POST/DELETE)",
                "/recruiter/my-jobs",
                "/recruiter/applications",
                "/applications?job_id=...",
                "/applications/{id}/status",
                "/applications/{id}/events/{event}",
                "/documents/signed-url"
            ]
        }
    }


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "version": API_VERSION
    }
