import os
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv

from study_api.db import get_settings, verify_connection, close_client
from study_api.routers import (
    subjects_router,
    flashcards_router,
    reviews_router,
    study_router,
    stats_router,
    dashboard_router,
    search_router,
)
from study_api.auth import get_auth_settings

load_dotenv()


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    auth_settings = get_auth_settings()

    if auth_settings.enabled:
        if auth_settings.is_configured():
            print("✓ Token authentication enabled")
            if auth_settings.issuer:
                print(f"  Issuer: {auth_settings.issuer}")
            print(f"  Audience: {auth_settings.audience}")
        else:
            print("⚠ Authentication enabled but not configured (missing SUPABASE_JWT_SECRET or SUPABASE_URL)")
    else:
        print("⚠ Authentication DISABLED - using X-User-Id header fallback (dev mode)")

    if settings.is_configured():
        if verify_connection():
            print("✓ Connected to Cosmos DB")
        else:
            print("✗ Failed to connect to Cosmos DB - check configuration")
    else:
        print("⚠ Cosmos DB not configured (COSMOS_ENDPOINT/COSMOS_EMULATOR not set)")

    yield

    close_client()
    print("✓ Cosmos DB connection closed")


app = FastAPI(
    title="Study Assistant API",
    description="Subjects, flashcards and spaced-repetition reviews",
    version="1.0.0",
    lifespan=lifespan,
)

cors_origins = os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",")
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(subjects_router)
app.include_router(flashcards_router)
app.include_router(reviews_router)
app.include_router(study_router)
app.include_router(stats_router)
app.include_router(dashboard_router)
app.include_router(search_router)


@app.get("/")
async def root():
    """Root endpoint with API info."""
    return {
        "name": "Study Assistant API",
        "version": "1.0.0",
        "endpoints": {
            "health": "/healthz",
            "subjects": "/subjects",
            "flashcards": "/subjects/{subject_id}/flashcards",
            "review": "/flashcards/update-review",
            "study": "/subjects/{subject_id}/study",
            "stats": "/subjects/{subject_id}/stats",
            "calendar": "/calendar",
            "dashboard": "/dashboard",
            "search": "/search",
        },
    }


@app.get("/healthz")
async def healthz():
    """Health check endpoint."""
    return {"status": "healthy"}
