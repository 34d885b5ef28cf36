"""
OC Wiki Backend

Authentication and shared utilities for the OC Wiki site.

Package Structure:
==================
    ocwiki/
    ├── api/        ← FastAPI application
    ├── shared/     ← Utilities, services, schemas
    └── config/     ← Configuration

Running the Application:
========================
    uvicorn ocwiki.api.main:app --reload
"""
