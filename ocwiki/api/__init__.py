"""
API Package

FastAPI application for OC Wiki admin authentication.

Usage:
======
    uvicorn ocwiki.api.main:app --reload
"""
