"""
API Module

FastAPI application and route handlers.

Package Structure:
==================
    api/
    ├── main.py           ← Application entry point
    ├── routes.py         ← Route registration
    ├── dependencies/     ← FastAPI dependencies
    ├── handlers/         ← Route handlers
    └── middleware/       ← Error envelope, request logging

Usage:
======
    # Run the API
    uvicorn media_platform.api.main:app --reload

    # Import the app
    from media_platform.api.main import app, create_application
"""
