"""
app/api/dependencies.py

Shared FastAPI dependencies for request validation.
"""

from __future__ import annotations

from pathlib import Path

from fastapi import File, HTTPException, UploadFile, status

from app.config import get_upload_settings


def get_spreadsheet_upload(file: UploadFile = File(...)) -> UploadFile:
    """
    Validate that the uploaded file has a supported spreadsheet extension.
    """

    allowed = get_upload_settings().allowed_extensions
    extension = Path((file.filename or "").strip()).suffix.lower()

    if extension not in allowed:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Only {', '.join(sorted(allowed))} files are allowed.",
        )

    return file
