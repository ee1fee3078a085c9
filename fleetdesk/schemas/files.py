"""
Pydantic schemas for stored files.
"""
from pydantic import BaseModel
from typing import Optional


class FileRef(BaseModel):
    """Reference to a file held by the blob store."""
    id: str
    name: str
    view_url: Optional[str] = None
