"""
FastAPI Dependencies Module

Dependencies are reusable components injected into route handlers.

Instead of writing:
    def get_book(db: Session = Depends(get_db)):

routes write:
    def get_book(db: DbSession):
"""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from library_api.database import get_db

DbSession = Annotated[Session, Depends(get_db)]
