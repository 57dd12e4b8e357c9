"""
Library API

A FastAPI service for managing books and their authors.
"""

__version__ = "1.0.0"
