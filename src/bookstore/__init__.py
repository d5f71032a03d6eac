"""Bookstore API.

A FastAPI service exposing CRUD endpoints for book records stored in a
relational database through SQLModel.
"""

__version__ = "0.1.0"
