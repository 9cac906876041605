"""
DressStore Backend: Application Package
=========================================

A small FastAPI service exposing CRUD operations over store products.

Layers:
    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← one persistence call per operation
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Database handle, async sessions
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
