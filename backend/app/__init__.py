"""
QuickNotes Backend - Application Package Initializer
=====================================================

What: Marks the `app` directory as a Python package.
Who:  Used implicitly by Python's import system and explicitly by pytest and uvicorn.

Architecture Note:
    This backend follows a layered architecture:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← Validation, result mapping
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← Note record + Pydantic contracts
    ├─────────────────────────────────────┤
    │        Storage (In-memory)          │  ← NoteStore, id generation
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
