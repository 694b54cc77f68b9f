# Services package init
"""
QuickNotes Backend - Services Layer
====================================

Service Inventory:
    - NoteService:   Business rules for the note resource
    - ServiceResult: Value-or-error return type shared by service methods
"""
