# Routes package init
"""
QuickNotes Backend - API Routes Package
========================================

Route Inventory:
    - notes.py:   POST   /api/notes          (create)
                  GET    /api/notes          (list)
                  GET    /api/notes/{id}     (detail)
                  PUT    /api/notes/{id}     (partial update)
                  DELETE /api/notes/{id}     (delete)
    - health.py:  GET    /                   (liveness message)
                  GET    /health             (service health check)

Routes stay thin: extract request data, call NoteService, unwrap the
result, wrap it in a response envelope.
"""
