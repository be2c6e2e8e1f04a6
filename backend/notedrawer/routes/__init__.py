# Routes package init
"""
NoteDrawer Backend — API Routes Package
========================================

Route Inventory:
    - auth.py:     POST /api/register, POST /api/login
    - drawers.py:  POST /api/drawers, POST /api/drawers/login
    - notes.py:    GET/POST /api/notes, PUT/DELETE /api/notes/{id}  (bearer)
    - health.py:   GET  /health

Routes stay thin: they parse the request, call a service and shape the
response. Ownership and credential rules live in the services.
"""
