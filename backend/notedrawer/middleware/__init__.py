# Middleware package init
"""
NoteDrawer Backend — Middleware Package
========================================

Middleware Chain:
    Request → [Request ID] → [Logging] → [CORS] → Route Handler

    1. Request ID: correlation ID for logs and error bodies
    2. Logging: method, path, status and duration, tagged with the ID
    3. CORS: FastAPI's CORSMiddleware (handles preflight)

Authentication is not middleware: protected routes declare the
`get_current_principal` dependency, so public routes never see it.
"""
