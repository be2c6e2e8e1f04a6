"""
Pydantic request/response models.

    auth.py  → Principal union, account and drawer bodies
    note.py  → note CRUD, error and health bodies
"""
