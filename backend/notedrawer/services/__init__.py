# Services package init
"""
NoteDrawer Backend — Services Layer
====================================

What:  Business logic between routes (HTTP) and the database (persistence).

Service Inventory:
    - PasswordHasher: bcrypt hash / verify, run in the threadpool
    - TokenService:   signs and verifies {id, type} principal tokens
    - AccountService: user registration/login, drawer creation/login
    - NoteService:    note CRUD scoped to the caller's owner pair

The hasher and token service are built once from settings at startup and
reached through the dependencies in `notedrawer.dependencies`.
"""
