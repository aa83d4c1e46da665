"""
Shared, cross-cutting code for the API.

`core/` holds the building blocks every resource uses: DB wiring, settings,
error kinds and the generic CRUD repository. Resource-specific validation and
routes live in the resource packages (`products/`, `categories/`, `auth/`).
"""
