"""Tollgate - credential-based session management.

Layers:
    domain/          Shared error taxonomy and time helpers
    application/     SessionManager, AuthorizationGuard, AuthFacade
    infrastructure/  Query helpers for ownership scoping
    presentation/    FastAPI boundary adapter and Typer CLI
"""
