"""Shared dependencies for API routes."""

from fastapi import Request

from services.session_store import SessionStore


def get_session_store(request: Request) -> SessionStore:
    return request.app.state.session_store
