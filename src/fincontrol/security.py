"""Bearer-token guard for API routes."""

from __future__ import annotations

from functools import wraps
from typing import Callable, TypeVar, cast

from flask import g, request

from .domain.entities import TokenIdentity
from .extensions import get_services
from .services.auth import token_from_header

F = TypeVar("F", bound=Callable)


def token_required(view: F) -> F:
    """Verify the Authorization header and expose the identity as ``g.identity``."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        token = token_from_header(request.headers.get("Authorization"))
        g.identity = get_services().auth.verify(token)
        return view(*args, **kwargs)

    return cast(F, wrapper)


def current_identity() -> TokenIdentity:
    return g.identity
