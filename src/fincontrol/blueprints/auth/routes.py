"""Registration and login endpoints."""

from __future__ import annotations

from flask import jsonify, request

from ...extensions import get_services
from . import bp
from .forms import CredentialsForm


@bp.post("/register")
def register():
    form = CredentialsForm.from_mapping(request.get_json(silent=True))
    user_id = get_services().auth.register(form.username, form.password)
    return jsonify({"message": "Usuario registrado exitosamente.", "id": user_id}), 201


@bp.post("/login")
def login():
    form = CredentialsForm.from_mapping(request.get_json(silent=True))
    token = get_services().auth.login(form.username, form.password)
    return jsonify({"token": token})
