"""Credential payload binding."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class CredentialsForm:
    username: str = ""
    password: str = ""

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> CredentialsForm:
        """Bind a JSON body; non-string values are treated as absent."""

        if not isinstance(data, Mapping):
            return cls()
        username = data.get("username")
        password = data.get("password")
        return cls(
            username=username if isinstance(username, str) else "",
            password=password if isinstance(password, str) else "",
        )
