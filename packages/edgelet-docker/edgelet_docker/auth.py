"""Registry credentials and their encoding for image pulls."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, ValidationError as PydanticValidationError

from edgelet_docker.exceptions import SerializationError
from edgelet_docker.models import AuthConfig


class RegistryAuthConfig(BaseModel):
    """Credentials for a private image registry.

    Every field is independently optional; unset fields are left out of the
    payload sent to the engine.
    """

    model_config = ConfigDict(frozen=True)

    user_name: str | None = None
    password: str | None = None
    email: str | None = None
    server: str | None = None


def serialize_registry_creds(credentials: RegistryAuthConfig | None) -> str:
    """Encode *credentials* as the engine's JSON credential object.

    Returns the empty string when *credentials* is ``None`` (never ``"null"``
    or ``"{}"``), so callers can skip the auth header entirely.
    """
    if credentials is None:
        return ""

    fields: dict[str, str] = {}
    if credentials.user_name is not None:
        fields["username"] = credentials.user_name
    if credentials.password is not None:
        fields["password"] = credentials.password
    if credentials.email is not None:
        fields["email"] = credentials.email
    if credentials.server is not None:
        fields["serveraddress"] = credentials.server

    try:
        return AuthConfig(**fields).model_dump_json(exclude_none=True)
    except PydanticValidationError as exc:
        raise SerializationError(f"Cannot encode registry credentials: {exc}") from exc
