"""Authentication-related Marshmallow schemas."""

from __future__ import annotations

from typing import Any

from marshmallow import EXCLUDE, Schema, fields, pre_load

from blogapi.schemas.user import UserSchema

# Alternative login keys still sent by older clients, in lookup order
LEGACY_IDENTIFIER_KEYS = ("usernameOrEmail", "username", "email")


class LoginSchema(Schema):
    """Input payload for authenticating a user.

    Both fields are optional here: the auth service reports a missing one
    with its own message.
    """

    class Meta:
        unknown = EXCLUDE

    identifier = fields.String(load_default=None, allow_none=True)
    password = fields.String(load_default=None, allow_none=True)

    @pre_load
    def accept_legacy_identifier(self, data: Any, **_: Any) -> Any:
        if not isinstance(data, dict) or data.get("identifier"):
            return data
        for key in LEGACY_IDENTIFIER_KEYS:
            if data.get(key):
                return {**data, "identifier": data[key]}
        return data


class RefreshSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    refresh_token = fields.String(data_key="refreshToken", load_default=None, allow_none=True)


class LogoutSchema(RefreshSchema):
    pass


class TokenPairSchema(Schema):
    """Response payload containing a rotated token pair."""

    accessToken = fields.String(attribute="access_token", required=True)
    refreshToken = fields.String(attribute="refresh_token", required=True)


class LoginResponseSchema(TokenPairSchema):
    user = fields.Nested(UserSchema, required=True)


class VerifyResponseSchema(Schema):
    message = fields.String(required=True)
    user = fields.Nested(UserSchema, required=True)
