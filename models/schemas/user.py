from marshmallow import EXCLUDE, Schema, fields, pre_load, validate

from models.schemas.common import UTCDateTime


def _norm_email(v):
    return v.strip().lower() if isinstance(v, str) else v


class UserCredentialsSchema(Schema):
    """Body of POST /users, PUT /users and POST /login."""

    class Meta:
        unknown = EXCLUDE

    email = fields.Email(required=True)
    password = fields.String(required=True, load_only=True, validate=validate.Length(min=1))

    @pre_load
    def normalize(self, data, **kwargs):
        if isinstance(data, dict) and "email" in data:
            data = dict(data, email=_norm_email(data["email"]))
        return data


class UserOutSchema(Schema):
    id = fields.String()
    created_at = UTCDateTime()
    updated_at = UTCDateTime()
    email = fields.String()
    is_chirpy_red = fields.Boolean()


class LoginOutSchema(UserOutSchema):
    token = fields.String()
    refresh_token = fields.String()


class TokenOutSchema(Schema):
    token = fields.String()
