from marshmallow import EXCLUDE, Schema, fields, post_load


class UpgradeWebhookSchema(Schema):
    """Payload posted by the payment provider.

    Loading never fails: events we do not handle are acknowledged whatever
    their shape, so `event` and `data` are taken as-is and user_id is only
    picked out when it is a string inside an object.
    """

    class Meta:
        unknown = EXCLUDE

    event = fields.Raw(load_default=None, allow_none=True)
    data = fields.Raw(load_default=None, allow_none=True)

    @post_load
    def extract_user_id(self, data, **kwargs):
        inner = data.get("data")
        user_id = inner.get("user_id") if isinstance(inner, dict) else None
        return {"event": data.get("event"), "user_id": user_id if isinstance(user_id, str) else None}
