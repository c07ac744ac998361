from marshmallow import fields

from models.base_model import as_utc


class UTCDateTime(fields.DateTime):
    """ISO 8601 with an explicit +00:00, also for the naive values SQLite returns."""

    def _serialize(self, value, attr, obj, **kwargs):
        return super()._serialize(as_utc(value), attr, obj, **kwargs)
