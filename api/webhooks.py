from flask import Blueprint, request

from api.state import account_service
from models.schemas.webhook import UpgradeWebhookSchema
from services.errors import UnauthorizedError
from utils.security import AuthorizationHeaderError, get_api_key

bp = Blueprint("webhooks", __name__)

webhook_schema = UpgradeWebhookSchema()


@bp.post("/webhook/upgrade")
def upgrade_webhook():
    """
    Payment provider webhook (Authorization: ApiKey <key>)
    ---
    tags:
      - Webhooks
    consumes:
      - application/json
    parameters:
      - in: body
        name: body
        schema:
          type: object
          properties:
            event: { type: string, example: user.upgraded }
            data:
              type: object
              properties:
                user_id: { type: string }
    responses:
      204:
        description: Accepted (unknown events are ignored)
      401:
        description: Bad API key
      404:
        description: User not found
    """
    try:
        api_key = get_api_key(request.headers)
    except AuthorizationHeaderError as e:
        raise UnauthorizedError("Couldn't find api key") from e

    accounts = account_service()
    # key first: a bad key is 401 whatever the body looks like
    accounts.check_webhook_key(api_key)

    payload = request.get_json(silent=True)
    data = webhook_schema.load(payload if isinstance(payload, dict) else {})
    accounts.apply_upgrade_webhook(api_key, data["event"], data["user_id"])
    return ("", 204)
