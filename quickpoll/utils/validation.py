from flask import request
from ..errors import ValidationFailed


def request_payload() -> dict:
    """JSON body, falling back to an url-encoded form."""
    payload = request.get_json(silent=True)
    if isinstance(payload, dict):
        return payload
    return request.form.to_dict()


def validate_or_abort(schema, payload):
    errors = schema.validate(payload)
    if errors:
        raise ValidationFailed("Validation error", details=errors)
    return payload
