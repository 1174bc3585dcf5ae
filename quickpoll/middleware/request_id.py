import logging
import uuid
from flask import g, request

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-Id"
MAX_REQUEST_ID_LENGTH = 128


def _incoming_request_id():
    rid = (request.headers.get(REQUEST_ID_HEADER) or "").strip()
    if not rid or len(rid) > MAX_REQUEST_ID_LENGTH:
        return None
    return rid


def init_request_id(app):
    @app.before_request
    def _assign_request_id():
        g.request_id = _incoming_request_id() or str(uuid.uuid4())

    @app.after_request
    def _add_request_id_header(response):
        rid = getattr(g, "request_id", None)
        if rid:
            response.headers[REQUEST_ID_HEADER] = rid
        logger.debug("%s %s -> %s request_id=%s", request.method, request.path, response.status_code, rid)
        return response
