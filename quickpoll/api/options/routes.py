from flask import Blueprint
from flasgger import swag_from
from ...extensions import current_poll_service
from ...schemas.option import OptionCreateSchema, OptionReadSchema
from ...utils.validation import request_payload, validate_or_abort

options_bp = Blueprint("options", __name__)

option_create_schema = OptionCreateSchema()
option_read_schema = OptionReadSchema()

_ERROR = {"schema": {"$ref": "#/definitions/ErrorResponse"}}


@options_bp.post("/<question_id>/create")
@swag_from({
    "tags": ["Options"],
    "summary": "Add an option to a question",
    "parameters": [
        {"in": "path", "name": "question_id", "required": True, "type": "string"},
        {
            "in": "body",
            "name": "body",
            "required": True,
            "schema": {"type": "object", "properties": {"text": {"type": "string"}}, "required": ["text"]},
        },
    ],
    "responses": {
        201: {"description": "Created", "schema": {"$ref": "#/definitions/Option"}},
        400: {"description": "Validation error", **_ERROR},
        404: {"description": "Question not found", **_ERROR},
    }
})
def create_option(question_id):
    payload = validate_or_abort(option_create_schema, request_payload())
    option = current_poll_service().attach_option(question_id, payload["text"])
    return {"message": "Option created successfully", "data": option_read_schema.dump(option)}, 201


@options_bp.delete("/<option_id>/delete")
@swag_from({
    "tags": ["Options"],
    "summary": "Delete an option that has no votes",
    "responses": {
        200: {"description": "Deleted"},
        400: {"description": "Invalid ID", **_ERROR},
        403: {"description": "Option has votes", **_ERROR},
        404: {"description": "Option not found", **_ERROR},
    }
})
def delete_option(option_id):
    result = current_poll_service().delete_option(option_id)
    message = "Orphan option deleted successfully" if result.orphan else "Option deleted successfully"
    return {"message": message, "orphan": result.orphan, "data": option_read_schema.dump(result.option)}, 200


@options_bp.route("/<option_id>/add_vote", methods=["GET", "POST"])
@swag_from({
    "tags": ["Options"],
    "summary": "Add one vote to an option",
    "description": "GET is accepted so the stored link_to_vote can be followed directly.",
    "responses": {200: {"description": "Vote added"}, 400: {"description": "Invalid ID", **_ERROR}, 404: {"description": "Option not found", **_ERROR}}
})
def add_vote(option_id):
    option = current_poll_service().cast_vote(option_id)
    return {"message": "Vote added successfully to option", "data": option_read_schema.dump(option)}, 200
