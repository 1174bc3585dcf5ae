from flask import Blueprint, request
from flasgger import swag_from
from ...extensions import current_poll_service
from ...schemas.question import QuestionCreateSchema, QuestionReadSchema, QuestionSummarySchema
from ...utils.validation import request_payload, validate_or_abort

questions_bp = Blueprint("questions", __name__)

question_create_schema = QuestionCreateSchema()
question_read_schema = QuestionReadSchema()
question_summary_schema = QuestionSummarySchema()

_ERROR = {"schema": {"$ref": "#/definitions/ErrorResponse"}}


@questions_bp.post("/create")
@swag_from({
    "tags": ["Questions"],
    "summary": "Create a question with no options",
    "parameters": [{
        "in": "body",
        "name": "body",
        "required": True,
        "schema": {"type": "object", "properties": {"title": {"type": "string"}}, "required": ["title"]},
    }],
    "responses": {201: {"description": "Created"}, 400: {"description": "Validation error", **_ERROR}}
})
def create_question():
    payload = validate_or_abort(question_create_schema, request_payload())
    question = current_poll_service().create_question(payload["title"])
    return {"message": "Question Created Successfully", "data": question_summary_schema.dump(question)}, 201


@questions_bp.get("/<question_id>")
@swag_from({
    "tags": ["Questions"],
    "summary": "Get a question with its options",
    "description": "Vote links are built from the host the request was made to.",
    "responses": {200: {"description": "OK"}, 400: {"description": "Invalid ID", **_ERROR}, 404: {"description": "Question not found", **_ERROR}}
})
def get_question(question_id):
    question = current_poll_service().get_question(question_id, link_base=request.host_url)
    return {"message": "Question details retrieved successfully", "data": question_read_schema.dump(question)}, 200


@questions_bp.delete("/<question_id>/delete")
@swag_from({
    "tags": ["Questions"],
    "summary": "Delete a question and all of its options",
    "description": "Refused with 403 while any option of the question has votes.",
    "responses": {
        200: {"description": "Deleted"},
        400: {"description": "Invalid ID", **_ERROR},
        403: {"description": "An option has votes", **_ERROR},
        404: {"description": "Question not found", **_ERROR},
    }
})
def delete_question(question_id):
    current_poll_service().delete_question(question_id)
    return {"message": "Question and associated options deleted successfully"}, 200
