from flask import Blueprint
from flasgger import swag_from
from ...extensions import current_poll_service
from ...schemas.question import QuestionReadSchema

home_bp = Blueprint("home", __name__)

question_read_many_schema = QuestionReadSchema(many=True)


@home_bp.get("/")
@swag_from({
    "tags": ["Questions"],
    "summary": "List every question with its options",
    "responses": {200: {"description": "OK"}, 500: {"description": "Store failure", "schema": {"$ref": "#/definitions/ErrorResponse"}}}
})
def list_questions():
    questions = current_poll_service().list_questions()
    return {"questions": question_read_many_schema.dump(questions)}, 200


@home_bp.get("/health")
def health():
    return {"status": "ok"}, 200
