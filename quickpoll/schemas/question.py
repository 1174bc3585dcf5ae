from marshmallow import Schema, fields, validate, EXCLUDE
from ..extensions import ma
from .option import OptionReadSchema


class QuestionCreateSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    title = fields.Str(required=True, validate=validate.Length(min=1, max=200))


class QuestionReadSchema(ma.Schema):
    id = fields.UUID()
    title = fields.Str()
    options = fields.List(fields.Nested(OptionReadSchema))


class QuestionSummarySchema(ma.Schema):
    """A question as stored: option references only, not resolved."""

    id = fields.UUID()
    title = fields.Str()
    options = fields.List(fields.UUID(), attribute="option_ids")
