from marshmallow import Schema, fields, validate, EXCLUDE
from ..extensions import ma


class OptionCreateSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    text = fields.Str(required=True, validate=validate.Length(min=1, max=200))


class OptionReadSchema(ma.Schema):
    id = fields.UUID()
    text = fields.Str()
    votes = fields.Int()
    link_to_vote = fields.Str(allow_none=True)
