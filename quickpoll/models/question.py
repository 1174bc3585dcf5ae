import uuid
from datetime import datetime
from sqlalchemy import Uuid
from ..extensions import db


class Question(db.Model):
    __tablename__ = "questions"

    id = db.Column(Uuid, primary_key=True, default=uuid.uuid4)
    title = db.Column(db.String(200), nullable=False)
    # Creation order; assigned as max(seq) + 1 inside the INSERT
    seq = db.Column(db.Integer, nullable=False, default=0, index=True)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow, index=True)

    # Ordered list of option references. Not a foreign key: the store does not
    # enforce that a referenced option exists.
    option_refs = db.relationship(
        "QuestionOption",
        backref="question",
        lazy=True,
        order_by=lambda: [QuestionOption.position, QuestionOption.id],
        cascade="all, delete-orphan",
    )

    @property
    def option_ids(self):
        return [ref.option_id for ref in self.option_refs]


class QuestionOption(db.Model):
    __tablename__ = "question_options"

    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    question_id = db.Column(Uuid, db.ForeignKey("questions.id", ondelete="CASCADE"), nullable=False, index=True)
    option_id = db.Column(Uuid, nullable=False)
    position = db.Column(db.Integer, nullable=False, default=0)

    __table_args__ = (
        # reverse lookup: which question owns this option
        db.Index("ix_question_options_option_id", "option_id"),
    )
