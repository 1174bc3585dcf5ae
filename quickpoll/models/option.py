import uuid
from datetime import datetime
from sqlalchemy import Uuid
from ..extensions import db


class Option(db.Model):
    __tablename__ = "options"

    id = db.Column(Uuid, primary_key=True, default=uuid.uuid4)

    text = db.Column(db.String(200), nullable=False)
    votes = db.Column(db.Integer, nullable=False, default=0)
    link_to_vote = db.Column(db.String(255), nullable=True)

    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    __table_args__ = (
        db.CheckConstraint("votes >= 0", name="ck_options_votes_non_negative"),
    )
