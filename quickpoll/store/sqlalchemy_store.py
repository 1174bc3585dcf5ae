import logging
from contextlib import contextmanager
from typing import Iterable, List, Optional

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import SQLAlchemyError

from ..errors import StoreFailure
from ..extensions import db
from ..models.option import Option
from ..models.question import Question, QuestionOption
from .base import OptionRecord, PollStore, QuestionRecord

logger = logging.getLogger(__name__)


def _question_record(question: Question) -> QuestionRecord:
    return QuestionRecord(id=question.id, title=question.title, option_ids=question.option_ids)


def _option_record(option: Option) -> OptionRecord:
    return OptionRecord(
        id=option.id,
        text=option.text,
        votes=option.votes,
        link_to_vote=option.link_to_vote,
    )


@contextmanager
def _unit_of_work(action: str):
    """Commit one store call on its own. Errors roll back and surface as StoreFailure."""
    try:
        yield db.session
        db.session.commit()
    except SQLAlchemyError as exc:
        db.session.rollback()
        logger.exception("DB error while trying to %s", action)
        raise StoreFailure(f"Failed to {action}") from exc


class SqlAlchemyPollStore(PollStore):
    """Store over the Flask-SQLAlchemy session of the current app context.

    Each method is its own transaction; a question and its reference rows
    count as one record, options are separate records.
    """

    # Questions

    def list_questions(self) -> List[QuestionRecord]:
        with _unit_of_work("list questions") as session:
            questions = session.execute(
                select(Question).order_by(Question.seq, Question.created_at, Question.id)
            ).scalars().all()
            return [_question_record(q) for q in questions]

    def find_question(self, question_id) -> Optional[QuestionRecord]:
        with _unit_of_work("load question") as session:
            question = session.get(Question, question_id)
            return _question_record(question) if question else None

    def create_question(self, title: str) -> QuestionRecord:
        with _unit_of_work("create question") as session:
            question = Question(
                title=title,
                seq=select(func.coalesce(func.max(Question.seq), 0) + 1).scalar_subquery(),
            )
            session.add(question)
            session.flush()
            return _question_record(question)

    def update_question_options(self, question_id, option_ids: Iterable) -> bool:
        with _unit_of_work("update question options") as session:
            question = session.get(Question, question_id)
            if not question:
                return False
            question.option_refs = [
                QuestionOption(option_id=oid, position=pos) for pos, oid in enumerate(option_ids)
            ]
            return True

    def append_option_ref(self, question_id, option_id) -> bool:
        with _unit_of_work("link option to question") as session:
            if session.get(Question, question_id) is None:
                return False
            last = session.execute(
                select(func.max(QuestionOption.position)).where(QuestionOption.question_id == question_id)
            ).scalar()
            session.add(QuestionOption(
                question_id=question_id,
                option_id=option_id,
                position=0 if last is None else last + 1,
            ))
            return True

    def pull_option_ref(self, question_id, option_id) -> bool:
        with _unit_of_work("unlink option from question") as session:
            if session.get(Question, question_id) is None:
                return False
            session.execute(
                delete(QuestionOption)
                .where(QuestionOption.question_id == question_id, QuestionOption.option_id == option_id)
                .execution_options(synchronize_session="fetch")
            )
            return True

    def delete_question(self, question_id) -> None:
        with _unit_of_work("delete question") as session:
            # Bulk deletes skip ORM cascades, and SQLite ignores ON DELETE by default.
            session.execute(
                delete(QuestionOption)
                .where(QuestionOption.question_id == question_id)
                .execution_options(synchronize_session="fetch")
            )
            session.execute(
                delete(Question)
                .where(Question.id == question_id)
                .execution_options(synchronize_session="fetch")
            )

    def find_question_owning(self, option_id) -> Optional[QuestionRecord]:
        with _unit_of_work("look up owning question") as session:
            question = session.execute(
                select(Question)
                .join(QuestionOption, QuestionOption.question_id == Question.id)
                .where(QuestionOption.option_id == option_id)
                .order_by(QuestionOption.id)
                .limit(1)
            ).scalars().first()
            return _question_record(question) if question else None

    # Options

    def find_option(self, option_id) -> Optional[OptionRecord]:
        with _unit_of_work("load option") as session:
            option = session.get(Option, option_id)
            return _option_record(option) if option else None

    def find_options(self, option_ids: Iterable) -> List[OptionRecord]:
        option_ids = list(option_ids)
        if not option_ids:
            return []
        with _unit_of_work("load options") as session:
            found = {
                o.id: o for o in session.execute(select(Option).where(Option.id.in_(option_ids))).scalars()
            }
            return [_option_record(found[oid]) for oid in option_ids if oid in found]

    def create_option(self, text: str) -> OptionRecord:
        with _unit_of_work("create option") as session:
            option = Option(text=text, votes=0)
            session.add(option)
            session.flush()
            return _option_record(option)

    def set_option_vote_link(self, option_id, link: str) -> Optional[OptionRecord]:
        with _unit_of_work("record vote link") as session:
            option = session.get(Option, option_id)
            if not option:
                return None
            option.link_to_vote = link
            session.flush()
            return _option_record(option)

    def increment_option_votes(self, option_id) -> Optional[OptionRecord]:
        with _unit_of_work("add vote") as session:
            result = session.execute(
                update(Option)
                .where(Option.id == option_id)
                .values(votes=Option.votes + 1)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                return None
            option = session.execute(select(Option).where(Option.id == option_id)).scalars().one()
            session.refresh(option)
            return _option_record(option)

    def delete_option(self, option_id) -> None:
        with _unit_of_work("delete option") as session:
            session.execute(
                delete(Option)
                .where(Option.id == option_id)
                .execution_options(synchronize_session="fetch")
            )

    def delete_options(self, option_ids: Iterable) -> int:
        option_ids = list(option_ids)
        if not option_ids:
            return 0
        with _unit_of_work("delete options") as session:
            result = session.execute(
                delete(Option)
                .where(Option.id.in_(option_ids))
                .execution_options(synchronize_session="fetch")
            )
            return result.rowcount
