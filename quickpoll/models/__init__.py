from .question import Question, QuestionOption  # noqa: F401
from .option import Option  # noqa: F401

# Import ALL models so SQLAlchemy registers them

__all__ = [
    "Question",
    "QuestionOption",
    "Option",
]
