from .errors import InvalidInput, InvalidTransition, QuizError
from .models import STRATEGIES, GradeResult, Problem, Question, QuizSummary, celebration_message
from .scaling import ScalingQuiz, format_answer, generate_batch, generate_distractors, generate_question
from .strategy import StrategyQuiz, generate_strategy_problem

__all__ = [
    "InvalidInput",
    "InvalidTransition",
    "QuizError",
    "STRATEGIES",
    "GradeResult",
    "Problem",
    "Question",
    "QuizSummary",
    "celebration_message",
    "ScalingQuiz",
    "format_answer",
    "generate_batch",
    "generate_distractors",
    "generate_question",
    "StrategyQuiz",
    "generate_strategy_problem",
]
