from .result_manager import ResultManager
from .schema import AnswerRow

__all__ = ["ResultManager", "AnswerRow"]
