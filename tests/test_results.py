import random
import unittest

from pydantic import ValidationError

from mathquiz.app.events import EventBus
from mathquiz.quiz.strategy import StrategyQuiz
from mathquiz.results import AnswerRow, ResultManager


def _payload(**kw):
    base = {
        "quiz": "strategy",
        "index": 1,
        "category": "Compensation",
        "prompt": "9 × 99",
        "given": "891",
        "expected": "891",
        "correct": True,
        "points": 5,
    }
    base.update(kw)
    return base


class AnswerRowTests(unittest.TestCase):
    def test_valid_row(self) -> None:
        row = AnswerRow.model_validate({"session_id": "s1", **_payload()})
        self.assertEqual(row.points, 5)
        self.assertIsNotNone(row.answered_at.tzinfo)

    def test_wrong_answer_cannot_score(self) -> None:
        with self.assertRaises(ValidationError):
            AnswerRow.model_validate({"session_id": "s1", **_payload(correct=False, points=5)})

    def test_rejects_unknown_quiz_and_bad_index(self) -> None:
        with self.assertRaises(ValidationError):
            AnswerRow.model_validate({"session_id": "s1", **_payload(quiz="trivia")})
        with self.assertRaises(ValidationError):
            AnswerRow.model_validate({"session_id": "s1", **_payload(index=0)})


class ResultManagerTests(unittest.TestCase):
    def test_empty_summary(self) -> None:
        rm = ResultManager()
        self.assertTrue(rm.summarize().empty)
        self.assertEqual(rm.format_summary(), "Total: 0/0 correct")

    def test_per_category_breakdown(self) -> None:
        rm = ResultManager(session_id="s1")
        rm.record(_payload())
        rm.record(_payload(index=2, correct=False, points=0, given="1"))
        rm.record(_payload(index=3, category="Compatible Numbers"))
        summary = rm.summarize().set_index("category")
        self.assertEqual(int(summary.loc["Compensation", "asked"]), 2)
        self.assertEqual(int(summary.loc["Compensation", "correct"]), 1)
        self.assertAlmostEqual(float(summary.loc["Compensation", "accuracy"]), 0.5)
        self.assertEqual(int(summary.loc["Compatible Numbers", "points"]), 5)
        text = rm.format_summary()
        self.assertIn("Total: 2/3 correct", text)
        self.assertIn("Compensation: 1/2 (50%)", text)

    def test_records_from_quiz_events(self) -> None:
        bus = EventBus()
        rm = ResultManager()
        rm.attach(bus)
        quiz = StrategyQuiz(rng=random.Random(2), events=bus, max_problems=2)
        quiz.submit(str(quiz.problem.answer))
        quiz.advance()
        quiz.submit("-1")
        self.assertEqual(len(rm.rows), 2)
        self.assertEqual([r.correct for r in rm.rows], [True, False])
        self.assertEqual(list(rm.to_frame()["index"]), [1, 2])
        rm.reset()
        self.assertEqual(rm.rows, [])


if __name__ == "__main__":
    unittest.main()
