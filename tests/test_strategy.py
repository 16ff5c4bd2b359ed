import random
import unittest
from math import prod

from mathquiz.quiz.errors import InvalidInput, InvalidTransition
from mathquiz.quiz.models import STRATEGIES
from mathquiz.quiz.strategy import (
    ACTIVE,
    ENDED,
    GRADED,
    StrategyQuiz,
    generate_strategy_problem,
    parse_answer,
)

from .helpers import RecordingBus, ScriptedRandom


def _factors(question):
    return [int(part) for part in question.split(" × ")]


class StrategyGeneratorTests(unittest.TestCase):
    def test_distributive_example(self) -> None:
        rng = ScriptedRandom(choices=["Distributive Property"], ints=[7, 3])
        problem = generate_strategy_problem(rng)
        self.assertEqual(problem.question, "7 × 26")
        self.assertEqual(problem.answer, 182)
        self.assertEqual(problem.strategy, "Distributive Property")
        self.assertIn("26 = 20 + 6", problem.hint)
        self.assertIn("by 7", problem.hint)

    def test_compensation_hint_wording(self) -> None:
        high = generate_strategy_problem(ScriptedRandom(choices=["Compensation"], ints=[9], floats=[0.1]))
        self.assertEqual(high.question, "9 × 99")
        self.assertEqual(high.answer, 891)
        self.assertIn("nearest hundred (100)", high.hint)

        low = generate_strategy_problem(ScriptedRandom(choices=["Compensation"], ints=[4], floats=[0.9]))
        self.assertEqual(low.question, "4 × 49")
        self.assertEqual(low.answer, 196)
        self.assertIn("nearest fifty (50)", low.hint)

    def test_compatible_numbers_display_order(self) -> None:
        problem = generate_strategy_problem(ScriptedRandom(choices=["Compatible Numbers"], floats=[0.7], ints=[13]))
        self.assertEqual(problem.question, "2 × 13 × 50")
        self.assertEqual(problem.answer, 1300)
        self.assertIn("2 × 50 = 100", problem.hint)

    def test_answer_matches_expression_and_operand_rules(self) -> None:
        rng = random.Random(1234)
        seen = set()
        for _ in range(500):
            p = generate_strategy_problem(rng)
            factors = _factors(p.question)
            self.assertEqual(p.answer, prod(factors))
            self.assertIn(p.strategy, STRATEGIES)
            self.assertTrue(p.hint)
            seen.add(p.strategy)
            if p.strategy == "Distributive Property":
                self.assertTrue(3 <= factors[0] <= 10)
                self.assertIn(factors[1], (11, 16, 21, 26, 31))
            elif p.strategy == "Compensation":
                self.assertTrue(2 <= factors[0] <= 9)
                self.assertIn(factors[1], (99, 49))
            else:
                self.assertIn((factors[0], factors[2]), ((4, 25), (2, 50)))
                self.assertTrue(5 <= factors[1] <= 19)
        self.assertEqual(seen, set(STRATEGIES))

    def test_seeded_generation_is_deterministic(self) -> None:
        a = [generate_strategy_problem(random.Random(7)) for _ in range(3)]
        b = [generate_strategy_problem(random.Random(7)) for _ in range(3)]
        self.assertEqual(a, b)

    def test_parse_answer(self) -> None:
        self.assertEqual(parse_answer(" 182 "), 182)
        self.assertEqual(parse_answer("-4"), -4)
        for bad in ("", "abc", "1.5", "12 3", "1_000", "١٨٢"):
            with self.assertRaises(InvalidInput):
                parse_answer(bad)


class StrategyQuizTests(unittest.TestCase):
    def setUp(self) -> None:
        self.bus = RecordingBus()
        self.quiz = StrategyQuiz(rng=random.Random(42), events=self.bus, max_problems=3)

    def test_starts_active_on_first_problem(self) -> None:
        self.assertEqual(self.quiz.state, ACTIVE)
        self.assertEqual(self.quiz.problem_count, 1)
        self.assertEqual(self.quiz.score, 0)
        self.assertEqual(self.quiz.counter_text(), "Question 1 of 3")
        self.assertEqual(self.quiz.score_text(), "Total Score: 0 / 15")
        self.assertEqual(self.bus.names(), ["question_ready"])

    def test_invalid_input_keeps_state(self) -> None:
        problem = self.quiz.problem
        with self.assertRaises(InvalidInput) as cm:
            self.quiz.submit("twelve")
        self.assertEqual(str(cm.exception), "Please enter a valid number!")
        self.assertEqual(self.quiz.state, ACTIVE)
        self.assertIs(self.quiz.problem, problem)
        result = self.quiz.submit(str(problem.answer))
        self.assertTrue(result.correct)

    def test_correct_answer_awards_fixed_points(self) -> None:
        result = self.quiz.submit(str(self.quiz.problem.answer))
        self.assertTrue(result.correct)
        self.assertEqual(result.points, 5)
        self.assertEqual(self.quiz.score, 5)
        self.assertEqual(self.quiz.state, GRADED)
        self.assertIn("+5 points", result.message)
        event, payload = self.bus.events[-1]
        self.assertEqual(event, "answer_graded")
        self.assertTrue(payload["correct"])
        self.assertEqual(payload["quiz"], "strategy")

    def test_wrong_answer_scores_nothing(self) -> None:
        answer = self.quiz.problem.answer
        result = self.quiz.submit(str(answer + 1))
        self.assertFalse(result.correct)
        self.assertEqual(result.points, 0)
        self.assertEqual(self.quiz.score, 0)
        self.assertIn(f"The correct answer is {answer}", result.message)

    def test_submit_twice_not_allowed(self) -> None:
        self.quiz.submit("0")
        with self.assertRaises(InvalidTransition):
            self.quiz.submit("0")

    def test_hint_is_idempotent_and_only_before_grading(self) -> None:
        first = self.quiz.hint()
        self.assertTrue(first.startswith(f"Strategy: {self.quiz.problem.strategy}"))
        self.assertEqual(self.quiz.hint(), first)
        self.assertTrue(self.quiz.hint_revealed)
        self.quiz.submit("0")
        with self.assertRaises(InvalidTransition):
            self.quiz.hint()

    def test_advance_requires_grading(self) -> None:
        with self.assertRaises(InvalidTransition):
            self.quiz.advance()

    def test_hint_resets_on_next_problem(self) -> None:
        self.quiz.hint()
        self.quiz.submit("0")
        self.quiz.advance()
        self.assertFalse(self.quiz.hint_revealed)
        self.assertEqual(self.quiz.problem_count, 2)

    def test_full_game_ends_and_restarts(self) -> None:
        scores = []
        for i in range(3):
            answer = self.quiz.problem.answer
            self.quiz.submit(str(answer if i < 2 else answer - 1))
            scores.append(self.quiz.score)
            self.quiz.advance()
        self.assertEqual(scores, sorted(scores))
        self.assertEqual(self.quiz.state, ENDED)
        self.assertIsNone(self.quiz.problem)
        summary = self.quiz.summary()
        self.assertEqual(summary.score, 10)
        self.assertEqual(summary.max_score, 15)
        self.assertAlmostEqual(summary.percentage, 200 / 3)
        self.assertIn("Keep practicing", summary.message)
        self.assertEqual(self.bus.names()[-1], "quiz_ended")

        with self.assertRaises(InvalidTransition):
            self.quiz.submit("1")

        self.quiz.restart()
        self.assertEqual(self.quiz.state, ACTIVE)
        self.assertEqual(self.quiz.score, 0)
        self.assertEqual(self.quiz.problem_count, 1)
        self.assertIsNotNone(self.quiz.problem)

    def test_restart_only_when_ended(self) -> None:
        with self.assertRaises(InvalidTransition):
            self.quiz.restart()

    def test_default_game_length(self) -> None:
        quiz = StrategyQuiz(rng=random.Random(3))
        for _ in range(20):
            quiz.submit(str(quiz.problem.answer))
            quiz.advance()
        self.assertEqual(quiz.state, ENDED)
        summary = quiz.summary()
        self.assertEqual(summary.score, 100)
        self.assertEqual(summary.percentage, 100)
        self.assertIn("PERFECT SCORE", summary.message)

    def test_rejects_empty_game(self) -> None:
        with self.assertRaises(ValueError):
            StrategyQuiz(max_problems=0)


if __name__ == "__main__":
    unittest.main()
