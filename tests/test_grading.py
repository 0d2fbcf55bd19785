"""
Tests for the grading functions.

Covers empty and dangling answers, order independence, duplicate answers to
one question, and exact-type matching of the selected option.
"""
import itertools

from app.services.grading import Answer, answers_from_json, answers_to_json, grade, grade_answers
from app.services.snapshot import QuestionSnapshot


QUESTIONS = (
    QuestionSnapshot(id="q1", question_text="2 + 2?", options=("3", "4"), correct_answer=1),
    QuestionSnapshot(id="q2", question_text="Capital of France?", options=("Paris", "Rome", "Oslo"), correct_answer=0),
    QuestionSnapshot(id="q3", question_text="Largest planet?", options=("Mars", "Venus", "Jupiter"), correct_answer=2),
)


class TestGrade:
    """Tests for grade()."""

    def test_empty_answers_score_zero(self):
        assert grade([], QUESTIONS) == 0
        assert grade([], ()) == 0

    def test_answers_to_unknown_questions_score_zero(self):
        answers = [Answer("missing", 0), Answer("also-missing", 1)]
        assert grade(answers, QUESTIONS) == 0

    def test_counts_only_matching_selections(self):
        answers = [Answer("q1", 1), Answer("q2", 2), Answer("q3", 2)]
        assert grade(answers, QUESTIONS) == 2

    def test_omitted_questions_earn_nothing(self):
        assert grade([Answer("q2", 0)], QUESTIONS) == 1

    def test_order_independent(self):
        answers = [Answer("q1", 1), Answer("q2", 0), Answer("q3", 1), Answer("ghost", 0)]
        expected = grade(answers, QUESTIONS)
        for permutation in itertools.permutations(answers):
            assert grade(list(permutation), QUESTIONS) == expected

    def test_duplicate_answers_each_count(self):
        # Repeated answers to one question are not deduplicated
        answers = [Answer("q1", 1), Answer("q1", 1), Answer("q1", 0)]
        assert grade(answers, QUESTIONS) == 2

    def test_no_coercion_between_representations(self):
        answers = [Answer("q1", True), Answer("q2", "0"), Answer("q3", 2.0)]
        assert grade(answers, QUESTIONS) == 0

    def test_dangling_answer_mixed_with_valid_ones(self):
        answers = [Answer("q1", 1), Answer("deleted", 1)]
        assert grade(answers, QUESTIONS) == 1


class TestGradeAnswers:
    """Tests for the per-answer breakdown."""

    def test_breakdown_matches_score(self):
        answers = [Answer("q1", 1), Answer("q2", 1), Answer("gone", 0)]
        graded = grade_answers(answers, QUESTIONS)

        assert [g.is_correct for g in graded] == [True, False, False]
        assert [g.correct_answer for g in graded] == [1, 0, None]
        assert sum(g.is_correct for g in graded) == grade(answers, QUESTIONS)

    def test_preserves_submission_order(self):
        answers = [Answer("q3", 0), Answer("q1", 1)]
        assert [g.question_id for g in grade_answers(answers, QUESTIONS)] == ["q3", "q1"]


class TestStoredAnswers:
    """Tests for converting answers to and from the stored JSON form."""

    def test_stored_form_grades_the_same(self):
        answers = [Answer("q1", 1), Answer("q3", 2)]
        assert grade(answers_from_json(answers_to_json(answers)), QUESTIONS) == 2

    def test_malformed_entries_earn_nothing(self):
        answers = answers_from_json([{"selected_option": 1}, {"question_id": "q1"}])
        assert grade(answers, QUESTIONS) == 0

    def test_non_mapping_entries_dropped(self):
        answers = answers_from_json(["q1", 1, None, ["q1", 1], {"question_id": "q1", "selected_option": 1}])
        assert answers == [Answer("q1", 1)]
        assert grade(answers, QUESTIONS) == 1

    def test_missing_list_reads_as_no_answers(self):
        assert answers_from_json(None) == []
