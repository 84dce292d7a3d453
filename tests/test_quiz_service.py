import json
from pathlib import Path

import quiz_bot
from quiz_bot.services.quiz_service import QuizService

BUNDLED_QUIZ = Path(quiz_bot.__file__).parent / "data" / "quiz.json"


def write_quiz(tmp_path, data) -> Path:
    path = tmp_path / "quiz.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


class TestLoading:
    def test_missing_file_gives_zero_sets(self, tmp_path):
        service = QuizService.from_file(tmp_path / "missing.json")
        assert service.list_set_names() == []
        assert service.get_questions("Math") == ()

    def test_invalid_json_gives_zero_sets(self, tmp_path):
        path = tmp_path / "quiz.json"
        path.write_text("{not json", encoding="utf-8")
        assert QuizService.from_file(path).list_set_names() == []

    def test_top_level_list_gives_zero_sets(self, tmp_path):
        path = write_quiz(tmp_path, [{"question": "What is 2 + 2?"}])
        assert QuizService.from_file(path).list_set_names() == []

    def test_set_names_keep_file_order(self, tmp_path):
        path = write_quiz(tmp_path, {"Zoology": [], "Algebra": [], "Music": []})
        assert QuizService.from_file(path).list_set_names() == ["Zoology", "Algebra", "Music"]

    def test_quality_filter_and_renumbering(self, tmp_path):
        path = write_quiz(
            tmp_path,
            {
                "Physics": [
                    {"question": "FIZIKA TEST MATERIALLARI", "options": {"A": "x", "B": "y"}},
                    {"question": "Savol", "options": {"A": "x", "B": "y"}},
                    {"question": "What is the unit of force?", "options": {"A": "Newton", "B": "Joule"}, "correct": "a"},
                    {"question": "Too short", "options": {"A": "x", "B": "y"}},
                    {"question": "Which has only one option?", "options": {"A": "x"}},
                    {"question": "What is the speed of light symbol?", "options": {"A": "v", "B": "", "C": "c"}, "correct": "C"},
                    {"question": "Which answer was left blank here?", "options": {"A": "x", "B": "", "C": "z"}, "correct": "B"},
                    {"options": {"A": "x", "B": "y"}},
                ]
            },
        )
        questions = QuizService.from_file(path).get_questions("Physics")

        assert [q.id for q in questions] == [1, 2]
        assert questions[0].text == "What is the unit of force?"
        assert questions[0].correct == "A"
        assert questions[1].options == ("v", "c")
        assert questions[1].correct == "B"
        assert questions[1].correct_option == "c"

    def test_non_list_set_is_skipped(self, tmp_path):
        path = write_quiz(tmp_path, {"Broken": "oops", "Empty": []})
        assert QuizService.from_file(path).list_set_names() == ["Empty"]

    def test_bundled_data_loads(self):
        service = QuizService.from_file(BUNDLED_QUIZ)
        assert "Math" in service.list_set_names()
        assert service.get_total_questions("Math") == 5
        assert all(q.text != "№" for q in service.get_questions("Math"))


class TestLookup:
    def test_unknown_set_is_empty(self, quizzes):
        assert quizzes.get_questions("Astrology") == ()
        assert quizzes.get_total_questions("Astrology") == 0

    def test_known_set(self, quizzes, math_questions):
        assert quizzes.get_questions("Math") == math_questions
        assert quizzes.list_set_names() == ["Math", "History"]

    def test_parse_user_submission_failure_is_empty_list(self, quizzes):
        assert quizzes.parse_user_submission("not json") == []

    def test_parse_user_submission(self, quizzes):
        text = json.dumps([{"question": "Pick one", "options": {"A": "x", "B": "y"}, "correct": "B"}])
        questions = quizzes.parse_user_submission(text)
        assert len(questions) == 1
        assert questions[0].correct_option == "y"


class TestCorrectLetterAfterBlankOptions:
    def test_letter_follows_its_option(self):
        service = QuizService.from_raw(
            {
                "Physics": [
                    {
                        "question": "Which symbol stands for the speed of light?",
                        "options": {"A": "v", "B": "", "C": "c", "D": "s"},
                        "correct": "D",
                    }
                ]
            }
        )
        [question] = service.get_questions("Physics")
        assert question.options == ("v", "c", "s")
        assert question.correct == "C"
        assert question.correct_option == "s"

    def test_blank_correct_option_drops_question(self):
        service = QuizService.from_raw(
            {
                "Physics": [
                    {
                        "question": "Which symbol stands for the speed of light?",
                        "options": {"A": "v", "B": "", "C": "c"},
                        "correct": "B",
                    }
                ]
            }
        )
        assert service.get_questions("Physics") == ()
