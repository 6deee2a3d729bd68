"""
Tests for the timed quiz state machine

Tests cover:
- Respondent detail validation before the quiz starts
- Shuffled question order and its stability across reloads
- Save / skip / navigation bookkeeping
- Countdown expiry
- The submission document built on completion
"""

import random
from datetime import datetime, timedelta

import pytest

from quizdesk.helpers.QuizFlow import QuizFlow, QuizFlowError
from quizdesk.schemas.QuizSession import QuizSessionState, QuizStep, SessionQuestion, UserDetails

DETAILS = UserDetails(name="Amina", email="amina@example.com", number="9876543210", place="Kochi")


def make_questions(count=5):
    return [
        SessionQuestion(
            id=f"q{index}",
            questionText=f"Question {index}?",
            options=["a", "b", "c", "d"],
            correctAnswer="a",
        )
        for index in range(count)
    ]


def make_state(duration=1500):
    return QuizSessionState(sessionId="session-1", timeLeft=duration, duration=duration)


def started_flow(count=5, seed=7):
    flow = QuizFlow(make_state(), random.Random(seed))
    flow.begin(DETAILS, make_questions(count))
    return flow


class TestStart:
    def test_missing_detail_blocks_start(self):
        flow = QuizFlow(make_state())
        details = UserDetails(name="Amina", email="", number="9876543210", place="Kochi")
        with pytest.raises(QuizFlowError, match="Please fill all details"):
            flow.begin(details, make_questions())
        assert flow.state.step == QuizStep.START
        assert flow.state.questions == []

    def test_whitespace_only_detail_blocks_start(self):
        flow = QuizFlow(make_state())
        details = UserDetails(name="  ", email="a@b.c", number="1", place="x")
        with pytest.raises(QuizFlowError):
            flow.begin(details, make_questions())

    def test_start_enters_quiz(self):
        flow = started_flow()
        assert flow.state.step == QuizStep.QUIZ
        assert flow.state.currentIndex == 0
        assert flow.state.lastTickAt is not None

    def test_no_questions_blocks_start(self):
        flow = QuizFlow(make_state())
        with pytest.raises(QuizFlowError, match="No questions"):
            flow.begin(DETAILS, [])


class TestShuffle:
    def test_order_is_a_permutation(self):
        questions = make_questions(10)
        flow = QuizFlow(make_state(), random.Random(3))
        flow.begin(DETAILS, questions)
        assert sorted(q.id for q in flow.state.questions) == sorted(q.id for q in questions)

    def test_order_survives_reload(self):
        flow = started_flow(count=10, seed=11)
        order = [q.id for q in flow.state.questions]

        reloaded = QuizSessionState(**flow.state.model_dump())
        resumed = QuizFlow(reloaded, random.Random(999))
        resumed.begin(DETAILS, list(reversed(make_questions(10))))

        assert [q.id for q in resumed.state.questions] == order


class TestAnswering:
    def test_select_marks_selected_but_unsaved(self):
        flow = started_flow()
        current = flow.state.current_question().id
        flow.select("b")
        assert flow.state.answers[current] == "b"
        assert current in flow.state.selectedButUnsaved

    def test_select_rejects_unknown_option(self):
        flow = started_flow()
        with pytest.raises(QuizFlowError):
            flow.select("zzz")

    def test_save_requires_selection(self):
        flow = started_flow()
        with pytest.raises(QuizFlowError, match="Please select an option before saving."):
            flow.save()
        assert flow.state.currentIndex == 0

    def test_save_clears_flags_and_advances(self):
        flow = started_flow()
        current = flow.state.current_question().id
        flow.select("a")
        flow.save()
        assert current not in flow.state.selectedButUnsaved
        assert current not in flow.state.unsavedQuestions
        assert flow.state.currentIndex == 1

    def test_save_on_last_question_stays(self):
        flow = started_flow(count=2)
        flow.select("a")
        flow.save()
        flow.select("a")
        flow.save()
        assert flow.state.currentIndex == 1

    def test_skip_records_unanswered_question_once(self):
        flow = started_flow()
        first = flow.state.current_question().id
        flow.skip()
        flow.prev()
        flow.skip()
        assert flow.state.unsavedQuestions == [first]
        assert flow.state.currentIndex == 1

    def test_next_with_answer_does_not_record_skip(self):
        flow = started_flow()
        flow.select("c")
        flow.next()
        assert flow.state.unsavedQuestions == []

    def test_prev_on_first_question_is_noop(self):
        flow = started_flow()
        flow.prev()
        assert flow.state.currentIndex == 0

    def test_saving_a_skipped_question_clears_skip(self):
        flow = started_flow()
        first = flow.state.current_question().id
        flow.skip()
        flow.prev()
        flow.select("a")
        flow.save()
        assert first not in flow.state.unsavedQuestions

    def test_actions_before_start_are_rejected(self):
        flow = QuizFlow(make_state())
        with pytest.raises(QuizFlowError, match="Quiz has not started"):
            flow.select("a")


class TestCountdown:
    def test_times_out_exactly_once_after_full_duration(self):
        flow = started_flow()
        transitions = [flow.tick() for _ in range(1500)]
        assert transitions.count(True) == 1
        assert transitions[-1] is True
        assert flow.state.step == QuizStep.COMPLETE
        assert flow.state.timeLeft == 0

    def test_extra_ticks_after_timeout_do_nothing(self):
        flow = started_flow()
        assert flow.tick(1500) is True
        assert flow.tick(5) is False
        assert flow.state.timeLeft == 0

    def test_one_tick_short_keeps_quiz_running(self):
        flow = started_flow()
        assert flow.tick(1499) is False
        assert flow.state.step == QuizStep.QUIZ
        assert flow.state.timeLeft == 1

    def test_catch_up_converts_elapsed_wall_clock(self):
        flow = started_flow()
        start = flow.state.lastTickAt
        assert flow.catch_up(start + timedelta(seconds=10, milliseconds=600)) is False
        assert flow.state.timeLeft == 1490
        assert flow.state.lastTickAt == start + timedelta(seconds=10)

    def test_catch_up_past_deadline_completes(self):
        flow = started_flow()
        assert flow.catch_up(flow.state.lastTickAt + timedelta(hours=1)) is True
        assert flow.state.step == QuizStep.COMPLETE

    def test_ticks_do_not_run_before_start(self):
        flow = QuizFlow(make_state())
        assert flow.tick(3000) is False
        assert flow.state.timeLeft == 1500


class TestCompletion:
    def test_complete_is_terminal(self):
        flow = started_flow()
        assert flow.complete() is True
        assert flow.complete() is False
        with pytest.raises(QuizFlowError, match="Quiz already completed"):
            flow.select("a")

    def test_submission_counts_and_correctness(self):
        flow = started_flow(count=5)
        flow.select("a")
        flow.save()
        flow.select("b")
        flow.save()
        flow.skip()
        flow.select("a")
        flow.tick(30)
        flow.complete()

        document = flow.build_submission()
        assert document["totalQuestions"] == 5
        assert document["answeredQuestions"] == len(document["answers"]) == 3
        for entry in document["answers"]:
            assert entry["isCorrect"] == (entry["selected"] == entry["correctAnswer"])
        assert document["timeSpent"] == 30
        assert document["name"] == "Amina"
        assert document["number"] == "9876543210"

    def test_skipped_questions_are_left_out(self):
        flow = started_flow(count=3)
        skipped = flow.state.current_question().id
        flow.skip()
        flow.prev()
        flow.select("a")
        flow.next()
        flow.complete()

        document = flow.build_submission()
        assert skipped not in [entry["questionId"] for entry in document["answers"]]
        assert document["answeredQuestions"] == 0

    def test_missing_correct_answer_is_stored_as_none(self):
        flow = QuizFlow(make_state(), random.Random(1))
        flow.begin(DETAILS, [SessionQuestion(id="open", questionText="?", options=[], correctAnswer=None)])
        flow.select("anything")
        flow.save()
        flow.complete()
        entry = flow.build_submission()["answers"][0]
        assert entry["correctAnswer"] is None
        assert entry["isCorrect"] is False

    def test_complete_before_start_is_rejected(self):
        flow = QuizFlow(make_state())
        with pytest.raises(QuizFlowError):
            flow.complete(datetime.utcnow())
