"""Unit tests for FAQ accordion handler functions."""

from imaginator.core.faq import DEFAULT_FAQ
from imaginator.ui.handlers.faq import toggle_faq_entry

ENTRIES = len(DEFAULT_FAQ)


def _split(result):
    questions = result[:ENTRIES]
    answers = result[ENTRIES : 2 * ENTRIES]
    return questions, answers, result[-1]


def test_opening_entry_shows_only_its_answer(initialized_state):
    questions, answers, state = _split(toggle_faq_entry(2, initialized_state))

    assert [answer["visible"] for answer in answers] == [False, False, True, False, False]
    assert questions[2]["value"].startswith("−")
    assert questions[0]["value"].startswith("+")
    assert state.faq.open_index == 2


def test_opening_another_entry_closes_previous(initialized_state):
    toggle_faq_entry(0, initialized_state)
    _, answers, _ = _split(toggle_faq_entry(3, initialized_state))

    assert [answer["visible"] for answer in answers] == [False, False, False, True, False]


def test_clicking_open_entry_closes_it(initialized_state):
    toggle_faq_entry(1, initialized_state)
    _, answers, state = _split(toggle_faq_entry(1, initialized_state))

    assert not any(answer["visible"] for answer in answers)
    assert state.faq.open_index is None


def test_out_of_range_keeps_states(initialized_state):
    toggle_faq_entry(4, initialized_state)
    _, answers, _ = _split(toggle_faq_entry(99, initialized_state))

    assert answers[4]["visible"] is True
