import dataclasses

import pytest

from conversation import HistoryStore, Message
from errors import EmptyHistoryError
from tokens import WordCountEstimator


def test_message_is_immutable():
    message = Message("user", "hello")
    with pytest.raises(dataclasses.FrozenInstanceError):
        message.content = "changed"


def test_message_rejects_unknown_role():
    with pytest.raises(ValueError):
        Message("tool", "output")


def test_append_keeps_chronological_order_and_allows_repeated_roles():
    history = HistoryStore()
    history.append(Message("user", "document text"))
    history.append(Message("user", "question"))
    history.append(Message("assistant", "answer"))

    assert [m.content for m in history] == ["document text", "question", "answer"]
    assert history.as_payload() == [
        {"role": "user", "content": "document text"},
        {"role": "user", "content": "question"},
        {"role": "assistant", "content": "answer"},
    ]


def test_peek_oldest_does_not_remove():
    history = HistoryStore([Message("user", "first"), Message("assistant", "second")])
    assert history.peek_oldest() == Message("user", "first")
    assert len(history) == 2


def test_peek_oldest_on_empty_history():
    assert HistoryStore().peek_oldest() is None


def test_evict_oldest_removes_the_head():
    history = HistoryStore([Message("user", "first"), Message("assistant", "second")])
    assert history.evict_oldest() == Message("user", "first")
    assert [m.content for m in history] == ["second"]


def test_evict_oldest_on_empty_history_raises():
    with pytest.raises(EmptyHistoryError):
        HistoryStore().evict_oldest()


def test_total_estimated_cost_tracks_appends_and_evictions():
    estimator = WordCountEstimator()
    history = HistoryStore()
    assert history.total_estimated_cost(estimator) == 0

    history.append(Message("user", "one two three"))
    history.append(Message("assistant", "four five"))
    assert history.total_estimated_cost(estimator) == 5

    history.evict_oldest()
    assert history.total_estimated_cost(estimator) == 2
