import io
import sys

import pytest

from aicommit.prompts import prompt_line, select

OPTIONS = [("Alpha", "a-value"), ("Beta", "b-value"), ("Gamma", "c-value")]


def feed(monkeypatch, text):
    monkeypatch.setattr(sys, "stdin", io.StringIO(text))


def test_select_returns_value_of_chosen_number(monkeypatch):
    feed(monkeypatch, "2\n")
    assert select("Pick one", OPTIONS) == OPTIONS[1][1]


def test_select_empty_answer_picks_first(monkeypatch):
    feed(monkeypatch, "\n")
    assert select("Pick one", OPTIONS) == OPTIONS[0][1]


def test_select_retries_on_invalid_answers(monkeypatch, capsys):
    feed(monkeypatch, "9\nabc\n0\n3\n")
    assert select("Pick one", OPTIONS) == OPTIONS[2][1]
    out = capsys.readouterr().out
    assert out.count("Please enter a number") == 3


def test_select_shows_message_and_labels(monkeypatch, capsys):
    feed(monkeypatch, "1\n")
    select("Pick one", OPTIONS)
    out = capsys.readouterr().out
    assert "Pick one" in out
    for label, _ in OPTIONS:
        assert label in out


def test_select_raises_at_end_of_input(monkeypatch):
    feed(monkeypatch, "")
    with pytest.raises(EOFError):
        select("Pick one", OPTIONS)


def test_select_rejects_empty_options(monkeypatch):
    feed(monkeypatch, "1\n")
    with pytest.raises(ValueError):
        select("Pick one", [])


def test_select_accepts_any_iterable(monkeypatch):
    feed(monkeypatch, "2\n")
    assert select("Pick", iter(OPTIONS)) == OPTIONS[1][1]


def test_prompt_line_trims_answer(monkeypatch, capsys):
    feed(monkeypatch, "   some answer  \n")
    assert prompt_line("Enter value: ") == "some answer"
    assert capsys.readouterr().out == "Enter value: "


def test_prompt_line_at_end_of_input_is_empty(monkeypatch):
    feed(monkeypatch, "")
    assert prompt_line("Enter value: ") == ""