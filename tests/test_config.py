import pytest

import config


@pytest.mark.parametrize("raw", ["0", "61", "-5", "abc", ""])
def test_poll_interval_outside_one_to_sixty_rejected(monkeypatch, raw):
    monkeypatch.setenv("TIMETABLE_POLL_SECONDS", raw)
    with pytest.raises(ValueError):
        config._poll_seconds()


@pytest.mark.parametrize("raw, expected", [("1", 1), ("15", 15), ("60", 60)])
def test_poll_interval_accepted(monkeypatch, raw, expected):
    monkeypatch.setenv("TIMETABLE_POLL_SECONDS", raw)
    assert config._poll_seconds() == expected


def test_poll_interval_default(monkeypatch):
    monkeypatch.delenv("TIMETABLE_POLL_SECONDS", raising=False)
    assert config._poll_seconds() == 15
