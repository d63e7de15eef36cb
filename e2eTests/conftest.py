import itertools
from types import SimpleNamespace

import pytest

import cihub.domain.historyEntry as history_entry_module


@pytest.fixture
def ticking_clock(monkeypatch):
    """Every HistoryEntry gets a distinct, increasing timestamp."""
    ticks = itertools.count(1_700_000_000)
    monkeypatch.setattr(history_entry_module, "time", SimpleNamespace(time=lambda: next(ticks)))
