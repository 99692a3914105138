"""Tests for the named lock table."""

from __future__ import annotations

import threading
import time

import pytest

from azlogic.services.locks import NamedLocks


def test_key_format():
    assert NamedLocks.key("wf1", "azurerm_logic_app") == "azurerm_logic_app.wf1"


def test_held_while_inside_block():
    locks = NamedLocks()
    with locks.lock("wf1", "azurerm_logic_app"):
        assert locks.held() == ["azurerm_logic_app.wf1"]
    assert locks.held() == []


def test_released_on_exception():
    locks = NamedLocks()
    with pytest.raises(RuntimeError):
        with locks.lock("wf1", "azurerm_logic_app"):
            raise RuntimeError("boom")
    assert locks.held() == []


def test_same_key_serializes():
    locks = NamedLocks()
    events = []

    def worker(tag):
        with locks.lock("wf1", "azurerm_logic_app"):
            events.append(f"{tag}-start")
            time.sleep(0.02)
            events.append(f"{tag}-end")

    threads = [threading.Thread(target=worker, args=(t,)) for t in ("a", "b")]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert events in (
        ["a-start", "a-end", "b-start", "b-end"],
        ["b-start", "b-end", "a-start", "a-end"],
    )


def test_different_keys_do_not_block():
    locks = NamedLocks()
    with locks.lock("wf1", "azurerm_logic_app"):
        acquired = threading.Event()

        def other():
            with locks.lock("wf2", "azurerm_logic_app"):
                acquired.set()

        t = threading.Thread(target=other)
        t.start()
        t.join(timeout=1)
        assert acquired.is_set()
