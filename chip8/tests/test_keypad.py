"""Tests for the shared keypad state."""

import threading

import pytest

from chip8.keypad import Keypad


def test_set_key_reports_changes_only() -> None:
    keypad = Keypad()
    assert keypad.set_key(0x5, True)
    assert not keypad.set_key(0x5, True)
    assert keypad.is_key_down(0x5)
    assert keypad.set_key(0x5, False)
    assert not keypad.set_key(0x5, False)
    assert not keypad.is_key_down(0x5)


@pytest.mark.parametrize("code", [-1, 16, 0xFF])
def test_set_key_rejects_invalid_codes(code: int) -> None:
    keypad = Keypad()
    with pytest.raises(ValueError):
        keypad.set_key(code, True)
    with pytest.raises(ValueError):
        keypad.post(code, True)


def test_is_key_down_outside_range_is_false() -> None:
    assert not Keypad().is_key_down(0x42)


def test_last_pressed_follows_insertion_order() -> None:
    keypad = Keypad()
    assert keypad.last_pressed_key() is None
    keypad.set_key(0xA, True)
    keypad.set_key(0x1, True)
    assert keypad.last_pressed_key() == 0x1
    keypad.set_key(0x1, False)
    assert keypad.last_pressed_key() == 0xA
    keypad.set_key(0x1, True)
    assert keypad.pressed_keys() == (0xA, 0x1)


def test_release_all() -> None:
    keypad = Keypad()
    keypad.set_key(0x2, True)
    keypad.set_key(0x3, True)
    keypad.release_all()
    assert keypad.pressed_keys() == ()


def test_posted_events_apply_only_when_drained() -> None:
    keypad = Keypad()
    keypad.post(0x4, True)
    keypad.post(0x4, True)
    keypad.post(0x6, True)
    assert not keypad.is_key_down(0x4)

    assert keypad.apply_pending() == 2
    assert keypad.pressed_keys() == (0x4, 0x6)
    assert keypad.apply_pending() == 0


def test_concurrent_updates_keep_state_consistent() -> None:
    keypad = Keypad()
    barrier = threading.Barrier(4)

    def toggle(code: int) -> None:
        barrier.wait()
        for _ in range(500):
            keypad.set_key(code, True)
            keypad.last_pressed_key()
            keypad.set_key(code, False)
        keypad.set_key(code, True)

    threads = [threading.Thread(target=toggle, args=(code,)) for code in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert sorted(keypad.pressed_keys()) == [0, 1, 2, 3]
