"""Tests for machine snapshots and diffs."""

from __future__ import annotations

from chip8.state_model import FieldDiff, capture_state, diff_states


def test_snapshot_contains_core_components(make_emu) -> None:
    emu = make_emu(0x6005)
    state = capture_state(emu)
    assert state.cpu.pc == 0x200
    assert len(state.cpu.v) == 16
    assert len(state.memory) == 4096
    assert state.cpu.state == "running"
    assert state.display.needs_redraw


def test_diff_detects_register_and_pc_change(make_emu) -> None:
    emu = make_emu(0x6005)
    before = capture_state(emu)
    emu.cycle()
    after = capture_state(emu)

    diff = diff_states(before, after)
    assert not diff.is_empty()
    assert FieldDiff("cpu.pc", 0x200, 0x202) in diff.cpu
    assert not diff.memory_changed
    assert not diff.display_changed


def test_diff_reports_memory_and_display(make_emu) -> None:
    emu = make_emu(0x60FE, 0xA300, 0xF033, 0xD005)
    before = capture_state(emu)
    for _ in range(4):
        emu.cycle()
    diff = diff_states(before, capture_state(emu), memory_limit=2)
    assert diff.memory_changed == (0x300, 0x301)
    assert diff.display_changed


def test_identical_snapshots_have_empty_diff(make_emu) -> None:
    emu = make_emu(0x6005)
    assert diff_states(capture_state(emu), capture_state(emu)).is_empty()
