"""Tests for gamepad state -> navigation mapping."""

import pytest

from cartridge.core.input_manager import InputManager, NavAction, actions_from_state

L, R, GO = NavAction.LEFT, NavAction.RIGHT, NavAction.LAUNCH


def _buttons(*pressed: int, count: int = 17) -> list[bool]:
    return [i in pressed for i in range(count)]


class TestActionsFromState:
    def test_idle_pad(self):
        assert actions_from_state([0.0, 0.0], _buttons()) == []

    @pytest.mark.parametrize("x, expected", [
        (-0.9, [L]),
        (-0.5, []),
        (0.3, []),
        (0.51, [R]),
    ])
    def test_stick_threshold(self, x, expected):
        assert actions_from_state([x, 0.0], _buttons()) == expected

    def test_dpad_buttons(self):
        assert actions_from_state([0.0], _buttons(14)) == [L]
        assert actions_from_state([0.0], _buttons(15)) == [R]

    def test_dpad_hat(self):
        assert actions_from_state([], [], [(-1, 0)]) == [L]
        assert actions_from_state([], [], [(1, 0)]) == [R]
        assert actions_from_state([], [], [(0, 1)]) == []

    def test_stick_wins_over_dpad(self):
        assert actions_from_state([0.8], _buttons(14)) == [R]

    def test_launch_button(self):
        assert actions_from_state([0.0], _buttons(1)) == [GO]

    def test_move_and_launch_together(self):
        assert actions_from_state([-1.0], _buttons(1)) == [L, GO]

    def test_short_button_list(self):
        # pads with fewer than 16 buttons never report D-pad buttons
        assert actions_from_state([0.0], [False, False]) == []


class TestInputManager:
    def test_singleton(self):
        assert InputManager.instance() is InputManager.instance()

    def test_poll_before_ready_is_empty(self):
        mgr = InputManager()
        result = mgr.poll()
        assert result.actions == []
        assert result.connected == []
        assert result.disconnected == []

    def test_shutdown_before_ready_is_safe(self):
        InputManager().shutdown()

    def test_no_controllers_before_ready(self):
        mgr = InputManager()
        assert mgr.controllers() == []
        assert mgr.controller_names() == []


class FakeJoystick:
    """Stands in for ``pygame.joystick.Joystick`` with a fixed reading."""

    axes = [0.0, 0.0]
    buttons = [False] * 17

    def __init__(self, device_index: int):
        self._device_index = device_index

    def init(self):
        pass

    def get_instance_id(self):
        return 100 + self._device_index

    def get_name(self):
        return "Test Pad"

    def get_numaxes(self):
        return len(self.axes)

    def get_numbuttons(self):
        return len(self.buttons)

    def get_numhats(self):
        return 1

    def get_axis(self, i):
        return self.axes[i]

    def get_button(self, i):
        return self.buttons[i]

    def get_hat(self, i):
        return (0, 0)


@pytest.fixture
def pad_env(monkeypatch):
    """A ready InputManager whose pygame event queue the test fills."""
    pygame = pytest.importorskip("pygame")
    queue: list = []

    def _drain():
        events = list(queue)
        queue.clear()
        return events

    monkeypatch.setattr(pygame.event, "get", _drain)
    monkeypatch.setattr(pygame.joystick, "Joystick", FakeJoystick)
    monkeypatch.setattr(FakeJoystick, "axes", [0.0, 0.0])

    mgr = InputManager()
    mgr._ready = True
    return mgr, queue, pygame


class TestDevicePolling:
    def test_device_added(self, pad_env):
        mgr, queue, pygame = pad_env
        queue.append(pygame.event.Event(pygame.JOYDEVICEADDED, device_index=0))

        result = mgr.poll()

        assert result.connected == ["Test Pad"]
        assert result.actions == []
        [info] = mgr.controllers()
        assert info.instance_id == 100
        assert info.num_buttons == 17

    def test_held_stick_gives_one_action_per_poll(self, pad_env, monkeypatch):
        mgr, queue, pygame = pad_env
        queue.append(pygame.event.Event(pygame.JOYDEVICEADDED, device_index=0))
        mgr.poll()
        monkeypatch.setattr(FakeJoystick, "axes", [-1.0, 0.0])

        for _ in range(3):
            result = mgr.poll()
            assert result.actions == [L]
            assert result.connected == []

    def test_device_removed(self, pad_env, monkeypatch):
        mgr, queue, pygame = pad_env
        queue.append(pygame.event.Event(pygame.JOYDEVICEADDED, device_index=0))
        mgr.poll()
        monkeypatch.setattr(FakeJoystick, "axes", [1.0, 0.0])

        queue.append(pygame.event.Event(pygame.JOYDEVICEREMOVED, instance_id=100))
        result = mgr.poll()

        assert result.disconnected == ["Test Pad"]
        assert result.actions == []
        assert mgr.controllers() == []

    def test_duplicate_add_reported_once(self, pad_env):
        mgr, queue, pygame = pad_env
        queue.append(pygame.event.Event(pygame.JOYDEVICEADDED, device_index=0))
        queue.append(pygame.event.Event(pygame.JOYDEVICEADDED, device_index=0))

        assert mgr.poll().connected == ["Test Pad"]
        assert mgr.controller_names() == ["Test Pad"]

    def test_unknown_removal_ignored(self, pad_env):
        mgr, queue, pygame = pad_env
        queue.append(pygame.event.Event(pygame.JOYDEVICEREMOVED, instance_id=7))
        assert mgr.poll().disconnected == []
