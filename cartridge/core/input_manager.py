"""
Gamepad detection and navigation input for Cartridge.

Uses pygame's joystick subsystem.  The main window polls
:meth:`InputManager.poll` on a timer; each poll pumps the pygame event
queue (hot-plug notifications) and samples every connected device.

Mapping follows the W3C "standard gamepad" layout:

*  left stick X below -0.5 / above 0.5  -> left / right
*  button 14 / 15 (D-pad as buttons)     -> left / right
*  hat 0 X -1 / +1 (D-pad as hat)        -> left / right
*  button 1                              -> launch
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Sequence

log = logging.getLogger(__name__)

AXIS_THRESHOLD = 0.5
_AXIS_X = 0
_BUTTON_LAUNCH = 1
_BUTTON_DPAD_LEFT = 14
_BUTTON_DPAD_RIGHT = 15


class NavAction(Enum):
    LEFT = "left"
    RIGHT = "right"
    LAUNCH = "launch"


@dataclass
class ControllerInfo:
    """Describes a connected game controller."""
    instance_id: int
    name: str
    num_buttons: int
    num_axes: int
    num_hats: int


@dataclass
class PollResult:
    """Everything one poll produced."""
    actions: list[NavAction] = field(default_factory=list)
    connected: list[str] = field(default_factory=list)
    disconnected: list[str] = field(default_factory=list)


def _pressed(buttons: Sequence[bool], index: int) -> bool:
    return index < len(buttons) and bool(buttons[index])


def actions_from_state(
    axes: Sequence[float],
    buttons: Sequence[bool],
    hats: Sequence[tuple[int, int]] = (),
) -> list[NavAction]:
    """Translate one device snapshot into navigation actions.

    At most one horizontal move is produced per snapshot; the stick takes
    precedence over the D-pad.
    """
    actions: list[NavAction] = []

    x = axes[_AXIS_X] if len(axes) > _AXIS_X else 0.0
    hat_x = hats[0][0] if hats else 0

    if x < -AXIS_THRESHOLD:
        actions.append(NavAction.LEFT)
    elif x > AXIS_THRESHOLD:
        actions.append(NavAction.RIGHT)
    elif _pressed(buttons, _BUTTON_DPAD_LEFT) or hat_x < 0:
        actions.append(NavAction.LEFT)
    elif _pressed(buttons, _BUTTON_DPAD_RIGHT) or hat_x > 0:
        actions.append(NavAction.RIGHT)

    if _pressed(buttons, _BUTTON_LAUNCH):
        actions.append(NavAction.LAUNCH)
    return actions


class InputManager:
    """Singleton managing controller detection and navigation polling.

    The pygame subsystems are initialised lazily on the first call to
    :meth:`ensure_ready`.  When pygame or SDL is unavailable the manager
    stays inert and every poll returns an empty :class:`PollResult`.
    """

    _instance: InputManager | None = None

    def __init__(self) -> None:
        self._ready = False
        self._failed = False
        self._joysticks: dict[int, object] = {}        # instance id -> Joystick
        self._controllers: dict[int, ControllerInfo] = {}

    # -- Singleton access --------------------------------------------------

    @classmethod
    def instance(cls) -> InputManager:
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    # -- Lifecycle ---------------------------------------------------------

    def ensure_ready(self) -> bool:
        """Initialise pygame's joystick subsystem.  Returns ``True`` on success."""
        if self._ready:
            return True
        if self._failed:
            return False
        try:
            import pygame

            prev = os.environ.get("SDL_VIDEODRIVER")
            os.environ["SDL_VIDEODRIVER"] = "dummy"
            try:
                pygame.display.init()
            finally:
                if prev is not None:
                    os.environ["SDL_VIDEODRIVER"] = prev
                else:
                    os.environ.pop("SDL_VIDEODRIVER", None)

            pygame.joystick.init()
            self._ready = True
            return True
        except Exception:
            log.debug("Gamepad input unavailable", exc_info=True)
            self._failed = True
            return False

    def shutdown(self) -> None:
        """Release all resources."""
        if not self._ready:
            return
        try:
            import pygame
            self._joysticks.clear()
            self._controllers.clear()
            pygame.joystick.quit()
            pygame.display.quit()
        except Exception:
            log.debug("Error shutting down pygame", exc_info=True)
        self._ready = False

    # -- Controller enumeration --------------------------------------------

    def controllers(self) -> list[ControllerInfo]:
        return list(self._controllers.values())

    def controller_names(self) -> list[str]:
        return [c.name for c in self._controllers.values()]

    def _add_device(self, device_index: int) -> str | None:
        import pygame

        try:
            joy = pygame.joystick.Joystick(device_index)
            joy.init()
        except pygame.error:
            log.debug("Could not open joystick %d", device_index, exc_info=True)
            return None
        iid = joy.get_instance_id()
        if iid in self._joysticks:
            return None
        self._joysticks[iid] = joy
        info = ControllerInfo(
            instance_id=iid,
            name=joy.get_name(),
            num_buttons=joy.get_numbuttons(),
            num_axes=joy.get_numaxes(),
            num_hats=joy.get_numhats(),
        )
        self._controllers[iid] = info
        log.info("Gamepad connected: %s", info.name)
        return info.name

    def _remove_device(self, instance_id: int) -> str | None:
        self._joysticks.pop(instance_id, None)
        info = self._controllers.pop(instance_id, None)
        if info is None:
            return None
        log.info("Gamepad disconnected: %s", info.name)
        return info.name

    # -- Input capture -----------------------------------------------------

    def poll(self) -> PollResult:
        """Handle hot-plug events and sample every connected controller."""
        result = PollResult()
        if not self._ready:
            return result

        import pygame

        for event in pygame.event.get():
            if event.type == pygame.JOYDEVICEADDED:
                name = self._add_device(event.device_index)
                if name:
                    result.connected.append(name)
            elif event.type == pygame.JOYDEVICEREMOVED:
                name = self._remove_device(event.instance_id)
                if name:
                    result.disconnected.append(name)

        for joy in self._joysticks.values():
            try:
                axes = [joy.get_axis(i) for i in range(joy.get_numaxes())]
                buttons = [joy.get_button(i) for i in range(joy.get_numbuttons())]
                hats = [joy.get_hat(i) for i in range(joy.get_numhats())]
            except pygame.error:
                continue
            result.actions.extend(actions_from_state(axes, buttons, hats))
        return result
