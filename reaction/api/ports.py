from __future__ import annotations

from reaction.core.machine import SessionStateMachine


class CommandPort:
    """
    The only way a UI surface drives a session.
    Deciding whether an activation hit a control or the open surface is the
    caller's job; by the time a call arrives here that decision is made.
    """

    def __init__(self, machine: SessionStateMachine):
        self._machine = machine

    def on_start_requested(self) -> None:
        self._machine.start()

    def on_reset_requested(self) -> None:
        self._machine.reset()

    def on_surface_activated(self) -> None:
        self._machine.surface_clicked()
