"""Default mode: bound keys run actions, everything else is typed."""

from __future__ import annotations

from kilo_engine.actions.editing import insert_char
from kilo_engine.keymaps.defaults import EDIT_MODE
from kilo_engine.keymaps.models import ResolutionMatch
from kilo_engine.keys import Key, KeyEvent
from kilo_engine.runtime import telemetry

from .base_mode import Mode, ModeContext, ModeResult


class EditMode(Mode):
    name = EDIT_MODE

    def __init__(self, context: ModeContext) -> None:
        super().__init__(context)
        self.logger = telemetry.get_logger("kilo_engine.modes.edit")
        self._registry = context.keymap_registry

    def handle_key(self, event: KeyEvent) -> ModeResult:
        if event.key is Key.CHAR:
            result = insert_char(self.context, event)
        else:
            match = self._registry.resolve(self.name, event.key)
            if match is None:
                result = ModeResult(consumed=False, status="miss")
            else:
                result = self._execute_match(match, event)

        # any key other than quit re-arms the unsaved-changes confirmation
        if event.key is not Key.QUIT:
            self.state.reset_quit_confirmations()
        return result

    def _execute_match(self, match: ResolutionMatch, event: KeyEvent) -> ModeResult:
        with telemetry.span(
            "keymaps::execute",
            component="keymaps",
            metadata={"binding_id": match.binding.id, "action": match.action.id},
        ):
            outcome = match.action(self.context, event)

        if isinstance(outcome, ModeResult):
            return outcome
        return ModeResult(consumed=True)


__all__ = ["EditMode"]
