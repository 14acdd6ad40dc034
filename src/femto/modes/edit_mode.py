"""The default editing mode: keymap dispatch plus self-inserting characters."""

from __future__ import annotations

from femto.runtime import telemetry

from femto.input import Character, KeyEvent
from femto.keymaps import ResolutionMatch

from .base_mode import Mode, ModeContext, ModeResult
from .keymap_helpers import require_keymap_resolver, set_last_action


class EditMode(Mode):
    name = "edit"

    def __init__(self, context: ModeContext) -> None:
        super().__init__(context)
        self.logger = telemetry.get_logger("femto.modes.edit")
        self._resolver = require_keymap_resolver(context)

    def handle_key(self, key: KeyEvent) -> ModeResult:
        result = self._resolver.resolve(self.name, key.token)

        if result.status == "match" and result.match:
            outcome = self._execute_match(result.match)
            set_last_action(self.context, result.match.action.id)
            return outcome

        set_last_action(self.context, None)
        if isinstance(key, Character):
            self.context.buffer.insert_char(key.byte)
            return ModeResult(consumed=True, status="insert")

        self.logger.debug("unbound key %s", key.token)
        return ModeResult(consumed=False, status="miss", message="unhandled")

    def _execute_match(self, match: ResolutionMatch) -> ModeResult:
        with telemetry.span(
            "keymaps::execute",
            component="keymaps",
            metadata={"binding_id": match.binding.id, "action": match.action.id},
        ):
            outcome = match.action(self.context, match)

        if isinstance(outcome, ModeResult):
            return outcome
        return ModeResult(consumed=True)
