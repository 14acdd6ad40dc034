"""Keymap registry responsible for storing actions and bindings."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterator, Optional

from femto.runtime.telemetry import span

from .models import ActionRef, Binding


@dataclass(slots=True)
class RegistryStats:
    """Lightweight snapshot describing registry state."""

    action_count: int
    binding_count: int
    modes: tuple[str, ...]


class KeymapConflictError(RuntimeError):
    """Raised when a new binding claims a key already bound in its mode."""

    def __init__(self, binding: Binding, existing: Binding):
        super().__init__(
            f"Binding '{binding.id}' conflicts with '{existing.id}' "
            f"on {binding.key} in mode '{binding.mode}'"
        )
        self.binding = binding
        self.existing = existing


class KeymapRegistry:
    """Owns action references and per-mode key bindings."""

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._actions: Dict[str, ActionRef] = {}
        self._bindings: Dict[str, Binding] = {}
        self._mode_index: Dict[str, Dict[str, str]] = {}
        self._logger_name = logger_name
        self._revision = 0

    def revision(self) -> int:
        return self._revision

    def get_action(self, action_id: str) -> ActionRef:
        try:
            return self._actions[action_id]
        except KeyError as exc:
            raise KeyError(f"Action '{action_id}' is not registered") from exc

    def get_binding(self, binding_id: str) -> Binding:
        try:
            return self._bindings[binding_id]
        except KeyError as exc:
            raise KeyError(f"Binding '{binding_id}' is not registered") from exc

    def lookup(self, mode: str, key: str) -> Optional[Binding]:
        binding_id = self._mode_index.get(mode, {}).get(key)
        if binding_id is None:
            return None
        return self._bindings[binding_id]

    def register_action(self, action: ActionRef, *, replace: bool = False) -> ActionRef:
        with span(
            "keymaps::register_action",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"action_id": action.id},
        ):
            if not replace and action.id in self._actions:
                raise ValueError(f"Action '{action.id}' already registered")
            self._actions[action.id] = action
            return action

    def register_binding(self, binding: Binding, *, replace: bool = False) -> Binding:
        with span(
            "keymaps::register_binding",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"binding_id": binding.id, "mode": binding.mode},
        ) as handle:
            if binding.action_id not in self._actions:
                handle.add_metadata("missing_action", binding.action_id)
                raise KeyError(
                    f"Binding '{binding.id}' references unknown action '{binding.action_id}'"
                )

            existing = self.lookup(binding.mode, binding.key)
            if existing is not None and existing.id != binding.id and not replace:
                handle.add_metadata("conflict", existing.id)
                raise KeymapConflictError(binding, existing)
            if binding.id in self._bindings and not replace:
                raise ValueError(f"Binding id '{binding.id}' already registered")

            if existing is not None:
                self._remove_binding(existing)
            previous = self._bindings.get(binding.id)
            if previous is not None:
                self._remove_binding(previous)

            self._bindings[binding.id] = binding
            self._mode_index.setdefault(binding.mode, {})[binding.key] = binding.id
            self._revision += 1
            return binding

    def unregister_binding(self, binding_id: str) -> Optional[Binding]:
        binding = self._bindings.get(binding_id)
        if binding is None:
            return None
        self._remove_binding(binding)
        self._revision += 1
        return binding

    def iter_bindings(self, mode: Optional[str] = None) -> Iterator[Binding]:
        if mode is None:
            yield from self._bindings.values()
            return
        for binding_id in self._mode_index.get(mode, {}).values():
            yield self._bindings[binding_id]

    def stats(self) -> RegistryStats:
        return RegistryStats(
            action_count=len(self._actions),
            binding_count=len(self._bindings),
            modes=tuple(sorted(self._mode_index)),
        )

    def _remove_binding(self, binding: Binding) -> None:
        self._bindings.pop(binding.id, None)
        keys = self._mode_index.get(binding.mode)
        if not keys:
            return
        if keys.get(binding.key) == binding.id:
            del keys[binding.key]
        if not keys:
            self._mode_index.pop(binding.mode, None)


__all__ = [
    "KeymapRegistry",
    "KeymapConflictError",
    "RegistryStats",
]
