from __future__ import annotations

from femto.keymaps import (
    ActionRef,
    Binding,
    KeymapRegistry,
    KeymapResolver,
)


def make_action(action_id: str) -> ActionRef:
    return ActionRef(id=action_id, handler=lambda *args, **kwargs: action_id)


def make_binding(
    binding_id: str,
    *,
    mode: str = "edit",
    key: str = "<C-x>",
    action_id: str = "core.test",
) -> Binding:
    return Binding(id=binding_id, mode=mode, key=key, action_id=action_id)


def build_registry(bindings: list[Binding]) -> KeymapRegistry:
    registry = KeymapRegistry()
    action_ids = {binding.action_id for binding in bindings}
    for action_id in action_ids:
        registry.register_action(make_action(action_id))
    for binding in bindings:
        registry.register_binding(binding)
    return registry


def test_resolver_matches_token() -> None:
    binding = make_binding("edit.cx")
    registry = build_registry([binding])
    resolver = KeymapResolver(registry)

    result = resolver.resolve("edit", "<C-x>")

    assert result.status == "match"
    assert result.match is not None
    assert result.match.binding.id == binding.id
    assert result.match.action.id == "core.test"
    assert result.match.action() == "core.test"


def test_resolver_reports_miss_for_unbound_token() -> None:
    registry = build_registry([make_binding("edit.cx")])
    resolver = KeymapResolver(registry)

    result = resolver.resolve("edit", "<C-y>")

    assert result.status == "miss"
    assert result.match is None


def test_resolver_is_scoped_by_mode() -> None:
    registry = build_registry([make_binding("prompt.cx", mode="prompt")])
    resolver = KeymapResolver(registry)

    assert resolver.resolve("edit", "<C-x>").status == "miss"
    assert resolver.resolve("prompt", "<C-x>").status == "match"


def test_resolver_sees_later_registrations() -> None:
    registry = build_registry([make_binding("edit.cx")])
    resolver = KeymapResolver(registry)
    registry.register_action(make_action("core.other"))
    registry.register_binding(
        make_binding("edit.cy", key="<C-y>", action_id="core.other")
    )

    result = resolver.resolve("edit", "<C-y>")

    assert result.match is not None
    assert result.match.action.id == "core.other"
    assert resolver.registry is registry
