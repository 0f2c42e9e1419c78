"""Tenant plugin: app-level ``app/tenant`` branch fed by tenant events."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any

from plugflux_core import Plugin, PluginProvides, RuntimeContext, create_slice
from plugflux_core.store import Dispatch

from .actions import make_action

TENANT_SLICE = "app/tenant"
TENANT_CHANGED = "app/tenant/changed"
TENANT_CLEARED = "app/tenant/cleared"


@dataclass(frozen=True)
class Tenant:
    id: str
    name: str | None = None


@dataclass(frozen=True)
class TenantState:
    tenant: Tenant | None = None
    loading: bool = False


tenant_slice = create_slice(
    TENANT_SLICE,
    TenantState(),
    {
        "set_tenant": lambda state, action: TenantState(tenant=action.payload, loading=False),
        "set_loading": lambda state, action: replace(state, loading=bool(action.payload)),
        "clear": lambda state, action: TenantState(),
    },
)
tenant_actions = tenant_slice.actions


def tenant(context: RuntimeContext) -> Plugin:
    events = context.events
    events.declare(TENANT_CHANGED, Tenant)

    def wire_tenant(dispatch: Dispatch):
        changed = events.on(TENANT_CHANGED, lambda value: dispatch(tenant_actions["set_tenant"](value)))
        cleared = events.on(TENANT_CLEARED, lambda _: dispatch(tenant_actions["clear"]()))

        def cleanup() -> None:
            changed.unsubscribe()
            cleared.unsubscribe()

        return cleanup

    def clear_tenant(_: Any = None) -> None:
        events.emit(TENANT_CLEARED)

    return Plugin(
        name="tenant",
        provides=PluginProvides(
            slices=[tenant_slice],
            effects=[wire_tenant],
            actions={
                "change_tenant": make_action(events, TENANT_CHANGED),
                "clear_tenant": clear_tenant,
            },
        ),
    )
