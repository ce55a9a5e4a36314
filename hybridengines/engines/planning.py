"""Engine update planning and rendering."""

import shlex

from hybridengines.config import DEFAULT_CORDOVA_COMMAND
from hybridengines.manifest import DeclaredEngineRef

from .models import EnginePlan, InstalledEngine, PlanStep


def _unique(engines: list[InstalledEngine]) -> list[InstalledEngine]:
    seen = set()
    result = []
    for engine in engines:
        key = (engine.id, engine.spec)
        if key not in seen:
            seen.add(key)
            result.append(engine)
    return result


def _declares(ref: DeclaredEngineRef, engine: InstalledEngine) -> bool:
    return ref.name == engine.id and ref.spec == engine.spec


def platform_command(cordova_command: str, action: str, name: str) -> str:
    return f"{cordova_command} platform {action} {shlex.quote(name)}"


def prepare_command(cordova_command: str) -> str:
    return f"{cordova_command} prepare"


def plan_update(
    desired: list[InstalledEngine],
    previous_refs: list[DeclaredEngineRef],
    project_name: str = "",
    cordova_command: str = DEFAULT_CORDOVA_COMMAND,
) -> EnginePlan:
    """Work out what it takes to move a manifest to ``desired``.

    A previously declared ref is stale unless some desired engine has the
    same id and exactly the same spec (version, or location for a local
    engine). A range such as ``^9.0.0`` is therefore stale even when 9.0.0
    is desired. Its platform is removed and the ref leaves the manifest.
    The new manifest lists exactly the desired engines. Platform additions
    are left to ``prepare``, which installs whatever the saved manifest
    declares.
    """
    desired = _unique(desired)

    removals = [
        ref for ref in previous_refs
        if not any(_declares(ref, engine) for engine in desired)
    ]

    steps = []
    removed_platforms = set()
    for ref in removals:
        if not ref.name or ref.name in removed_platforms:
            continue
        removed_platforms.add(ref.name)
        steps.append(
            PlanStep(
                platform=ref.name,
                action="remove",
                command=platform_command(cordova_command, "remove", ref.name),
            )
        )
    steps.append(
        PlanStep(platform=None, action="prepare", command=prepare_command(cordova_command))
    )

    return EnginePlan(
        project_name=project_name,
        removals=removals,
        steps=steps,
        previous_refs=list(previous_refs),
        new_refs=[DeclaredEngineRef(name=e.id, spec=e.spec) for e in desired],
    )


def render_plan(plan: EnginePlan) -> str:
    lines = [f"Engine update plan: {plan.project_name}", ""]

    if plan.is_noop:
        lines.append("config.xml already declares these engines.")
        lines.append("")

    if plan.removals:
        lines.append("Remove from config.xml:")
        for ref in plan.removals:
            lines.append(f"   - {ref.name} {ref.spec}")
        lines.append("")

    if plan.manifest_changed:
        lines.append("Declare in config.xml:")
        for ref in plan.new_refs:
            lines.append(f"   + {ref.name} {ref.spec}")
        lines.append("")

    lines.append("Steps:")
    for i, step in enumerate(plan.steps, 1):
        title = f"{step.action} {step.platform}" if step.platform else step.action
        lines.append(f"  {i}. {title}")
        lines.append(f"     $ {step.command}")

    return "\n".join(lines)


__all__ = [
    "platform_command",
    "prepare_command",
    "plan_update",
    "render_plan",
]
