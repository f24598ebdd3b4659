# pyright: reportUnusedCallResult=false
"""ffhost status command - shows configuration and binary resolution."""

from typing import Any

from cyclopts import App

from ._context import CLIContext

app = App(
    name="status",
    help="Show the resolved configuration and where ffmpeg will come from",
    help_on_error=True,
)


def _flatten(data: dict[str, Any], prefix: str = "") -> list[tuple[str, Any]]:
    items: list[tuple[str, Any]] = []
    for key, value in data.items():
        full_key = f"{prefix}.{key}" if prefix else key
        if isinstance(value, dict):
            items.extend(_flatten(value, full_key))  # pyright: ignore[reportUnknownArgumentType]
        else:
            items.append((full_key, value))
    return items


@app.default
def status() -> None:
    """Print the effective configuration and the engine binary resolution."""
    from ffhost.supervisor import default_resolvers, resolve_binary
    from ffhost.utils import resolve_path

    ctx = CLIContext.get_current()
    config = ctx.config

    if ctx.config_error is not None:
        print(f"config_error: {ctx.config_error}")

    for source in config.sources:
        location = f" ({source.path})" if source.path is not None else ""
        print(f"source: {source.name.value}{location}")

    for key, value in _flatten(config.to_dict()):
        print(f"{key} = {value!r}")

    provision_root = resolve_path(config.provision.root, ctx.project_root)
    resolved = resolve_binary(
        default_resolvers(
            ffmpeg_path=config.supervisor.ffmpeg_path or None,
            provision_root=provision_root,
        ),
        ctx.get_logger(),
    )
    if resolved is None:
        print("ffmpeg: not found")
    else:
        print(f"ffmpeg: {resolved.path} ({resolved.source})")
