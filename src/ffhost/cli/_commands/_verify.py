# pyright: reportUnusedCallResult=false
# ruff: noqa: TC003  # Path needed at runtime for cyclopts parameter parsing
"""ffhost verify command - checks an already provisioned bundle."""

from pathlib import Path
from typing import Annotated

from cyclopts import App, Parameter

from ._context import CLIContext
from ._shared import exit_with_error, parse_platform, resolve_root

app = App(
    name="verify",
    help="Check that the ffmpeg bundle for a platform is complete",
    help_on_error=True,
)


@app.default
def verify(
    platform: Annotated[
        str | None,
        Parameter(help="Target platform: win, mac or linux."),
    ] = None,
    /,
    *,
    root: Annotated[
        Path | None,
        Parameter(help="Directory holding the extracted ffmpeg<platform>/ bundles."),
    ] = None,
) -> None:
    """Verify the ffmpeg and ffprobe binaries without touching archives."""
    from ffhost.exceptions import VerificationError
    from ffhost.provision import Provisioner

    tag = parse_platform(platform)
    ctx = CLIContext.get_current()

    provisioner = Provisioner(resolve_root(ctx, root), logger=ctx.get_logger())
    try:
        bundle = provisioner.verify(tag)
    except VerificationError as e:
        exit_with_error(str(e))

    print(f"ffmpeg: {bundle.engine_path}")
    print(f"ffprobe: {bundle.probe_path}")
    print(f"Verified {tag.value} binaries in {bundle.directory}")
