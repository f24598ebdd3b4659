# pyright: reportUnusedCallResult=false
# ruff: noqa: TC003  # Path needed at runtime for cyclopts parameter parsing
"""ffhost provision command - extracts and verifies a platform bundle."""

from pathlib import Path
from typing import Annotated

from cyclopts import App, Parameter

from ffhost.config import ExtractorName

from ._context import CLIContext
from ._shared import exit_with_error, parse_platform, resolve_root

app = App(
    name="provision",
    help="Extract, flatten and verify the ffmpeg bundle for a platform",
    help_on_error=True,
)


@app.default
def provision(
    platform: Annotated[
        str | None,
        Parameter(help="Target platform: win, mac or linux."),
    ] = None,
    /,
    *,
    root: Annotated[
        Path | None,
        Parameter(help="Directory holding ffmpeg<platform>.zip archives."),
    ] = None,
    extractor: Annotated[
        ExtractorName | None,
        Parameter(help="Archive extraction back-end."),
    ] = None,
) -> None:
    """Provision the ffmpeg and ffprobe binaries for a platform.

    Extracts ffmpeg<platform>.zip into ffmpeg<platform>/, removes one level
    of directory nesting, deletes the archive and checks that both binaries
    are present. A missing archive skips straight to verification.
    """
    from ffhost.exceptions import ProvisionError
    from ffhost.provision import Provisioner, get_extractor

    tag = parse_platform(platform)
    ctx = CLIContext.get_current()
    logger = ctx.get_logger()

    provision_root = resolve_root(ctx, root)
    extractor_name = extractor or ctx.config.provision.extractor
    provisioner = Provisioner(
        provision_root,
        extractor=get_extractor(extractor_name),
        logger=logger,
    )

    try:
        result = provisioner.provision(tag)
    except ProvisionError as e:
        exit_with_error(str(e))

    if not result.extracted:
        print(f"No archive found for {tag.value}; verified existing binaries")
    elif result.flattened is not None:
        print(f"Flattened nested directory '{result.flattened}'")
    print(f"ffmpeg: {result.bundle.engine_path}")
    print(f"ffprobe: {result.bundle.probe_path}")
    print(f"Provisioned {tag.value} binaries in {result.bundle.directory}")
