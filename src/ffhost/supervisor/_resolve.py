"""Engine binary resolution.

The supervisor tells the engine where ffmpeg lives through FFMPEG_PATH.
Candidates are tried in order by a chain of resolvers; each returns a
ResolvedBinary or None. When every resolver comes up empty the variable is
left unset and the engine performs its own discovery.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from ffhost.provision import BinaryBundle, PlatformTag

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger


@dataclass(frozen=True, slots=True)
class ResolvedBinary:
    """An engine binary found by a resolver.

    Attributes:
        source: Name of the resolver that found it.
        path: Path to the executable.
    """

    source: str
    path: Path


Resolver = Callable[[], "ResolvedBinary | None"]


def configured_path(path: str | Path | None) -> Resolver:
    """Resolve to an explicitly configured binary, if it exists."""

    def resolve() -> ResolvedBinary | None:
        if not path:
            return None
        candidate = Path(path).expanduser()
        if not candidate.is_file():
            return None
        return ResolvedBinary(source="configured", path=candidate)

    return resolve


def provisioned_bundle(
    root: Path,
    platform: PlatformTag | None = None,
) -> Resolver:
    """Resolve to the engine binary provisioned under root for this host."""

    def resolve() -> ResolvedBinary | None:
        bundle = BinaryBundle.for_platform(root, platform or PlatformTag.host())
        if not bundle.engine_path.is_file():
            return None
        return ResolvedBinary(source="provisioned", path=bundle.engine_path)

    return resolve


def packaged_binary() -> ResolvedBinary | None:
    """Resolve to the binary shipped with the optional imageio-ffmpeg package."""
    try:
        import imageio_ffmpeg  # noqa: PLC0415
    except ImportError:
        return None

    try:
        candidate = Path(imageio_ffmpeg.get_ffmpeg_exe())
    except RuntimeError:
        # Raised when the package carries no binary for this platform
        return None

    if not candidate.is_file():
        return None
    return ResolvedBinary(source="imageio-ffmpeg", path=candidate)


def default_resolvers(
    *,
    ffmpeg_path: str | Path | None = None,
    provision_root: Path | None = None,
) -> tuple[Resolver, ...]:
    """Build the standard resolver chain.

    Order: configured path, provisioned bundle, packaged binary.
    """
    resolvers: list[Resolver] = [configured_path(ffmpeg_path)]
    if provision_root is not None:
        resolvers.append(provisioned_bundle(provision_root))
    resolvers.append(packaged_binary)
    return tuple(resolvers)


def resolve_binary(
    resolvers: Sequence[Resolver],
    logger: FilteringBoundLogger | None = None,
) -> ResolvedBinary | None:
    """Run resolvers in order and return the first hit.

    A resolver that fails with an OS error is skipped.
    """
    for resolver in resolvers:
        try:
            result = resolver()
        except OSError as e:
            if logger is not None:
                logger.debug("supervisor.resolver_failed", error=str(e))
            continue
        if result is not None:
            return result
    return None
