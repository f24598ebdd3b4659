"""Build-time provisioning of the ffmpeg binary bundle.

This module provides the Provisioner that turns a platform archive into a
verified pair of engine and probe executables.
"""

from __future__ import annotations

import shutil
from dataclasses import dataclass
from typing import TYPE_CHECKING, final

from ffhost.exceptions import ExtractionError, VerificationError
from ffhost.utils import get_null_logger

from ._extract import ExtractorFailed, extract_native
from ._flatten import flatten_single_nested
from ._platform import ArchiveBundle, BinaryBundle, PlatformTag, is_windows_host
from ._verify import describe_missing, make_executable

if TYPE_CHECKING:
    from pathlib import Path

    from structlog.typing import FilteringBoundLogger

    from ._extract import Extractor


@dataclass(frozen=True, slots=True)
class ProvisionResult:
    """Outcome of a successful provisioning run.

    Attributes:
        bundle: The verified binary bundle.
        extracted: Whether an archive was found and extracted.
        flattened: Name of the nested directory that was flattened, if any.
    """

    bundle: BinaryBundle
    extracted: bool
    flattened: str | None = None


@final
class Provisioner:
    """Extracts, normalizes and verifies platform binary bundles.

    Every run starts from an empty target directory, so provisioning the
    same platform twice yields the same binaries.
    """

    __slots__ = ("_extractor", "_logger", "_root")

    def __init__(
        self,
        root: Path,
        *,
        extractor: Extractor = extract_native,
        logger: FilteringBoundLogger | None = None,
    ) -> None:
        """Initialize the provisioner.

        Args:
            root: Directory holding archives and extracted bundles.
            extractor: Archive extraction back-end.
            logger: Logger for progress and warnings.
        """
        self._root = root
        self._extractor = extractor
        self._logger = logger or get_null_logger()

    @property
    def root(self) -> Path:
        """Return the provisioning root directory."""
        return self._root

    def provision(self, platform: PlatformTag | str) -> ProvisionResult:
        """Provision the binary bundle for a platform.

        A missing archive is not an error: provisioning falls through to
        verification so binaries placed out-of-band are accepted.

        Args:
            platform: The platform tag (win, mac or linux).

        Returns:
            The provisioning result.

        Raises:
            ValueError: If platform is not a known tag.
            ExtractionError: If the archive could not be extracted.
            VerificationError: If either binary is missing afterwards.
        """
        tag = PlatformTag(platform)
        archive = ArchiveBundle.for_platform(self._root, tag)
        log = self._logger.bind(platform=tag.value)
        log.info("provision.start", root=str(self._root))

        if not archive.archive_path.is_file():
            log.warning(
                "provision.archive_missing",
                archive=archive.archive_path.name,
                root=str(self._root),
                message="Skipping extraction",
            )
            return ProvisionResult(bundle=self.verify(tag), extracted=False)

        self._prepare_target(archive)
        self._extract(archive, log)

        flattened = flatten_single_nested(archive.target_dir)
        if flattened is not None:
            log.info("provision.flattened", nested=flattened)

        log.info("provision.archive_removed", archive=archive.archive_path.name)
        archive.archive_path.unlink()

        return ProvisionResult(
            bundle=self.verify(tag),
            extracted=True,
            flattened=flattened,
        )

    def verify(self, platform: PlatformTag | str) -> BinaryBundle:
        """Check that both binaries exist and make them executable.

        Permission bits are only applied on non-Windows hosts; failing to set
        them is logged and otherwise ignored.

        Args:
            platform: The platform tag to verify.

        Returns:
            The verified bundle.

        Raises:
            VerificationError: If either binary is missing.
        """
        tag = PlatformTag(platform)
        bundle = BinaryBundle.for_platform(self._root, tag)
        log = self._logger.bind(platform=tag.value)
        log.info("provision.verify", directory=str(bundle.directory))

        missing = bundle.missing()
        if missing:
            details = describe_missing(bundle)
            for line in details:
                log.error("provision.binary_missing", detail=line)
            msg = "Binaries missing:\n  " + "\n  ".join(details)
            raise VerificationError(msg, platform=tag.value, missing=missing)

        if not is_windows_host():
            _ = make_executable(bundle.paths, log)

        log.info(
            "provision.verified",
            engine=str(bundle.engine_path),
            probe=str(bundle.probe_path),
        )
        return bundle

    def _prepare_target(self, archive: ArchiveBundle) -> None:
        """Remove any previous extraction and recreate the target directory."""
        target = archive.target_dir
        if target.is_dir() and not target.is_symlink():
            shutil.rmtree(target)
        elif target.exists() or target.is_symlink():
            target.unlink()
        target.mkdir(parents=True)

    def _extract(self, archive: ArchiveBundle, log: FilteringBoundLogger) -> None:
        log.info("provision.extract", archive=archive.archive_path.name)
        try:
            self._extractor(archive.archive_path, archive.target_dir)
        except ExtractorFailed as e:
            log.error("provision.extract_failed", error=str(e))
            msg = f"Extraction of {archive.archive_path.name} failed: {e}"
            raise ExtractionError(
                msg,
                platform=archive.platform.value,
                archive=archive.archive_path,
                cause=e,
            ) from e


def provision(
    platform: PlatformTag | str,
    *,
    root: Path,
    extractor: Extractor = extract_native,
    logger: FilteringBoundLogger | None = None,
) -> ProvisionResult:
    """Provision the binary bundle for a platform under root.

    Convenience wrapper around Provisioner.provision().
    """
    return Provisioner(root, extractor=extractor, logger=logger).provision(platform)
