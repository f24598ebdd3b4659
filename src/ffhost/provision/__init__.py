"""Build-time provisioning of platform ffmpeg/ffprobe bundles.

Key Components:
    - PlatformTag: Closed set of platforms (win, mac, linux)
    - ArchiveBundle: Source archive and extraction directory for a platform
    - BinaryBundle: Expected engine/probe executables for a platform
    - Provisioner: Extract, flatten, clean up and verify
    - flatten_single_nested: One-level nesting normalization

Example:
    >>> from pathlib import Path
    >>> from ffhost.provision import Provisioner
    >>> result = Provisioner(Path("ffmpeg")).provision("linux")
    >>> result.bundle.engine_path
    PosixPath('ffmpeg/ffmpeglinux/ffmpeg')
"""

from ._extract import (
    EXTRACTORS,
    Extractor,
    ExtractorFailed,
    extract_native,
    extract_zipfile,
    get_extractor,
)
from ._flatten import flatten_single_nested, single_nested_directory
from ._platform import ArchiveBundle, BinaryBundle, PlatformTag
from ._provisioner import ProvisionResult, Provisioner, provision
from ._verify import describe_missing, make_executable

__all__ = [
    "EXTRACTORS",
    "ArchiveBundle",
    "BinaryBundle",
    "Extractor",
    "ExtractorFailed",
    "PlatformTag",
    "ProvisionResult",
    "Provisioner",
    "describe_missing",
    "extract_native",
    "extract_zipfile",
    "flatten_single_nested",
    "get_extractor",
    "make_executable",
    "provision",
    "single_nested_directory",
]
