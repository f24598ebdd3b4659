"""Provision ffmpeg binary bundles and supervise the transcoding engine."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("ffhost")
except PackageNotFoundError:
    __version__ = "0.0.0"

from ffhost.config import Config  # noqa: E402
from ffhost.exceptions import FFHostError  # noqa: E402
from ffhost.provision import PlatformTag, Provisioner  # noqa: E402
from ffhost.supervisor import EngineConfig, Supervisor  # noqa: E402

__all__ = [
    "Config",
    "EngineConfig",
    "FFHostError",
    "PlatformTag",
    "Provisioner",
    "Supervisor",
    "__version__",
]
