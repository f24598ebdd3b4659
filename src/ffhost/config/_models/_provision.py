"""Provisioning configuration model."""

from enum import StrEnum
from typing import ClassVar

from pydantic import BaseModel, ConfigDict


class ExtractorName(StrEnum):
    """Archive extraction back-ends.

    - NATIVE: the host's own tool (PowerShell Expand-Archive or unzip)
    - ZIPFILE: Python's zipfile module, for hosts lacking the native tool
    """

    NATIVE = "native"
    ZIPFILE = "zipfile"


class ProvisionConfig(BaseModel):
    """Provisioning configuration section.

    Attributes:
        root: Directory holding `ffmpeg<platform>.zip` archives and the
            extracted `ffmpeg<platform>/` bundles. Relative paths resolve
            against the project root.
        extractor: Archive extraction back-end.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    root: str = "ffmpeg"
    extractor: ExtractorName = ExtractorName.NATIVE
