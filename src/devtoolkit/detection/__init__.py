"""Tool install-state detection.

Usage:
    from devtoolkit.detection import Detector

    detector = Detector(ProcessProbe())
    result = detector.detect(definition)
"""

from devtoolkit.detection.detector import Detector
from devtoolkit.detection.records import (
    InstallRecord,
    InstallRecordSource,
    default_record_source,
)

__all__ = [
    "Detector",
    "InstallRecord",
    "InstallRecordSource",
    "default_record_source",
]
