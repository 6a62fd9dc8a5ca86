"""Package spec models and loader."""

from speclint.kernel.spec.loader import SPEC_EXTENSION, load_spec
from speclint.kernel.spec.models import License, PlatformSpec, Source, Specification

__all__ = [
    "SPEC_EXTENSION",
    "License",
    "PlatformSpec",
    "Source",
    "Specification",
    "load_spec",
]
