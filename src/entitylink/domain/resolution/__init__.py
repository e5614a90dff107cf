"""Authority resolution: link metadata values to related records, creating them on demand."""

from __future__ import annotations

from .builder import RelatedRecordBuilder
from .consumer import CONSUMER_NAME, ResolutionConsumer, ResolutionReport
from .fillers import FieldFiller, FillerRegistry, MetadataMappingFiller
from .keys import (
    GENERATE,
    REFERENCE,
    derive_key,
    fingerprint,
    generate_authority,
    is_authority_settled,
    is_generate_authority,
    is_reference_authority,
    reference_authority,
)
from .routing import ContainerRouter

__all__ = [
    "CONSUMER_NAME",
    "GENERATE",
    "REFERENCE",
    "ContainerRouter",
    "FieldFiller",
    "FillerRegistry",
    "MetadataMappingFiller",
    "RelatedRecordBuilder",
    "ResolutionConsumer",
    "ResolutionReport",
    "derive_key",
    "fingerprint",
    "generate_authority",
    "is_authority_settled",
    "is_generate_authority",
    "is_reference_authority",
    "reference_authority",
]
