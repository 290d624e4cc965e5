"""vitae-resource - Bounded resource ledger for the progression engine."""
from vitae_resource.ledger import Ledger
from vitae_resource.systems import make_rate_system
from vitae_resource.types import (
    STAT_SORT_ORDER,
    ById,
    ByTag,
    Resource,
    ResourceDef,
    ResourceRef,
    parse_ref,
)

__all__ = [
    "STAT_SORT_ORDER",
    "ById",
    "ByTag",
    "Ledger",
    "Resource",
    "ResourceDef",
    "ResourceRef",
    "make_rate_system",
    "parse_ref",
]
