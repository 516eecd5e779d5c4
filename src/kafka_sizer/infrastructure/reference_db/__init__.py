"""Reference data: domain catalog and ECKU pricing."""

from kafka_sizer.infrastructure.reference_db.domains import DomainDatabase
from kafka_sizer.infrastructure.reference_db.pricing import PricingDatabase

__all__ = ["DomainDatabase", "PricingDatabase"]
