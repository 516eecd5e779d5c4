"""
Business domain catalog database.

Five business domains and four deployment environments. Subdomain order is
significant: it drives suggested topic counts and topic name previews.
"""

from pathlib import Path
from typing import Any

import yaml

from kafka_sizer.domain import Domain, DomainCatalog, Environment, InvalidConfigurationError


class DomainDatabase:
    """Database of business domains and environments."""

    _DOMAINS = (
        Domain(
            id="cust",
            name="Customer",
            subdomains=(
                "marketing",
                "customer_engagement_and_personalisation",
                "customer_management",
                "sales",
                "loyalty",
            ),
        ),
        Domain(
            id="comm",
            name="Commercial",
            subdomains=(
                "trading_and_revenue_management",
                "network_and_scheduling",
                "commercial_partnerships",
                "passenger_reservation_and_management",
                "product_and_offer_management",
            ),
        ),
        Domain(
            id="corp",
            name="Corporate",
            subdomains=(
                "people",
                "facilities",
                "finance_and_risk",
                "legal_and_compliance",
            ),
        ),
        Domain(
            id="aops",
            name="Airline Operations",
            subdomains=(
                "airport_operations",
                "engineering_and_safety",
                "scheduling_and_crew_rostering",
                "aircraft_and_crew_management",
                "flight_operations",
            ),
        ),
        Domain(
            id="hols",
            name="easyJet Holidays",
            subdomains=(
                "search_compare",
                "itinerary",
                "scheduling",
                "payment",
                "availability",
                "booking",
                "notification",
                "support",
            ),
        ),
    )

    # Scale is the fraction of production load
    _ENVIRONMENTS = (
        Environment(id="dev", label="Development", default_scale=0.1),
        Environment(id="tst", label="Testing", default_scale=0.3),
        Environment(id="pre", label="Staging", default_scale=0.7),
        Environment(id="prd", label="Production", default_scale=1.0),
    )

    @classmethod
    def default(cls) -> DomainCatalog:
        """Canonical catalog."""
        return DomainCatalog(domains=cls._DOMAINS, environments=cls._ENVIRONMENTS)

    @classmethod
    def from_dict(cls, data: Any) -> DomainCatalog:
        """
        Build a catalog from parsed YAML/JSON data.

        Expected shape:

            domains:
              - {id: cust, name: Customer, subdomains: [marketing, sales]}
            environments:
              - {id: dev, label: Development, default_scale: 0.1}

        Environments default to the canonical four when omitted.

        Raises:
            InvalidConfigurationError: If the data has the wrong shape
        """
        if not isinstance(data, dict) or not isinstance(data.get("domains"), list):
            raise InvalidConfigurationError("catalog data must be a mapping with a 'domains' list")

        try:
            domains = tuple(
                Domain(
                    id=str(entry["id"]),
                    name=str(entry.get("name", entry["id"])),
                    subdomains=tuple(str(s) for s in entry["subdomains"]),
                )
                for entry in data["domains"]
            )
            if "environments" in data:
                environments = tuple(
                    Environment(
                        id=str(entry["id"]),
                        label=str(entry.get("label", entry["id"])),
                        default_scale=float(entry.get("default_scale", 1.0)),
                    )
                    for entry in data["environments"]
                )
            else:
                environments = cls._ENVIRONMENTS
        except (KeyError, TypeError, ValueError) as e:
            raise InvalidConfigurationError(f"Invalid catalog data: {e!r}") from e

        return DomainCatalog(domains=domains, environments=environments)

    @classmethod
    def from_yaml(cls, filepath: str | Path) -> DomainCatalog:
        """
        Load a catalog from a YAML file.

        Raises:
            InvalidConfigurationError: If the file cannot be read or parsed
        """
        try:
            with open(filepath, "r") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise InvalidConfigurationError(f"Cannot load catalog file {filepath}: {e}") from e

        return cls.from_dict(data)
