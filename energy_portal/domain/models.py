"""Request-scoped view models exchanged with the prediction backend."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from energy_portal.domain.pagination import total_pages


BUILDING_TYPES: tuple[str, ...] = ("Residential", "Commercial", "Industrial")

INPUT_FIELDS: tuple[str, ...] = (
    "building_type",
    "square_footage",
    "number_of_occupants",
    "appliances_used",
)

METRIC_LABELS: dict[str, str] = {
    "energy_consumption": "Energy Consumption (kWh)",
    "square_footage": "Square Footage",
    "number_of_occupants": "Number of Occupants",
    "appliances_used": "Appliances Used",
}

DEFAULT_UNIT = "kWh"


def _number_or_zero(value: Any) -> float:
    if value is None:
        return 0
    return value


@dataclass(frozen=True)
class PredictionInput:
    building_type: str
    square_footage: float
    number_of_occupants: int
    appliances_used: int

    def to_payload(self) -> dict[str, Any]:
        return {
            "building_type": self.building_type,
            "square_footage": self.square_footage,
            "number_of_occupants": self.number_of_occupants,
            "appliances_used": self.appliances_used,
        }


@dataclass(frozen=True)
class FactorContributions:
    building_type: float = 0
    square_footage: float = 0
    number_of_occupants: float = 0
    appliances_used: float = 0

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any] | None) -> "FactorContributions":
        payload = payload or {}
        return cls(
            building_type=_number_or_zero(payload.get("building_type")),
            square_footage=_number_or_zero(payload.get("square_footage")),
            number_of_occupants=_number_or_zero(payload.get("number_of_occupants")),
            appliances_used=_number_or_zero(payload.get("appliances_used")),
        )

    def to_dict(self) -> dict[str, float]:
        return {
            "building_type": self.building_type,
            "square_footage": self.square_footage,
            "number_of_occupants": self.number_of_occupants,
            "appliances_used": self.appliances_used,
        }

    def ordered_series(self) -> list[tuple[str, float]]:
        """Contributions in display order, independent of magnitude."""
        return [
            ("Building Type", self.building_type),
            ("Square Footage", self.square_footage),
            ("Occupants", self.number_of_occupants),
            ("Appliances", self.appliances_used),
        ]


@dataclass(frozen=True)
class PredictionResult:
    energy_consumption: float
    unit: str = DEFAULT_UNIT
    factors: FactorContributions = field(default_factory=FactorContributions)

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "PredictionResult":
        """Build a fully populated result, defaulting every missing field."""
        factors = payload.get("factors")
        return cls(
            energy_consumption=_number_or_zero(payload.get("energy_consumption")),
            unit=DEFAULT_UNIT if payload.get("unit") is None else payload["unit"],
            factors=FactorContributions.from_payload(factors if isinstance(factors, Mapping) else None),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "energy_consumption": self.energy_consumption,
            "unit": self.unit,
            "factors": self.factors.to_dict(),
        }

    def monthly_consumption(self, divisor: float = 4) -> float:
        return self.energy_consumption / divisor

    def format_monthly(self, divisor: float = 4) -> str:
        return f"{self.monthly_consumption(divisor):.2f} {self.unit}"


@dataclass(frozen=True)
class DatasetRow:
    building_type: str
    square_footage: float
    number_of_occupants: int
    appliances_used: int
    energy_consumption: float

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "DatasetRow":
        if not isinstance(payload, Mapping):
            raise ValueError("dataset row must be an object")
        return cls(
            building_type=str(payload.get("building_type", "")),
            square_footage=payload.get("square_footage", 0),
            number_of_occupants=payload.get("number_of_occupants", 0),
            appliances_used=payload.get("appliances_used", 0),
            energy_consumption=payload.get("energy_consumption", 0),
        )

    def metric(self, name: str) -> float:
        if name not in METRIC_LABELS:
            raise KeyError(f"Unknown metric: {name}")
        return getattr(self, name)


@dataclass(frozen=True)
class DatasetPage:
    rows: list[DatasetRow]
    total: int
    page: int
    limit: int
    pages: int

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "DatasetPage":
        data = payload.get("data") or []
        if not isinstance(data, list):
            raise ValueError("dataset rows must be a list of objects")
        rows = [DatasetRow.from_payload(item) for item in data]
        total = int(payload.get("total", len(rows)))
        limit = int(payload.get("limit", len(rows) or 1))
        pages = payload.get("pages")
        return cls(
            rows=rows,
            total=total,
            page=int(payload.get("page", 1)),
            limit=limit,
            pages=int(pages) if pages is not None else total_pages(total, limit),
        )
