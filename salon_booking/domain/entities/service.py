from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SelectedService:
    id: str
    name: str
    price: float
    duration: int  # minutes
    category: str = ""


@dataclass(frozen=True)
class ServiceOffering:
    id: str
    name: str
    price: float
    duration: int
    category: str
    description: str | None = None
    is_chemical: bool = False  # chemical treatments need a client acknowledgement
    is_active: bool = True
    branch_id: str | None = None

    def to_selection(self) -> SelectedService:
        return SelectedService(
            id=self.id,
            name=self.name,
            price=self.price,
            duration=self.duration,
            category=self.category,
        )
