from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class BranchSelection:
    id: str
    name: str
    address: str
    city: str


@dataclass(frozen=True)
class Branch:
    id: str
    name: str
    address: str
    city: str
    hours: str | None = None  # e.g. "Mon-Sat 9:00-19:00"
    is_active: bool = True

    def to_selection(self) -> BranchSelection:
        return BranchSelection(id=self.id, name=self.name, address=self.address, city=self.city)
