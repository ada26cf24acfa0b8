from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SelectedStylist:
    id: str
    name: str
    first_name: str = ""
    last_name: str = ""

    @property
    def display_name(self) -> str:
        full = f"{self.first_name} {self.last_name}".strip()
        if self.first_name and self.last_name:
            return full
        return self.name or full


@dataclass(frozen=True)
class StylistProfile:
    id: str
    name: str
    first_name: str = ""
    last_name: str = ""
    rating: float = 4.5
    is_available: bool = True
    service_ids: tuple[str, ...] = ()
    branch_id: str | None = None

    def can_perform(self, service_id: str) -> bool:
        return service_id in self.service_ids

    def to_selection(self) -> SelectedStylist:
        return SelectedStylist(
            id=self.id,
            name=self.name,
            first_name=self.first_name,
            last_name=self.last_name,
        )
