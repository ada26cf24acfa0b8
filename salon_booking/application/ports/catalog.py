from __future__ import annotations

from abc import ABC, abstractmethod

from salon_booking.domain.entities.branch import Branch
from salon_booking.domain.entities.service import ServiceOffering
from salon_booking.domain.entities.stylist import StylistProfile


class CatalogPort(ABC):
    @abstractmethod
    def list_branches(self) -> list[Branch]:
        """List all branches, active or not."""
        raise NotImplementedError

    @abstractmethod
    def get_branch(self, branch_id: str) -> Branch | None:
        raise NotImplementedError

    @abstractmethod
    def list_services(self, branch_id: str) -> list[ServiceOffering]:
        """List services offered at a branch."""
        raise NotImplementedError

    @abstractmethod
    def list_stylists(self, branch_id: str) -> list[StylistProfile]:
        """List stylists working at a branch."""
        raise NotImplementedError
