from __future__ import annotations

import logging
from dataclasses import dataclass

from salon_booking.application.ports.catalog import CatalogPort
from salon_booking.domain.entities.branch import Branch
from salon_booking.domain.entities.service import ServiceOffering
from salon_booking.domain.entities.stylist import StylistProfile

logger = logging.getLogger(__name__)


@dataclass
class CatalogUseCase:
    catalog: CatalogPort

    def list_branches(self) -> list[Branch]:
        """Branches a client can book at."""
        return [b for b in self.catalog.list_branches() if b.is_active]

    def get_branch(self, branch_id: str) -> Branch | None:
        return self.catalog.get_branch(branch_id)

    def get_active_branch(self, branch_id: str) -> Branch | None:
        branch = self.catalog.get_branch(branch_id)
        if branch is None or not branch.is_active:
            return None
        return branch

    def list_services(self, branch_id: str) -> list[ServiceOffering]:
        return [s for s in self.catalog.list_services(branch_id) if s.is_active]

    def get_service(self, branch_id: str, service_id: str) -> ServiceOffering | None:
        for service in self.list_services(branch_id):
            if service.id == service_id:
                return service
        return None

    def list_stylists(
        self,
        branch_id: str,
        service_id: str | None = None,
        available_only: bool = True,
    ) -> list[StylistProfile]:
        stylists = self.catalog.list_stylists(branch_id)
        if service_id:
            stylists = [s for s in stylists if s.can_perform(service_id)]
        if available_only:
            stylists = [s for s in stylists if s.is_available]
        logger.debug(
            "Stylists listed",
            extra={"branch_id": branch_id, "service_id": service_id, "count": len(stylists)},
        )
        return stylists

    def get_stylist(self, branch_id: str, stylist_id: str) -> StylistProfile | None:
        for stylist in self.catalog.list_stylists(branch_id):
            if stylist.id == stylist_id:
                return stylist
        return None
