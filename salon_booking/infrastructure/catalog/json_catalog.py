from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from salon_booking.application.exceptions import CatalogUnavailableError
from salon_booking.application.ports.catalog import CatalogPort
from salon_booking.domain.entities.branch import Branch
from salon_booking.domain.entities.service import ServiceOffering
from salon_booking.domain.entities.stylist import StylistProfile
from salon_booking.infrastructure.catalog.catalog_data import SAMPLE_CATALOG
from salon_booking.infrastructure.catalog.parsing import (
    branch_from_record,
    service_from_record,
    stylist_from_record,
)


class JsonCatalog(CatalogPort):
    """Catalog loaded once from a JSON file (or the bundled sample data)."""

    def __init__(
        self,
        data_path: str | None = None,
        data: dict[str, list[dict[str, Any]]] | None = None,
    ) -> None:
        self._logger = logging.getLogger(__name__)
        raw = data if data is not None else self._load(data_path)
        try:
            self._branches = [branch_from_record(r) for r in raw.get("branches", [])]
            self._services = [service_from_record(r) for r in raw.get("services", [])]
            self._stylists = [
                stylist_from_record(r)
                for r in raw.get("stylists", [])
                if r.get("role", "stylist") == "stylist"
            ]
        except (KeyError, TypeError, ValueError) as e:
            raise CatalogUnavailableError(f"Malformed catalog data: {e}") from e

    def _load(self, data_path: str | None) -> dict[str, list[dict[str, Any]]]:
        if not data_path:
            return SAMPLE_CATALOG
        path = Path(data_path)
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise CatalogUnavailableError(f"Cannot read catalog file {path}: {e}") from e
        self._logger.info("Catalog loaded", extra={"path": str(path)})
        return data

    def list_branches(self) -> list[Branch]:
        return list(self._branches)

    def get_branch(self, branch_id: str) -> Branch | None:
        for branch in self._branches:
            if branch.id == branch_id:
                return branch
        return None

    def list_services(self, branch_id: str) -> list[ServiceOffering]:
        return [s for s in self._services if s.branch_id == branch_id]

    def list_stylists(self, branch_id: str) -> list[StylistProfile]:
        return [s for s in self._stylists if s.branch_id == branch_id]
