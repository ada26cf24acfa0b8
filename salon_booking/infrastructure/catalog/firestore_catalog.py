from __future__ import annotations

import logging
from typing import Any, Iterable

from google.cloud import exceptions as gexc
from google.cloud import firestore
from google.cloud.firestore_v1.base_query import FieldFilter

from salon_booking.application.exceptions import CatalogUnavailableError
from salon_booking.application.ports.catalog import CatalogPort
from salon_booking.core.config import settings
from salon_booking.domain.entities.branch import Branch
from salon_booking.domain.entities.service import ServiceOffering
from salon_booking.domain.entities.stylist import StylistProfile
from salon_booking.infrastructure.catalog.parsing import (
    branch_from_record,
    service_from_record,
    stylist_from_record,
)

BRANCHES_COLLECTION = "branches"
SERVICES_COLLECTION = "services"
USERS_COLLECTION = "users"


def _record(snapshot: Any) -> dict[str, Any]:
    return {**(snapshot.to_dict() or {}), "id": snapshot.id}


class FirestoreCatalog(CatalogPort):
    """
    Salon catalog read from Firestore.

    Branches and services live in their own collections. Stylists are user
    documents with role "stylist" whose branch sits under staffData.branchId.
    """

    def __init__(
        self,
        project_id: str | None = None,
        client: firestore.Client | None = None,
        timeout: float | None = None,
    ) -> None:
        self._project_id = project_id or settings.FIREBASE_PROJECT_ID
        self._timeout = timeout or settings.FIRESTORE_TIMEOUT_SECONDS
        self._logger = logging.getLogger(__name__)

        if client is None:
            if not self._project_id:
                raise ValueError("FIREBASE_PROJECT_ID is required for the Firestore catalog")
            client = firestore.Client(project=self._project_id, database=settings.FIRESTORE_DATABASE)
        self._db = client

    def list_branches(self) -> list[Branch]:
        snapshots = self._fetch(
            BRANCHES_COLLECTION,
            lambda: self._db.collection(BRANCHES_COLLECTION).stream(timeout=self._timeout),
        )
        return [branch_from_record(_record(s)) for s in snapshots]

    def get_branch(self, branch_id: str) -> Branch | None:
        try:
            snapshot = self._db.collection(BRANCHES_COLLECTION).document(branch_id).get(timeout=self._timeout)
        except gexc.GoogleCloudError as e:
            self._logger.error("Error fetching branch", extra={"branch_id": branch_id, "error": str(e)})
            raise CatalogUnavailableError(f"Failed to fetch branch {branch_id}") from e
        if not snapshot.exists:
            return None
        return branch_from_record(_record(snapshot))

    def list_services(self, branch_id: str) -> list[ServiceOffering]:
        query = self._db.collection(SERVICES_COLLECTION).where(filter=FieldFilter("branchId", "==", branch_id))
        snapshots = self._fetch(SERVICES_COLLECTION, lambda: query.stream(timeout=self._timeout))
        return [service_from_record(_record(s)) for s in snapshots]

    def list_stylists(self, branch_id: str) -> list[StylistProfile]:
        query = self._db.collection(USERS_COLLECTION).where(filter=FieldFilter("role", "==", "stylist"))
        snapshots = self._fetch(USERS_COLLECTION, lambda: query.stream(timeout=self._timeout))
        stylists = [stylist_from_record(_record(s)) for s in snapshots]
        return [s for s in stylists if s.branch_id == branch_id]

    def _fetch(self, collection: str, stream: Any) -> list[Any]:
        # stream() is lazy; errors surface while iterating.
        try:
            snapshots: Iterable[Any] = stream()
            return list(snapshots)
        except gexc.GoogleCloudError as e:
            self._logger.error("Error reading collection", extra={"collection": collection, "error": str(e)})
            raise CatalogUnavailableError(f"Failed to read {collection}") from e
