from __future__ import annotations

import json
import logging
import re
import threading
import uuid
from pathlib import Path
from typing import Any

from salon_booking.application.ports.session_store import BookingSessionStorePort
from salon_booking.domain.entities.booking_selection import BookingSelection, WorkflowState
from salon_booking.domain.entities.branch import BranchSelection
from salon_booking.domain.entities.service import SelectedService
from salon_booking.domain.entities.stylist import SelectedStylist

_SESSION_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")


class JsonBookingSessionStore(BookingSessionStorePort):
    def __init__(self, data_dir: str = "./data/bookings") -> None:
        self._data_dir = Path(data_dir)
        self._data_dir.mkdir(parents=True, exist_ok=True)
        self._locks: dict[str, threading.Lock] = {}
        self._lock_lock = threading.Lock()  # guards the locks dict
        self._logger = logging.getLogger(__name__)

    def _get_lock(self, session_id: str) -> threading.Lock:
        with self._lock_lock:
            if session_id not in self._locks:
                self._locks[session_id] = threading.Lock()
            return self._locks[session_id]

    def _get_file_path(self, session_id: str) -> Path:
        if not _SESSION_ID_PATTERN.match(session_id):
            raise ValueError(f"Invalid session id: {session_id!r}")
        return self._data_dir / f"{session_id}.json"

    def create(self) -> str:
        session_id = uuid.uuid4().hex
        self.save(session_id, WorkflowState())
        return session_id

    def get(self, session_id: str) -> WorkflowState | None:
        try:
            file_path = self._get_file_path(session_id)
        except ValueError:
            return None
        with self._get_lock(session_id):
            if not file_path.exists():
                return None
            try:
                with open(file_path, "r", encoding="utf-8") as f:
                    data = json.load(f)
                return self._deserialize_state(data.get("state") or {})
            except (json.JSONDecodeError, OSError, KeyError, TypeError, ValueError) as e:
                # A corrupted session file is treated as an expired session.
                self._logger.warning(
                    "Unreadable booking session file",
                    extra={"session_id": session_id, "error": str(e)},
                )
                return None

    def save(self, session_id: str, state: WorkflowState) -> None:
        file_path = self._get_file_path(session_id)
        temp_path = file_path.with_suffix(".json.tmp")
        data = {"session_id": session_id, "state": self._serialize_state(state), "version": 1}

        with self._get_lock(session_id):
            try:
                with open(temp_path, "w", encoding="utf-8") as f:
                    json.dump(data, f, indent=2, ensure_ascii=False)
                temp_path.replace(file_path)
            except Exception:
                if temp_path.exists():
                    temp_path.unlink()
                raise

    def delete(self, session_id: str) -> bool:
        try:
            file_path = self._get_file_path(session_id)
        except ValueError:
            return False
        with self._get_lock(session_id):
            if not file_path.exists():
                return False
            file_path.unlink()
        with self._lock_lock:
            self._locks.pop(session_id, None)
        return True

    def _serialize_state(self, state: WorkflowState) -> dict[str, Any]:
        selection = state.selection
        branch = selection.branch
        return {
            "is_submitting": state.is_submitting,
            "last_error": state.last_error,
            "selection": {
                "branch": (
                    {"id": branch.id, "name": branch.name, "address": branch.address, "city": branch.city}
                    if branch
                    else None
                ),
                "date": selection.date,
                "time": selection.time,
                "services": [
                    {
                        "id": s.id,
                        "name": s.name,
                        "price": s.price,
                        "duration": s.duration,
                        "category": s.category,
                    }
                    for s in selection.services
                ],
                "stylist_assignments": {
                    service_id: {
                        "id": st.id,
                        "name": st.name,
                        "first_name": st.first_name,
                        "last_name": st.last_name,
                    }
                    for service_id, st in selection.stylist_assignments.items()
                },
                "current_step": selection.current_step,
                "notes": selection.notes,
            },
        }

    def _deserialize_state(self, data: dict[str, Any]) -> WorkflowState:
        raw = data.get("selection") or {}
        branch = raw.get("branch")
        selection = BookingSelection(
            branch=BranchSelection(**branch) if branch else None,
            date=raw.get("date"),
            time=raw.get("time"),
            services=tuple(SelectedService(**s) for s in raw.get("services", [])),
            stylist_assignments={
                service_id: SelectedStylist(**st)
                for service_id, st in (raw.get("stylist_assignments") or {}).items()
            },
            current_step=int(raw.get("current_step", 1)),
            notes=raw.get("notes"),
        )
        return WorkflowState(
            selection=selection,
            is_submitting=bool(data.get("is_submitting", False)),
            last_error=data.get("last_error"),
        )
