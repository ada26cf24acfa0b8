#!/usr/bin/env python3
"""
Interactive local booking harness (no HTTP, no Firebase).

Usage:
  python3 scripts/book_local.py

What it does:
- Starts one booking session against the bundled sample catalog and a mock sink
- Lets you drive every workflow operation from the prompt
- Prints the current step, selections and totals after each command
"""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from salon_booking.application.exceptions import BookingError, CatalogUnavailableError
from salon_booking.application.use_cases.booking_session import BookingSessionUseCase
from salon_booking.application.use_cases.booking_workflow import BookingWorkflow
from salon_booking.application.use_cases.catalog import CatalogUseCase
from salon_booking.domain.entities.client import ClientInfo
from salon_booking.infrastructure.appointments.mock_sink import MockAppointmentSink
from salon_booking.infrastructure.catalog.json_catalog import JsonCatalog
from salon_booking.infrastructure.store.memory_store import MemoryBookingSessionStore

STEP_NAMES = {1: "branch", 2: "date & time", 3: "services & stylists", 4: "summary"}

HELP = """Commands:
  branches                    list branches
  services                    list services of the selected branch
  stylists <service_id>       list stylists for a service
  branch <branch_id>          select a branch
  when <YYYY-MM-DD> <HH:MM>   select date and time
  toggle <service_id>         select / deselect a service
  assign <service_id> <stylist_id>
  notes <text>                set notes
  confirm | back | next | reset
  book                        commit the booking
  /new | /quit | /help"""


def _print_state(session_id: str, workflow: BookingWorkflow) -> None:
    selection = workflow.selection
    totals = workflow.compute_totals()
    print(f"\nsession: {session_id}")
    print(f"step {selection.current_step}/4: {STEP_NAMES[selection.current_step]}")
    if selection.branch:
        print(f"branch: {selection.branch.name} ({selection.branch.city})")
    if selection.date:
        print(f"when: {selection.date} {selection.time}")
    for service in selection.services:
        stylist = selection.stylist_assignments.get(service.id)
        who = stylist.display_name if stylist else "(no stylist)"
        print(f"  - {service.name} {service.price} / {service.duration}min -> {who}")
    if selection.notes:
        print(f"notes: {selection.notes}")
    print(f"total: {totals.total_price} / {totals.total_duration}min")
    if workflow.last_error:
        print(f"last error: {workflow.last_error}")


def main() -> None:
    catalog = CatalogUseCase(catalog=JsonCatalog())
    sink = MockAppointmentSink()
    use_case = BookingSessionUseCase(store=MemoryBookingSessionStore(), catalog=catalog, sink=sink)
    client = ClientInfo(id="local_client", first_name="Local", last_name="Client")

    session_id = use_case.start()
    print("\nLocal Booking Harness")
    print("-" * 60)
    print(HELP)
    print("-" * 60)

    while True:
        try:
            line = input("\n> ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\nBye!")
            return

        if not line:
            continue
        cmd, _, rest = line.partition(" ")
        args = rest.split()
        cmd = cmd.lower()

        if cmd in ("/quit", "/exit"):
            print("Bye!")
            return
        if cmd == "/help":
            print(HELP)
            continue
        if cmd == "/new":
            session_id = use_case.start()
            print(f"New session: {session_id}")
            continue

        try:
            workflow = use_case.get(session_id)
            branch = workflow.selection.branch
            if cmd == "branches":
                for b in catalog.list_branches():
                    print(f"  {b.id}: {b.name}, {b.address}, {b.city}  {b.hours or ''}")
                continue
            if cmd == "services":
                if not branch:
                    print("Select a branch first.")
                    continue
                for s in catalog.list_services(branch.id):
                    flag = " [chemical]" if s.is_chemical else ""
                    print(f"  {s.id}: {s.name} {s.price} / {s.duration}min ({s.category}){flag}")
                continue
            if cmd == "stylists" and args:
                if not branch:
                    print("Select a branch first.")
                    continue
                for st in catalog.list_stylists(branch.id, service_id=args[0]):
                    print(f"  {st.id}: {st.to_selection().display_name} ({st.rating})")
                continue

            if cmd == "branch" and args:
                workflow = use_case.select_branch(session_id, args[0])
            elif cmd == "when" and len(args) == 2:
                workflow = use_case.select_date_time(session_id, args[0], args[1])
            elif cmd == "toggle" and args:
                workflow = use_case.toggle_service(session_id, args[0])
            elif cmd == "assign" and len(args) == 2:
                workflow = use_case.assign_stylist(session_id, args[0], args[1])
            elif cmd == "notes":
                workflow = use_case.set_notes(session_id, rest)
            elif cmd == "confirm":
                workflow = use_case.confirm_services(session_id)
            elif cmd == "back":
                workflow = use_case.previous_step(session_id)
            elif cmd == "next":
                workflow = use_case.next_step(session_id)
            elif cmd == "reset":
                workflow = use_case.reset(session_id)
            elif cmd == "book":
                appointment_id, workflow = asyncio.run(use_case.commit(session_id, client))
                print(f"Booked! appointment_id={appointment_id}")
                print(sink.appointments[appointment_id])
            else:
                print("Unknown command, /help for the list.")
                continue
        except (BookingError, CatalogUnavailableError) as e:
            print(f"{e.__class__.__name__}: {e}")
            workflow = use_case.get(session_id)

        _print_state(session_id, workflow)


if __name__ == "__main__":
    main()
