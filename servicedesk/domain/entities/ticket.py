"""Snapshot of the ticket fields used to describe ticket activity."""

from __future__ import annotations

from dataclasses import dataclass

TICKET_PRIORITY_HIGH = "High"


@dataclass(frozen=True)
class TicketSnapshot:
    ticket_id: str
    device_type: str
    brand: str
    issue_description: str
    priority: str
    status: str

    @property
    def is_high_priority(self) -> bool:
        return self.priority == TICKET_PRIORITY_HIGH

    @property
    def device_label(self) -> str:
        return f"{self.device_type} • {self.brand}"


__all__ = ["TicketSnapshot", "TICKET_PRIORITY_HIGH"]
