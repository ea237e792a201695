"""Schemas describing ticket activity reported by the ticketing front end."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, model_validator

from servicedesk.domain.entities import TicketSnapshot

from .notification import NotificationRead

TicketEventKind = Literal["created", "priority_changed", "status_changed", "assigned"]
TicketPriority = Literal["Low", "Medium", "High"]


class TicketPayload(BaseModel):
    ticket_id: str = Field(..., min_length=1, max_length=64)
    device_type: str = Field(..., min_length=1, max_length=80)
    brand: str = Field(..., min_length=1, max_length=80)
    issue_description: str = Field(..., min_length=1)
    priority: TicketPriority
    status: str = Field(..., min_length=1, max_length=40)

    def to_snapshot(self) -> TicketSnapshot:
        return TicketSnapshot(
            ticket_id=self.ticket_id,
            device_type=self.device_type,
            brand=self.brand,
            issue_description=self.issue_description,
            priority=self.priority,
            status=self.status,
        )


class TicketEventCreate(BaseModel):
    """A change made to a ticket by the authenticated user.

    ``previous_priority``, ``previous_status`` and ``assignee_id`` are only
    required by the event kinds that compare against or name them.
    """

    event: TicketEventKind
    ticket: TicketPayload
    previous_priority: TicketPriority | None = None
    previous_status: str | None = Field(default=None, min_length=1, max_length=40)
    assignee_id: str | None = Field(default=None, min_length=1)

    @model_validator(mode="after")
    def check_event_fields(self) -> "TicketEventCreate":
        if self.event == "priority_changed" and self.previous_priority is None:
            raise ValueError("'previous_priority' is required for priority changes")
        if self.event == "status_changed" and self.previous_status is None:
            raise ValueError("'previous_status' is required for status changes")
        if self.event == "assigned" and self.assignee_id is None:
            raise ValueError("'assignee_id' is required for assignments")
        return self


class TicketEventResult(BaseModel):
    """The notification produced by a ticket event, if any."""

    notification: NotificationRead | None = None


__all__ = [
    "TicketEventCreate",
    "TicketEventKind",
    "TicketEventResult",
    "TicketPayload",
    "TicketPriority",
]
