"""
Audit sink module for the skirmish engine.

The engine reports placements, movements, looting, attacks and damage to an
audit sink. The sink only prescribes the call shape; storage is up to the
implementation.
"""

from abc import ABC, abstractmethod

from pydantic import BaseModel, Field

from core.constants import AuditAction
from core.logging import get_logger


class AuditEvent(BaseModel):
    """A single structured notification."""

    actor: str = Field(description="The name of the creature or subsystem acting.")
    action: AuditAction = Field(description="The kind of notification.")
    detail: str = Field(default="", description="Free-text detail.")

    def __str__(self) -> str:
        return f"{self.actor} performed action: {self.action}. Details: {self.detail}"


class AuditSink(ABC):
    """Receiver of audit notifications."""

    @abstractmethod
    def record(self, actor: str, action: AuditAction, detail: str = "") -> None:
        """Records a notification."""


class LoggingAuditSink(AuditSink):
    """Forwards notifications to the `skirmish.audit` logger."""

    def __init__(self) -> None:
        self.logger = get_logger("skirmish.audit")

    def record(self, actor: str, action: AuditAction, detail: str = "") -> None:
        self.logger.info(str(AuditEvent(actor=actor, action=action, detail=detail)))


class MemoryAuditSink(AuditSink):
    """Keeps every notification in memory, in arrival order."""

    def __init__(self) -> None:
        self.events: list[AuditEvent] = []

    def record(self, actor: str, action: AuditAction, detail: str = "") -> None:
        self.events.append(AuditEvent(actor=actor, action=action, detail=detail))

    def of_action(self, action: AuditAction) -> list[AuditEvent]:
        """Returns the recorded events of the given kind."""
        return [event for event in self.events if event.action == action]

    def clear(self) -> None:
        self.events.clear()
