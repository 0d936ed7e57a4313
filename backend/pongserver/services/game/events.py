"""Outbound events produced by the session core.

The coordinator never talks to the transport directly; it hands
`OutboundEvent` values to an `EventSink`. The Socket.IO adapter delivers
them to connections, tests collect them in a `RecordingSink`.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple


@dataclass(frozen=True)
class OutboundEvent:
    name: str
    payload: Optional[Dict[str, Any]]
    recipients: Tuple[str, ...]


def event(name: str, payload: Optional[Dict[str, Any]], recipients: Sequence[str]) -> OutboundEvent:
    return OutboundEvent(name=name, payload=payload, recipients=tuple(recipients))


class EventSink:
    def publish(self, evt: OutboundEvent) -> None:
        raise NotImplementedError


class RecordingSink(EventSink):
    """Keeps every published event in memory."""

    def __init__(self):
        self.events: List[OutboundEvent] = []

    def publish(self, evt: OutboundEvent) -> None:
        self.events.append(evt)

    def named(self, name: str) -> List[OutboundEvent]:
        return [e for e in self.events if e.name == name]


class SocketIOEventSink(EventSink):
    """Delivers events to individual Socket.IO connections."""

    def __init__(self, socketio, namespace: str = '/'):
        self.socketio = socketio
        self.namespace = namespace

    def publish(self, evt: OutboundEvent) -> None:
        for sid in evt.recipients:
            if evt.payload is None:
                self.socketio.emit(evt.name, to=sid, namespace=self.namespace)
            else:
                self.socketio.emit(evt.name, evt.payload, to=sid, namespace=self.namespace)
