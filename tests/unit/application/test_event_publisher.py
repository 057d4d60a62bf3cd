from datetime import datetime
from unittest.mock import Mock

from qrdrop.application.event_publisher import EventPublisher
from qrdrop.domain.events import DomainEvent, FileDownloadedEvent, FileUploadedEvent

NOW = datetime(2024, 1, 1)


def test_base_class_subscribers_receive_subclass_events():
    publisher = EventPublisher()
    handler = Mock(__name__="handler")
    publisher.subscribe(DomainEvent, handler)
    event = FileDownloadedEvent("0123456789ab", NOW, "a.txt")

    publisher.publish(event)

    handler.assert_called_once_with(event)


def test_handlers_only_receive_their_event_type():
    publisher = EventPublisher()
    handler = Mock(__name__="handler")
    publisher.subscribe(FileUploadedEvent, handler)

    publisher.publish(FileDownloadedEvent("0123456789ab", NOW, "a.txt"))

    handler.assert_not_called()


def test_failing_handler_does_not_stop_others():
    publisher = EventPublisher()
    broken = Mock(__name__="broken", side_effect=RuntimeError("boom"))
    healthy = Mock(__name__="healthy")
    publisher.subscribe(DomainEvent, broken)
    publisher.subscribe(DomainEvent, healthy)

    publisher.publish(FileDownloadedEvent("0123456789ab", NOW, "a.txt"))

    healthy.assert_called_once()


def test_event_to_dict():
    event = FileUploadedEvent("0123456789ab", NOW, "a.txt", 42, True)

    assert event.to_dict() == {
        "event_type": "FileUploadedEvent",
        "aggregate_id": "0123456789ab",
        "occurred_at": "2024-01-01T00:00:00",
        "original_name": "a.txt",
        "expires_at": 42,
        "password_protected": True,
    }
