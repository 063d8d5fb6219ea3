from __future__ import annotations

from datetime import datetime, timezone

from relay_chat.domain.value_objects.enums import MessageKind
from tests.conftest import make_message


def test_broadcast_message_is_visible_to_everyone():
    msg = make_message(author="Alice", to="Todos")

    assert msg.is_broadcast
    assert msg.visible_to("Alice")
    assert msg.visible_to("Zed")


def test_targeted_message_is_visible_to_sender_and_recipient_only():
    msg = make_message(author="Alice", to="Bob", kind=MessageKind.PRIVATE)

    assert not msg.is_broadcast
    assert msg.visible_to("Alice")
    assert msg.visible_to("Bob")
    assert not msg.visible_to("Carol")


def test_status_flag():
    assert make_message(kind=MessageKind.STATUS).is_status
    assert not make_message(kind=MessageKind.CHAT).is_status


def test_time_is_rendered_in_local_time():
    created = datetime(2024, 5, 1, 23, 59, 7, tzinfo=timezone.utc)
    msg = make_message(created_at=created)

    assert msg.time == created.astimezone().strftime("%H:%M:%S")
