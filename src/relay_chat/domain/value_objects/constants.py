from __future__ import annotations

# Reserved recipient meaning "every current participant".
BROADCAST_TARGET = "Todos"

ARRIVAL_TEXT = "entra na sala..."
DEPARTURE_TEXT = "sai da sala..."

DISPLAY_TIME_FORMAT = "%H:%M:%S"
