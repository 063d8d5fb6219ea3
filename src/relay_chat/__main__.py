"""Run the relay: python -m relay_chat [--no-reaper]"""
from __future__ import annotations

import sys

import uvicorn

from relay_chat.config import settings


def main() -> None:
    # The reaper can run as its own process (relay-chat-reaper); then keep
    # web workers from sweeping as well.
    if "--no-reaper" in sys.argv[1:]:
        settings.REAPER_ENABLED = False

    uvicorn.run(
        "relay_chat.app:create_app",
        factory=True,
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
