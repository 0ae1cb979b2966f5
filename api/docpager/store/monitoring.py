"""Command monitoring: logs the commands the driver sends to MongoDB."""

import logging
from typing import Any, Dict, Iterable, Optional

from bson import json_util
from bson.json_util import RELAXED_JSON_OPTIONS
from pymongo.monitoring import (
    CommandListener,
    CommandStartedEvent,
    CommandSucceededEvent,
    CommandFailedEvent,
)


DEFAULT_IGNORED_COMMANDS = ("endSessions", "ping")


def format_document(document: Any) -> str:
    """Render a BSON document as indented relaxed Extended JSON."""
    return json_util.dumps(document, indent=2, json_options=RELAXED_JSON_OPTIONS)


class CommandLogger(CommandListener):
    """Command listener that writes started, succeeded and failed events to a logger.

    Commands named in ``ignored_commands`` (handshake noise such as ``ping``
    and ``endSessions``) are never logged.
    """

    def __init__(
        self,
        logger: Optional[logging.Logger] = None,
        ignored_commands: Iterable[str] = DEFAULT_IGNORED_COMMANDS
    ):
        self.logger = logger or logging.getLogger(__name__)
        self.ignored_commands = frozenset(ignored_commands)

    def is_ignored(self, command_name: str) -> bool:
        return command_name in self.ignored_commands

    def started(self, event: CommandStartedEvent) -> None:
        if self.is_ignored(event.command_name):
            return
        payload: Dict[str, Any] = {
            "commandName": event.command_name,
            "requestId": event.request_id,
            "databaseName": event.database_name,
            "address": list(event.connection_id) if event.connection_id else None,
            "command": event.command,
        }
        self.logger.info(f"Command started:\n{format_document(payload)}")

    def succeeded(self, event: CommandSucceededEvent) -> None:
        if self.is_ignored(event.command_name):
            return
        payload: Dict[str, Any] = {
            "commandName": event.command_name,
            "requestId": event.request_id,
            "durationMicros": event.duration_micros,
            "reply": event.reply,
        }
        self.logger.info(f"Command succeeded:\n{format_document(payload)}")

    def failed(self, event: CommandFailedEvent) -> None:
        if self.is_ignored(event.command_name):
            return
        payload: Dict[str, Any] = {
            "commandName": event.command_name,
            "requestId": event.request_id,
            "durationMicros": event.duration_micros,
            "failure": event.failure,
        }
        self.logger.warning(f"Command failed:\n{format_document(payload)}")
