"""Logging and metrics wrappers around command and query handlers."""

from __future__ import annotations

import logging
import time
from typing import Any, Protocol


class QueryHandler(Protocol):
    def handle(self, cmd: Any) -> Any: ...


class MetricsClient(Protocol):
    def inc(self, key: str, value: int) -> None: ...


def generate_action_name(cmd: Any) -> str:
    """Name of the command's type, used in logs and metric keys."""
    return type(cmd).__name__


class LoggingDecorator:
    """Log the start and outcome of every handled command."""

    def __init__(self, logger: logging.Logger, base: QueryHandler):
        self.logger = logger
        self.base = base

    def handle(self, cmd: Any) -> Any:
        fields = {"query": generate_action_name(cmd), "query_body": repr(cmd)}
        self.logger.debug("Executing query", extra={"fields": fields})
        try:
            result = self.base.handle(cmd)
        except Exception as err:
            self.logger.error("Failed to execute query: %s", err, extra={"fields": fields})
            raise
        self.logger.info("Query execute successfully", extra={"fields": fields})
        return result


class MetricsDecorator:
    """Record duration and success or failure counts for every command."""

    def __init__(self, base: QueryHandler, client: MetricsClient):
        self.base = base
        self.client = client

    def handle(self, cmd: Any) -> Any:
        start = time.monotonic()
        name = generate_action_name(cmd).lower()
        ok = False
        try:
            result = self.base.handle(cmd)
            ok = True
            return result
        finally:
            self.client.inc(f"querys.{name}.duration", int(time.monotonic() - start))
            outcome = "success" if ok else "failure"
            self.client.inc(f"querys.{name}.{outcome}", 1)


def apply_query_decorators(handler, logger, metrics_client) -> LoggingDecorator:
    return LoggingDecorator(logger, MetricsDecorator(handler, metrics_client))


def apply_command_decorators(handler, logger, metrics_client) -> LoggingDecorator:
    return LoggingDecorator(logger, MetricsDecorator(handler, metrics_client))