# Copyright (c) 2025-2026 OptimNow. All Rights Reserved.
# Licensed under the Apache License, Version 2.0.
# See LICENSE file in the project root for full license information.

"""Ship reconciliation logs to CloudWatch, one batch per run."""

import logging
import sys
from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from .logging_config import LOG_FORMAT

# PutLogEvents limits: 10,000 events and 1 MiB per call, each event
# counted as its UTF-8 size plus 26 bytes.
MAX_BATCH_EVENTS = 10_000
MAX_BATCH_BYTES = 1_048_576
EVENT_OVERHEAD_BYTES = 26


class CloudWatchHandler(logging.Handler):
    """
    Logging handler that buffers a reconciliation run for CloudWatch.

    Every message is prefixed with the cluster name so runs against
    different clusters can share a log group. Records are held in memory
    and sent with a single PutLogEvents call when the run is flushed, or
    earlier if a batch would exceed the API limits.
    """

    def __init__(
        self,
        log_group: str,
        log_stream: str,
        cluster_name: str,
        region: str = "us-east-1",
        client: Any = None,
    ):
        """
        Args:
            log_group: CloudWatch log group name
            log_stream: CloudWatch log stream name
            cluster_name: Cluster the run reconciles, prefixed to each message
            region: AWS region for CloudWatch
            client: Optional boto3 logs client
        """
        super().__init__()
        self.log_group = log_group
        self.log_stream = log_stream
        self.cluster_name = cluster_name
        self.client = client or boto3.client("logs", region_name=region)
        self._events: list[dict[str, Any]] = []
        self._batch_bytes = 0
        self.enabled = self._create_destination()

    def _create_destination(self) -> bool:
        """Create the log group and stream; False when CloudWatch is unusable."""
        steps = [
            (self.client.create_log_group, {"logGroupName": self.log_group}),
            (
                self.client.create_log_stream,
                {"logGroupName": self.log_group, "logStreamName": self.log_stream},
            ),
        ]
        for create, kwargs in steps:
            try:
                create(**kwargs)
            except ClientError as e:
                if e.response["Error"]["Code"] != "ResourceAlreadyExistsException":
                    print(f"Failed to setup CloudWatch logging: {e}", file=sys.stderr)
                    return False
            except BotoCoreError as e:
                print(f"Failed to setup CloudWatch logging: {e}", file=sys.stderr)
                return False
        return True

    @property
    def pending(self) -> int:
        """Number of buffered events not yet sent."""
        return len(self._events)

    def emit(self, record: logging.LogRecord) -> None:
        if not self.enabled:
            return
        try:
            message = f"[{self.cluster_name}] {self.format(record)}"
            size = len(message.encode("utf-8")) + EVENT_OVERHEAD_BYTES
            if (
                len(self._events) >= MAX_BATCH_EVENTS
                or self._batch_bytes + size > MAX_BATCH_BYTES
            ):
                self.flush()
            self._events.append({"timestamp": int(record.created * 1000), "message": message})
            self._batch_bytes += size
        except Exception:
            self.handleError(record)

    def flush(self) -> None:
        """Send the buffered events in one PutLogEvents call."""
        self.acquire()
        try:
            events, self._events = self._events, []
            self._batch_bytes = 0
        finally:
            self.release()
        if not events:
            return

        # PutLogEvents rejects batches that are not in chronological order
        events.sort(key=lambda event: event["timestamp"])
        try:
            self.client.put_log_events(
                logGroupName=self.log_group,
                logStreamName=self.log_stream,
                logEvents=events,
            )
        except (ClientError, BotoCoreError) as e:
            print(f"Failed to send {len(events)} log events to CloudWatch: {e}", file=sys.stderr)

    def close(self) -> None:
        try:
            self.flush()
        finally:
            super().close()


def configure_cloudwatch_logging(
    log_group: str,
    log_stream: str,
    cluster_name: str,
    region: str = "us-east-1",
    enable: bool = True,
) -> CloudWatchHandler | None:
    """
    Attach a CloudWatch handler for one reconciliation run to the root logger.

    Args:
        log_group: CloudWatch log group name
        log_stream: CloudWatch log stream name
        cluster_name: Cluster the run reconciles
        region: AWS region for CloudWatch
        enable: Whether to enable CloudWatch logging

    Returns:
        The installed handler, or None when disabled or unusable
    """
    if not enable:
        return None

    try:
        handler = CloudWatchHandler(
            log_group=log_group,
            log_stream=log_stream,
            cluster_name=cluster_name,
            region=region,
        )
    except BotoCoreError as e:
        print(f"Failed to configure CloudWatch logging: {e}", file=sys.stderr)
        return None
    if not handler.enabled:
        return None

    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logging.getLogger().addHandler(handler)

    logging.getLogger(__name__).info(
        f"CloudWatch logging configured: group={log_group}, stream={log_stream}"
    )
    return handler
