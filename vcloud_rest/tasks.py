"""
Polling of vCloud Director task resources
"""

import logging
import math
import time
from typing import Callable, Dict, Optional

import httpx

from .config import DEFAULT_POLL_INTERVAL
from .models import TaskOutcome, TaskResult, TaskStatus
from .transport import find_task, parse_document, send, task_fields

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[Optional[TaskStatus], object], None]


class TaskPoller:
    """Re-fetches a task until it reaches a terminal status or the budget runs out.

    Every poll uses the headers of the request that created the task, so the
    API version and credential stay fixed for the whole wait. A failed poll
    request raises RequestFailedError; polls are never retried.
    """

    def __init__(self, client: httpx.Client, headers: Dict[str, str],
                 poll_interval: float = DEFAULT_POLL_INTERVAL,
                 sleep: Callable[[float], None] = time.sleep,
                 progress: Optional[ProgressCallback] = None):
        if poll_interval <= 0:
            raise ValueError("poll_interval must be positive")
        self.client = client
        self.headers = dict(headers)
        self.poll_interval = poll_interval
        self.sleep = sleep
        self.progress = progress

    def fetch(self, task_href: str):
        """GET the task once and return its element (or JSON object), None if absent"""
        response = send(self.client, "GET", task_href, self.headers)
        return find_task(parse_document(response))

    def poll_until_done(self, task_href: str, task_timeout: float) -> TaskResult:
        max_polls = max(0, math.ceil(task_timeout / self.poll_interval))
        polls = 0
        last_status = None
        unknown_seen = set()

        while polls < max_polls:
            task = self.fetch(task_href)
            polls += 1
            raw_status, error_message, operation = task_fields(task) if task is not None else (None, None, None)
            last_status = raw_status
            status = TaskStatus.parse(raw_status)

            if status is not None and status.is_terminal:
                outcome = TaskOutcome.from_status(status)
                if outcome is TaskOutcome.SUCCESS:
                    logger.info(f"Task {task_href} succeeded after {polls} polls")
                else:
                    logger.info(f"Task {task_href} ended with status {raw_status}: {error_message}")
                return TaskResult(task_href, outcome, raw_status, polls, error_message, operation)

            if status is None and raw_status not in unknown_seen:
                unknown_seen.add(raw_status)
                logger.warning(f"Task {task_href} reported unknown status {raw_status!r}, still waiting")
            else:
                logger.debug(f"Task {task_href} is {raw_status}")

            if self.progress is not None:
                self.progress(status, task)

            if polls < max_polls:
                self.sleep(self.poll_interval)

        logger.warning(f"Timed out waiting for task {task_href} (last status {last_status}, {polls} polls)")
        return TaskResult(task_href, TaskOutcome.TIMED_OUT, last_status, polls)
