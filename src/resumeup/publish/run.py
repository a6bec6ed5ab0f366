"""
Run orchestrator for resumeup.

Executes one bump pass: list resumes (refreshing the token at most once),
evaluate each resume, publish the eligible ones and notify on success.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, List, Optional, Protocol

from ..auth.tokens import TokenManager
from ..errors import (
    AuthError,
    HttpStatusError,
    NotificationError,
    ResumeUpError,
    TransportError,
)
from ..hh.client import PUBLISH_OK_STATUS, ResumeClient
from ..hh.models import ResumeSummary, parse_listing
from .eligibility import SKIP_NOT_VISIBLE, WAIT_UNTIL, Decision, decide


logger = logging.getLogger(__name__)

DEFAULT_SUCCESS_TEMPLATE = "Успешно поднято {title}"
WAIT_DISPLAY_FORMAT = "%d.%m.%Y %H:%M"


class Notifier(Protocol):
    def send(self, text: str) -> None: ...


@dataclass
class RunResult:
    """Outcome for a single resume."""
    resume_id: str
    title: str
    decision: Decision
    published: bool = False
    notified: bool = False
    error: Optional[str] = None


@dataclass
class RunReport:
    """Everything one pass produced, for logging and the --print mode."""
    results: List[RunResult] = field(default_factory=list)
    listing: Optional[Any] = None
    error: Optional[ResumeUpError] = None
    list_attempts: int = 0
    refresh_attempts: int = 0

    @property
    def aborted(self) -> bool:
        return self.error is not None

    @property
    def published_count(self) -> int:
        return sum(1 for r in self.results if r.published)


class RunCoordinator:
    """
    Orchestrates a single bump pass.

    Retry policy: the first failed listing triggers exactly one token
    refresh and one more listing attempt. Anything failing after that
    aborts the run.
    """

    def __init__(
        self,
        tokens: TokenManager,
        client: ResumeClient,
        notifier: Notifier,
        success_template: str = DEFAULT_SUCCESS_TEMPLATE,
    ):
        """
        Initialize coordinator.

        Args:
            tokens: TokenManager holding the current token pair
            client: ResumeClient for hh.ru calls
            notifier: Anything with send(text)
            success_template: Message template, formatted with title and id
        """
        self.tokens = tokens
        self.client = client
        self.notifier = notifier
        self.success_template = success_template

    def _list(self, report: RunReport) -> Any:
        report.list_attempts += 1
        return self.client.list_mine(self.tokens.ensure_valid())

    def _list_with_refresh(self, report: RunReport) -> Any:
        try:
            return self._list(report)
        except (TransportError, HttpStatusError) as e:
            # hh.ru does not reliably separate auth failures from the rest
            logger.info("Listing failed (%s), refreshing access token", e)

        report.refresh_attempts += 1
        self.tokens.refresh()

        try:
            return self._list(report)
        except HttpStatusError as e:
            raise AuthError(e.status, e.body, f"Listing still failing after token refresh: {e}") from e

    def _process(self, summary: ResumeSummary, token: str) -> RunResult:
        logger.info("%s %s", summary.title, summary.id)

        # SchemaError propagates and aborts the run
        decision = decide(summary)
        result = RunResult(resume_id=summary.id, title=summary.title, decision=decision)

        if decision.action == SKIP_NOT_VISIBLE:
            logger.info(
                "%s not visible for clients (access type: %s), skipping",
                summary.title,
                summary.access_type,
            )
            return result

        if decision.action == WAIT_UNTIL:
            logger.info(
                "%s can publish or update at %s",
                summary.title,
                decision.wait_until.strftime(WAIT_DISPLAY_FORMAT),
            )
            return result

        try:
            status = self.client.publish(summary.id, token)
        except TransportError as e:
            result.error = str(e)
            return result

        if status != PUBLISH_OK_STATUS:
            result.error = f"Publish returned HTTP {status}"
            return result

        result.published = True
        logger.info("Resume %s updated", summary.id)

        try:
            self.notifier.send(self.success_template.format(title=summary.title, id=summary.id))
            result.notified = True
        except NotificationError as e:
            logger.warning("Notification for %s failed: %s", summary.id, e)

        return result

    def run(self) -> RunReport:
        """
        Execute one pass.

        Never raises ResumeUpError: fatal errors are logged and stored on
        the returned report, per-resume errors on their RunResult.

        Returns:
            RunReport
        """
        report = RunReport()

        try:
            report.listing = self._list_with_refresh(report)
            summaries = parse_listing(report.listing)
            logger.info("Found %d resume(s)", len(summaries))

            token = self.tokens.ensure_valid()
            for summary in summaries:
                report.results.append(self._process(summary, token))

        except ResumeUpError as e:
            logger.error("Run aborted: %s", e)
            report.error = e
            return report

        logger.info(
            "Run finished: %d resume(s), %d published",
            len(report.results),
            report.published_count,
        )
        return report
