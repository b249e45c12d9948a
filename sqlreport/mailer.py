"""SMTP delivery of report emails."""

from __future__ import annotations

import hashlib
import logging
import smtplib
import threading
import time
from collections import deque
from email.message import EmailMessage
from typing import Callable, Deque, Dict, Optional

from .models import EmailData

logger = logging.getLogger(__name__)


class SendLimiter:
    """
    Throttle for sends flagged with_limiter.

    Allows at most `limit` sends in any `interval`-second window and drops a
    message identical to one already sent in the window. Messages are
    identical when they share subject and dedupe_key, or subject and body
    when no dedupe_key is set.
    """

    def __init__(
        self,
        limit: int = 10,
        interval: float = 60.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.limit = limit
        self.interval = interval
        self._clock = clock
        self._lock = threading.Lock()
        self._sent: Deque[float] = deque()
        self._recent: Dict[str, float] = {}

    @staticmethod
    def _fingerprint(data: EmailData) -> str:
        h = hashlib.sha1()
        h.update(data.subject.encode("utf-8", "replace"))
        h.update(b"\0")
        key = data.dedupe_key if data.dedupe_key is not None else data.body
        h.update(key.encode("utf-8", "replace"))
        return h.hexdigest()

    def allow(self, data: EmailData) -> bool:
        """Record and allow the send, or return False if it must be dropped."""
        now = self._clock()
        horizon = now - self.interval
        key = self._fingerprint(data)
        with self._lock:
            while self._sent and self._sent[0] <= horizon:
                self._sent.popleft()
            for k in [k for k, t in self._recent.items() if t <= horizon]:
                del self._recent[k]

            if key in self._recent:
                return False
            if len(self._sent) >= self.limit:
                return False
            self._sent.append(now)
            self._recent[key] = now
            return True


class SmtpSender:
    """EmailProvider that delivers through an SMTP server."""

    def __init__(
        self,
        host: str,
        port: int = 587,
        username: Optional[str] = None,
        password: Optional[str] = None,
        *,
        starttls: bool = True,
        timeout: float = 20,
        limit: int = 10,
        interval: float = 60.0,
        limiter: Optional[SendLimiter] = None,
    ) -> None:
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.starttls = starttls
        self.timeout = timeout
        self.limiter = (
            limiter if limiter is not None else SendLimiter(limit, interval)
        )

    def build_message(self, data: EmailData) -> EmailMessage:
        msg = EmailMessage()
        msg["From"] = data.from_addr
        msg["To"] = tuple(data.to)
        msg["Subject"] = data.subject
        msg.set_content(data.body)
        return msg

    def send(self, data: EmailData) -> None:
        """Send `data`. Raises smtplib.SMTPException or OSError on failure."""
        if not data.to:
            logger.debug("No recipients for %r; nothing to send", data.subject)
            return
        if data.with_limiter and not self.limiter.allow(data):
            logger.debug("Send of %r suppressed by limiter", data.subject)
            return

        msg = self.build_message(data)
        with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as server:
            server.ehlo()
            if self.starttls:
                server.starttls()
                server.ehlo()
            if self.username and self.password:
                server.login(self.username, self.password)
            server.send_message(msg)
        logger.info(
            "SMTP mail accepted: subject=%r to=%d host=%s:%s",
            data.subject,
            len(data.to),
            self.host,
            self.port,
        )
