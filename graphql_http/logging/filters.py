"""
Logging filters for graphql_http.
"""

import logging
import re
from typing import List, Pattern, Tuple

MASK = "***MASKED***"


class SensitiveDataFilter(logging.Filter):
    """
    Mask credentials in log messages.

    Covers ``Authorization`` header values, bearer tokens, API keys, secrets,
    passwords and credentials embedded in URLs.
    """

    def __init__(self) -> None:
        super().__init__()
        self.rules: List[Tuple[Pattern[str], str]] = [
            (
                re.compile(r"(authorization['\"]?\s*[:=]\s*['\"]?)([^'\",\s]+(?:\s+[^'\",\s]+)?)", re.IGNORECASE),
                rf"\1{MASK}",
            ),
            (re.compile(r"(bearer\s+)([A-Za-z0-9\-._~+/]+=*)", re.IGNORECASE), rf"\1{MASK}"),
            (
                re.compile(
                    r"((?:api[_-]?key|token|secret|password|passwd)['\"]?\s*[:=]\s*['\"]?)([^'\",\s}&]+)",
                    re.IGNORECASE,
                ),
                rf"\1{MASK}",
            ),
            (re.compile(r"(https?://[^:/\s]+):([^@/\s]+)@"), rf"\1:{MASK}@"),
        ]

    def mask(self, message: str) -> str:
        """Return ``message`` with sensitive values masked."""
        for pattern, replacement in self.rules:
            message = pattern.sub(replacement, message)
        return message

    def filter(self, record: logging.LogRecord) -> bool:
        try:
            message = record.getMessage()
        except (TypeError, ValueError):
            # Leave malformed records to the handler's error reporting.
            return True

        masked = self.mask(message)
        if masked != message:
            record.msg = masked
            record.args = ()
        return True
