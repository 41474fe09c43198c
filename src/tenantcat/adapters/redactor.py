"""Redactor for catalog connection URLs.

Masks the password (and, in strict mode, the username) of SQLAlchemy-style
database URLs, plus secret-looking query-string parameters such as
``sslpassword`` or ``token``. Strings that are not URLs at all are still
scrubbed of ``password=...`` style fragments.
"""

import re

from tenantcat.interfaces import redactor
from tenantcat.interfaces.redactor import RedactorMode

# pylint: disable=too-few-public-methods

PLACEHOLDER = "***"
SECRET_KEYWORDS = ["password", "passwd", "pwd", "sslpassword", "secret", "token"]
STRICT_MODE_KEYWORDS = SECRET_KEYWORDS + ["user", "username", "uid"]

URL_CREDENTIALS_PATTERN = re.compile(r"(?<=://)(?P<user>[^:@/]+):(?P<password>[^@/]*)@")
URL_USER_ONLY_PATTERN = re.compile(r"(?<=://)(?P<user>[^:@/]+)@")


def _query_pattern(keywords: list[str]) -> re.Pattern[str]:
    alternatives = "|".join(keywords)
    return re.compile(rf"(\b(?:{alternatives})=)[^&#\s;]*", re.IGNORECASE)


QUERY_SECRET_PATTERN = _query_pattern(SECRET_KEYWORDS)
STRICT_QUERY_SECRET_PATTERN = _query_pattern(STRICT_MODE_KEYWORDS)


class Redactor(redactor.Redactor):
    """Regex-based `Redactor` implementation."""

    def __init__(self, mode: RedactorMode = RedactorMode.LENIENT) -> None:
        self._mode = mode

    def sanitize_db_url(self, raw_url: str) -> str:
        strict = self._mode is RedactorMode.STRICT
        sanitized = str(raw_url)

        # user:pass@ -> user:***@ (or ***:***@ when strict)
        def _mask_credentials(match: re.Match[str]) -> str:
            user = PLACEHOLDER if strict else match.group("user")
            return f"{user}:{PLACEHOLDER}@"

        sanitized = URL_CREDENTIALS_PATTERN.sub(_mask_credentials, sanitized)
        if strict:
            sanitized = URL_USER_ONLY_PATTERN.sub(f"{PLACEHOLDER}@", sanitized)

        pattern = STRICT_QUERY_SECRET_PATTERN if strict else QUERY_SECRET_PATTERN
        return pattern.sub(rf"\1{PLACEHOLDER}", sanitized)
