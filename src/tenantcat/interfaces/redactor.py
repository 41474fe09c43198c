"""Port for keeping catalog credentials out of logs and messages.

The catalog URL carries the credentials of the catalog database. Bootstrap
errors, CLI prompts and startup diagnostics show it only after a `Redactor`
has masked it; driver messages that may quote a URL go through
`Redactor.sanitize_text`.
"""

import abc
import re
from enum import Enum

# pylint: disable=too-few-public-methods

# scheme://rest, up to the next whitespace or closing quote
EMBEDDED_URL_PATTERN = re.compile(r"\b[a-z][a-z0-9+.-]*://[^\s'\"]+", re.IGNORECASE)


class RedactorMode(Enum):
    """How much of a URL is masked.

    ``LENIENT`` hides passwords and tokens; ``STRICT`` hides usernames too.
    """

    LENIENT = "lenient"
    STRICT = "strict"


class Redactor(abc.ABC):
    """Masks secrets in database URLs and in text that quotes them."""

    _mode: RedactorMode

    @property
    def mode(self) -> RedactorMode:
        return self._mode

    @abc.abstractmethod
    def sanitize_db_url(self, raw_url: str) -> str:
        """Return `raw_url` with its credentials replaced by a placeholder."""

    def sanitize_text(self, text: str) -> str:
        """Return `text` with every URL inside it passed to `sanitize_db_url`."""
        return EMBEDDED_URL_PATTERN.sub(
            lambda match: self.sanitize_db_url(match.group(0)), text
        )
