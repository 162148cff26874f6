import logging
import re
import sys
from typing import Optional

from artist_playlists.config import LOG_LEVEL

# access_token=..., refresh_token=..., code=... in query strings, fragments and
# form bodies, plus "Bearer <token>" headers.
_SECRET_PARAM_RE = re.compile(r"(?P<key>(?:access_token|refresh_token|code)=)[^&#\s'\"]+")
_BEARER_RE = re.compile(r"(?P<key>Bearer )[A-Za-z0-9._\-]+")


def redact_secrets(text: str) -> str:
    text = _SECRET_PARAM_RE.sub(r"\g<key>***", text)
    return _BEARER_RE.sub(r"\g<key>***", text)


class RedactSecretsFilter(logging.Filter):
    """Masks OAuth tokens and codes before a record reaches the handler."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        redacted = redact_secrets(message)
        if redacted != message:
            record.msg = redacted
            record.args = None
        return True


def configure_logging(level: Optional[int | str] = None) -> None:
    """
    Configure root logging for the application.

    - Logs go to stdout, with tokens masked
    - Level comes from LOG_LEVEL unless given explicitly
    - urllib3 is held at WARNING: its debug lines carry full request URLs,
      and /refresh-token puts the refresh token in the query string
    """
    level = level if level is not None else LOG_LEVEL
    root = logging.getLogger()
    logging.getLogger("urllib3").setLevel(logging.WARNING)

    # Avoid adding handlers multiple times (uvicorn may have configured it)
    if root.handlers:
        root.setLevel(level)
        for existing in root.handlers:
            if not any(isinstance(f, RedactSecretsFilter) for f in existing.filters):
                existing.addFilter(RedactSecretsFilter())
        return

    handler = logging.StreamHandler(sys.stdout)
    formatter = logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s - %(message)s",
        datefmt="%H:%M:%S",
    )
    handler.setFormatter(formatter)
    handler.addFilter(RedactSecretsFilter())

    root.addHandler(handler)
    root.setLevel(level)
