from pathlib import Path
import logging

logger = logging.getLogger(__name__)

_AUTHENTICATED = "true"


class AdminSession:
    """Authenticated flag persisted to a small file so restarts skip the login gate."""

    def __init__(self, path: str):
        self.path = Path(path)
        self.authenticated = False

    def init(self) -> bool:
        try:
            self.authenticated = self.path.read_text(encoding="utf-8").strip() == _AUTHENTICATED
        except FileNotFoundError:
            self.authenticated = False
        logger.debug(f"Session restored from {self.path}: authenticated={self.authenticated}")
        return self.authenticated

    def mark_authenticated(self) -> None:
        self.authenticated = True
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(_AUTHENTICATED, encoding="utf-8")

    def teardown(self) -> None:
        self.authenticated = False
        self.path.unlink(missing_ok=True)
