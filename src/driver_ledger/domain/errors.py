"""Errors reported back to the user."""


class InvalidRecordInput(ValueError):
    """Raised when a record field cannot be parsed as a valid amount."""

    def __init__(self, field_name: str, raw: object) -> None:
        super().__init__(f"Invalid value for {field_name}: {raw!r}")
        self.field_name = field_name
        self.raw = raw


class InvalidSettings(ValueError):
    """Raised when settings fall outside their allowed range."""
