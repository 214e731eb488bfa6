"""
Newsboard Input Validators
==========================

Guard checks applied by the repositories before any query runs. Each check
either returns the normalized value or raises the error kind the controller
layer maps to a response.
"""

import re
from typing import Any, Dict

from .exceptions import (
    ErrorCode,
    InvalidBodyError,
    InvalidIdentifierError,
)

# Range of a SQLite INTEGER
MIN_SQLITE_INTEGER = -2**63
MAX_SQLITE_INTEGER = 2**63 - 1

MAX_ROW_ID = MAX_SQLITE_INTEGER


class IdentifierValidator:
    """Validation of path-style identifiers."""

    DIGITS_PATTERN = re.compile(r"[0-9]+")

    @classmethod
    def validate_row_id(cls, value: Any, field_name: str = "article_id") -> int:
        """Validate a numeric row identifier.

        Accepts a positive ``int`` or a string made only of ASCII digits.

        Args:
            value: Raw identifier as handed over by the controller
            field_name: Name reported in the error

        Returns:
            Identifier as an ``int``

        Raises:
            InvalidIdentifierError: If the identifier is malformed
        """
        # bool is an int subclass, but never a row id
        if isinstance(value, bool):
            raise InvalidIdentifierError(field_name, value)

        if isinstance(value, int):
            row_id = value
        elif isinstance(value, str) and cls.DIGITS_PATTERN.fullmatch(value.strip()):
            row_id = int(value.strip())
        else:
            raise InvalidIdentifierError(field_name, value)

        if not 0 < row_id <= MAX_ROW_ID:
            raise InvalidIdentifierError(field_name, value)

        return row_id

    @classmethod
    def validate_username(cls, value: Any) -> str:
        """Validate an opaque username key (non-empty string)."""
        if not isinstance(value, str) or not value.strip():
            raise InvalidIdentifierError("username", value)
        return value


class BodyValidator:
    """Validation of request body fields."""

    @classmethod
    def validate_vote_delta(cls, delta: Any) -> int:
        """Validate the vote increment of a vote update.

        Raises:
            InvalidBodyError: If delta is missing, not an integer, or outside
                the SQLite integer range
        """
        if delta is None:
            raise InvalidBodyError(
                "inc_votes is required",
                field_name="inc_votes",
                error_code=ErrorCode.VALIDATION_REQUIRED_FIELD,
            )

        if isinstance(delta, bool) or not isinstance(delta, int):
            raise InvalidBodyError(
                f"inc_votes must be an integer, got {type(delta).__name__}",
                field_name="inc_votes",
            )

        if not MIN_SQLITE_INTEGER <= delta <= MAX_SQLITE_INTEGER:
            raise InvalidBodyError(
                f"inc_votes out of integer range: {delta}",
                field_name="inc_votes",
            )

        return delta

    @classmethod
    def validate_comment_body(cls, username: Any, body: Any) -> Dict[str, str]:
        """Validate the fields of a new comment.

        Both fields must be present, non-blank strings.

        Returns:
            Dictionary with ``username`` and ``body``

        Raises:
            InvalidBodyError: On the first missing or mistyped field
        """
        for field_name, value in (("username", username), ("body", body)):
            if value is None:
                raise InvalidBodyError(
                    f"{field_name} is required",
                    field_name=field_name,
                    error_code=ErrorCode.VALIDATION_REQUIRED_FIELD,
                )
            if not isinstance(value, str):
                raise InvalidBodyError(
                    f"{field_name} must be a string, got {type(value).__name__}",
                    field_name=field_name,
                )
            if not value.strip():
                raise InvalidBodyError(
                    f"{field_name} cannot be blank",
                    field_name=field_name,
                    error_code=ErrorCode.VALIDATION_REQUIRED_FIELD,
                )

        return {"username": username, "body": body}
