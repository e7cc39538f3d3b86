"""Validation utilities for Chess Tourney.

This module provides reusable validation functions with consistent error handling.
"""

# Chess Tourney
# Copyright (C) 2025  Chess Tourney developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

import re
from typing import Any, Optional, Union

from chesstourney.constants import MAX_RATING, MIN_RATING
from chesstourney.exceptions import (
    InvalidRoundException,
    PhoneValidationException,
    RatingValidationException,
)


class ValidationResult:
    """Result of a validation operation.

    Attributes:
        is_valid: Whether the validation passed
        error_message: Human-readable error message if invalid
        sanitized_value: Cleaned/normalized value if valid
    """

    def __init__(
        self,
        is_valid: bool,
        error_message: Optional[str] = None,
        sanitized_value: Union[str, int, None] = None,
    ):
        self.is_valid = is_valid
        self.error_message = error_message
        self.sanitized_value = sanitized_value

    def __bool__(self) -> bool:
        """Allow using result in boolean context: if result: ..."""
        return self.is_valid

    def __repr__(self) -> str:
        if self.is_valid:
            return f"ValidationResult(VALID, {self.sanitized_value!r})"
        return f"ValidationResult(INVALID, {self.error_message!r})"


# ========== Name Validation ==========


def validate_name(name: Optional[str]) -> ValidationResult:
    """Validate a player's display name (required, collapsed whitespace)."""
    if not name or not name.strip():
        return ValidationResult(is_valid=False, error_message="Name is required")
    return ValidationResult(is_valid=True, sanitized_value=" ".join(name.split()))


# ========== Phone Validation ==========


def validate_phone(phone: Optional[str], required: bool = False) -> ValidationResult:
    """Validate a phone number.

    Accepts various formats:
    - (123) 456-7890
    - 123-456-7890
    - 123.456.7890
    - 1234567890
    - +233 24 123 4567

    Args:
        phone: Phone number to validate
        required: Whether phone is required

    Returns:
        ValidationResult with validation status and sanitized number
    """
    if not phone or not phone.strip():
        if required:
            return ValidationResult(
                is_valid=False,
                error_message="Phone number is required",
            )
        return ValidationResult(is_valid=True, sanitized_value=None)

    phone = phone.strip()

    # Remove common formatting characters
    digits_only = re.sub(r"[\s\-\.\(\)\+]", "", phone)

    if not digits_only.isdigit():
        return ValidationResult(
            is_valid=False,
            error_message=f"Phone number contains invalid characters: {phone}",
        )

    if len(digits_only) < 10 or len(digits_only) > 15:
        return ValidationResult(
            is_valid=False,
            error_message=f"Phone number must be 10-15 digits: {phone}",
        )

    return ValidationResult(is_valid=True, sanitized_value=digits_only)


def validate_phone_strict(phone: str) -> str:
    """Validate phone and return sanitized number or raise exception.

    Raises:
        PhoneValidationException: If phone is invalid
    """
    result = validate_phone(phone, required=True)
    if not result.is_valid:
        raise PhoneValidationException(result.error_message)
    return result.sanitized_value


# ========== Rating Validation ==========


def validate_rating(rating: Any) -> ValidationResult:
    """Validate a rating, accepting ints and integer strings.

    Missing ratings are treated as 0 (unrated).
    """
    if rating is None or (isinstance(rating, str) and not rating.strip()):
        return ValidationResult(is_valid=True, sanitized_value=0)

    if isinstance(rating, bool):
        return ValidationResult(
            is_valid=False, error_message=f"Rating must be a number: {rating!r}"
        )

    try:
        value = int(str(rating).strip())
    except ValueError:
        return ValidationResult(
            is_valid=False, error_message=f"Rating must be a number: {rating!r}"
        )

    if not MIN_RATING <= value <= MAX_RATING:
        return ValidationResult(
            is_valid=False,
            error_message=f"Rating must be between {MIN_RATING} and {MAX_RATING}: {value}",
        )
    return ValidationResult(is_valid=True, sanitized_value=value)


def validate_rating_strict(rating: Any) -> int:
    """Validate rating and return it as int or raise exception.

    Raises:
        RatingValidationException: If rating is invalid
    """
    result = validate_rating(rating)
    if not result.is_valid:
        raise RatingValidationException(result.error_message)
    return result.sanitized_value


# ========== Round Validation ==========


def validate_round_number(value: Any) -> int:
    """Check that a round number is a positive integer before any arithmetic.

    Raises:
        InvalidRoundException: For bools, non-integers and values below 1
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidRoundException(f"Round number must be an integer, got {value!r}")
    if value < 1:
        raise InvalidRoundException(f"Round number must be at least 1, got {value}")
    return value
