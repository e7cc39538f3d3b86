import pytest

from chesstourney.exceptions import (
    InvalidRoundException,
    PhoneValidationException,
    RatingValidationException,
)
from chesstourney.utils.validation import (
    validate_name,
    validate_phone,
    validate_phone_strict,
    validate_rating,
    validate_rating_strict,
    validate_round_number,
)


def test_name_is_required_and_collapsed():
    assert not validate_name("   ")
    assert validate_name(" Kofi   Boateng ").sanitized_value == "Kofi Boateng"


@pytest.mark.parametrize(
    "phone, expected",
    [
        ("(123) 456-7890", "1234567890"),
        ("123.456.7890", "1234567890"),
        ("+233 24 123 4567", "233241234567"),
    ],
)
def test_phone_formats(phone, expected):
    assert validate_phone(phone).sanitized_value == expected


def test_phone_rejects_letters_and_short_numbers():
    assert not validate_phone("555-CALL-NOW")
    assert not validate_phone("12345")
    assert validate_phone("").sanitized_value is None
    with pytest.raises(PhoneValidationException):
        validate_phone_strict("")


def test_rating_accepts_blank_and_integer_strings():
    assert validate_rating(None).sanitized_value == 0
    assert validate_rating(" ").sanitized_value == 0
    assert validate_rating_strict("1850") == 1850


@pytest.mark.parametrize("rating", ["fast", True, -5, 4000, "12.5"])
def test_rating_rejects_bad_values(rating):
    with pytest.raises(RatingValidationException):
        validate_rating_strict(rating)


def test_round_number_checks():
    assert validate_round_number(4) == 4
    for bad in (0, "1", None, False, 2.0):
        with pytest.raises(InvalidRoundException):
            validate_round_number(bad)
