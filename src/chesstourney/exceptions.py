"""Exceptions for use in Chess Tourney"""

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


# ========== Base Application Exception ==========


class ChessTourneyException(Exception):
    """Base exception for all Chess Tourney errors.

    All custom exceptions in the application should inherit from this class.
    This enables catching all application-specific errors with a single except clause.
    """

    pass


# ========== Pairing Exceptions ==========


class PairingException(ChessTourneyException):
    """Base exception for pairing-related errors."""

    pass


class InvalidPairingException(PairingException):
    """Raised when a pairing is invalid (self-pairing, double booking)."""

    pass


# ========== Tournament Exceptions ==========


class TournamentException(ChessTourneyException):
    """Base exception for tournament-related errors."""

    pass


class TournamentStateException(TournamentException):
    """Raised when tournament is in an invalid state for the requested operation."""

    pass


class InvalidRoundException(TournamentException):
    """Raised when a round number is missing, non-numeric or out of range."""

    pass


# ========== Player Exceptions ==========


class PlayerException(ChessTourneyException):
    """Base exception for player-related errors."""

    pass


class PlayerNotFoundException(PlayerException):
    """Raised when a requested player cannot be found."""

    pass


class InvalidPlayerDataException(PlayerException):
    """Raised when player data is invalid or incomplete."""

    pass


# ========== Result Exceptions ==========


class ResultException(ChessTourneyException):
    """Base exception for result recording errors."""

    pass


class InvalidResultException(ResultException):
    """Raised when a result string is not one of the known outcomes."""

    pass


class MatchNotFoundException(ResultException):
    """Raised when a requested match cannot be found."""

    pass


# ========== Store Exceptions ==========


class StoreException(ChessTourneyException):
    """Raised when the backing store cannot be read or written."""

    pass


# ========== Validation Exceptions ==========


class ValidationException(ChessTourneyException):
    """Base exception for validation errors."""

    pass


class PhoneValidationException(ValidationException):
    """Raised when a phone number is invalid."""

    pass


class RatingValidationException(ValidationException):
    """Raised when a rating value is invalid."""

    pass


# ========== Configuration Exceptions ==========


class ConfigurationException(ChessTourneyException):
    """Raised when configuration data is invalid or cannot be loaded."""

    pass
