"""Shared helpers: logging setup, id generation and random sources."""

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

import logging
import random
import sys
import uuid
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
_configured = False


def setup_logger(name: str, level: int = logging.INFO) -> logging.Logger:
    """Return a module logger, attaching the package handler on first use.

    Args:
        name: Logger name, normally ``__name__``
        level: Level applied to the package root logger

    Returns:
        The configured logger
    """
    global _configured
    if not _configured:
        root = logging.getLogger("chesstourney")
        if not root.handlers:
            handler = logging.StreamHandler(sys.stderr)
            handler.setFormatter(logging.Formatter(LOG_FORMAT))
            root.addHandler(handler)
        root.setLevel(level)
        _configured = True
    return logging.getLogger(name)


def generate_id(prefix: str = "") -> str:
    """Generate a unique identifier, optionally prefixed (e.g. ``Player-3f2a...``)."""
    unique = uuid.uuid4().hex
    return f"{prefix}-{unique}" if prefix else unique


def make_rng(seed: Optional[int] = None) -> random.Random:
    """Create the random source used for shuffles and colour draws.

    A fixed seed makes pairings reproducible.
    """
    return random.Random(seed) if seed is not None else random.Random()
