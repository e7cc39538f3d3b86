"""Store that keeps the whole tournament in one JSON save file."""

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

import json
import os
import tempfile
from pathlib import Path
from typing import Union

from chesstourney.exceptions import StoreException
from chesstourney.store.memory import InMemoryStore
from chesstourney.utils import setup_logger

logger = setup_logger(__name__)


class JsonFileStore(InMemoryStore):
    """In-memory store written back to ``path`` after every committed change.

    The file is replaced atomically, so a failed write leaves the previous
    save intact and the in-memory records rolled back.
    """

    def __init__(self, path: Union[str, Path]) -> None:
        super().__init__()
        self.path = Path(path)
        if self.path.exists():
            self._load()

    def _load(self) -> None:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            raise StoreException(f"Cannot read {self.path}: {exc}") from exc

        try:
            self.load_dict(data)
        except (KeyError, TypeError, ValueError) as exc:
            raise StoreException(f"Corrupt save file {self.path}: {exc}") from exc
        logger.info(f"Loaded tournament data from {self.path}")

    def _commit(self) -> None:
        directory = self.path.parent
        try:
            directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self.path.name}.", dir=directory, text=True
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(self.to_dict(), f, indent=2)
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            logger.error(f"Failed to save tournament data to {self.path}: {exc}")
            raise StoreException(f"Cannot write {self.path}: {exc}") from exc
        logger.debug(f"Saved tournament data to {self.path}")
