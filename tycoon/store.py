from __future__ import annotations

import json
import logging
import os
import tempfile
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Any
from urllib.parse import quote, unquote

from tycoon.codec import CodecError, state_from_dict, state_to_dict
from tycoon.state import GameState, Stats

logger = logging.getLogger(__name__)

LEADERBOARD_SIZE = 10


class StoreError(Exception):
    """A save or load could not reach the underlying storage."""


@dataclass(frozen=True)
class LeaderboardEntry:
    username: str
    money: int
    day: int
    stats: Stats


class StateStore(ABC):
    """Key-value store of save documents, keyed by user identity.

    ``load`` returns None when nothing usable is stored; that is not an
    error. Concurrent saves for one user are last-write-wins.
    """

    @abstractmethod
    def load(self, user_id: str) -> GameState | None: ...

    @abstractmethod
    def save(self, user_id: str, state: GameState) -> None: ...

    @abstractmethod
    def delete(self, user_id: str) -> None: ...

    @abstractmethod
    def user_ids(self) -> list[str]: ...

    def leaderboard(self, limit: int = LEADERBOARD_SIZE) -> list[LeaderboardEntry]:
        """Top *limit* saved games by money, richest first."""
        entries: list[LeaderboardEntry] = []
        for user_id in self.user_ids():
            state = self.load(user_id)
            if state is None:
                continue
            entries.append(
                LeaderboardEntry(
                    username=user_id,
                    money=state.money,
                    day=state.day,
                    stats=state.stats,
                )
            )
        entries.sort(key=lambda e: (-e.money, e.username))
        return entries[:limit]


class MemoryStore(StateStore):
    """In-process store. Keeps encoded documents, so saved states are snapshots."""

    def __init__(self) -> None:
        self._documents: dict[str, dict[str, Any]] = {}

    def load(self, user_id: str) -> GameState | None:
        document = self._documents.get(user_id)
        if document is None:
            return None
        try:
            return state_from_dict(document)
        except CodecError as exc:
            logger.warning("Ignoring unreadable save for %r: %s", user_id, exc)
            return None

    def save(self, user_id: str, state: GameState) -> None:
        self._documents[user_id] = state_to_dict(state)

    def delete(self, user_id: str) -> None:
        self._documents.pop(user_id, None)

    def user_ids(self) -> list[str]:
        return sorted(self._documents)


class JsonFileStore(StateStore):
    """One JSON document per user in a directory."""

    def __init__(self, directory: str | Path) -> None:
        self.directory = Path(directory)

    def path_for(self, user_id: str) -> Path:
        return self.directory / f"{quote(user_id, safe='')}.json"

    def load(self, user_id: str) -> GameState | None:
        path = self.path_for(user_id)
        try:
            with open(path, encoding="utf-8") as f:
                document = json.load(f)
        except FileNotFoundError:
            return None
        except (ValueError, RecursionError) as exc:
            logger.warning("Ignoring corrupt save file %s: %s", path, exc)
            return None
        except OSError as exc:
            raise StoreError(f"Could not read {path}: {exc}") from exc

        try:
            return state_from_dict(document)
        except CodecError as exc:
            logger.warning("Ignoring malformed save file %s: %s", path, exc)
            return None

    def save(self, user_id: str, state: GameState) -> None:
        path = self.path_for(user_id)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=self.directory, suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(state_to_dict(state), f, ensure_ascii=False)
                os.replace(tmp_path, path)
            except BaseException:
                os.unlink(tmp_path)
                raise
        except OSError as exc:
            raise StoreError(f"Could not write {path}: {exc}") from exc
        logger.debug("Saved game for %r to %s", user_id, path)

    def delete(self, user_id: str) -> None:
        try:
            self.path_for(user_id).unlink()
        except FileNotFoundError:
            pass
        except OSError as exc:
            raise StoreError(f"Could not delete save for {user_id!r}: {exc}") from exc

    def user_ids(self) -> list[str]:
        if not self.directory.is_dir():
            return []
        return sorted(unquote(p.stem) for p in self.directory.glob("*.json"))
