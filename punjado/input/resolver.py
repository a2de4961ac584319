"""Chorded key-sequence resolution.

``KeyResolver`` buffers tokens until they spell a bound sequence. Each new
token narrows the candidate bindings to those starting with the buffer:

- no candidates: the buffer is dropped,
- the buffer is itself bound: its command fires and the buffer resets,
- otherwise the buffer waits for the next token.

There is no timeout. A binding that is also a strict prefix of a longer
binding fires as soon as it is typed, so the longer one can never be
reached; ``shadowed`` lists such bindings.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from .keymap import Command, KeySequence

logger = logging.getLogger(__name__)


class KeyResolver:
    """Deterministic prefix matcher from key tokens to commands."""

    def __init__(self, bindings: Mapping[KeySequence, Command]) -> None:
        self._bindings: dict[KeySequence, Command] = {
            tuple(sequence): command for sequence, command in bindings.items() if sequence
        }
        self._buffer: KeySequence = ()

    @property
    def bindings(self) -> dict[KeySequence, Command]:
        return dict(self._bindings)

    @property
    def pending(self) -> KeySequence:
        """Tokens typed so far toward an incomplete chord."""
        return self._buffer

    def reset(self) -> None:
        self._buffer = ()

    def candidates(self, prefix: KeySequence) -> list[KeySequence]:
        size = len(prefix)
        return [sequence for sequence in self._bindings if sequence[:size] == prefix]

    def feed(self, token: str) -> Command | None:
        """Append ``token`` and return the command it completes, if any."""
        buffer = self._buffer + (token,)
        if not self.candidates(buffer):
            logger.debug("dropping unmatched key sequence %r", buffer)
            self._buffer = ()
            return None

        command = self._bindings.get(buffer)
        if command is not None:
            self._buffer = ()
            return command

        self._buffer = buffer
        return None

    def shadowed(self) -> list[KeySequence]:
        """Return bindings unreachable because a shorter prefix is bound."""
        unreachable: list[KeySequence] = []
        for sequence in self._bindings:
            if any(sequence[:size] in self._bindings for size in range(1, len(sequence))):
                unreachable.append(sequence)
        return sorted(unreachable)
