"""
Word Sets
=========

Immutable collections of five-letter words that can be partitioned by the
feedback a guess would produce against each member.

Two representations share one interface:

- ``LetterWordSet`` stores the letters themselves and computes feedback
  with the numba kernel.
- ``IndexWordSet`` stores indices into a canonical word list and looks
  feedback up in a precomputed flat table (``table[g * n + a]``).

Sets are never modified after construction; ``partition`` always builds
new sets for its buckets.
"""

from abc import ABC, abstractmethod
from typing import Callable, Dict, Iterable, Iterator, Optional

import numpy as np

from .feedback import WORD_LENGTH, feedback_row, word_to_codes


# Chunks per parallel map; bounds the number of pickled task batches.
PAR_CHUNKS = 32

# Feedback tables by key.  Index sets pickle their key rather than the
# table, and worker processes resolve it here (see ``install_tables``).
_SHARED_TABLES: Dict[int, np.ndarray] = {}


def shared_tables() -> Dict[int, np.ndarray]:
    """Snapshot of the registered feedback tables, for worker initializers."""
    return dict(_SHARED_TABLES)


def install_tables(tables: Dict[int, np.ndarray]) -> None:
    """Register feedback tables in a worker process."""
    _SHARED_TABLES.update(tables)


class WordSet(ABC):
    """Interface shared by both word set representations."""

    @abstractmethod
    def __len__(self) -> int:
        ...

    @abstractmethod
    def __iter__(self) -> Iterator:
        ...

    @abstractmethod
    def word(self, idx: int):
        """Return the member at position ``idx``."""
        ...

    @abstractmethod
    def feedback_codes(self, guess) -> np.ndarray:
        """Feedback of ``guess`` against every member, in member order."""
        ...

    @abstractmethod
    def _take(self, positions: np.ndarray) -> 'WordSet':
        """New set of the same kind holding the members at ``positions``."""
        ...

    def partition(self, guess) -> Dict[int, 'WordSet']:
        """
        Group the members by the feedback ``guess`` produces against them.

        Returns:
            Mapping of feedback code to the (non-empty) set of members giving
            that code.  Keys are in ascending order and each bucket keeps
            the members' original relative order.
        """
        codes = self.feedback_codes(guess)
        order = np.argsort(codes, kind='stable')
        keys, starts = np.unique(codes[order], return_index=True)
        return {
            int(code): self._take(positions)
            for code, positions in zip(keys, np.split(order, starts[1:]))
        }

    def try_for_each(self, fn: Callable):
        """
        Call ``fn`` on each member in order, stopping at the first non-None
        result and returning it.  Returns None if no call stops the loop.
        """
        for word in self:
            result = fn(word)
            if result is not None:
                return result
        return None

    def par_process(self, weight: int, fn: Callable, executor=None) -> Optional[int]:
        """
        Minimum of ``fn`` over every member, plus ``weight``.

        ``fn`` returns a cost or None for members that fail.  With an
        executor the calls are spread over its workers; ``fn`` must then be
        picklable.

        Returns:
            ``weight + min(costs)``, or None if every member failed.
        """
        if executor is None:
            results = map(fn, self)
        else:
            chunksize = max(1, -(-len(self) // PAR_CHUNKS))
            results = executor.map(fn, self, chunksize=chunksize)
        best = min((cost for cost in results if cost is not None), default=None)
        if best is None:
            return None
        return weight + best


class LetterWordSet(WordSet):
    """
    Word set over raw letters.

    Members are plain strings; ``letters`` holds the same words as a
    (n, 5) array of letter codes for the feedback kernel.
    """

    def __init__(self, words: Iterable[str] = ()):
        words = list(words)
        for w in words:
            if not isinstance(w, str):
                raise TypeError(f"Words must be str, got {type(w).__name__}")
            word_to_codes(w)  # raises ValueError on malformed words

        self.words = np.array(words, dtype=f'<U{WORD_LENGTH}')
        self.letters = self._letters_of(self.words)

    @staticmethod
    def _letters_of(words: np.ndarray) -> np.ndarray:
        """Convert a '<U5' array to letter codes (0-25)."""
        codes = words.view('<u4').reshape(-1, WORD_LENGTH) - ord('a')
        return codes.astype(np.uint8)

    @classmethod
    def from_text(cls, text: str) -> 'LetterWordSet':
        """
        Build a set from a concatenated fixed-width word list.

        Whitespace is ignored, so newline-separated lists are accepted too.

        Raises:
            ValueError: if the letters do not split into whole words
        """
        data = ''.join(text.split())
        if len(data) % WORD_LENGTH != 0:
            raise ValueError(
                f"Word list length {len(data)} is not a multiple of {WORD_LENGTH}"
            )
        return cls(data[i:i + WORD_LENGTH] for i in range(0, len(data), WORD_LENGTH))

    @classmethod
    def _from_arrays(cls, words: np.ndarray, letters: np.ndarray) -> 'LetterWordSet':
        this = cls.__new__(cls)
        this.words = words
        this.letters = letters
        return this

    def __len__(self) -> int:
        return self.words.shape[0]

    def __iter__(self) -> Iterator[str]:
        return iter(self.words.tolist())

    def __repr__(self) -> str:
        return f"LetterWordSet({len(self)} words)"

    def word(self, idx: int) -> str:
        return str(self.words[idx])

    def index_of(self, word: str) -> Optional[int]:
        """Position of ``word`` in the set, or None."""
        hits = np.flatnonzero(self.words == word)
        return int(hits[0]) if hits.size else None

    def feedback_codes(self, guess: str) -> np.ndarray:
        return feedback_row(word_to_codes(guess), self.letters)

    def _take(self, positions: np.ndarray) -> 'LetterWordSet':
        return self._from_arrays(self.words[positions], self.letters[positions])


class IndexWordSet(WordSet):
    """
    Word set over indices into a canonical list of ``size`` words.

    Feedback comes from ``table``, the flat ``size * size`` matrix built by
    ``feedback.build_feedback_table`` (or loaded from disk).  Members and
    guesses are both plain integer indices.
    """

    def __init__(self, table: np.ndarray, size: int, indices: Optional[Iterable[int]] = None):
        table = np.ascontiguousarray(table, dtype=np.uint8).ravel()
        if table.shape[0] != size * size:
            raise ValueError(
                f"Feedback table has {table.shape[0]} entries, expected {size * size}"
            )
        if indices is None:
            indices = np.arange(size, dtype=np.int64)
        else:
            indices = np.asarray(list(indices), dtype=np.int64)
            if indices.size and (indices.min() < 0 or indices.max() >= size):
                raise ValueError(f"Word index out of range for {size} words")

        self.table = table
        self.table_key = id(table)
        _SHARED_TABLES.setdefault(self.table_key, table)
        self.size = size
        self.indices = indices

    def _share(self, indices: np.ndarray) -> 'IndexWordSet':
        this = self.__class__.__new__(self.__class__)
        this.table = self.table
        this.table_key = self.table_key
        this.size = self.size
        this.indices = indices
        return this

    def __getstate__(self):
        state = self.__dict__.copy()
        del state['table']
        return state

    def __setstate__(self, state):
        self.__dict__.update(state)
        self.table = _SHARED_TABLES[self.table_key]

    def __len__(self) -> int:
        return self.indices.shape[0]

    def __iter__(self) -> Iterator[int]:
        return iter(self.indices.tolist())

    def __repr__(self) -> str:
        return f"IndexWordSet({len(self)} of {self.size} words)"

    def word(self, idx: int) -> int:
        return int(self.indices[idx])

    def feedback_codes(self, guess: int) -> np.ndarray:
        if not 0 <= guess < self.size:
            raise ValueError(f"Guess index {guess} out of range for {self.size} words")
        return self.table[guess * self.size + self.indices]

    def _take(self, positions: np.ndarray) -> 'IndexWordSet':
        return self._share(self.indices[positions])
