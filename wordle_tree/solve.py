"""
Search Engine
=============

Two ways of costing a guessing strategy, both minimising the TOTAL number
of guesses summed over every possible answer (equivalently the mean):

- Tree mode (``solve``): branch-and-bound beam search that returns the
  full decision tree.  At each node every guess is ranked by its partition
  score, the best ``breadth`` candidates are expanded recursively and the
  cheapest expansion wins.

- Batch mode (``solve_easy``, ``solve_hard``, ``solve_hard_limited``):
  exhaustive cost of one fixed opening guess.  No tree is built and no
  candidate is pruned; every admissible follow-up is tried.

Cost recurrence (batch mode):

    f(t, H) = [t in H] + sum over non-correct buckets B of (|B| + min_u f(u, B))

where H is the set of remaining answers, t the guess and the buckets the
partition of H by t's feedback.

Parallelism: only the first fan-out of a call uses the executor.  Work
running inside a worker recurses sequentially.
"""

import heapq
import logging
from concurrent.futures import Executor
from functools import partial
from itertools import repeat
from typing import Dict, List, Optional, Tuple

from .candidate import Candidate
from .feedback import CORRECT
from .solution import Solution
from .wordset import IndexWordSet, WordSet

log = logging.getLogger(__name__)


# ============================================================================
# TREE MODE
# ============================================================================

class _WorstFirst:
    """Heap entry that orders the least promising candidate first."""

    __slots__ = ('candidate',)

    def __init__(self, candidate: Candidate):
        self.candidate = candidate

    def __lt__(self, other: '_WorstFirst') -> bool:
        return other.candidate < self.candidate


def solve(guesses: WordSet, answers: WordSet, breadth: int, depth: int, hard: bool,
          executor: Optional[Executor] = None, shortcut: bool = True) -> Optional[Solution]:
    """
    Find a low-cost decision tree for ``answers``.

    Args:
        guesses: words that may be played at this node
        answers: answers still possible at this node
        breadth: number of ranked candidates expanded per node
        depth: guesses still available, including this one
        hard: only allow later guesses consistent with earlier feedback
        executor: pool for expanding this node's candidates in parallel
        shortcut: return the first candidate whose singleton shortcut
            fires instead of searching

    Returns:
        The cheapest solution found (ties go to the smaller guess word), or
        None if no expanded candidate solves every answer within ``depth``.
    """
    if len(answers) == 1:
        return Solution(answers.word(0))
    if depth <= 1:
        return None

    retained: List[_WorstFirst] = []

    def rank(word) -> Optional[Solution]:
        candidate = Candidate(word, answers)
        if candidate.is_degenerate:
            return None  # learned nothing, not a useful guess
        if shortcut:
            fast = candidate.fast_solution(depth - 1)
            if fast is not None:
                return fast
        if len(retained) < breadth:
            heapq.heappush(retained, _WorstFirst(candidate))
        elif candidate < retained[0].candidate:
            heapq.heapreplace(retained, _WorstFirst(candidate))
        return None

    fast = guesses.try_for_each(rank)
    if fast is not None:
        return fast

    candidates = sorted(entry.candidate for entry in retained)
    if executor is None:
        expanded = [
            candidate.slow_solution(guesses, answers, breadth, depth - 1, hard, None, shortcut)
            for candidate in candidates
        ]
    else:
        log.debug(f"Expanding {len(candidates)} candidates over {len(answers)} answers "
                  f"(depth {depth}): {[c.word for c in candidates]}")
        expanded = executor.map(
            Candidate.slow_solution, candidates, repeat(guesses), repeat(answers),
            repeat(breadth), repeat(depth - 1), repeat(hard), repeat(None), repeat(shortcut),
        )

    solutions = [solution for solution in expanded if solution is not None]
    return min(solutions, key=lambda s: (s.size, s.guess), default=None)


# ============================================================================
# BATCH MODE
# ============================================================================

def _split(guess, answers: WordSet) -> Optional[Tuple[int, Dict[int, WordSet]]]:
    """
    Partition ``answers`` by ``guess`` and take out the correct bucket.

    Returns:
        (credit, buckets) where credit is 1 if ``guess`` is itself an answer,
        or None if the guess cannot tell any answers apart.
    """
    partition = answers.partition(guess)
    if len(partition) == 1:
        return None
    credit = 1 if partition.pop(CORRECT, None) is not None else 0
    return credit, partition


def _all_singletons(buckets: Dict[int, WordSet]) -> bool:
    return all(len(bucket) == 1 for bucket in buckets.values())


def solve_easy(guess, guesses: WordSet, answers: WordSet, depth: int,
               executor: Optional[Executor] = None) -> Optional[int]:
    """
    Total guesses to solve every answer after opening with ``guess``,
    follow-ups drawn from the whole ``guesses`` pool.

    Args:
        guess: word played now
        guesses: pool of follow-up guesses
        answers: answers still possible
        depth: guesses still available after this one
        executor: pool for the follow-up search at this level

    Returns:
        Total guess count, or None if some answer cannot be reached within
        ``depth``.
    """
    if len(answers) == 1:
        return 1
    if depth <= 0:
        return None
    split = _split(guess, answers)
    if split is None:
        return None
    credit, buckets = split

    # Each remaining answer needs one more guess to be played
    if _all_singletons(buckets):
        return credit + 2 * len(buckets)

    total = credit
    for bucket in buckets.values():
        follow_up = partial(solve_easy, guesses=guesses, answers=bucket, depth=depth - 1)
        total = guesses.par_process(total + len(bucket), follow_up, executor)
        if total is None:
            return None
    return total


def solve_hard(guess, guesses: WordSet, answers: WordSet, depth: int,
               executor: Optional[Executor] = None, strict: bool = False) -> Optional[int]:
    """
    Like ``solve_easy`` but each bucket's follow-ups must give that bucket's
    feedback against ``guess``.

    By default consistency is only enforced against the immediately
    preceding guess: deeper levels continue with ``solve_easy`` over the
    restricted pool.  With ``strict`` the check is repeated at every level.
    """
    if len(answers) == 1:
        return 1
    if depth <= 0:
        return None
    split = _split(guess, answers)
    if split is None:
        return None
    credit, buckets = split

    if _all_singletons(buckets):
        return credit + 2 * len(buckets)

    consistent = guesses.partition(guess)
    total = credit
    for code, bucket in buckets.items():
        pool = consistent.get(code)
        if pool is None:
            return None
        if strict:
            follow_up = partial(solve_hard, guesses=pool, answers=bucket, depth=depth - 1, strict=True)
        else:
            follow_up = partial(solve_easy, guesses=pool, answers=bucket, depth=depth - 1)
        total = pool.par_process(total + len(bucket), follow_up, executor)
        if total is None:
            return None
    return total


def solve_hard_limited(guess: int, words: IndexWordSet, depth: int,
                       executor: Optional[Executor] = None) -> Optional[int]:
    """
    Hard-mode cost when guesses are limited to the answers themselves.

    Every follow-up is drawn from its own bucket, so consistency with all
    earlier feedback holds at every depth.  Feedback comes from the index
    set's table.
    """
    if len(words) == 1:
        return 1
    if depth <= 0:
        return None
    split = _split(guess, words)
    if split is None:
        return None
    credit, buckets = split

    if _all_singletons(buckets):
        return credit + 2 * len(buckets)

    total = credit
    for bucket in buckets.values():
        follow_up = partial(solve_hard_limited, words=bucket, depth=depth - 1)
        total = bucket.par_process(total + len(bucket), follow_up, executor)
        if total is None:
            return None
    return total
