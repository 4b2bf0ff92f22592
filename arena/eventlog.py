from typing import Dict, List, Sequence, Tuple
from combat.model import RoundStarted, Step

class EventLog:
    """Append-only step storage, indexed by round for replay and tracing."""

    def __init__(self):
        self._log: List[Step] = []
        self._round_starts: Dict[int, int] = {}  # round -> offset of its RoundStarted

    def __len__(self) -> int:
        return len(self._log)

    def record(self, evts: Sequence[Step]) -> range:
        """Append one turn's steps and return the offsets they landed at."""
        for e in evts:
            if isinstance(e, RoundStarted):
                self._round_starts[e.round] = len(self._log)
            self._log.append(e)
        return range(len(self._log) - len(evts), len(self._log))

    def read(self, cursor: int, limit: int = 1000) -> Tuple[List[Step], int]:
        """Steps after cursor, at most limit, and the cursor to resume from."""
        chunk = self._log[max(0, cursor):][:limit]
        return chunk, max(0, cursor) + len(chunk)

    @property
    def rounds(self) -> int:
        return len(self._round_starts)

    def round_steps(self, n: int) -> List[Step]:
        """Everything from round n's start up to the next round's start."""
        if n not in self._round_starts:
            return []
        end = self._round_starts.get(n + 1, len(self._log))
        return self._log[self._round_starts[n]:end]

    def of_kind(self, kind: str) -> List[Step]:
        return [e for e in self._log if e.kind == kind]
