# schemas/core/execution_record.py

from typing import Any, Dict, Iterator, List, Optional

from pydantic import BaseModel, ConfigDict

from schemas.core.test_result import CapturedResponse, ResolvedRequest


class RecordEntry(BaseModel):
    """Request/response pair captured for one executed test case."""

    model_config = ConfigDict(frozen=True)

    key: str
    request: ResolvedRequest
    response: Optional[CapturedResponse] = None


class ExecutionRecord:
    """
    Append-only log of the cases executed so far in one collection run.

    Later test cases reference earlier entries by key (the test case id)
    through ``$.<key>.<params|body|header>.<path>`` expressions. A new
    instance is created for every run and never shared between runs.
    """

    def __init__(self) -> None:
        self._entries: List[RecordEntry] = []

    def append(
        self,
        key: str,
        request: ResolvedRequest,
        response: Optional[CapturedResponse] = None,
    ) -> RecordEntry:
        entry = RecordEntry(key=key, request=request, response=response)
        self._entries.append(entry)
        return entry

    def find(self, key: str) -> Optional[RecordEntry]:
        """Most recently appended entry for ``key``, if any."""
        for entry in reversed(self._entries):
            if entry.key == key:
                return entry
        return None

    def keys(self) -> List[str]:
        return [entry.key for entry in self._entries]

    def snapshot(self) -> List[Dict[str, Any]]:
        """JSON-safe copy of all entries, with camelCase request/response keys."""
        return [
            {
                "key": entry.key,
                "request": entry.request.to_wire(),
                "response": entry.response.to_wire() if entry.response else None,
            }
            for entry in self._entries
        ]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[RecordEntry]:
        return iter(list(self._entries))

    def __repr__(self) -> str:
        return f"ExecutionRecord(keys={self.keys()!r})"
