"""Protected process name registry."""
from typing import FrozenSet, Iterable, Optional


class ProtectedProcessRegistry:
    """Answers whether a process name is exempt from termination.

    Matching is a case-sensitive substring test against every configured
    fragment. Read-only after construction.
    """

    def __init__(self, names: Iterable[str] = ()):
        self._fragments: FrozenSet[str] = frozenset(n for n in names if n)

    @property
    def fragments(self) -> FrozenSet[str]:
        return self._fragments

    def is_protected(self, process_name: Optional[str]) -> bool:
        if not process_name:
            return False
        return any(fragment in process_name for fragment in self._fragments)
