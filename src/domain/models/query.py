"""Value objects describing a kata search query."""

from dataclasses import dataclass, field
from typing import Literal

SortOption = Literal[
    "oldest",
    "newest",
    "popularity",
    "positive-feedback",
    "most-completed",
    "least-completed",
    "hardest",
    "easiest",
    "name",
    "low-satisfaction",
]
StatusOption = Literal["approved", "beta", "approved-and-beta"]
ProgressOption = Literal["kata-untrained", "kata-incomplete", "kata-completed", "all"]

MIN_DIFFICULTY = 1
MAX_DIFFICULTY = 8


@dataclass(frozen=True)
class QueryOptions:
    """Immutable description of one kata search.

    ``difficulty`` holds kyu levels (1 is hardest, 8 is easiest). ``sort_by`` also
    accepts raw ``&order_by=...`` fragments, which are passed through verbatim.
    """

    sort_by: SortOption | str = "newest"
    language: str = "my-languages"
    status: StatusOption | str = "approved"
    progress: ProgressOption | str = "kata-incomplete"
    difficulty: tuple[int, ...] = field(default_factory=tuple)
    tags: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        # Accept any iterable but store tuples so equal queries hash and compare equal
        object.__setattr__(self, "difficulty", tuple(int(level) for level in self.difficulty))
        tags = (self.tags,) if isinstance(self.tags, str) else tuple(self.tags)
        object.__setattr__(self, "tags", tags)

        for level in self.difficulty:
            if not MIN_DIFFICULTY <= level <= MAX_DIFFICULTY:
                raise ValueError(
                    f"Difficulty must be between {MIN_DIFFICULTY} and {MAX_DIFFICULTY} kyu, got {level}"
                )

    @classmethod
    def default(cls) -> "QueryOptions":
        """Query used when the caller has no preferences."""
        return cls()
