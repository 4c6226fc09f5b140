"""Value objects for discovered challenges and their extracted artifacts."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator


@dataclass(frozen=True)
class ChallengeRef:
    """A challenge found on the listing page."""

    name: str
    path: str

    def __str__(self) -> str:
        return f"{self.name} ({self.path})"


@dataclass
class ChallengeArtifacts:
    """Text artifacts extracted from a challenge's training page."""

    url: str
    description: str = ""
    starting_code: str = ""
    test_code: str = ""

    @property
    def is_complete(self) -> bool:
        return bool(self.description and self.starting_code and self.test_code)

    def to_dict(self) -> dict[str, Any]:
        return {
            "url": self.url,
            "description": self.description,
            "startingCode": self.starting_code,
            "testCode": self.test_code,
        }


@dataclass
class ResultSet:
    """Challenges keyed by name, plus an out-of-band error message.

    ``error`` is set when the listing page yielded no challenges; ``challenges`` is
    then empty. A challenge literally named "error" is therefore never confused
    with a failed query.
    """

    challenges: dict[str, ChallengeArtifacts] = field(default_factory=dict)
    error: str | None = None

    def add(self, name: str, artifacts: ChallengeArtifacts) -> None:
        """Store artifacts under ``name``, replacing any earlier entry."""
        self.challenges[name] = artifacts

    def completed(self) -> ResultSet:
        """Return a copy holding only challenges with all three artifacts."""
        return ResultSet(
            challenges={
                name: artifacts
                for name, artifacts in self.challenges.items()
                if artifacts.is_complete
            },
            error=self.error,
        )

    @property
    def ok(self) -> bool:
        return self.error is None

    def names(self) -> list[str]:
        return list(self.challenges)

    def __len__(self) -> int:
        return len(self.challenges)

    def __contains__(self, name: object) -> bool:
        return name in self.challenges

    def __getitem__(self, name: str) -> ChallengeArtifacts:
        return self.challenges[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self.challenges)

    def to_dict(self) -> dict[str, dict[str, Any]]:
        """
        Render as a plain mapping of name to artifacts.

        A failed query is rendered in the legacy shape: a single ``"error"`` entry
        whose description carries the message. Check ``ok`` before relying on the
        keys of this mapping.
        """
        if self.error is not None:
            return {
                "error": ChallengeArtifacts(url="", description=self.error).to_dict()
            }
        return {name: artifacts.to_dict() for name, artifacts in self.challenges.items()}
