"""Data models for role resolution and drift detection."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class ResolutionStatus(Enum):
    """Drift verdict for a single dependency."""
    UP_TO_DATE = "up_to_date"
    OUTDATED = "outdated"
    UNRESOLVED = "unresolved"


@dataclass(frozen=True)
class DependencyReference:
    """One pinned role from the manifest."""
    name: str
    declared_version: str
    source_hint: Optional[str] = None  # overrides name as the search keyword

    @property
    def keyword(self) -> str:
        """Search keyword: the source hint when set, else the name."""
        if self.source_hint:
            return self.source_hint
        return self.name


@dataclass(frozen=True)
class CatalogEntry:
    """A candidate returned by the registry search, versions in registry order."""
    namespace: str
    versions: Tuple[str, ...]


@dataclass(frozen=True)
class ResolutionResult:
    """Resolution outcome fed to the report layer.

    Use the ``up_to_date``/``outdated``/``unresolved`` constructors; they keep
    ``latest_version`` consistent with ``status``.
    """
    reference: DependencyReference
    latest_version: Optional[str]
    status: ResolutionStatus
    error: Optional[str] = None

    @classmethod
    def up_to_date(cls, reference: DependencyReference) -> "ResolutionResult":
        return cls(reference, reference.declared_version, ResolutionStatus.UP_TO_DATE)

    @classmethod
    def outdated(cls, reference: DependencyReference, latest_version: str) -> "ResolutionResult":
        if not latest_version or latest_version == reference.declared_version:
            raise ValueError(
                f"outdated result for {reference.name} needs a latest version other than "
                f"{reference.declared_version!r}"
            )
        return cls(reference, latest_version, ResolutionStatus.OUTDATED)

    @classmethod
    def unresolved(cls, reference: DependencyReference, error: str) -> "ResolutionResult":
        return cls(reference, None, ResolutionStatus.UNRESOLVED, error)

    @classmethod
    def from_latest(cls, reference: DependencyReference, latest_version: str) -> "ResolutionResult":
        """Compare by exact string identity: ``v1.0.0`` and ``1.0.0`` differ."""
        if latest_version == reference.declared_version:
            return cls.up_to_date(reference)
        return cls.outdated(reference, latest_version)
