"""Outcome types for a single paste operation."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from clipmerge.analysis.models import MethodSignature


class AbortReason(str, Enum):
    """Why a paste operation stopped without committing."""

    UNPARSABLE_IDENTITY = "UNPARSABLE_IDENTITY"
    STRUCTURAL_INCOMPLETE = "STRUCTURAL_INCOMPLETE"
    CANCELLED = "CANCELLED"
    FILE_READ_FAILURE = "FILE_READ_FAILURE"
    FILE_WRITE_FAILURE = "FILE_WRITE_FAILURE"
    EMPTY_CLIPBOARD = "EMPTY_CLIPBOARD"


class PasteState(str, Enum):
    """Progress markers of the paste state machine."""

    START = "start"
    IDENTITY_RESOLVED = "identity_resolved"
    STRUCTURE_CHECKED = "structure_checked"
    LOCATION_RESOLVED = "location_resolved"
    NO_PRIOR_VERSION = "no_prior_version"
    PRIOR_VERSION_COMPARED = "prior_version_compared"
    COMMITTED = "committed"
    ABORTED = "aborted"


@dataclass(slots=True, frozen=True)
class NewFile:
    target_dir: Path

    @property
    def kind(self) -> str:
        return "new_file"


@dataclass(slots=True, frozen=True)
class OverwriteClean:
    @property
    def kind(self) -> str:
        return "overwrite_clean"


@dataclass(slots=True, frozen=True)
class OverwriteWithRegressions:
    missing_signatures: frozenset[MethodSignature]

    @property
    def kind(self) -> str:
        return "overwrite_with_regressions"


@dataclass(slots=True, frozen=True)
class Rejected:
    reason: AbortReason

    @property
    def kind(self) -> str:
        return "rejected"


MergeDecision = NewFile | OverwriteClean | OverwriteWithRegressions | Rejected


@dataclass(slots=True, frozen=True)
class PasteResult:
    """Final record of one paste operation."""

    decision: MergeDecision
    state: PasteState
    type_name: str | None = None
    path: str | None = None
    message: str | None = None
    trail: tuple[PasteState, ...] = ()

    @property
    def committed(self) -> bool:
        return self.state is PasteState.COMMITTED

    @property
    def abort_reason(self) -> AbortReason | None:
        if isinstance(self.decision, Rejected):
            return self.decision.reason
        return None

    def to_dict(self) -> dict[str, object]:
        """Return a JSON-serializable summary."""
        payload: dict[str, object] = {
            "committed": self.committed,
            "state": self.state.value,
            "decision": self.decision.kind,
            "type_name": self.type_name,
            "path": self.path,
            "message": self.message,
            "trail": [state.value for state in self.trail],
        }
        if isinstance(self.decision, NewFile):
            payload["target_dir"] = str(self.decision.target_dir)
        if isinstance(self.decision, OverwriteWithRegressions):
            payload["missing_signatures"] = [
                str(signature) for signature in sorted(self.decision.missing_signatures)
            ]
        reason = self.abort_reason
        payload["abort_reason"] = reason.value if reason is not None else None
        return payload
