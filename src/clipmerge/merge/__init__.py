"""Merge orchestration for pasted source units."""

from .collaborators import (
    Choice,
    ClipboardSink,
    ClipboardSource,
    ConfirmationPrompt,
    MemoryClipboard,
    PromptExchange,
    ScriptedPrompt,
    StatusSink,
)
from .decisions import (
    AbortReason,
    MergeDecision,
    NewFile,
    OverwriteClean,
    OverwriteWithRegressions,
    PasteResult,
    PasteState,
    Rejected,
)
from .orchestrator import (
    OPTION_CANCEL,
    OPTION_COPY_DIAGNOSTIC,
    OPTION_OVERWRITE,
    RESOLUTION_OPTIONS,
    PasteOrchestrator,
)
from .roots import RootResolution, RootStrategy, SourceRootResolver, target_file

__all__ = [
    "AbortReason",
    "Choice",
    "ClipboardSink",
    "ClipboardSource",
    "ConfirmationPrompt",
    "MemoryClipboard",
    "MergeDecision",
    "NewFile",
    "OPTION_CANCEL",
    "OPTION_COPY_DIAGNOSTIC",
    "OPTION_OVERWRITE",
    "OverwriteClean",
    "OverwriteWithRegressions",
    "PasteOrchestrator",
    "PasteResult",
    "PasteState",
    "PromptExchange",
    "RESOLUTION_OPTIONS",
    "Rejected",
    "RootResolution",
    "RootStrategy",
    "ScriptedPrompt",
    "SourceRootResolver",
    "StatusSink",
    "target_file",
]
