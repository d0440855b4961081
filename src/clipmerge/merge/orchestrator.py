"""Paste reconciliation: identity, structure, location, diff, commit."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import TypeVar

from clipmerge.analysis import (
    MethodSignature,
    SourceUnit,
    format_missing_report,
    missing_signatures,
    scan_brace_balance,
)
from clipmerge.merge.collaborators import (
    Choice,
    ClipboardSink,
    ClipboardSource,
    ConfirmationPrompt,
    StatusSink,
)
from clipmerge.merge.decisions import (
    AbortReason,
    MergeDecision,
    NewFile,
    OverwriteClean,
    OverwriteWithRegressions,
    PasteResult,
    PasteState,
    Rejected,
)
from clipmerge.merge.roots import SourceRootResolver, target_file
from clipmerge.repository import (
    BackgroundIO,
    FileReadError,
    FileSystem,
    FileWriteError,
    Repository,
)

T = TypeVar("T")

OPTION_OVERWRITE = "Overwrite"
OPTION_COPY_DIAGNOSTIC = "Copy Diagnostic"
OPTION_CANCEL = "Cancel"
RESOLUTION_OPTIONS = (OPTION_OVERWRITE, OPTION_COPY_DIAGNOSTIC, OPTION_CANCEL)


class PasteOrchestrator:
    """Runs one paste operation at a time against a Repository.

    Must be driven from the thread that owns the Repository. File reads and
    writes go through ``io`` when one is given and run inline otherwise.
    """

    def __init__(
        self,
        repository: Repository,
        fs: FileSystem,
        prompt: ConfirmationPrompt,
        clipboard: ClipboardSink,
        status: StatusSink,
        fallback_root: Path,
        extension: str = ".java",
        io: BackgroundIO | None = None,
    ) -> None:
        self._repository = repository
        self._fs = fs
        self._prompt = prompt
        self._clipboard = clipboard
        self._status = status
        self._extension = extension
        self._io = io
        self._resolver = SourceRootResolver(
            repository=repository,
            prompt=prompt,
            fallback_root=fallback_root,
        )

    def paste_from_clipboard(self, source: ClipboardSource) -> PasteResult:
        """Read clipboard text and paste it; blank clipboards abort immediately."""
        text = source.read_text()
        if text is None or not text.strip():
            return _aborted(
                [PasteState.START],
                AbortReason.EMPTY_CLIPBOARD,
                message="Clipboard is empty or does not contain text.",
            )
        return self.paste(text)

    def paste(self, text: str) -> PasteResult:
        """Reconcile pasted text with the tree and write it if allowed."""
        trail = [PasteState.START]
        unit = SourceUnit.from_text(text)
        type_name = unit.type_name
        if type_name is None:
            return _aborted(
                trail,
                AbortReason.UNPARSABLE_IDENTITY,
                message="Could not determine the class/interface/enum/record name.",
            )

        trail.append(PasteState.IDENTITY_RESOLVED)

        if not unit.is_structurally_complete:
            balance = scan_brace_balance(text)
            answer = self._prompt.confirm(
                f"Type: {type_name}\n\n"
                "The pasted source appears to have incomplete or unbalanced braces "
                f"(balance {balance.balance:+d}).\n\n"
                "Continue anyway?"
            )
            if answer is not Choice.PROCEED:
                return _aborted(trail, AbortReason.STRUCTURAL_INCOMPLETE, type_name=type_name)

        trail.append(PasteState.STRUCTURE_CHECKED)

        resolution = self._resolver.resolve(unit)
        target = target_file(resolution.root, unit, self._extension)
        trail.append(PasteState.LOCATION_RESOLVED)

        decision: MergeDecision
        if not self._fs.exists(target):
            answer = self._prompt.confirm(
                f"Type: {type_name}\n\n"
                "File does not exist.\n\n"
                f"Target directory:\n{target.parent}\n\n"
                "Create new file?"
            )
            if answer is not Choice.PROCEED:
                return _aborted(trail, AbortReason.CANCELLED, type_name=type_name)
            trail.append(PasteState.NO_PRIOR_VERSION)
            decision = NewFile(target_dir=target.parent)
            try:
                self._run(lambda: self._create(target, text))
            except FileWriteError as error:
                return _aborted(
                    trail,
                    AbortReason.FILE_WRITE_FAILURE,
                    type_name=type_name,
                    path=str(target),
                    message=f"Failed to create file:\n{error.message}",
                )
        else:
            try:
                old_text = self._run(lambda: self._fs.read_all(target))
            except FileReadError as error:
                return _aborted(
                    trail,
                    AbortReason.FILE_READ_FAILURE,
                    type_name=type_name,
                    path=str(target),
                    message=f"Failed to read existing file:\n{error.message}",
                )
            missing = missing_signatures(old_text, text)
            trail.append(PasteState.PRIOR_VERSION_COMPARED)
            if missing:
                if not self._resolve_regressions(type_name, missing):
                    return _aborted(
                        trail,
                        AbortReason.CANCELLED,
                        type_name=type_name,
                        path=str(target),
                    )
                decision = OverwriteWithRegressions(missing_signatures=missing)
            else:
                decision = OverwriteClean()
            try:
                self._run(lambda: self._fs.write_all(target, text))
            except FileWriteError as error:
                return _aborted(
                    trail,
                    AbortReason.FILE_WRITE_FAILURE,
                    type_name=type_name,
                    path=str(target),
                    message=f"Failed to update file:\n{error.message}",
                )

        entry = self._repository.put(target, text)
        verb = "Created" if isinstance(decision, NewFile) else "Updated"
        message = f"{verb}: {type_name} ({entry.path})"
        self._status.log(message)
        trail.append(PasteState.COMMITTED)
        return PasteResult(
            decision=decision,
            state=PasteState.COMMITTED,
            type_name=type_name,
            path=entry.path,
            message=message,
            trail=tuple(trail),
        )

    def _resolve_regressions(
        self,
        type_name: str,
        missing: frozenset[MethodSignature],
    ) -> bool:
        """Loop until the user overwrites (True) or cancels (False)."""
        report = format_missing_report(type_name, missing)
        while True:
            picked = self._prompt.choose(report, RESOLUTION_OPTIONS)
            if picked == OPTION_OVERWRITE:
                return True
            if picked == OPTION_COPY_DIAGNOSTIC:
                self._clipboard.write_text(report)
                continue
            return False

    def _create(self, target: Path, text: str) -> None:
        self._fs.mkdirs(target.parent)
        self._fs.write_all(target, text)

    def _run(self, task: Callable[[], T]) -> T:
        if self._io is None:
            return task()
        return self._io.run(task)


def _aborted(
    trail: list[PasteState],
    reason: AbortReason,
    type_name: str | None = None,
    path: str | None = None,
    message: str | None = None,
) -> PasteResult:
    trail.append(PasteState.ABORTED)
    return PasteResult(
        decision=Rejected(reason=reason),
        state=PasteState.ABORTED,
        type_name=type_name,
        path=path,
        message=message,
        trail=tuple(trail),
    )
