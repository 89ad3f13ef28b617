"""
Single immutable view state + reducer.

Views dispatch actions; `reduce` returns the next state. Keeps repository
calls out of rendering and the many UI flags in one place.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Optional

from data.codec import GwasRecord


TABS = ("all", "pending", "processed", "error")


@dataclass(frozen=True)
class TxStatus:
    visible: bool = False
    status: str = "pending"  # "pending" | "success" | "error"
    message: str = ""


@dataclass(frozen=True)
class ViewState:
    records: tuple[GwasRecord, ...] = ()
    loading: bool = True
    refreshing: bool = False
    upload_open: bool = False
    uploading: bool = False
    tx: TxStatus = field(default_factory=TxStatus)
    search: str = ""
    tab: str = "all"
    show_tutorial: bool = False
    selected_id: Optional[str] = None
    revealed_value: Optional[float] = None
    revealing: bool = False

    @property
    def selected(self) -> Optional[GwasRecord]:
        return next((r for r in self.records if r.id == self.selected_id), None)


# --- actions ---

@dataclass(frozen=True)
class RefreshStarted:
    pass


@dataclass(frozen=True)
class RecordsLoaded:
    records: tuple[GwasRecord, ...]


@dataclass(frozen=True)
class UploadOpened:
    pass


@dataclass(frozen=True)
class UploadClosed:
    pass


@dataclass(frozen=True)
class UploadStarted:
    message: str = "Encrypting GWAS data with Zama FHE..."


@dataclass(frozen=True)
class TxStarted:
    message: str


@dataclass(frozen=True)
class TxFinished:
    ok: bool
    message: str


@dataclass(frozen=True)
class TxCleared:
    pass


@dataclass(frozen=True)
class SearchChanged:
    search: str


@dataclass(frozen=True)
class TabChanged:
    tab: str


@dataclass(frozen=True)
class TutorialToggled:
    pass


@dataclass(frozen=True)
class RecordSelected:
    record_id: str


@dataclass(frozen=True)
class RecordDeselected:
    pass


@dataclass(frozen=True)
class RevealStarted:
    pass


@dataclass(frozen=True)
class ValueRevealed:
    value: Optional[float]


def reduce(state: ViewState, action: object) -> ViewState:
    if isinstance(action, RefreshStarted):
        return replace(state, refreshing=True)
    if isinstance(action, RecordsLoaded):
        return replace(state, records=tuple(action.records), loading=False, refreshing=False)
    if isinstance(action, UploadOpened):
        return replace(state, upload_open=True)
    if isinstance(action, UploadClosed):
        return replace(state, upload_open=False, uploading=False)
    if isinstance(action, UploadStarted):
        return replace(state, uploading=True, tx=TxStatus(True, "pending", action.message))
    if isinstance(action, TxStarted):
        return replace(state, tx=TxStatus(True, "pending", action.message))
    if isinstance(action, TxFinished):
        # a successful upload closes the form
        return replace(
            state,
            uploading=False,
            upload_open=state.upload_open and not action.ok,
            tx=TxStatus(True, "success" if action.ok else "error", action.message),
        )
    if isinstance(action, TxCleared):
        return replace(state, uploading=False, tx=TxStatus())
    if isinstance(action, SearchChanged):
        return replace(state, search=action.search)
    if isinstance(action, TabChanged):
        return replace(state, tab=action.tab if action.tab in TABS else "all")
    if isinstance(action, TutorialToggled):
        return replace(state, show_tutorial=not state.show_tutorial)
    if isinstance(action, RecordSelected):
        return replace(state, selected_id=action.record_id, revealed_value=None, revealing=False)
    if isinstance(action, RecordDeselected):
        return replace(state, selected_id=None, revealed_value=None, revealing=False)
    if isinstance(action, RevealStarted):
        return replace(state, revealing=True)
    if isinstance(action, ValueRevealed):
        return replace(state, revealing=False, revealed_value=action.value)
    return state
