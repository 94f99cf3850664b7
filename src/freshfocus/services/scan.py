"""Review workflow for scanned ingredients before they reach the store."""

import logging
import math
from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from datetime import date

from freshfocus.domain.expiry import DEFAULT_DAYS_LEFT, days_until
from freshfocus.domain.ingredients import Ingredient, IngredientDraft
from freshfocus.domain.scan import ScanDraft, ScanItem, ScanState
from freshfocus.services.inventory import DEFAULT_NAME, DEFAULT_UNIT, IngredientStore

logger = logging.getLogger(__name__)


@dataclass
class ScanIntake:
    """State machine staging scan results for user confirmation.

    IDLE -> REVIEWING when a scan result arrives; REVIEWING -> IDLE on
    cancel, or through COMMITTING on save.
    """

    suppress_empty: bool = False
    state: ScanState = ScanState.IDLE
    _drafts: list[ScanDraft] = field(default_factory=list)

    @property
    def drafts(self) -> list[ScanDraft]:
        """Staged rows, empty unless reviewing."""
        return list(self._drafts)

    def begin_review(self, items: Iterable[ScanItem]) -> bool:
        """Stage scan results, replacing any pending review."""
        drafts = [_draft_from_item(item) for item in items]
        if not drafts and self.suppress_empty:
            logger.info("Scan found nothing; review suppressed")
            return False
        self._drafts = drafts
        self.state = ScanState.REVIEWING
        return True

    def edit_item(  # noqa: PLR0913
        self,
        index: int,
        *,
        name: str | None = None,
        quantity: object = None,
        unit: str | None = None,
        expiry_date: date | None = None,
        today: date | None = None,
    ) -> ScanDraft | None:
        """Edit one staged row; returns None when there is no such row."""
        if self.state != ScanState.REVIEWING or not 0 <= index < len(self._drafts):
            return None
        draft = self._drafts[index]
        if name is not None:
            draft = replace(draft, name=name)
        if quantity is not None:
            draft = replace(draft, quantity=quantity)
        if unit is not None:
            draft = replace(draft, unit=unit)
        if expiry_date is not None:
            draft = replace(
                draft, estimated_days_left=days_until(expiry_date, today=today)
            )
        self._drafts[index] = draft
        return draft

    def cancel(self) -> bool:
        """Discard staged rows without touching the store."""
        if self.state != ScanState.REVIEWING:
            return False
        self._reset()
        return True

    def save(self, store: IngredientStore) -> list[Ingredient]:
        """Commit every staged row through the store's add operation."""
        if self.state != ScanState.REVIEWING:
            return []
        self.state = ScanState.COMMITTING
        try:
            return store.add(
                IngredientDraft(
                    name=draft.name,
                    quantity=draft.quantity,
                    unit=draft.unit,
                    estimated_days_left=draft.estimated_days_left,
                )
                for draft in self._drafts
            )
        finally:
            self._reset()

    def _reset(self) -> None:
        self._drafts = []
        self.state = ScanState.IDLE


def _draft_from_item(item: ScanItem) -> ScanDraft:
    days = item.estimated_days_left
    if not math.isfinite(days):
        days = DEFAULT_DAYS_LEFT
    return ScanDraft(
        name=item.name.strip() or DEFAULT_NAME,
        quantity=item.quantity,
        unit=DEFAULT_UNIT,
        estimated_days_left=math.ceil(days),
    )
