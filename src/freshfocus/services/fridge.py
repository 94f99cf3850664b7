"""Application controller owning the fridge state."""

import logging
from dataclasses import dataclass, field
from datetime import date

from freshfocus.domain.expiry import days_until
from freshfocus.domain.ingredients import Ingredient, IngredientDraft
from freshfocus.domain.stats import WasteStats
from freshfocus.services.capture import FrameSource, acquire
from freshfocus.services.inventory import IngredientStore
from freshfocus.services.preferences import PreferencesService
from freshfocus.services.recipes import RecipeService
from freshfocus.services.scan import ScanIntake
from freshfocus.services.selection import SelectionSet
from freshfocus.services.stats import StatsService
from freshfocus.services.vision import VisionService

logger = logging.getLogger(__name__)


@dataclass
class FridgeController:
    """Single owner of inventory, selection, scan review and recipes."""

    store: IngredientStore
    vision_service: VisionService
    recipe_service: RecipeService
    preferences_service: PreferencesService
    scan_intake: ScanIntake = field(default_factory=ScanIntake)
    selection: SelectionSet = field(default_factory=SelectionSet)
    stats_service: StatsService = field(default_factory=StatsService)
    scanning: bool = False

    def manual_add(  # noqa: PLR0913
        self,
        name: str,
        quantity: object,
        unit: str | None,
        expiry_date: date,
        today: date | None = None,
    ) -> Ingredient | None:
        """Add a hand-entered ingredient; a blank name adds nothing."""
        if not name or not name.strip():
            return None
        created = self.store.add(
            [
                IngredientDraft(
                    name=name,
                    quantity=quantity,
                    unit=unit,
                    estimated_days_left=days_until(expiry_date, today=today),
                )
            ]
        )
        return created[0]

    def use(self, ingredient_id: str, amount: float) -> Ingredient | None:
        """Record consumption of an ingredient."""
        return self.store.use(ingredient_id, amount)

    def decrease(self, ingredient_id: str) -> Ingredient | None:
        """Consume a single unit of an ingredient."""
        return self.store.decrease(ingredient_id)

    def delete(self, ingredient_id: str) -> bool:
        """Remove an ingredient and forget it in the selection."""
        self.selection.select(ingredient_id, included=False)
        return self.store.delete(ingredient_id)

    def select(self, ingredient_id: str, included: bool) -> list[Ingredient]:
        """Toggle an ingredient for the next recipe request."""
        self.selection.select(ingredient_id, included)
        return self.selection.selected(self.store)

    async def scan(self, image_bytes: bytes) -> bool:
        """Analyze a fridge photo and stage the result for review."""
        if self.scanning:
            logger.info("Fridge scan already in progress")
            return False
        self.scanning = True
        try:
            items = await self.vision_service.analyze(image_bytes)
        except Exception:
            logger.exception(
                "Fridge scan failed", extra={"image_size": len(image_bytes)}
            )
            return False
        finally:
            self.scanning = False
        return self.scan_intake.begin_review(items)

    async def scan_from(self, source: FrameSource) -> bool:
        """Capture one frame from a device, release it, then scan it."""
        try:
            async with acquire(source) as device:
                frame = await device.read_frame()
        except Exception:
            logger.exception("Frame capture failed")
            return False
        return await self.scan(frame)

    def save_scan(self) -> list[Ingredient]:
        """Merge the reviewed scan into the store."""
        return self.scan_intake.save(self.store)

    def cancel_scan(self) -> bool:
        """Discard the pending scan review."""
        return self.scan_intake.cancel()

    async def generate_recipes(self) -> bool:
        """Request recipes for everything still in the fridge."""
        return await self.recipe_service.generate(
            self.store.active(), self.preferences_service.get()
        )

    async def generate_from_selection(self) -> bool:
        """Request recipes for the selected ingredients only."""
        return await self.recipe_service.generate(
            self.selection.selected(self.store), self.preferences_service.get()
        )

    def stats(self) -> WasteStats:
        """Return usage and waste figures across every record."""
        return self.stats_service.summarize(self.store.all())
