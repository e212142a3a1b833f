"""Spaces: categorized notes, documents and images."""

import logging
import shutil
from pathlib import Path
from typing import Optional
from uuid import UUID, uuid4

from gratitude.db.store import DataStore
from gratitude.errors import ItemNotFoundError, SpaceNotFoundError
from gratitude.models import CategoryColor, ItemType, SpaceCategory, SpaceItem

logger = logging.getLogger(__name__)

IMAGE_SUFFIXES = {".png", ".jpg", ".jpeg", ".gif", ".heic", ".webp", ".bmp", ".tiff"}


def item_type_for(path: Path) -> ItemType:
    """Image for known picture extensions, document otherwise."""
    return ItemType.IMAGE if path.suffix.lower() in IMAGE_SUFFIXES else ItemType.DOCUMENT


class SpaceService:
    """Manages spaces and the items stored in them."""

    def __init__(self, store: DataStore, files_dir: Path):
        """Initialize the service.

        Args:
            store: Data store holding spaces and items.
            files_dir: Directory receiving copies of documents and images.
        """
        self.store = store
        self.files_dir = files_dir

    def _require_space(self, space_id: UUID) -> SpaceCategory:
        space = self.store.get_space(space_id)
        if space is None:
            raise SpaceNotFoundError(f"No space with id {space_id}")
        return space

    def resolve_space(self, ref: str) -> SpaceCategory:
        """Find a space by exact name (case-insensitive) or id prefix.

        Raises:
            SpaceNotFoundError: If nothing, or more than one space, matches.
        """
        ref = ref.strip()
        if not ref:
            raise SpaceNotFoundError("No space name or id given")
        spaces = self.store.get_spaces()
        by_name = [s for s in spaces if s.name.lower() == ref.lower()]
        matches = by_name or [s for s in spaces if str(s.id).startswith(ref.lower())]
        if len(matches) != 1:
            raise SpaceNotFoundError(f"No unique space matches '{ref}'")
        return matches[0]

    def resolve_item(self, ref: str) -> SpaceItem:
        """Find an item by id prefix.

        Raises:
            ItemNotFoundError: If nothing, or more than one item, matches.
        """
        ref = ref.strip().lower()
        if not ref:
            raise ItemNotFoundError("No item id given")
        matches = [i for i in self.store.get_items() if str(i.id).startswith(ref)]
        if len(matches) != 1:
            raise ItemNotFoundError(f"No unique item matches '{ref}'")
        return matches[0]

    # ==================== Spaces ====================

    def create_space(
        self, name: str, icon: str = "folder", color: str = CategoryColor.BLUE.value
    ) -> SpaceCategory:
        """Create a space."""
        space = SpaceCategory(name=name.strip(), icon=icon, color=CategoryColor(color))
        self.store.save_space(space)
        logger.info("Created space '%s'", space.name)
        return space

    def list_spaces(self) -> list[SpaceCategory]:
        return self.store.get_spaces()

    def rename_space(self, space_id: UUID, name: str) -> SpaceCategory:
        """Give a space a new name."""
        space = self._require_space(space_id)
        renamed = SpaceCategory(
            id=space.id, name=name.strip(), icon=space.icon, color=space.color
        )
        self.store.save_space(renamed)
        return renamed

    def delete_space(self, space_id: UUID) -> SpaceCategory:
        """Delete a space, its items and their stored files."""
        space = self._require_space(space_id)
        items = self.store.get_items(space_id)
        self.store.delete_space(space_id)
        for item in items:
            self._remove_file(item)
        logger.info("Deleted space '%s' with %d item(s)", space.name, len(items))
        return space

    # ==================== Items ====================

    def add_text_item(self, space_id: UUID, name: str, text: str) -> SpaceItem:
        """Add a text note to a space."""
        self._require_space(space_id)
        item = SpaceItem(name=name, type=ItemType.TEXT, category_id=space_id, text=text)
        self.store.save_item(item)
        return item

    def add_file_item(
        self, space_id: UUID, source: Path, name: Optional[str] = None
    ) -> SpaceItem:
        """Copy a file into the files directory and add it to a space.

        Raises:
            SpaceNotFoundError: If the space does not exist.
            FileNotFoundError: If ``source`` is not a file.
        """
        self._require_space(space_id)
        if not source.is_file():
            raise FileNotFoundError(f"No such file: {source}")

        item_name = name or source.name
        self.files_dir.mkdir(parents=True, exist_ok=True)
        destination = self.files_dir / f"{uuid4()}_{source.name}"
        shutil.copy2(source, destination)

        item = SpaceItem(
            name=item_name,
            type=item_type_for(source),
            category_id=space_id,
            data_path=destination,
        )
        try:
            self.store.save_item(item)
        except Exception:
            destination.unlink(missing_ok=True)
            raise
        logger.info("Stored %s as %s", source, destination.name)
        return item

    def list_items(self, space_id: UUID) -> list[SpaceItem]:
        self._require_space(space_id)
        return self.store.get_items(space_id)

    def delete_item(self, item_id: UUID) -> SpaceItem:
        """Delete an item and its stored file."""
        item = self.store.get_item(item_id)
        if item is None:
            raise ItemNotFoundError(f"No item with id {item_id}")
        self.store.delete_item(item_id)
        self._remove_file(item)
        return item

    def _remove_file(self, item: SpaceItem) -> None:
        if item.data_path is not None:
            try:
                item.data_path.unlink(missing_ok=True)
            except OSError:
                logger.warning("Could not remove %s", item.data_path)
