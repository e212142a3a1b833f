"""Space category and item data models."""

from enum import Enum
from pathlib import Path
from typing import Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field, model_validator


class CategoryColor(str, Enum):
    """Colors a space can be tagged with."""

    RED = "red"
    BLUE = "blue"
    GREEN = "green"
    YELLOW = "yellow"
    PURPLE = "purple"
    GRAY = "gray"


class ItemType(str, Enum):
    """Kinds of content stored in a space."""

    DOCUMENT = "document"
    IMAGE = "image"
    TEXT = "text"


class SpaceCategory(BaseModel):
    """A named, colored space grouping items."""

    id: UUID = Field(default_factory=uuid4, description="Space identifier")
    name: str = Field(..., min_length=1, description="Space name")
    icon: str = Field(default="folder", description="Icon name")
    color: CategoryColor = Field(default=CategoryColor.BLUE, description="Space color")

    model_config = {"frozen": True}


class SpaceItem(BaseModel):
    """A document, image or text note stored in a space."""

    id: UUID = Field(default_factory=uuid4, description="Item identifier")
    name: str = Field(..., min_length=1, description="Item name")
    type: ItemType = Field(default=ItemType.TEXT, description="Item type")
    category_id: UUID = Field(..., description="Owning space")
    data_path: Optional[Path] = Field(
        default=None, description="Stored copy of a document or image"
    )
    text: Optional[str] = Field(default=None, description="Content of a text item")

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _check_payload(self) -> "SpaceItem":
        if self.type == ItemType.TEXT and self.text is None:
            raise ValueError("text items require text content")
        if self.type != ItemType.TEXT and self.data_path is None:
            raise ValueError(f"{self.type.value} items require a data_path")
        return self
