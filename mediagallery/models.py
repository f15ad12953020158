"""Data models for mediagallery."""

import json
from collections.abc import Callable
from pathlib import Path
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, PrivateAttr, ValidationError

from .config import GalleryConfig
from .utils import print_error, write_text_atomic

# Id of the group that holds the items of a flat `images` document
LEGACY_GROUP_ID = "images"
# Id given to that group when the document is upgraded to the grouped shape
UPGRADED_GROUP_ID = "default"


def _scalar_to_str(value: Any) -> Any:
    """Accept numbers and booleans where text is expected (hand-edited files)."""
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, (int, float)):
        return str(value)
    return value


Text = Annotated[str, BeforeValidator(_scalar_to_str)]
OptionalText = Annotated[str | None, BeforeValidator(_scalar_to_str)]


class GalleryError(Exception):
    """Base class for gallery errors."""

    pass


class DocumentLoadError(GalleryError):
    """Raised when a gallery document can't be read or parsed."""

    pass


class DocumentSaveError(GalleryError):
    """Raised when a gallery document can't be written."""

    pass


class Layout(BaseModel):
    """Placement of an item within its group."""
    model_config = ConfigDict(extra="allow")

    width: OptionalText = None
    position: int | float | None = None


class Item(BaseModel):
    """A single image or video entry."""
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: int | None = None
    type: OptionalText = None
    src: OptionalText = None
    video_id: OptionalText = Field(default=None, alias="videoId")
    alt: OptionalText = None
    category: OptionalText = None
    layout: Layout | None = None
    # Flat documents only: "full" or "half"
    size: OptionalText = None

    @property
    def is_video(self) -> bool:
        return self.type == "video"

    def to_data(self) -> dict[str, Any]:
        data = self.model_dump(by_alias=True, exclude_unset=True)
        data.update(self.model_extra or {})
        return data


class Group(BaseModel):
    """An ordered column of items sharing one width."""
    model_config = ConfigDict(extra="allow")

    id: Text
    width: OptionalText = None
    items: list[Item] = Field(default_factory=list)

    def to_data(self) -> dict[str, Any]:
        data = self.model_dump(by_alias=True, exclude_unset=True, exclude={"items"})
        data.update(self.model_extra or {})
        data["items"] = [item.to_data() for item in self.items]
        return data


class GalleryDocument(BaseModel):
    """A whole gallery, always held in the grouped shape.

    Flat `{"images": [...]}` documents are wrapped into a single group when
    loaded and written back flat until `upgrade()` is called.
    """
    model_config = ConfigDict(extra="allow")

    groups: list[Group] = Field(default_factory=list)

    _legacy: bool = PrivateAttr(default=False)

    @property
    def legacy(self) -> bool:
        return self._legacy

    @classmethod
    def from_data(cls, data: Any) -> 'GalleryDocument':
        """Build a document from parsed JSON in either the grouped or the flat shape."""
        if not isinstance(data, dict):
            return cls(groups=[])
        if isinstance(data.get("groups"), list):
            return cls.model_validate(data)
        if isinstance(data.get("images"), list):
            rest = {k: v for k, v in data.items() if k != "images"}
            doc = cls.model_validate({
                **rest,
                "groups": [{"id": LEGACY_GROUP_ID, "items": data["images"]}],
            })
            doc._legacy = True
            return doc
        rest = {k: v for k, v in data.items() if k not in ("groups", "images")}
        return cls.model_validate({**rest, "groups": []})

    def to_data(self) -> dict[str, Any]:
        data = self.model_dump(by_alias=True, exclude_unset=True, exclude={"groups"})
        data.update(self.model_extra or {})
        if self._legacy:
            data["images"] = [item.to_data() for group in self.groups for item in group.items]
        else:
            data["groups"] = [group.to_data() for group in self.groups]
        return data

    def upgrade(self, config: GalleryConfig | None = None) -> None:
        """Convert a flat document to the grouped shape in place.

        Flat documents take width only from `size`, so each item's `size` becomes
        its `layout.width` and it renders at the same width afterwards. `size`
        itself is kept.
        """
        if not self._legacy:
            return
        config = config or GalleryConfig()
        self._legacy = False
        for item in self.all_items():
            if item.layout is None:
                item.layout = Layout(width=config.size_width(item.size))
            else:
                item.layout.width = config.size_width(item.size)
        self.groups = [
            Group(id=UPGRADED_GROUP_ID, type="column", items=group.items)
            if group.id == LEGACY_GROUP_ID else group
            for group in self.groups
        ]

    def all_items(self) -> list[Item]:
        """Every item exactly once, in group order then item order."""
        return [item for group in self.groups for item in group.items]

    def next_id(self) -> int:
        ids = [item.id for item in self.all_items() if item.id is not None]
        return max(ids, default=0) + 1

    def find_group(self, group_id: str) -> Group | None:
        for group in self.groups:
            if group.id == group_id:
                return group
        return None

    def save(self, path: Path) -> None:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            write_text_atomic(path, json.dumps(self.to_data(), indent=2, ensure_ascii=False) + "\n")
        except OSError as e:
            raise DocumentSaveError(f"Error writing gallery file: {e}") from e

    @classmethod
    def load(cls, path: Path) -> 'GalleryDocument':
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
            return cls.from_data(data)
        except OSError as e:
            raise DocumentLoadError(f"Error reading gallery file: {e}") from e
        except (json.JSONDecodeError, ValidationError) as e:
            raise DocumentLoadError(f"Error parsing gallery file {path}: {e}") from e

    @classmethod
    def load_or_empty(
        cls, path: Path, log: Callable[[str], None] = print_error
    ) -> 'GalleryDocument':
        """Load a document, reporting failures and falling back to an empty one."""
        try:
            return cls.load(path)
        except DocumentLoadError as e:
            log(str(e))
            return cls(groups=[])
