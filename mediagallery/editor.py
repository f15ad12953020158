"""Add, remove and list operations on a gallery document."""

from collections.abc import Callable
from typing import Literal

from pydantic import BaseModel, ValidationError, field_validator, model_validator

from .config import GalleryConfig
from .models import GalleryDocument, GalleryError, Group, Item, Layout
from .utils import extract_video_id

NEW_GROUP_KEYWORD = "new"


class EditorError(GalleryError):
    """Raised when an edit is rejected. The document is left unchanged."""

    pass


class ItemNotFoundError(EditorError):
    """Raised when removing an id that isn't in the document."""

    pass


class NewItem(BaseModel):
    """All the fields for a new entry, validated together before any change is made.

    `url` is the image URL for images and a YouTube URL for videos.
    """
    type: Literal["image", "video"] = "image"
    url: str
    alt: str = ""
    category: str = ""
    group: str = ""
    width: str = ""
    video_id: str | None = None

    @field_validator("type", mode="before")
    @classmethod
    def normalize_type(cls, value):
        if value is None:
            return "image"
        return str(value).strip().lower() or "image"

    @field_validator("url", "alt", "category", "group", "width", mode="before")
    @classmethod
    def strip_text(cls, value):
        return "" if value is None else str(value).strip()

    @model_validator(mode="after")
    def check_url(self) -> 'NewItem':
        if self.type == "video":
            self.video_id = extract_video_id(self.url)
            if not self.video_id:
                raise ValueError(f"Invalid YouTube URL: {self.url!r}")
        elif not self.url:
            raise ValueError("Image URL is required")
        return self

    @classmethod
    def from_fields(cls, fields: dict) -> 'NewItem':
        """Validate raw field values, raising EditorError on bad input."""
        try:
            return cls.model_validate(fields)
        except ValidationError as e:
            messages = "; ".join(err["msg"].removeprefix("Value error, ") for err in e.errors())
            raise EditorError(messages) from e


class RemovedItem(BaseModel):
    item: Item
    group_id: str | None = None


def build_item(new_item: NewItem, item_id: int, config: GalleryConfig) -> Item:
    """Create the stored item, applying per-type defaults."""
    if new_item.type == "video":
        return Item(
            id=item_id,
            type="video",
            video_id=new_item.video_id,
            src=config.thumbnail_url(new_item.video_id),
            alt=new_item.alt,
            category=new_item.category or config.video_category,
            layout=Layout(
                width=new_item.width or config.new_video_width,
                position=config.new_item_position,
            ),
        )
    return Item(
        id=item_id,
        src=new_item.url,
        alt=new_item.alt,
        category=new_item.category or config.image_category,
        layout=Layout(
            width=new_item.width or config.new_image_width,
            position=config.new_item_position,
        ),
    )


def _unused_group_id(document: GalleryDocument) -> str:
    n = len(document.groups) + 1
    while document.find_group(f"group{n}") is not None:
        n += 1
    return f"group{n}"


def add_item(
    document: GalleryDocument,
    new_item: NewItem,
    config: GalleryConfig | None = None,
    log: Callable[[str], None] = print,
) -> Item:
    """Add an item to the named group, creating the group if needed.

    An empty group name or "new" puts the item in a fresh group. Flat documents
    are converted to the grouped shape first.
    """
    config = config or GalleryConfig()
    document.upgrade(config)
    item = build_item(new_item, document.next_id(), config)

    group_name = new_item.group
    if not group_name or group_name == NEW_GROUP_KEYWORD:
        group_name = _unused_group_id(document)
        log(f"Created new group: {group_name}")
    else:
        group = document.find_group(group_name)
        if group is not None:
            group.items.append(item)
            return item
        log(f'Group "{group_name}" not found, creating new group.')

    document.groups.append(
        Group(id=group_name, type="column", width=config.new_group_width, items=[item])
    )
    return item


def remove_item(document: GalleryDocument, item_id: int) -> RemovedItem:
    """Remove the first item with this id. Raises ItemNotFoundError if there is none."""
    for group in document.groups:
        for index, item in enumerate(group.items):
            if item.id == item_id:
                del group.items[index]
                return RemovedItem(item=item, group_id=None if document.legacy else group.id)
    raise ItemNotFoundError(f"Item with ID {item_id} not found.")


def item_label(item: Item) -> str:
    return "VIDEO" if item.is_video else "IMAGE"


def summarize_items(document: GalleryDocument) -> list[str]:
    """One line per item, used when choosing what to remove."""
    lines = []
    for group in document.groups:
        group_info = "" if document.legacy else f" ({group.id})"
        for item in group.items:
            lines.append(f"   {item_label(item)} #{item.id}: {item.alt or ''}{group_info}")
    return lines


def describe_document(document: GalleryDocument, config: GalleryConfig | None = None) -> list[str]:
    """Lines for the `list` command: layout per group and item, then totals."""
    config = config or GalleryConfig()
    items = document.all_items()
    if not items:
        return ["No items in gallery."]

    lines = []
    if document.legacy:
        lines.append("Simple Layout:")
        lines.append("")
        for item in items:
            lines.append(f"{item_label(item)} #{item.id}: {item.alt or ''}")
            lines.append(f"   Category: {item.category} | Size: {item.size or 'half'}")
            if item.is_video:
                lines.append(f"   Video ID: {item.video_id}")
            lines.append("")
    else:
        for group in document.groups:
            lines.append(f"Group: {group.id} ({group.width or config.group_width})")
            for item in group.items:
                layout = item.layout or Layout()
                position = "?" if layout.position is None else layout.position
                lines.append(f"   {item_label(item)} #{item.id}: {item.alt or ''}")
                lines.append(
                    f"      Category: {item.category} | Width: {layout.width or config.full_width} | Pos: {position}"
                )
                if item.is_video:
                    lines.append(f"      Video ID: {item.video_id}")
            lines.append("")

    video_count = sum(1 for item in items if item.is_video)
    image_count = len(items) - video_count
    lines.append(f"Total: {image_count} images, {video_count} videos ({len(items)} items)")
    return lines
