"""Gallery configuration and layout defaults."""

import os
from pathlib import Path

from pydantic import BaseModel

DEFAULT_DATA_PATH = Path(os.environ.get("MEDIAGALLERY_DATA", "data/images.json"))
DEFAULT_OUTPUT_PATH = Path(os.environ.get("MEDIAGALLERY_OUTPUT", "gallery.html"))


class GalleryConfig(BaseModel):
    """Layout defaults and external URL templates.

    Width values are Tailwind CSS width classes. Every optional item or group
    field is resolved against these once, before rendering.
    """
    full_width: str = "w-full"
    half_width: str = "w-full md:w-1/2"
    group_width: str = "w-full"
    filter_width: str = "w-full md:w-1/2"

    # Editor defaults for newly added entries
    new_group_width: str = "md:w-1/2"
    new_image_width: str = "md:w-1/2"
    new_video_width: str = "w-full"
    new_item_position: int = 999
    image_category: str = "nature"
    video_category: str = "tutorial"

    video_host: str = "www.youtube.com"
    thumbnail_host: str = "img.youtube.com"
    thumbnail_variant: str = "maxresdefault"

    fade_in_delay_ms: int = 100
    container_id: str = "gallery-container"
    lightbox_group: str = "gallery"

    def watch_url(self, video_id: str) -> str:
        return f"https://{self.video_host}/watch?v={video_id}"

    def thumbnail_url(self, video_id: str) -> str:
        return f"https://{self.thumbnail_host}/vi/{video_id}/{self.thumbnail_variant}.jpg"

    def size_width(self, size: str | None) -> str:
        """Width for a flat-document `size`: "full" is full width, anything else half."""
        return self.full_width if size == "full" else self.half_width

    def default_category(self, is_video: bool) -> str:
        return self.video_category if is_video else self.image_category
