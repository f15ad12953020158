"""Tests for add/remove/list operations."""

import pytest

from mediagallery.config import GalleryConfig
from mediagallery.editor import (
    EditorError,
    ItemNotFoundError,
    NewItem,
    add_item,
    describe_document,
    remove_item,
    summarize_items,
)
from mediagallery.gallery import GalleryContext, render
from mediagallery.models import GalleryDocument
from mediagallery.utils import extract_video_id


@pytest.mark.parametrize("url", [
    "https://www.youtube.com/watch?v=dQw4w9WgXcQ",
    "https://youtu.be/dQw4w9WgXcQ",
    "https://www.youtube.com/embed/dQw4w9WgXcQ",
    "https://www.youtube.com/watch?feature=share&v=dQw4w9WgXcQ",
    "youtube.com/v/dQw4w9WgXcQ?t=10",
])
def test_extract_video_id(url):
    assert extract_video_id(url) == "dQw4w9WgXcQ"


@pytest.mark.parametrize("url", [
    "https://vimeo.com/123456789",
    "https://example.com/watch?v=dQw4w9WgXcQ",
    "https://youtu.be/short",
    "",
])
def test_extract_video_id_no_match(url):
    assert extract_video_id(url) is None


def quiet(msg):
    pass


def test_new_item_defaults():
    new_item = NewItem.from_fields({"type": "", "url": " a.jpg "})
    assert new_item.type == "image"
    assert new_item.url == "a.jpg"


def test_new_item_rejects_bad_video_url():
    with pytest.raises(EditorError, match="Invalid YouTube URL"):
        NewItem.from_fields({"type": "video", "url": "https://vimeo.com/1"})


def test_new_item_rejects_unknown_type():
    with pytest.raises(EditorError):
        NewItem.from_fields({"type": "gif", "url": "a.gif"})


def test_new_item_requires_image_url():
    with pytest.raises(EditorError, match="Image URL is required"):
        NewItem.from_fields({"type": "image", "url": "  "})


def test_add_image_to_existing_group(grouped_data):
    doc = GalleryDocument.from_data(grouped_data)
    item = add_item(doc, NewItem(url="d.jpg", alt="D", group="g2"), log=quiet)

    assert item.id == 5
    assert doc.groups[1].items[-1] is item
    assert item.to_data() == {
        "id": 5,
        "src": "d.jpg",
        "alt": "D",
        "category": "nature",
        "layout": {"width": "md:w-1/2", "position": 999},
    }


def test_add_video_defaults(grouped_data):
    doc = GalleryDocument.from_data(grouped_data)
    new_item = NewItem.from_fields({"type": "video", "url": "https://youtu.be/abcdefghijk", "group": "g1"})
    item = add_item(doc, new_item, log=quiet)

    assert item.to_data() == {
        "id": 5,
        "type": "video",
        "videoId": "abcdefghijk",
        "src": "https://img.youtube.com/vi/abcdefghijk/maxresdefault.jpg",
        "alt": "",
        "category": "tutorial",
        "layout": {"width": "w-full", "position": 999},
    }


def test_add_to_empty_document_starts_at_one():
    doc = GalleryDocument(groups=[])
    messages = []
    item = add_item(doc, NewItem(url="a.jpg"), log=messages.append)

    assert item.id == 1
    assert messages == ["Created new group: group1"]
    assert doc.to_data()["groups"][0] == {
        "id": "group1",
        "type": "column",
        "width": "md:w-1/2",
        "items": [item.to_data()],
    }


def test_add_new_group_keyword_picks_unused_id(grouped_data):
    grouped_data["groups"][1]["id"] = "group3"
    doc = GalleryDocument.from_data(grouped_data)
    add_item(doc, NewItem(url="a.jpg", group="new"), log=quiet)
    assert [g.id for g in doc.groups] == ["g1", "group3", "group4"]


def test_add_to_missing_group_creates_it(grouped_data):
    doc = GalleryDocument.from_data(grouped_data)
    messages = []
    add_item(doc, NewItem(url="a.jpg", group="beach"), log=messages.append)

    assert doc.groups[-1].id == "beach"
    assert messages == ['Group "beach" not found, creating new group.']


def test_add_upgrades_legacy_document(legacy_data):
    doc = GalleryDocument.from_data(legacy_data)
    item = add_item(doc, NewItem(url="n.jpg", group="default"), log=quiet)

    data = doc.to_data()
    assert "images" not in data
    assert [g["id"] for g in data["groups"]] == ["default"]
    assert [i["id"] for i in data["groups"][0]["items"]] == [1, 2, 5, 6]
    assert item.id == 6
    assert [i["layout"]["width"] for i in data["groups"][0]["items"]] == [
        "w-full", "w-full md:w-1/2", "w-full md:w-1/2", "md:w-1/2",
    ]


def test_add_to_legacy_keeps_rendered_widths(legacy_data):
    doc = GalleryDocument.from_data(legacy_data)
    half = '<div class="w-full md:w-1/2 p-1">'
    full = '<div class="w-full p-1">'
    before = render(GalleryContext(document=doc))
    assert (before.count(half), before.count(full)) == (2, 1)

    add_item(doc, NewItem(url="n.jpg", group="default", width="w-full"), log=quiet)

    after = render(GalleryContext(document=doc))
    assert (after.count(half), after.count(full)) == (2, 2)


def test_add_keeps_ids_unique(grouped_data):
    doc = GalleryDocument.from_data(grouped_data)
    for n in range(5):
        add_item(doc, NewItem(url=f"{n}.jpg", group="g1"), log=quiet)
    ids = [item.id for item in doc.all_items()]
    assert len(ids) == len(set(ids))
    assert max(ids) == 9


def test_add_uses_custom_config():
    config = GalleryConfig(image_category="misc", new_image_width="w-1/3", new_item_position=5)
    item = add_item(GalleryDocument(groups=[]), NewItem(url="a.jpg"), config, log=quiet)
    assert item.category == "misc"
    assert item.layout.width == "w-1/3"
    assert item.layout.position == 5


def test_remove_item(grouped_data):
    doc = GalleryDocument.from_data(grouped_data)
    removed = remove_item(doc, 3)

    assert removed.item.id == 3
    assert removed.group_id == "g2"
    assert [item.id for item in doc.all_items()] == [1, 2, 4]


def test_remove_from_legacy_keeps_shape(legacy_data):
    doc = GalleryDocument.from_data(legacy_data)
    removed = remove_item(doc, 2)

    assert removed.group_id is None
    assert doc.to_data() == {"images": [legacy_data["images"][0], legacy_data["images"][2]]}


def test_remove_missing_leaves_document_unchanged(grouped_data):
    doc = GalleryDocument.from_data(grouped_data)
    with pytest.raises(ItemNotFoundError, match="Item with ID 42 not found."):
        remove_item(doc, 42)
    assert doc.to_data() == grouped_data


def test_summarize_items(grouped_data, legacy_data):
    assert summarize_items(GalleryDocument.from_data(grouped_data))[0] == "   IMAGE #1: A (g1)"
    assert summarize_items(GalleryDocument.from_data(legacy_data))[0] == "   IMAGE #1: X"


def test_describe_grouped(grouped_data):
    lines = describe_document(GalleryDocument.from_data(grouped_data))

    assert lines[0] == "Group: g1 (md:w-1/2)"
    assert "   VIDEO #3: Clip" in lines
    assert "      Video ID: dQw4w9WgXcQ" in lines
    assert "      Category: urban | Width: w-full | Pos: ?" in lines
    assert "      Category: tutorial | Width: w-full md:w-1/2 | Pos: 0" in lines
    assert lines[-1] == "Total: 3 images, 1 videos (4 items)"


def test_describe_legacy(legacy_data):
    lines = describe_document(GalleryDocument.from_data(legacy_data))

    assert lines[0] == "Simple Layout:"
    assert "   Category: nature | Size: full" in lines
    assert "   Category: nature | Size: half" in lines
    assert lines[-1] == "Total: 3 images, 0 videos (3 items)"


def test_describe_empty():
    assert describe_document(GalleryDocument(groups=[])) == ["No items in gallery."]
