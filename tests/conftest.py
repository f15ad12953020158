"""Pytest fixtures for gallery documents."""

import json

import pytest


@pytest.fixture
def grouped_data():
    """A current-shape document with two groups and one video."""
    return {
        "groups": [
            {
                "id": "g1",
                "type": "column",
                "width": "md:w-1/2",
                "items": [
                    {
                        "id": 1,
                        "type": "image",
                        "src": "a.jpg",
                        "alt": "A",
                        "category": "nature",
                        "layout": {"width": "w-full", "position": 2},
                    },
                    {
                        "id": 2,
                        "type": "image",
                        "src": "b.jpg",
                        "alt": "B",
                        "category": "nature",
                        "layout": {"width": "w-full", "position": 1},
                    },
                ],
            },
            {
                "id": "g2",
                "items": [
                    {
                        "id": 3,
                        "type": "video",
                        "videoId": "dQw4w9WgXcQ",
                        "src": "https://img.youtube.com/vi/dQw4w9WgXcQ/maxresdefault.jpg",
                        "alt": "Clip",
                        "category": "tutorial",
                        "layout": {"width": "w-full md:w-1/2", "position": 0},
                    },
                    {"id": 4, "src": "c.jpg", "alt": "C", "category": "urban"},
                ],
            },
        ]
    }


@pytest.fixture
def legacy_data():
    """A flat `images` document with size fields."""
    return {
        "images": [
            {"id": 1, "src": "x.jpg", "alt": "X", "category": "nature", "size": "full"},
            {"id": 2, "src": "y.jpg", "alt": "Y", "category": "urban", "size": "half"},
            {"id": 5, "src": "z.jpg", "alt": "Z", "category": "nature"},
        ]
    }


def write_json(path, data):
    path.write_text(json.dumps(data, indent=2))
    return path


@pytest.fixture
def grouped_file(tmp_path, grouped_data):
    return write_json(tmp_path / "images.json", grouped_data)


@pytest.fixture
def legacy_file(tmp_path, legacy_data):
    return write_json(tmp_path / "images.json", legacy_data)
