"""Command-line interface for mediagallery."""

import argparse
import sys
from pathlib import Path

from .config import DEFAULT_DATA_PATH, DEFAULT_OUTPUT_PATH, GalleryConfig
from .editor import (
    EditorError,
    NewItem,
    add_item,
    describe_document,
    remove_item,
    summarize_items,
)
from .gallery import generate_gallery
from .models import DocumentLoadError, DocumentSaveError, GalleryDocument
from .utils import print_error

COMMANDS = ("add", "remove", "list", "gallery", "serve")

LAYOUT_HELP = """Layout system:
  - Items are organized in groups/columns
  - Each item has a flexible width and a position within its group
  - Flat "images" files are upgraded to groups on the first add
"""


def save_document(document: GalleryDocument, path: Path) -> None:
    try:
        document.save(path)
    except DocumentSaveError as e:
        print_error(str(e))
        sys.exit(1)
    print("Gallery file updated successfully!")


def ask(prompt: str) -> str:
    return input(prompt).strip()


def prompt_new_item() -> dict:
    """Ask for the fields of a new item. Nothing is validated until all are given."""
    item_type = ask("Type (image/video): ").lower() or "image"
    if item_type == "video":
        fields = {
            "type": item_type,
            "url": ask("YouTube Video URL: "),
            "alt": ask("Description: "),
        }
    else:
        fields = {
            "type": item_type,
            "url": ask("Image URL: "),
            "alt": ask("Alt text: "),
        }
    fields["category"] = ask("Category: ")
    fields["group"] = ask('Group ID (or "new" for new group): ')
    fields["width"] = ask("Width (w-full, md:w-1/2, etc.): ")
    return fields


def load_for_edit(path: Path) -> GalleryDocument:
    """Load a document that is about to be rewritten.

    A missing file starts an empty gallery. A file that exists but can't be
    loaded aborts the command so it is never overwritten.
    """
    if not path.exists():
        return GalleryDocument(groups=[])
    try:
        return GalleryDocument.load(path)
    except DocumentLoadError as e:
        print_error(f"Error: {e}")
        print_error(f"Not modifying {path}; fix or remove it first.")
        sys.exit(1)


def cmd_add(args):
    """Add a new image or video."""
    config = GalleryConfig()
    document = load_for_edit(args.data)

    print("\nAdd New Item to Gallery\n")
    if document.groups and not document.legacy:
        print("Available groups:")
        for i, group in enumerate(document.groups, 1):
            print(f"  {i}. {group.id} ({len(group.items)} items)")
        print("")

    try:
        new_item = NewItem.from_fields(prompt_new_item())
    except EditorError as e:
        print_error(f"Error: {e}")
        sys.exit(1)

    item = add_item(document, new_item, config)
    save_document(document, args.data)
    kind = "video" if item.is_video else "image"
    print(f"\nAdded {kind} #{item.id}: {item.alt}")


def cmd_remove(args):
    """Remove an image or video by id."""
    document = load_for_edit(args.data)
    if not document.all_items():
        print("No items to remove.")
        return

    if args.id is None:
        print("\nCurrent Items:")
        for line in summarize_items(document):
            print(line)
        id_str = ask("\nEnter item ID to remove: ")
        try:
            item_id = int(id_str)
        except ValueError:
            print_error(f"Error: Invalid item ID: {id_str!r}")
            sys.exit(1)
    else:
        item_id = args.id

    try:
        removed = remove_item(document, item_id)
    except EditorError as e:
        print_error(f"Error: {e}")
        sys.exit(1)

    save_document(document, args.data)
    kind = "video" if removed.item.is_video else "image"
    location = f" from {removed.group_id}" if removed.group_id else ""
    print(f"Removed {kind}: {removed.item.alt or ''}{location}")


def cmd_list(args):
    """List all items with layout info."""
    document = GalleryDocument.load_or_empty(args.data)
    if document.all_items():
        print("\nGallery Layout:\n")
    for line in describe_document(document):
        print(line)


def cmd_gallery(args):
    """Generate the gallery HTML page."""
    if generate_gallery(args.data, args.output) is None:
        sys.exit(1)
    print("Done!")


def cmd_serve(args):
    """Start web server for viewing the gallery."""
    from .server import run_server

    run_server(args.data, host=args.host, port=args.port)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mediagallery",
        description="Media gallery: edit the gallery JSON and render it to HTML",
        epilog=LAYOUT_HELP,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command")

    def add_data_option(p: argparse.ArgumentParser) -> None:
        p.add_argument(
            "--data",
            type=Path,
            default=DEFAULT_DATA_PATH,
            help=f"Gallery JSON file (default: {DEFAULT_DATA_PATH})",
        )

    p_add = subparsers.add_parser("add", help="Add a new image or video")
    add_data_option(p_add)
    p_add.set_defaults(func=cmd_add)

    p_remove = subparsers.add_parser("remove", help="Remove an image or video")
    p_remove.add_argument("id", type=int, nargs="?", help="Item id (prompted if omitted)")
    add_data_option(p_remove)
    p_remove.set_defaults(func=cmd_remove)

    p_list = subparsers.add_parser("list", help="List all items with layout info")
    add_data_option(p_list)
    p_list.set_defaults(func=cmd_list)

    p_gallery = subparsers.add_parser("gallery", help="Generate the gallery HTML page")
    add_data_option(p_gallery)
    p_gallery.add_argument(
        "--output",
        type=Path,
        default=DEFAULT_OUTPUT_PATH,
        help=f"Output HTML file (default: {DEFAULT_OUTPUT_PATH})",
    )
    p_gallery.set_defaults(func=cmd_gallery)

    p_serve = subparsers.add_parser("serve", help="Start web server for viewing the gallery")
    add_data_option(p_serve)
    p_serve.add_argument("--host", default="127.0.0.1", help="Host (default: 127.0.0.1)")
    p_serve.add_argument("--port", type=int, default=8000, help="Port (default: 8000)")
    p_serve.set_defaults(func=cmd_serve)

    return parser


def main(argv: list[str] | None = None):
    argv = sys.argv[1:] if argv is None else argv
    parser = build_parser()

    # Missing or unknown commands print usage and do nothing
    if not argv or (argv[0] not in COMMANDS and argv[0] not in ("-h", "--help")):
        parser.print_help()
        return

    args = parser.parse_args(argv)
    args.func(args)


if __name__ == "__main__":
    main()
