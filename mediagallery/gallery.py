"""HTML gallery rendering."""

import html as html_lib
import json
import re
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from pydantic import BaseModel

from .config import GalleryConfig
from .models import GalleryDocument, Group, Item
from .utils import print_error, write_text_atomic

ALL_CATEGORIES = "all"

IMG_CLASSES = (
    "block h-full w-full object-cover object-center opacity-0 animate-fade-in "
    "transition duration-500 transform scale-100 hover:scale-110"
)


class ResolvedItem(BaseModel):
    """An item with every optional field resolved, ready to render."""
    id: int | None
    is_video: bool
    width: str
    position: int
    alt: str
    category: str | None
    href: str
    thumbnail: str


@dataclass
class GalleryContext:
    """Everything a render needs. Built by the caller, never stored globally."""
    document: GalleryDocument | None
    config: GalleryConfig = field(default_factory=GalleryConfig)
    log: Callable[[str], None] = print_error


def resolve_item(
    item: Item,
    config: GalleryConfig,
    *,
    legacy: bool = False,
    fallback_width: str | None = None,
) -> ResolvedItem:
    """Resolve widths, ordering and URLs for one item.

    Items from a flat document take their width from `size`; anything but
    "full" (including no size at all) is half width.
    """
    if legacy:
        width = config.size_width(item.size)
    elif item.layout and item.layout.width:
        width = item.layout.width
    else:
        width = fallback_width or config.full_width

    position = 0
    if item.layout and item.layout.position is not None:
        position = item.layout.position

    if item.is_video:
        video_id = item.video_id or ""
        href = config.watch_url(video_id)
        thumbnail = item.src or (config.thumbnail_url(video_id) if video_id else "")
    else:
        href = item.src or ""
        thumbnail = item.src or ""

    return ResolvedItem(
        id=item.id,
        is_video=item.is_video,
        width=width,
        position=position,
        alt=item.alt or "",
        category=item.category or None,
        href=href,
        thumbnail=thumbnail,
    )


def render_item(item: ResolvedItem, config: GalleryConfig) -> str:
    """Render one image or video tile."""
    esc = html_lib.escape
    link_attrs = f'href="{esc(item.href)}" data-fancybox="{esc(config.lightbox_group)}"'
    if item.category is not None:
        link_attrs += f' data-category="{esc(item.category)}"'
    img = f'''<img alt="{esc(item.alt)}"
                   class="{IMG_CLASSES}"
                   src="{esc(item.thumbnail)}"
                   loading="lazy" />'''

    if item.is_video:
        return f'''
        <div class="{esc(item.width)} p-1">
          <div class="overflow-hidden h-full w-full relative group">
            <a {link_attrs}>
              {img}
              <div class="absolute inset-0 flex items-center justify-center bg-black bg-opacity-30 group-hover:bg-opacity-40 transition-all duration-300">
                <div class="bg-white bg-opacity-90 rounded-full p-4 transform group-hover:scale-110 transition-transform duration-300">
                  <svg class="w-8 h-8 text-gray-800 ml-1" fill="currentColor" viewBox="0 0 24 24">
                    <path d="M8 5v14l11-7z"/>
                  </svg>
                </div>
              </div>
              <div class="absolute top-2 left-2 bg-red-600 text-white text-xs px-2 py-1 rounded">
                VIDEO
              </div>
            </a>
          </div>
        </div>
'''
    return f'''
        <div class="{esc(item.width)} p-1">
          <div class="overflow-hidden h-full w-full">
            <a {link_attrs}>
              {img}
            </a>
          </div>
        </div>
'''


def sorted_group_items(group: Group, config: GalleryConfig, legacy: bool = False) -> list[ResolvedItem]:
    """Resolve a group's items in display order (stable sort by position)."""
    resolved = [resolve_item(item, config, legacy=legacy) for item in group.items]
    return sorted(resolved, key=lambda r: r.position)


def render_group(group: Group, config: GalleryConfig, legacy: bool = False) -> str:
    items_html = "".join(render_item(r, config) for r in sorted_group_items(group, config, legacy))
    width = html_lib.escape(group.width or config.group_width)
    return f'''
      <div class="flex {width} flex-wrap">
        {items_html}
      </div>
'''


def wrap_items(inner_html: str) -> str:
    return f'''
    <div class="flex flex-wrap w-full">
      {inner_html}
    </div>
'''


def render(ctx: GalleryContext) -> str | None:
    """Render the grouped layout. Returns None (and logs) when there is no document."""
    if ctx.document is None:
        ctx.log("Gallery container or data not found")
        return None
    doc = ctx.document
    if doc.legacy:
        # Flat documents have no columns; items sit directly in the wrapper
        return wrap_items("".join(
            render_item(r, ctx.config)
            for g in doc.groups
            for r in sorted_group_items(g, ctx.config, legacy=True)
        ))
    return wrap_items("".join(render_group(g, ctx.config) for g in doc.groups))


def get_categories(document: GalleryDocument) -> list[str]:
    """Return "all" followed by each distinct category in first-seen order."""
    categories = [ALL_CATEGORIES]
    for item in document.all_items():
        if item.category and item.category not in categories:
            categories.append(item.category)
    return categories


def filter_items(document: GalleryDocument, category: str) -> list[Item]:
    items = document.all_items()
    if category == ALL_CATEGORIES:
        return items
    return [item for item in items if item.category == category]


def filter_by_category(ctx: GalleryContext, category: str) -> str | None:
    """Render the items of one category as a single flat sequence.

    Group structure is dropped here; items without a layout get the filter width.
    """
    if ctx.document is None:
        ctx.log("Gallery container or data not found")
        return None
    doc = ctx.document
    items_html = "".join(
        render_item(
            resolve_item(item, ctx.config, legacy=doc.legacy, fallback_width=ctx.config.filter_width),
            ctx.config,
        )
        for item in filter_items(doc, category)
    )
    return wrap_items(items_html)


def mount(
    host_html: str, container_id: str, markup: str, log: Callable[[str], None] = print_error
) -> str | None:
    """Replace the content of the element with id `container_id` with markup.

    Returns None (and logs) if the host page has no such element.
    """
    open_match = re.search(
        rf'<([a-zA-Z][\w-]*)\b[^>]*\sid=["\']{re.escape(container_id)}["\'][^>]*>', host_html
    )
    if not open_match:
        log(f"Gallery container not found: #{container_id}")
        return None

    # Find the matching close tag, skipping nested elements with the same name
    tag = open_match.group(1)
    depth = 1
    for tag_match in re.finditer(rf'<(/?){tag}\b[^>]*>', host_html[open_match.end():], re.IGNORECASE):
        if tag_match.group(1):
            depth -= 1
        elif not tag_match.group(0).endswith("/>"):
            depth += 1
        if depth == 0:
            close_start = open_match.end() + tag_match.start()
            return host_html[:open_match.end()] + markup + host_html[close_start:]

    log(f"Gallery container is not closed: #{container_id}")
    return None


def render_into(ctx: GalleryContext, host_html: str) -> str | None:
    """Render the gallery into the container of a host page."""
    markup = render(ctx)
    if markup is None:
        return None
    return mount(host_html, ctx.config.container_id, markup, log=ctx.log)


def build_page(ctx: GalleryContext, title: str = "Gallery") -> str | None:
    """Build a standalone HTML page with category filters and lightbox binding."""
    if ctx.document is None:
        ctx.log("Gallery container or data not found")
        return None

    config = ctx.config
    categories = get_categories(ctx.document)
    views = {category: filter_by_category(ctx, category) for category in categories}
    # Escape </script> so embedded markup can't close the script block
    views_json = json.dumps(views).replace('</', '<\\/')

    buttons_html = "".join(
        f'<button class="category-filter px-4 py-2 m-1 rounded bg-gray-200 hover:bg-gray-300" '
        f'data-category="{html_lib.escape(category)}">{html_lib.escape(category)}</button>'
        for category in categories
    )
    container_id = html_lib.escape(config.container_id)

    host_html = f'''<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{html_lib.escape(title)}</title>
    <script src="https://cdn.tailwindcss.com"></script>
    <link rel="stylesheet" href="https://cdn.jsdelivr.net/npm/@fancyapps/ui@5.0/dist/fancybox/fancybox.css">
</head>
<body class="bg-white">
    <div class="container mx-auto px-4 py-8">
        <h1 class="text-3xl font-bold mb-6">{html_lib.escape(title)}</h1>
        <div class="flex flex-wrap mb-4" id="category-filters">{buttons_html}</div>
        <div id="{container_id}"></div>
    </div>
    <script src="https://cdn.jsdelivr.net/npm/@fancyapps/ui@5.0/dist/fancybox/fancybox.umd.js"></script>
    <script>
        const views = {views_json};
        const container = document.getElementById('{container_id}');

        // Fixed grace period after each render, not tied to image load
        function revealImages() {{
            setTimeout(() => {{
                container.querySelectorAll('img').forEach(img => img.classList.remove('opacity-0'));
            }}, {config.fade_in_delay_ms});
        }}

        document.querySelectorAll('.category-filter').forEach(btn => {{
            btn.addEventListener('click', () => {{
                const markup = views[btn.dataset.category];
                if (markup === undefined) return;
                container.innerHTML = markup;
                revealImages();
            }});
        }});

        revealImages();
        if (typeof Fancybox !== 'undefined') {{
            Fancybox.bind('[data-fancybox]', {{}});
        }}
    </script>
</body>
</html>
'''
    return render_into(ctx, host_html)


def generate_gallery(
    data_path: Path,
    output_path: Path,
    config: GalleryConfig | None = None,
    log: Callable[[str], None] = print,
) -> Path | None:
    """Generate the gallery page from a JSON document."""
    log("Generating gallery...")
    document = GalleryDocument.load_or_empty(data_path)
    items = document.all_items()
    video_count = sum(1 for item in items if item.is_video)
    log(f"  Found {len(items)} items ({video_count} videos) in {len(document.groups)} groups")

    ctx = GalleryContext(document=document, config=config or GalleryConfig())
    page = build_page(ctx)
    if page is None:
        return None

    output_path.parent.mkdir(parents=True, exist_ok=True)
    write_text_atomic(output_path, page)
    log(f"  Gallery: {output_path}")
    return output_path
