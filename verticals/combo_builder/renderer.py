"""Combo builder preview renderer.

Turns a configuration plus a device mode into a fully resolved render tree:
container, optional banner, selection (pricing) bar, heading block and
product grid. Deterministic, pure and free of I/O, so the same input always
yields an equal tree and the presentation layer only has to paint it.
"""

from dataclasses import asdict, dataclass, field
from typing import Any, Mapping

from verticals.combo_builder.device import VIEWPORT_WIDTHS, Device, resolve

# Fixed demonstration size of the product grid, not tied to any catalog.
PLACEHOLDER_CARD_COUNT = 3

RECTANGLE_WIDTH_FACTOR = 1.4
RECTANGLE_HEIGHT_FACTOR = 0.8
CIRCLE_RADIUS = "50%"


# ---------------------------------------------------------------------------
# Render tree
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Box:
    top: int = 0
    right: int = 0
    bottom: int = 0
    left: int = 0


@dataclass(frozen=True)
class ContainerBlock:
    device: str
    max_width: int
    padding: Box
    content_width: int


@dataclass(frozen=True)
class BannerBlock:
    width_percent: int
    width: float
    height: int
    padding_top: int
    padding_bottom: int


@dataclass(frozen=True)
class SlotGeometry:
    width: float
    height: float
    border_radius: int | str


@dataclass(frozen=True)
class Slot:
    index: int
    geometry: SlotGeometry
    border_color: str


@dataclass(frozen=True)
class PriceSummary:
    original_size: int
    original_color: str
    discount_size: int
    discount_color: str


@dataclass(frozen=True)
class ButtonStyle:
    text: str
    color: str
    text_color: str
    font_size: int
    font_weight: int


@dataclass(frozen=True)
class SelectionBarBlock:
    background: str
    text_color: str
    border_radius: int
    padding: int
    padding_top: int
    padding_bottom: int
    margin_top: int
    margin_bottom: int
    min_height: int
    font_size: int
    font_weight: int
    align_items: str
    justify_content: str
    item_gap: int
    shape: str
    slots: tuple[Slot, ...]
    price: PriceSummary
    checkout_button: ButtonStyle
    discount_id: int | None = None


@dataclass(frozen=True)
class HeadingBlock:
    padding_top: int
    padding_bottom: int
    title: str
    title_align: str
    title_size: int
    title_weight: int
    title_color: str
    description: str
    description_align: str
    description_size: int
    description_weight: int
    description_color: str


@dataclass(frozen=True)
class ProductCard:
    index: int
    title: str
    border_radius: int
    min_height: int | None
    image_height: int
    padding: int
    title_size: int
    price_size: int
    add_button: ButtonStyle


@dataclass(frozen=True)
class ProductGridBlock:
    columns: int
    gap: int
    padding_top: int
    padding_bottom: int
    margin_top: int
    margin_bottom: int
    cards: tuple[ProductCard, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class RenderTree:
    layout: str
    container: ContainerBlock
    banner: BannerBlock | None
    selection_bar: SelectionBarBlock
    heading: HeadingBlock
    grid: ProductGridBlock

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


# ---------------------------------------------------------------------------
# Geometry rules
# ---------------------------------------------------------------------------

def slot_geometry(shape: str, base_size: float, border_radius: int) -> SlotGeometry:
    """Slot box for a preview item shape.

    circle    -> base x base, fully rounded regardless of ``border_radius``
    rectangle -> 1.4 base x 0.8 base, configured radius
    other     -> base x base, configured radius (``square`` and unknown tags)
    """
    if shape == "circle":
        return SlotGeometry(width=base_size, height=base_size, border_radius=CIRCLE_RADIUS)
    if shape == "rectangle":
        return SlotGeometry(
            width=base_size * RECTANGLE_WIDTH_FACTOR,
            height=base_size * RECTANGLE_HEIGHT_FACTOR,
            border_radius=border_radius,
        )
    return SlotGeometry(width=base_size, height=base_size, border_radius=border_radius)


def column_count(value: Any) -> int:
    """Grid column count; anything unparseable or below one renders as one column."""
    try:
        return max(1, int(value))
    except (TypeError, ValueError):
        return 1


def _int(value: Any, fallback: int = 0) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return fallback


# ---------------------------------------------------------------------------
# Blocks
# ---------------------------------------------------------------------------

def _container(eff: Mapping[str, Any], device: Device) -> ContainerBlock:
    padding = Box(
        top=_int(eff["container_padding_top"]),
        right=_int(eff["container_padding_right"]),
        bottom=_int(eff["container_padding_bottom"]),
        left=_int(eff["container_padding_left"]),
    )
    max_width = VIEWPORT_WIDTHS[device]
    return ContainerBlock(
        device=device.value,
        max_width=max_width,
        padding=padding,
        content_width=max(0, max_width - padding.left - padding.right),
    )


def _banner(eff: Mapping[str, Any], container: ContainerBlock) -> BannerBlock | None:
    if not eff["show_banner"]:
        return None
    width_percent = _int(eff["banner_width"], 100)
    return BannerBlock(
        width_percent=width_percent,
        width=container.content_width * width_percent / 100,
        height=_int(eff["banner_height"]),
        padding_top=_int(eff["banner_padding_top"]),
        padding_bottom=_int(eff["banner_padding_bottom"]),
    )


def _selection_bar(eff: Mapping[str, Any]) -> SelectionBarBlock:
    shape = eff["preview_item_shape"] or "circle"
    radius = _int(eff["preview_border_radius"])
    geometry = slot_geometry(shape, _int(eff["preview_item_size"]), radius)
    slot_count = max(0, _int(eff["max_selections"]))
    slots = tuple(
        Slot(index=i, geometry=geometry, border_color=eff["preview_item_border_color"])
        for i in range(slot_count)
    )
    return SelectionBarBlock(
        background=eff["preview_bg_color"],
        text_color=eff["preview_text_color"],
        border_radius=radius,
        padding=_int(eff["preview_padding"]),
        padding_top=_int(eff["preview_padding_top"]),
        padding_bottom=_int(eff["preview_padding_bottom"]),
        margin_top=_int(eff["preview_margin_top"]),
        margin_bottom=_int(eff["preview_margin_bottom"]),
        min_height=_int(eff["preview_height"]),
        font_size=_int(eff["preview_font_size"]),
        font_weight=_int(eff["preview_font_weight"]) or 600,
        align_items=eff["preview_align_items"] or "center",
        justify_content=eff["preview_alignment"],
        item_gap=_int(eff["preview_item_gap"], 12),
        shape=shape,
        slots=slots,
        price=PriceSummary(
            original_size=_int(eff["preview_original_price_size"]),
            original_color=eff["preview_original_price_color"],
            discount_size=_int(eff["preview_discount_price_size"]),
            discount_color=eff["preview_discount_price_color"],
        ),
        checkout_button=ButtonStyle(
            text=eff["buy_btn_text"],
            color=eff["buy_btn_color"],
            text_color=eff["buy_btn_text_color"],
            font_size=_int(eff["buy_btn_font_size"]),
            font_weight=_int(eff["buy_btn_font_weight"]),
        ),
        discount_id=eff["selected_discount_id"] if eff["has_discount_offer"] else None,
    )


def _heading(eff: Mapping[str, Any]) -> HeadingBlock:
    return HeadingBlock(
        padding_top=_int(eff["header_padding_top"]),
        padding_bottom=_int(eff["header_padding_bottom"]),
        title=eff["collection_title"],
        title_align=eff["heading_align"] or "left",
        title_size=_int(eff["heading_size"]),
        title_weight=_int(eff["heading_weight"]),
        title_color=eff["heading_color"],
        description=eff["collection_description"],
        description_align=eff["description_align"] or "left",
        description_size=_int(eff["description_size"]),
        description_weight=_int(eff["description_weight"]),
        description_color=eff["description_color"],
    )


def _grid(eff: Mapping[str, Any]) -> ProductGridBlock:
    add_button = ButtonStyle(
        text=eff["product_add_btn_text"],
        color=eff["product_add_btn_color"],
        text_color=eff["product_add_btn_text_color"],
        font_size=_int(eff["product_add_btn_font_size"]),
        font_weight=_int(eff["product_add_btn_font_weight"]),
    )
    card_height = _int(eff["card_height"])
    cards = tuple(
        ProductCard(
            index=i,
            title=f"Product {i} Title",
            border_radius=_int(eff["card_border_radius"]),
            min_height=card_height or None,
            image_height=_int(eff["product_image_height"]),
            padding=_int(eff["product_card_padding"]),
            title_size=_int(eff["product_title_size"]),
            price_size=_int(eff["product_price_size"]),
            add_button=add_button,
        )
        for i in range(1, PLACEHOLDER_CARD_COUNT + 1)
    )
    return ProductGridBlock(
        columns=column_count(eff["columns"]),
        gap=_int(eff["products_gap"], 12),
        padding_top=_int(eff["products_padding_top"]),
        padding_bottom=_int(eff["products_padding_bottom"]),
        margin_top=_int(eff["products_margin_top"]),
        margin_bottom=_int(eff["products_margin_bottom"]),
        cards=cards,
    )


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def render(config: Mapping[str, Any], device: Device | str) -> RenderTree:
    """Render the combo builder preview for one device.

    Args:
        config: A Configuration or any mapping of parameter keys. Unknown keys
            are ignored and missing keys take their schema defaults.
        device: ``"desktop"`` or ``"mobile"``.

    Raises:
        InvalidDevice: ``device`` is not a recognised mode.
    """
    mode = Device.parse(device)
    eff = resolve(config, mode)
    container = _container(eff, mode)
    return RenderTree(
        layout=eff["layout"],
        container=container,
        banner=_banner(eff, container),
        selection_bar=_selection_bar(eff),
        heading=_heading(eff),
        grid=_grid(eff),
    )
