"""Parameter schema for the combo builder widget.

Every configurable key of the storefront widget is declared here exactly once,
with its semantic kind, validation bounds and default. The keys are the ones
persisted inside saved templates, so they must never be renamed.

The schema is pure data. Validation lives in ``validation.py`` and device
resolution in ``device.py``.
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping


# ---------------------------------------------------------------------------
# Kinds
# ---------------------------------------------------------------------------

class ParamKind(str, Enum):
    """Semantic type of a configurable parameter."""

    PIXEL = "pixel-integer"
    PERCENTAGE = "percentage"
    COLOR = "color-hex"
    SHORT_TEXT = "short-text"
    LONG_TEXT = "long-text"
    ENUM = "enum"
    BOOLEAN = "boolean"
    WEIGHT = "weight-scale"
    DISCOUNT_REF = "discount-reference"

    @property
    def is_numeric(self) -> bool:
        return self in (ParamKind.PIXEL, ParamKind.PERCENTAGE, ParamKind.WEIGHT)

    @property
    def is_text(self) -> bool:
        return self in (ParamKind.COLOR, ParamKind.SHORT_TEXT, ParamKind.LONG_TEXT)


# ---------------------------------------------------------------------------
# Descriptor
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ParameterDescriptor:
    """Schema entry for one configuration key.

    ``minimum``/``maximum`` apply to numeric kinds, ``choices`` to enums.
    """

    key: str
    kind: ParamKind
    default: Any
    minimum: int | None = None
    maximum: int | None = None
    choices: tuple[str, ...] = ()
    label: str = ""

    @property
    def bounds(self) -> tuple[int, int] | tuple[str, ...] | None:
        if self.kind.is_numeric:
            return (self.minimum, self.maximum)
        if self.kind == ParamKind.ENUM:
            return self.choices
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "key": self.key,
            "kind": self.kind.value,
            "default": self.default,
            "min": self.minimum,
            "max": self.maximum,
            "choices": list(self.choices),
            "label": self.label,
        }


def _px(key: str, default: int, lo: int, hi: int, label: str = "") -> ParameterDescriptor:
    return ParameterDescriptor(key, ParamKind.PIXEL, default, lo, hi, label=label)


def _pct(key: str, default: int, lo: int, hi: int, label: str = "") -> ParameterDescriptor:
    return ParameterDescriptor(key, ParamKind.PERCENTAGE, default, lo, hi, label=label)


def _weight(key: str, default: int, lo: int = 400, hi: int = 700, label: str = "") -> ParameterDescriptor:
    return ParameterDescriptor(key, ParamKind.WEIGHT, default, lo, hi, label=label)


def _color(key: str, default: str, label: str = "") -> ParameterDescriptor:
    return ParameterDescriptor(key, ParamKind.COLOR, default, label=label)


def _text(key: str, default: str, label: str = "", long: bool = False) -> ParameterDescriptor:
    kind = ParamKind.LONG_TEXT if long else ParamKind.SHORT_TEXT
    return ParameterDescriptor(key, kind, default, label=label)


def _enum(key: str, default: str, choices: tuple[str, ...], label: str = "") -> ParameterDescriptor:
    return ParameterDescriptor(key, ParamKind.ENUM, default, choices=choices, label=label)


def _flag(key: str, default: bool, label: str = "") -> ParameterDescriptor:
    return ParameterDescriptor(key, ParamKind.BOOLEAN, default, label=label)


# ---------------------------------------------------------------------------
# Choice sets
# ---------------------------------------------------------------------------

JUSTIFY_CHOICES = ("flex-start", "center", "flex-end", "space-between")
ALIGN_ITEMS_CHOICES = ("flex-start", "center", "flex-end")
TEXT_ALIGN_CHOICES = ("left", "center", "right")
SHAPE_CHOICES = ("circle", "square", "rectangle")
LAYOUT_CHOICES = ("layout1", "layout2", "layout3", "layout4")
DESKTOP_COLUMN_CHOICES = ("2", "3", "4")
MOBILE_COLUMN_CHOICES = ("1", "2")


# ---------------------------------------------------------------------------
# Parameter table
# ---------------------------------------------------------------------------

PARAMETERS: tuple[ParameterDescriptor, ...] = (
    # -- Container --
    _px("container_padding_desktop", 0, 0, 100),
    _px("container_padding_mobile", 0, 0, 100),
    _px("container_padding_top_desktop", 0, 0, 100, "Desktop Padding Top (px)"),
    _px("container_padding_right_desktop", 0, 0, 100, "Desktop Padding Right (px)"),
    _px("container_padding_bottom_desktop", 0, 0, 100, "Desktop Padding Bottom (px)"),
    _px("container_padding_left_desktop", 0, 0, 100, "Desktop Padding Left (px)"),
    _px("container_padding_top_mobile", 0, 0, 100, "Mobile Padding Top (px)"),
    _px("container_padding_right_mobile", 0, 0, 100, "Mobile Padding Right (px)"),
    _px("container_padding_bottom_mobile", 0, 0, 100, "Mobile Padding Bottom (px)"),
    _px("container_padding_left_mobile", 0, 0, 100, "Mobile Padding Left (px)"),
    # -- Banner --
    _flag("show_banner", True, "Show banner"),
    _pct("banner_width_desktop", 100, 50, 100, "Desktop Banner Width (%)"),
    _px("banner_height_desktop", 300, 150, 600, "Desktop Banner Height (px)"),
    _pct("banner_width_mobile", 100, 50, 100, "Mobile Banner Width (%)"),
    _px("banner_height_mobile", 200, 100, 400, "Mobile Banner Height (px)"),
    _px("banner_padding_top", 0, 0, 80, "Banner Padding Top (px)"),
    _px("banner_padding_bottom", 10, 0, 80, "Banner Padding Bottom (px)"),
    # -- Preview bar --
    _color("preview_bg_color", "#e0ca9b", "Background Color"),
    _color("preview_text_color", "#333", "Text Color"),
    _color("preview_item_border_color", "#333", "Item Border Color"),
    _px("preview_height", 100, 60, 200, "Preview Bar Height (px)"),
    _px("preview_font_size", 14, 12, 24, "Preview Font Size (px)"),
    _weight("preview_font_weight", 600, label="Font Weight"),
    _px("preview_item_size", 60, 40, 120, "Preview Item Size (px)"),
    _px("preview_item_gap", 12, 0, 32, "Preview Item Gap (px)"),
    _px("preview_border_radius", 5, 0, 50, "Border Radius (px)"),
    _px("preview_padding", 20, 5, 30, "Padding (px)"),
    _px("preview_padding_top", 0, 0, 80, "Padding Top (px)"),
    _px("preview_padding_bottom", 10, 0, 80, "Padding Bottom (px)"),
    _px("preview_margin_top", 0, 0, 80, "Margin Top (px)"),
    _px("preview_margin_bottom", 12, 0, 80, "Margin Bottom (px)"),
    _enum("preview_align_items", "center", ALIGN_ITEMS_CHOICES, "Align Items (vertical)"),
    _enum("preview_alignment", "flex-start", JUSTIFY_CHOICES, "Items Alignment"),
    _enum("preview_alignment_mobile", "flex-start", JUSTIFY_CHOICES, "Items Alignment (Mobile)"),
    _enum("preview_item_shape", "circle", SHAPE_CHOICES, "Preview Image Shape"),
    _px("preview_original_price_size", 14, 12, 24, "Original Price Font Size (px)"),
    _px("preview_discount_price_size", 18, 12, 28, "Discount Price Font Size (px)"),
    _color("preview_original_price_color", "#999", "Original Price Color"),
    _color("preview_discount_price_color", "#000", "Discount Price Color"),
    # -- Product grid --
    _enum("desktop_columns", "3", DESKTOP_COLUMN_CHOICES, "Desktop Columns"),
    _enum("mobile_columns", "2", MOBILE_COLUMN_CHOICES, "Mobile Columns"),
    _px("header_padding_top", 0, 0, 80, "Header Padding Top (px)"),
    _px("header_padding_bottom", 10, 0, 80, "Header Padding Bottom (px)"),
    _px("products_padding_top", 0, 0, 80, "Products Padding Top (px)"),
    _px("products_padding_bottom", 0, 0, 80, "Products Padding Bottom (px)"),
    _px("products_margin_top", 12, 0, 80, "Products Margin Top (px)"),
    _px("products_margin_bottom", 0, 0, 80, "Products Margin Bottom (px)"),
    _px("products_gap", 12, 0, 32, "Products Gap (px)"),
    _px("product_card_padding", 10, 0, 30, "Product Card Padding (px)"),
    _px("product_image_height_desktop", 250, 150, 400, "Image Height Desktop (px)"),
    _px("product_image_height_mobile", 200, 120, 350, "Image Height Mobile (px)"),
    _px("product_title_size_desktop", 14, 12, 28, "Title Font Size Desktop (px)"),
    _px("product_title_size_mobile", 14, 12, 28, "Title Font Size Mobile (px)"),
    _px("product_price_size_desktop", 16, 12, 28, "Price Font Size Desktop (px)"),
    _px("product_price_size_mobile", 16, 12, 28, "Price Font Size Mobile (px)"),
    _px("card_border_radius", 10, 0, 24, "Card Border Radius (px)"),
    _px("card_height_desktop", 0, 0, 800, "Card Height Desktop (px, 0 = auto)"),
    _px("card_height_mobile", 0, 0, 800, "Card Height Mobile (px, 0 = auto)"),
    # -- Content --
    _text("collection_title", "Build Your Combo", "Collection Title"),
    _text(
        "collection_description",
        "Select your favorite products and enjoy exclusive discounts",
        "Collection Description",
        long=True,
    ),
    _enum("heading_align", "left", TEXT_ALIGN_CHOICES, "Heading Alignment"),
    _px("heading_size", 28, 16, 48, "Heading Size (px)"),
    _color("heading_color", "#000000", "Heading Color"),
    _weight("heading_weight", 700, label="Heading Weight"),
    _enum("description_align", "left", TEXT_ALIGN_CHOICES, "Description Alignment"),
    _px("description_size", 16, 12, 32, "Description Size (px)"),
    _color("description_color", "#666666", "Description Color"),
    _weight("description_weight", 400, lo=300, label="Description Weight"),
    # -- Checkout button --
    _text("buy_btn_text", "Proceed to checkout", "Button Text"),
    _color("buy_btn_color", "#000", "Button Color (Hex)"),
    _color("buy_btn_text_color", "#fff", "Text Color (Hex)"),
    _px("buy_btn_font_size", 14, 10, 28, "Font Size (px)"),
    _weight("buy_btn_font_weight", 700, label="Font Weight"),
    # -- Product card add button --
    _text("product_add_btn_text", "Add", "Button Text"),
    _color("product_add_btn_color", "#000", "Button Color (Hex)"),
    _color("product_add_btn_text_color", "#fff", "Text Color (Hex)"),
    _px("product_add_btn_font_size", 14, 10, 28, "Font Size (px)"),
    _weight("product_add_btn_font_weight", 600, label="Font Weight"),
    # -- Selection & discounts --
    _px("max_selections", 3, 1, 10, "Max Selections"),
    _enum("layout", "layout1", LAYOUT_CHOICES, "Layout"),
    _text("discount_rule", "default"),
    _flag("has_discount_offer", False, "Do you have a discount offer?"),
    ParameterDescriptor("selected_discount_id", ParamKind.DISCOUNT_REF, None, label="Select Active Discount"),
)


SCHEMA: Mapping[str, ParameterDescriptor] = MappingProxyType(
    {descriptor.key: descriptor for descriptor in PARAMETERS}
)


def get_descriptor(key: str) -> ParameterDescriptor | None:
    """Return the descriptor for ``key``, or None for unknown keys."""
    return SCHEMA.get(key)


def default_values() -> dict[str, Any]:
    """A fresh dict of every key mapped to its schema default."""
    return {descriptor.key: descriptor.default for descriptor in PARAMETERS}
