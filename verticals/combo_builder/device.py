"""Device resolution.

Some logical parameters exist once per device mode (``banner_width_desktop``
/ ``banner_width_mobile``). ``resolve`` collapses every such pair into the one
value that applies to the requested device, using the explicit
``DEVICE_PAIRS`` table rather than key-name suffixes. Shared keys pass
through unchanged.
"""

from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping

from verticals.combo_builder.errors import InvalidDevice
from verticals.combo_builder.schema import SCHEMA


class Device(str, Enum):
    DESKTOP = "desktop"
    MOBILE = "mobile"

    @classmethod
    def parse(cls, value: "Device | str") -> "Device":
        """Return the Device for ``value``; raise InvalidDevice otherwise."""
        if isinstance(value, Device):
            return value
        try:
            return cls(value)
        except ValueError:
            raise InvalidDevice(value) from None


# Preview viewport width per device. Design constant, not user-configurable.
VIEWPORT_WIDTHS: Mapping[Device, int] = MappingProxyType({
    Device.DESKTOP: 1280,
    Device.MOBILE: 430,
})


# logical name -> (desktop key, mobile key)
DEVICE_PAIRS: Mapping[str, tuple[str, str]] = MappingProxyType({
    "container_padding_top": ("container_padding_top_desktop", "container_padding_top_mobile"),
    "container_padding_right": ("container_padding_right_desktop", "container_padding_right_mobile"),
    "container_padding_bottom": ("container_padding_bottom_desktop", "container_padding_bottom_mobile"),
    "container_padding_left": ("container_padding_left_desktop", "container_padding_left_mobile"),
    "banner_width": ("banner_width_desktop", "banner_width_mobile"),
    "banner_height": ("banner_height_desktop", "banner_height_mobile"),
    "columns": ("desktop_columns", "mobile_columns"),
    "card_height": ("card_height_desktop", "card_height_mobile"),
    "product_image_height": ("product_image_height_desktop", "product_image_height_mobile"),
    "product_title_size": ("product_title_size_desktop", "product_title_size_mobile"),
    "product_price_size": ("product_price_size_desktop", "product_price_size_mobile"),
    "preview_alignment": ("preview_alignment", "preview_alignment_mobile"),
})

_PAIRED_KEYS = frozenset(key for pair in DEVICE_PAIRS.values() for key in pair)

SHARED_KEYS: tuple[str, ...] = tuple(key for key in SCHEMA if key not in _PAIRED_KEYS)


def _lookup(config: Mapping[str, Any], key: str) -> Any:
    if key in config:
        return config[key]
    descriptor = SCHEMA.get(key)
    return descriptor.default if descriptor is not None else None


def resolve(config: Mapping[str, Any], device: Device | str) -> Mapping[str, Any]:
    """Collapse device-paired keys for ``device``.

    The result holds every shared key under its own name and every logical
    device-paired parameter under its logical name (``banner_width``,
    ``columns``...). Keys missing from ``config`` resolve to schema defaults.

    Raises:
        InvalidDevice: ``device`` is not desktop or mobile.
    """
    mode = Device.parse(device)
    index = 0 if mode == Device.DESKTOP else 1

    effective: dict[str, Any] = {key: _lookup(config, key) for key in SHARED_KEYS}
    for logical, pair in DEVICE_PAIRS.items():
        effective[logical] = _lookup(config, pair[index])
    return MappingProxyType(effective)
