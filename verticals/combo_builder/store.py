"""Configuration model and store.

``Configuration`` is an immutable mapping validated against the parameter
schema: unknown keys are dropped, missing keys take their defaults and every
stored value has been through ``normalize``. Edits never mutate a
Configuration; they produce a new one, and ``ConfigStore`` swaps the whole map
under a lock so a reader sees either the old or the new state, never half of
a paired update.
"""

import logging
import threading
from types import MappingProxyType
from typing import Any, Callable, Iterator, Mapping

from verticals.combo_builder.errors import UnknownParameter
from verticals.combo_builder.schema import SCHEMA, ParameterDescriptor, default_values
from verticals.combo_builder.validation import normalize

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Symmetric pairs written by a single editor control
# ---------------------------------------------------------------------------

PAIRED_CONTROLS: Mapping[str, tuple[str, str]] = MappingProxyType({
    "container_padding_vertical_desktop": ("container_padding_top_desktop", "container_padding_bottom_desktop"),
    "container_padding_horizontal_desktop": ("container_padding_left_desktop", "container_padding_right_desktop"),
    "container_padding_vertical_mobile": ("container_padding_top_mobile", "container_padding_bottom_mobile"),
    "container_padding_horizontal_mobile": ("container_padding_left_mobile", "container_padding_right_mobile"),
    "banner_padding_vertical": ("banner_padding_top", "banner_padding_bottom"),
    "preview_padding_vertical": ("preview_padding_top", "preview_padding_bottom"),
    "preview_margin_vertical": ("preview_margin_top", "preview_margin_bottom"),
    "header_padding_vertical": ("header_padding_top", "header_padding_bottom"),
    "products_padding_vertical": ("products_padding_top", "products_padding_bottom"),
    "products_margin_vertical": ("products_margin_top", "products_margin_bottom"),
})


def _descriptor(key: str, schema: Mapping[str, ParameterDescriptor]) -> ParameterDescriptor:
    descriptor = schema.get(key)
    if descriptor is None:
        raise UnknownParameter(key)
    return descriptor


def _enforce_offer_invariant(values: dict[str, Any]) -> None:
    # A selected discount only exists while an offer is switched on.
    if not values.get("has_discount_offer"):
        values["selected_discount_id"] = None


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

class Configuration(Mapping[str, Any]):
    """Immutable, schema-validated mapping of parameter key to value.

    Usage::

        config = Configuration({"max_selections": "11"})
        config["max_selections"]            # 10
        config = config.replace({"show_banner": False})
    """

    __slots__ = ("_values", "_schema")

    def __init__(
        self,
        values: Mapping[str, Any] | None = None,
        schema: Mapping[str, ParameterDescriptor] = SCHEMA,
    ):
        merged = {key: descriptor.default for key, descriptor in schema.items()}
        for key, raw in (values or {}).items():
            descriptor = schema.get(key)
            if descriptor is not None:
                merged[key] = normalize(descriptor, raw)
        _enforce_offer_invariant(merged)
        self._values = merged
        self._schema = schema

    @classmethod
    def _trusted(cls, values: dict[str, Any], schema: Mapping[str, ParameterDescriptor]) -> "Configuration":
        instance = cls.__new__(cls)
        _enforce_offer_invariant(values)
        instance._values = values
        instance._schema = schema
        return instance

    def __getitem__(self, key: str) -> Any:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"Configuration({len(self._values)} keys)"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Configuration):
            return self._values == other._values
        if isinstance(other, Mapping):
            return self._values == dict(other)
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    @property
    def schema(self) -> Mapping[str, ParameterDescriptor]:
        return self._schema

    def replace(self, changes: Mapping[str, Any]) -> "Configuration":
        """Return a new Configuration with ``changes`` normalized and applied.

        Raises UnknownParameter if any key is not in the schema.
        """
        updated = dict(self._values)
        for key, raw in changes.items():
            updated[key] = normalize(_descriptor(key, self._schema), raw)
        return Configuration._trusted(updated, self._schema)

    def to_dict(self) -> dict[str, Any]:
        return dict(self._values)


def default_configuration() -> Configuration:
    return Configuration(default_values())


def merge_with_defaults(persisted: Mapping[str, Any] | None) -> Configuration:
    """Load a persisted configuration object over the schema defaults.

    Keys added to the schema after the object was saved get their defaults;
    keys no longer in the schema are ignored.
    """
    if persisted is None:
        return default_configuration()
    return Configuration(persisted)


def set_value(config: Configuration, key: str, raw: Any) -> Configuration:
    """Single-key edit through the field validator."""
    return config.replace({key: raw})


def apply_paired(config: Configuration, key_a: str, key_b: str, raw: Any) -> Configuration:
    """Write one raw value to two keys in a single new Configuration.

    Each key is normalized against its own descriptor.
    """
    return config.replace({key_a: raw, key_b: raw})


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------

CommitHook = Callable[[Configuration], None]


class ConfigStore:
    """Holds the in-progress Configuration of the combo builder editor.

    Every mutation builds a new Configuration and swaps it in under a lock,
    and the commit hooks (e.g. the session cache) see each new state in commit
    order. Hooks may block on I/O, so async callers run mutations in a thread.
    """

    def __init__(
        self,
        initial: Mapping[str, Any] | None = None,
        on_commit: CommitHook | None = None,
    ):
        self._lock = threading.Lock()
        self._config = merge_with_defaults(initial)
        self._hooks: list[CommitHook] = [on_commit] if on_commit else []

    # -- Read --

    @property
    def config(self) -> Configuration:
        return self._config

    def snapshot(self) -> dict[str, Any]:
        return self._config.to_dict()

    def get(self, key: str) -> Any:
        if key not in self._config:
            raise UnknownParameter(key)
        return self._config[key]

    # -- Hooks --

    def add_commit_hook(self, hook: CommitHook) -> None:
        self._hooks.append(hook)

    def _commit(self, build: Callable[[Configuration], Configuration]) -> Configuration:
        # Hooks run under the lock so they observe commits in order; a hook
        # must not write back to the store.
        with self._lock:
            updated = build(self._config)
            self._config = updated
            for hook in self._hooks:
                try:
                    hook(updated)
                except Exception:
                    logger.exception("Configuration commit hook failed")
        return updated

    # -- Write --

    def set(self, key: str, raw: Any) -> Configuration:
        return self._commit(lambda current: set_value(current, key, raw))

    def apply_paired(self, key_a: str, key_b: str, raw: Any) -> Configuration:
        return self._commit(lambda current: apply_paired(current, key_a, key_b, raw))

    def apply_control(self, control: str, raw: Any) -> Configuration:
        """Apply a named symmetric control from PAIRED_CONTROLS."""
        if control not in PAIRED_CONTROLS:
            raise UnknownParameter(control)
        key_a, key_b = PAIRED_CONTROLS[control]
        return self.apply_paired(key_a, key_b, raw)

    def update_many(self, changes: Mapping[str, Any]) -> Configuration:
        """Apply several keys as one atomic update."""
        return self._commit(lambda current: current.replace(changes))

    def update_with(self, transition: Callable[[Configuration], Mapping[str, Any]]) -> Configuration:
        """Compute a change-set from the current state and apply it atomically."""
        return self._commit(lambda current: current.replace(transition(current)))

    def reset(self) -> Configuration:
        return self._commit(lambda _current: default_configuration())

    def load(self, persisted: Mapping[str, Any] | None) -> Configuration:
        """Replace the whole configuration with a persisted object merged over defaults."""
        return self._commit(lambda _current: merge_with_defaults(persisted))
