"""Observable key/value storage with change notifications."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
import logging
from typing import Any

from pydantic import BaseModel, TypeAdapter, ValidationError

from .events import EventBus, EventSource
from .utils import IdGenerator, deep_copy, default_id_generator, same_value

LOGGER = logging.getLogger(__name__)

_MISSING: Any = object()


def _always_valid(name: str, value: Any) -> bool:
    return True


def _no_defaults() -> dict[str, Any]:
    return {}


@dataclass(frozen=True)
class StoreVariant:
    """Validation and default-value strategy for a family of stores."""

    name: str = "default"
    validator: Callable[[str, Any], bool] = field(default=_always_valid)
    defaults: Callable[[], Mapping[str, Any]] = field(default=_no_defaults)

    def is_valid_pair(self, name: str, value: Any) -> bool:
        return bool(self.validator(name, value))

    def get_defaults(self) -> dict[str, Any]:
        """Return a fresh copy of the default properties."""
        return deep_copy(dict(self.defaults()))

    @classmethod
    def from_model(cls, model: type[BaseModel]) -> StoreVariant:
        """Build a variant from a pydantic model's fields.

        Field defaults become store defaults. Each written value must satisfy
        its field annotation in strict mode. Unknown keys are rejected only
        when the model forbids extra fields. ``None`` (deletion) is always
        accepted.
        """
        fields = model.model_fields
        adapters = {name: TypeAdapter(info.annotation) for name, info in fields.items()}
        forbid_extra = model.model_config.get("extra") == "forbid"

        def validator(name: str, value: Any) -> bool:
            if value is None:
                return True
            adapter = adapters.get(name)
            if adapter is None:
                return not forbid_extra
            try:
                adapter.validate_python(value, strict=True)
            except ValidationError:
                return False
            return True

        def defaults() -> dict[str, Any]:
            values: dict[str, Any] = {}
            for name, info in fields.items():
                if info.is_required():
                    continue
                default = info.get_default(call_default_factory=True)
                if default is not None:
                    values[name] = default
            return values

        return cls(name=model.__name__, validator=validator, defaults=defaults)


DEFAULT_VARIANT = StoreVariant()


class PropertyStore(EventSource):
    """Observable property container.

    Absent keys are "unset"; the store never holds ``None`` values. Every
    effective mutation publishes ``change`` and ``change:<name>`` with
    ``(name, new_value, old_value, options)`` unless ``options["silent"]``.
    Rejected writes publish ``invalid`` with ``(name, value, options)``.

    Without ``id_generator`` ids come from the process-wide
    ``default_id_generator`` shared with every other directly built store and
    view; a ``Framework`` injects its own generator instead.
    """

    id_prefix = "mid"

    def __init__(
        self,
        props: Mapping[str, Any] | None = None,
        *,
        id: str | None = None,
        variant: StoreVariant | None = None,
        id_generator: IdGenerator | None = None,
        options: Mapping[str, Any] | None = None,
        id_prefix: str | None = None,
    ) -> None:
        opts = dict(options or {})
        self._ids = id_generator or default_id_generator
        self._id_prefix = id_prefix or self.id_prefix
        requested_id = opts.pop("id", None)
        self._id = id or requested_id or self._ids.next_id(self._id_prefix)
        self._variant = variant or DEFAULT_VARIANT
        self._props: dict[str, Any] = {}
        self.events = EventBus()

        initial = self._variant.get_defaults()
        initial.update(props or {})
        self.set(initial, opts)

    @property
    def id(self) -> str:
        return self._id

    @property
    def variant(self) -> StoreVariant:
        return self._variant

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self._id!r}, props={self._props!r})"

    def has(self, name: str) -> bool:
        return name in self._props

    def get(self, *names: Any) -> Any:
        """Read properties.

        - no arguments: a deep copy of every property
        - one name: the raw value, or ``None`` when unset
        - several names (or one list of names): a mapping of exactly those keys
        """
        if not names:
            return deep_copy(self._props)
        if len(names) == 1 and not isinstance(names[0], (list, tuple)):
            return self._props.get(names[0])
        if len(names) == 1:
            names = tuple(names[0])
        return {name: self._props.get(name) for name in names}

    def set(
        self,
        name: str | Mapping[str, Any] | None,
        value: Any = _MISSING,
        options: Mapping[str, Any] | None = None,
        **kwargs: Any,
    ) -> PropertyStore:
        """Write one property, a mapping of properties, or clear all (``None``).

        In the mapping and ``None`` forms the second positional argument is the
        options mapping. Keyword arguments are merged into the options.
        """
        if name is None or isinstance(name, Mapping):
            batch_options = value if value is not _MISSING else options
            opts = self._merge_options(batch_options, kwargs)
            if name is None:
                for key in list(self._props):
                    self._apply(key, None, opts)
            else:
                for key, item in name.items():
                    self._apply(key, item, opts)
            return self

        self._apply(name, None if value is _MISSING else value, self._merge_options(options, kwargs))
        return self

    def clear(self, options: Mapping[str, Any] | None = None, **kwargs: Any) -> PropertyStore:
        """Remove every property."""
        return self.set(None, options, **kwargs)

    def reset(self, options: Mapping[str, Any] | None = None, **kwargs: Any) -> PropertyStore:
        """Replace all properties with the variant defaults."""
        opts = self._merge_options(options, kwargs)
        defaults = self._variant.get_defaults()
        for key in [key for key in self._props if key not in defaults]:
            self._apply(key, None, opts)
        return self.set(defaults, opts)

    def clone(self, options: Mapping[str, Any] | None = None, **kwargs: Any) -> PropertyStore:
        """Return a new store of the same variant seeded with current values."""
        opts = self._merge_options(options, kwargs)
        return type(self)(
            deep_copy(self._props),
            id=opts.pop("id", None),
            variant=self._variant,
            id_generator=self._ids,
            options=opts,
            id_prefix=self._id_prefix,
        )

    @staticmethod
    def _merge_options(options: Any, extra: Mapping[str, Any]) -> dict[str, Any]:
        merged = dict(options) if isinstance(options, Mapping) else {}
        merged.update(extra)
        return merged

    def _apply(self, name: str, value: Any, options: dict[str, Any]) -> None:
        if not self._variant.is_valid_pair(name, value):
            LOGGER.debug("Rejected property %s on store %s", name, self._id)
            self.events.emit("invalid", name, value, options)
            return

        old = self._props.get(name)
        if value is None:
            if name not in self._props:
                return
            del self._props[name]
        else:
            if name in self._props and same_value(old, value):
                return
            self._props[name] = value

        LOGGER.debug("Property %s changed on store %s", name, self._id)
        if not options.get("silent"):
            self.events.emit("change", name, value, old, options)
            self.events.emit(f"change:{name}", name, value, old, options)
