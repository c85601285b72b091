from __future__ import annotations

from dataclasses import fields
from typing import Any, ClassVar, Dict, FrozenSet, Optional, Tuple


class Model:
    """Mixin for dataclass shapes exchanged with the controller.

    - `_aliases` maps a field name to its JSON key when they differ.
    - `_nested` maps a field name to `(container, ModelClass)`; container is
      None for a single object, `list` or `dict` (str keys) otherwise.
    - `_keep_null` names fields serialized even when None.

    Fields left as None are omitted on output. Keys the controller sent
    (including unknown keys and explicit nulls) survive a round trip.
    """

    _aliases: ClassVar[Dict[str, str]] = {}
    _nested: ClassVar[Dict[str, Tuple[Any, type]]] = {}
    _keep_null: ClassVar[FrozenSet[str]] = frozenset()

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]):
        if data is None:
            return None
        kwargs: Dict[str, Any] = {}
        known = set()
        for f in fields(cls):
            key = cls._aliases.get(f.name, f.name)
            known.add(key)
            if key in data:
                kwargs[f.name] = _decode(cls._nested.get(f.name), data[key])
        obj = cls(**kwargs)
        obj._present = frozenset(k for k in data if k in known)
        obj._extra = {k: v for k, v in data.items() if k not in known}
        return obj

    def mark_null(self, *names: str):
        """Send the named fields as explicit JSON nulls; returns self.

        A null handler or probe tells the controller to remove it, which an
        unset (omitted) field does not.
        """
        known = {f.name for f in fields(self)}
        for name in names:
            if name not in known:
                raise AttributeError(f"{type(self).__name__} has no field {name!r}")
            setattr(self, name, None)
        keys = {self._aliases.get(name, name) for name in names}
        self._present = getattr(self, "_present", frozenset()) | keys
        return self

    def to_dict(self) -> Dict[str, Any]:
        present = getattr(self, "_present", frozenset())
        out: Dict[str, Any] = {}
        for f in fields(self):
            key = self._aliases.get(f.name, f.name)
            value = getattr(self, f.name)
            if value is None and key not in present and f.name not in self._keep_null:
                continue
            out[key] = _encode(value)
        out.update(getattr(self, "_extra", {}))
        return out


def _decode(shape: Optional[Tuple[Any, type]], value: Any) -> Any:
    if shape is None or value is None:
        return value
    container, model = shape
    if container is list:
        return [model.from_dict(v) for v in value]
    if container is dict:
        return {k: model.from_dict(v) for k, v in value.items()}
    return model.from_dict(value)


def _encode(value: Any) -> Any:
    if isinstance(value, Model):
        return value.to_dict()
    if isinstance(value, list):
        return [_encode(v) for v in value]
    if isinstance(value, dict):
        return {k: _encode(v) for k, v in value.items()}
    return value
