"""
Materialized snapshots of remote entities.

A Resource is hydrated from the JSON object the server returned and never
re-fetches on its own. Mutating calls replace the whole field set with the
server's fresh representation via ``refresh_with``.

Each resource kind declares a ``schema`` mapping field names to types:
  - a Resource subclass: nested objects are materialized as that class
  - ``[Cls]``: a list of nested objects (or coerced scalars)
  - any other type: the value is coerced with a pydantic TypeAdapter
Fields that a payload carries but the schema doesn't declare are kept, with
nested objects materialized as generic Resources.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any, ClassVar, Dict, Mapping, Optional, Type, TypeVar

from pydantic import TypeAdapter, ValidationError

from .client import AsanaClient, AsanaModelValidationError
from .params import require
from .parser import parse_single

R = TypeVar("R", bound="Resource")


class _Absent:
    """Marker for a declared field the current snapshot doesn't carry."""

    _instance: Optional["_Absent"] = None

    def __new__(cls) -> "_Absent":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "ABSENT"


ABSENT = _Absent()


@lru_cache(maxsize=None)
def _adapter(tp: Any) -> TypeAdapter:
    return TypeAdapter(tp)


class Resource:
    """A generic remote entity. Subclasses declare a richer schema."""

    plural_name: ClassVar[str] = ""
    schema: ClassVar[Dict[str, Any]] = {"gid": str, "resource_type": str}

    def __init__(self, data: Mapping[str, Any], *, client: AsanaClient):
        self._client = client
        self._raw: Dict[str, Any] = {}
        self._values: Dict[str, Any] = {}
        self.refresh_with(data)

    @property
    def client(self) -> AsanaClient:
        return self._client

    def refresh_with(self: R, data: Mapping[str, Any]) -> R:
        """Replace every field with the contents of ``data``; nothing is merged."""
        if not data:
            raise ValueError(
                f"Cannot materialize {type(self).__name__} from an empty payload."
            )
        current = self._values.get("gid")
        if current is not None and data.get("gid") not in (None, current):
            raise ValueError(
                f"Cannot refresh {type(self).__name__} {current} "
                f"with data for {data.get('gid')}."
            )
        values = {name: self._materialize(name, value) for name, value in data.items()}
        self._raw = dict(data)
        self._values = values
        return self

    def _materialize(self, name: str, value: Any) -> Any:
        if value is None:
            return None
        spec = type(self).schema.get(name)
        if spec is None:
            return self._generic(value)
        if isinstance(spec, list):
            if not isinstance(value, list):
                raise AsanaModelValidationError(
                    f"{type(self).__name__}.{name}: expected a list, "
                    f"got {type(value).__name__}"
                )
            return [self._coerce(name, spec[0], v) for v in value]
        return self._coerce(name, spec, value)

    def _coerce(self, name: str, spec: Any, value: Any) -> Any:
        if value is None:
            return None
        if isinstance(spec, type) and issubclass(spec, Resource):
            if not isinstance(value, dict):
                raise AsanaModelValidationError(
                    f"{type(self).__name__}.{name}: expected an object, "
                    f"got {type(value).__name__}"
                )
            return spec(value, client=self._client) if value else {}
        try:
            return _adapter(spec).validate_python(value)
        except ValidationError as exc:
            raise AsanaModelValidationError(
                f"{type(self).__name__}.{name} did not match {spec!r}: {exc}"
            ) from exc

    def _generic(self, value: Any) -> Any:
        if isinstance(value, dict):
            return Resource(value, client=self._client) if value else {}
        if isinstance(value, list):
            return [self._generic(v) for v in value]
        return value

    def __getattr__(self, name: str) -> Any:
        # Only reached when normal lookup fails.
        if name.startswith("_"):
            raise AttributeError(name)
        values = self.__dict__.get("_values", {})
        if name in values:
            return values[name]
        if name in type(self).schema:
            return ABSENT
        raise AttributeError(f"{type(self).__name__} has no field {name!r}")

    def get(self, name: str, default: Any = ABSENT) -> Any:
        """Field value, or ``default`` (ABSENT) when the snapshot lacks it."""
        return self._values.get(name, default)

    def __contains__(self, name: str) -> bool:
        return name in self._values

    def to_dict(self) -> Dict[str, Any]:
        """The raw JSON object this snapshot was last hydrated from."""
        return dict(self._raw)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Resource) or type(other) is not type(self):
            return NotImplemented
        gid = self._values.get("gid")
        return gid is not None and gid == other._values.get("gid")

    def __hash__(self) -> int:
        return hash((type(self), self._values.get("gid")))

    def __repr__(self) -> str:
        return f"<{type(self).__name__} gid={self._values.get('gid')!r}>"

    # --- request helpers --------------------------------------------------- #

    def _path(self, suffix: str = "") -> str:
        return f"/{self.plural_name}/{self._values.get('gid')}{suffix}"

    @classmethod
    async def find_by_id(
        cls: Type[R],
        client: AsanaClient,
        id: str,
        *,
        options: Optional[Dict[str, Any]] = None,
    ) -> R:
        """Returns the complete record for a single resource."""
        require(id=id)
        payload = await client.get(f"/{cls.plural_name}/{id}", options=options)
        return cls(parse_single(payload), client=client)


__all__ = ["ABSENT", "Resource"]
