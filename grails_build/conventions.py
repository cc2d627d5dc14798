"""Convention mapping — lazy, overridable, per-instance property resolution.

A convention-aware object declares its properties with
:class:`convention_property`. Reading such a property returns, in order:

1. a value assigned explicitly on the instance,
2. the result of calling the supplier currently mapped for that name,
3. the declared default.

Suppliers are called on every read, never when they are mapped, so values
that the build script configures after the object was created are still
observed. Mapping the same name again replaces the previous supplier.
"""

from __future__ import annotations

from typing import Any, Callable, ClassVar, Iterable

from grails_build.exceptions import UnknownPropertyError

Supplier = Callable[[], Any]


class ConventionMapping:
    """Supplier table for one convention-aware instance."""

    def __init__(self, owner: str, properties: Iterable[str]) -> None:
        self._owner = owner
        self._properties = frozenset(properties)
        self._suppliers: dict[str, Supplier] = {}

    @property
    def properties(self) -> frozenset[str]:
        return self._properties

    def map_property(self, name: str, supplier: Supplier) -> None:
        """Register *supplier* for *name*; last registration wins."""
        if name not in self._properties:
            raise UnknownPropertyError(self._owner, name)
        self._suppliers[name] = supplier

    def map(self, **suppliers: Supplier) -> None:
        for name, supplier in suppliers.items():
            self.map_property(name, supplier)

    def is_mapped(self, name: str) -> bool:
        return name in self._suppliers

    def resolve(self, name: str) -> Any:
        try:
            supplier = self._suppliers[name]
        except KeyError:
            raise UnknownPropertyError(self._owner, name) from None
        return supplier()


class convention_property:
    """Descriptor for a property whose value may come from a convention."""

    def __init__(self, default: Any = None) -> None:
        self.default = default
        self.name = ""

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name

    def __get__(self, obj: ConventionAware | None, objtype: type | None = None) -> Any:
        if obj is None:
            return self
        if self.name in obj._explicit_values:
            return obj._explicit_values[self.name]
        mapping = obj.convention_mapping
        if mapping.is_mapped(self.name):
            return mapping.resolve(self.name)
        return self.default

    def __set__(self, obj: ConventionAware, value: Any) -> None:
        obj._explicit_values[self.name] = value

    def __delete__(self, obj: ConventionAware) -> None:
        obj._explicit_values.pop(self.name, None)


class ConventionAware:
    """Mixin giving each instance its own :class:`ConventionMapping`."""

    convention_properties: ClassVar[frozenset[str]] = frozenset()

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        names: set[str] = set()
        for klass in cls.__mro__:
            names.update(
                attr for attr, value in vars(klass).items() if isinstance(value, convention_property)
            )
        cls.convention_properties = frozenset(names)

    def __init__(self) -> None:
        self._explicit_values: dict[str, Any] = {}
        self.convention_mapping = ConventionMapping(type(self).__name__, self.convention_properties)
