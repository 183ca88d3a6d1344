"""
Storefront Backend — Transparent Delegating Decorator
=======================================================

What:  Base class for presentation decorators that wrap one domain entity.
Why:   View-only questions ("is this item featured?", "what status do we
       show?") do not belong on the ORM model or in a route handler. A
       decorator adds them for one presentation context and hands every other
       call straight through to the entity.
How:   Subclasses mark their presentation operations with `@presents`. The
       marked names are collected into the class-level `declared` set when the
       subclass is defined. Anything not in that set goes through `delegate()`,
       which invokes the same-named operation on the wrapped entity.
Who:   ItemDecorator (item_decorator.py); built per request by ItemService.

Forwarding contract:
    decorator.op(*args)  ==  entity.op(*args)         for op not in declared
    decorator.attr       ==  entity.attr
    failures raised by the entity propagate unchanged (same type, same message)
    unknown names raise UnsupportedOperation (which is an AttributeError)
    str(decorator) / format(decorator, spec) render the entity

Dunder methods the entity defines forward when called by name
(`decorator.__len__()`); implicit protocol use such as `len(decorator)` is
resolved on the decorator class and is not forwarded. Copy and pickle
protocol names in _NOT_FORWARDED always describe the decorator itself.

Example:
    class BookDecorator(Decorator):
        __slots__ = ()

        @presents
        def headline(self):
            return self.wrapped.title.upper()

    book = BookDecorator.create(Book(title="Dune", pages=412))
    book.headline()      # "DUNE"   (declared)
    book.pages           # 412      (forwarded)
"""

import inspect
from typing import Any, Callable, ClassVar, FrozenSet, Generic, TypeVar

from storefront.exceptions import UnsupportedOperation

T = TypeVar("T")
D = TypeVar("D", bound="Decorator")

_MISSING = object()

# Attribute set on methods marked with @presents
_PRESENTS_MARKER = "__presents__"

# Object-protocol probes answered by the decorator itself, never the entity
_NOT_FORWARDED = frozenset({
    "_entity",
    "__copy__",
    "__deepcopy__",
    "__reduce__",
    "__reduce_ex__",
    "__getstate__",
    "__setstate__",
    "__dict__",
    "__orig_class__",
})


def presents(method: Callable[..., Any]) -> Callable[..., Any]:
    """Mark a decorator method as a declared, presentation-only operation."""
    setattr(method, _PRESENTS_MARKER, True)
    return method


def _is_declared(attr: Any) -> bool:
    if isinstance(attr, (staticmethod, classmethod)):
        attr = attr.__func__
    return bool(getattr(attr, _PRESENTS_MARKER, False))


def _defines(entity: Any, name: str) -> bool:
    """True when `name` exists on the entity without running any getter."""
    return inspect.getattr_static(entity, name, _MISSING) is not _MISSING


class Decorator(Generic[T]):
    """
    Wraps exactly one entity for its whole lifetime.

    The wrapped reference is stored in a slot, exposed read-only through
    `wrapped`, and cannot be rebound: every attribute assignment on a
    decorator raises AttributeError. Subclasses must declare `__slots__ = ()`
    to keep that guarantee.

    Attributes:
        declared:  Names of the operations this class answers itself
    """

    __slots__ = ("_entity",)

    declared: ClassVar[FrozenSet[str]] = frozenset()

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        names = set()
        for klass in reversed(cls.__mro__):
            for name, attr in vars(klass).items():
                if _is_declared(attr):
                    names.add(name)
        cls.declared = frozenset(names)

    def __init__(self, entity: T) -> None:
        if entity is None:
            raise ValueError(f"{type(self).__name__} requires an entity to wrap, got None")
        object.__setattr__(self, "_entity", entity)

    @classmethod
    def create(cls: type[D], entity: Any) -> D:
        """Wrap `entity`; the only validation is that it is not None."""
        return cls(entity)

    @property
    def wrapped(self) -> T:
        """The decorated entity."""
        return self._entity

    # ── Capability reporting ──────────────────────────────────────────────

    def supports(self, name: str) -> bool:
        """True if this decorator declares `name` or the wrapped entity has it."""
        if name in self.declared:
            return True
        if name in _NOT_FORWARDED:
            return _defines(self, name)
        if _defines(self._entity, name):
            return True
        # Entities that answer names dynamically (their own __getattr__)
        return hasattr(self._entity, name)

    # ── Forwarding ────────────────────────────────────────────────────────

    def delegate(self, name: str, *args: Any, **kwargs: Any) -> Any:
        """
        Invoke `name` on the wrapped entity with the given arguments.

        Callables are called with the arguments and their result returned
        as-is. A plain attribute is returned as its value when no arguments
        are given; passing arguments to one fails exactly as calling it
        directly would.

        Raises:
            UnsupportedOperation: The entity has no attribute `name`.
            Anything the entity raises, unchanged.
        """
        target = self._lookup(name)
        if callable(target) or args or kwargs:
            return target(*args, **kwargs)
        return target

    def invoke(self, name: str, *args: Any, **kwargs: Any) -> Any:
        """Dispatch by name: declared operations run here, the rest are delegated."""
        if name in self.declared:
            return getattr(self, name)(*args, **kwargs)
        return self.delegate(name, *args, **kwargs)

    def _lookup(self, name: str) -> Any:
        entity = self._entity
        try:
            return getattr(entity, name)
        except AttributeError:
            # Raised from inside an existing property: not ours to rewrite
            if _defines(entity, name):
                raise
            raise UnsupportedOperation(name, type(entity).__name__) from None

    def __getattr__(self, name: str) -> Any:
        # Only reached when normal lookup on the decorator fails
        if name in _NOT_FORWARDED:
            raise AttributeError(name)
        return self._lookup(name)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(
            f"{type(self).__name__} is read-only; set '{name}' on the wrapped entity instead"
        )

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is read-only; cannot delete '{name}'")

    def __dir__(self):
        return sorted(set(super().__dir__()) | set(dir(self._entity)))

    def __repr__(self) -> str:
        return f"<{type(self).__name__}({self._entity!r})>"

    def __str__(self) -> str:
        return str(self._entity)

    def __format__(self, format_spec: str) -> str:
        return format(self._entity, format_spec)

    def __reduce__(self):
        # copy and pickle rebuild through __init__; the slot is never set directly
        return (type(self), (self._entity,))
