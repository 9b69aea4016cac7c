"""Test-unit registration.

A Suite collects named checks as they are declared. Units run later, either
as pytest items (see ``fmtspec.pytest_plugin``) or through
``fmtspec.runner.run_units``; in both cases each unit passes or fails on its
own.
"""

from collections.abc import Callable, Iterator

from .core.logging import get_logger
from .core.models import TestUnit

logger = get_logger(__name__)


class Suite:
    """Ordered collection of TestUnits with unique names."""

    def __init__(self) -> None:
        self._units: list[TestUnit] = []
        self._names: dict[str, int] = {}

    def add(self, name: str, check: Callable[[], None]) -> TestUnit:
        """Register a check.

        Repeated names get a numeric suffix (``"name (2)"``) so every unit
        stays individually addressable.
        """
        count = self._names.get(name, 0) + 1
        self._names[name] = count
        if count > 1:
            name = f"{name} ({count})"

        unit = TestUnit(name=name, check=check)
        self._units.append(unit)
        logger.debug(f"Registered unit '{name}'")
        return unit

    @property
    def units(self) -> list[TestUnit]:
        return list(self._units)

    def __iter__(self) -> Iterator[TestUnit]:
        return iter(self._units)

    def __len__(self) -> int:
        return len(self._units)
