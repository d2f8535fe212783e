"""Host-owned option registry."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterator, Mapping, Optional

from vim_init.errors import UnknownOptionError
from vim_init.runtime.telemetry import span

from .models import DEFAULT_CATALOGUE, OptionSpec, OptionValue

_MISSING = object()


@dataclass(slots=True)
class OptionChange:
    """Last recorded write for an option."""

    name: str
    previous: OptionValue
    value: OptionValue


class OptionStore:
    """Holds current option values; defaults come from the catalogue."""

    def __init__(
        self,
        catalogue: Mapping[str, OptionSpec] = DEFAULT_CATALOGUE,
        *,
        logger_name: str | None = None,
    ) -> None:
        self._catalogue = catalogue
        self._values: Dict[str, OptionValue] = {}
        self._logger_name = logger_name
        self._revision = 0
        self._last_change: Optional[OptionChange] = None

    def revision(self) -> int:
        return self._revision

    def spec(self, name: str) -> OptionSpec:
        try:
            return self._catalogue[name]
        except KeyError as exc:
            raise UnknownOptionError(name) from exc

    def knows(self, name: str) -> bool:
        return name in self._catalogue

    def get(self, name: str, default: object = _MISSING) -> OptionValue:
        if default is not _MISSING and name not in self._catalogue:
            return default  # type: ignore[return-value]
        spec = self.spec(name)
        return self._values.get(spec.name, spec.default)

    def __getitem__(self, name: str) -> OptionValue:
        return self.get(name)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name in self._catalogue

    def is_set(self, name: str) -> bool:
        return self.spec(name).name in self._values

    def set(self, name: str, value: object) -> OptionValue:
        """Validate and store ``value``; the last write wins."""

        with span(
            "options::set",
            logger_name=self._logger_name,
            component="options",
            metadata={"option": name},
        ):
            spec = self.spec(name)
            coerced = spec.coerce(value)
            previous = self.get(spec.name)
            self._values[spec.name] = coerced
            self._last_change = OptionChange(spec.name, previous, coerced)
            if previous != coerced:
                self._revision += 1
            return coerced

    def reset(self, name: str) -> OptionValue:
        spec = self.spec(name)
        self._values.pop(spec.name, None)
        self._revision += 1
        return spec.default

    @property
    def last_change(self) -> Optional[OptionChange]:
        return self._last_change

    def snapshot(self) -> Dict[str, OptionValue]:
        """Current value of every catalogued option, keyed by full name."""

        result: Dict[str, OptionValue] = {}
        for spec in self._iter_specs():
            result[spec.name] = self._values.get(spec.name, spec.default)
        return result

    def changed(self) -> Dict[str, OptionValue]:
        return dict(self._values)

    def _iter_specs(self) -> Iterator[OptionSpec]:
        seen: set[str] = set()
        for spec in self._catalogue.values():
            if spec.name not in seen:
                seen.add(spec.name)
                yield spec


__all__ = ["OptionStore", "OptionChange"]
