"""Tray events. Every menu click becomes one of these and goes through a single queue."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Enable:
    pass


@dataclass(frozen=True)
class Disable:
    pass


@dataclass(frozen=True)
class IntervalChanged:
    value: int


@dataclass(frozen=True)
class HoursChanged:
    label: str


@dataclass(frozen=True)
class About:
    pass


@dataclass(frozen=True)
class Quit:
    pass


Event = Enable | Disable | IntervalChanged | HoursChanged | About | Quit
