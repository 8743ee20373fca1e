# lever/kinematics/variants.py
"""
Variant parsing: turn wire strings into typed setups, with descriptive errors.

Movements without variants (ohp, pushup, thruster) ignore whatever is passed.
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Type, TypeVar, Union

from ..errors import InputValidationError
from ..model import (
    BenchArch,
    BenchGrip,
    DeadliftVariant,
    Movement,
    PullupGrip,
    SquatVariant,
    Variant,
)

E = TypeVar("E", bound=Enum)


@dataclass(frozen=True)
class BenchSetup:
    grip: BenchGrip
    arch: BenchArch

    @property
    def key(self) -> str:
        return f"{self.grip.value}-{self.arch.value}"


DEFAULT_VARIANTS = MappingProxyType({
    Movement.SQUAT: SquatVariant.HIGH_BAR,
    Movement.DEADLIFT: DeadliftVariant.CONVENTIONAL,
    Movement.BENCH: BenchSetup(BenchGrip.MEDIUM, BenchArch.FLAT),
    Movement.PULLUP: PullupGrip.PRONATED,
    Movement.PUSHUP: None,
    Movement.OHP: None,
    Movement.THRUSTER: None,
})


def coerce_enum(enum_cls: Type[E], value, label: str) -> E:
    """Accept an enum member or its string value; raise InputValidationError otherwise."""
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        valid = ", ".join(m.value for m in enum_cls)
        raise InputValidationError([f"Invalid {label} '{value}'. Expected one of: {valid}"]) from None


def parse_movement(movement: Union[str, Movement]) -> Movement:
    return coerce_enum(Movement, movement, "movement")


def parse_squat_variant(variant: Variant) -> SquatVariant:
    if variant is None:
        return DEFAULT_VARIANTS[Movement.SQUAT]
    return coerce_enum(SquatVariant, variant, "squat variant")


def parse_deadlift_variant(variant: Variant) -> DeadliftVariant:
    if variant is None:
        return DEFAULT_VARIANTS[Movement.DEADLIFT]
    return coerce_enum(DeadliftVariant, variant, "deadlift variant")


def parse_pullup_grip(variant: Variant) -> PullupGrip:
    if variant is None:
        return DEFAULT_VARIANTS[Movement.PULLUP]
    return coerce_enum(PullupGrip, variant, "pull-up grip")


def parse_bench_variant(variant: Union[str, BenchSetup, None]) -> BenchSetup:
    """
    Parse "{grip}-{arch}", e.g. "medium-moderate".

    Raises:
        InputValidationError: naming the expected format and the valid values
    """
    if variant is None:
        return DEFAULT_VARIANTS[Movement.BENCH]
    if isinstance(variant, BenchSetup):
        return variant

    grips = ", ".join(g.value for g in BenchGrip)
    arches = ", ".join(a.value for a in BenchArch)
    expected = f"Expected '{{grip}}-{{arch}}' with grip in ({grips}) and arch in ({arches})"

    parts = variant.split("-") if isinstance(variant, str) else []
    if len(parts) != 2:
        raise InputValidationError([f"Invalid bench variant '{variant}'. {expected}"])

    grip, arch = parts
    errors = []
    if grip not in {g.value for g in BenchGrip}:
        errors.append(f"Invalid bench grip '{grip}' in '{variant}'. {expected}")
    if arch not in {a.value for a in BenchArch}:
        errors.append(f"Invalid bench arch '{arch}' in '{variant}'. {expected}")
    if errors:
        raise InputValidationError(errors)
    return BenchSetup(BenchGrip(grip), BenchArch(arch))


def variant_key(movement: Movement, variant: Variant) -> str:
    """Canonical string for a movement's variant (used for labels and comparisons)."""
    if movement is Movement.SQUAT:
        return parse_squat_variant(variant).value
    if movement is Movement.DEADLIFT:
        return parse_deadlift_variant(variant).value
    if movement is Movement.BENCH:
        return parse_bench_variant(variant).key
    if movement is Movement.PULLUP:
        return parse_pullup_grip(variant).value
    return "standard"
