"""Typed models for decoder framing."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Dimensions:
    width: int
    height: int

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Dimensions must be positive, got {self.width}x{self.height}")

    @property
    def pixel_bytes(self) -> int:
        return self.width * self.height * 3


@dataclass(frozen=True)
class FrameHeader:
    magic: bytes
    width: int
    height: int
    maxval: int
    length: int
