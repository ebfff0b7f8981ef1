from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Callable, Iterator

from valleyfarm.crops import CropType, crop_spec, stage_glyph, stage_index

GRID_SIZE = 6

Position = tuple[int, int]


@dataclass(frozen=True)
class Crop:
    crop_type: CropType
    growth: int
    max_growth: int
    watered: bool = False
    planted_on_day: int = 1

    def __post_init__(self) -> None:
        if self.max_growth < 1:
            raise ValueError(f"max_growth must be >= 1 (got {self.max_growth})")
        if self.growth < 0 or self.growth > self.max_growth:
            raise ValueError(f"growth must be in 0..{self.max_growth} (got {self.growth})")

    @staticmethod
    def sprout(crop_type: CropType, day: int) -> "Crop":
        """Return a freshly planted, unwatered crop."""
        return Crop(
            crop_type=crop_type,
            growth=0,
            max_growth=crop_spec(crop_type).grow_time,
            watered=False,
            planted_on_day=day,
        )

    @property
    def is_mature(self) -> bool:
        return self.growth >= self.max_growth

    @property
    def stage(self) -> int:
        return stage_index(self.growth, self.max_growth, crop_spec(self.crop_type).stage_count)

    @property
    def glyph(self) -> str:
        return stage_glyph(self.crop_type, self.growth, self.max_growth)

    def grown(self) -> "Crop":
        """Apply one night of growth: watered crops advance by one, watering always resets."""
        growth = min(self.growth + 1, self.max_growth) if self.watered else self.growth
        return replace(self, growth=growth, watered=False)


@dataclass(frozen=True)
class Tile:
    tilled: bool = False
    crop: Crop | None = None

    def __post_init__(self) -> None:
        if self.crop is not None and not self.tilled:
            raise ValueError("a crop can only exist on a tilled tile")

    @property
    def is_empty(self) -> bool:
        return self.crop is None


@dataclass(frozen=True)
class Grid:
    rows: tuple[tuple[Tile, ...], ...]

    def __post_init__(self) -> None:
        size = len(self.rows)
        if size < 1:
            raise ValueError("grid must have at least one row")
        for row in self.rows:
            if len(row) != size:
                raise ValueError(f"grid must be square ({size}x{size})")

    @staticmethod
    def empty(size: int = GRID_SIZE) -> "Grid":
        """Return a size x size grid of untilled, empty tiles."""
        if size < 1:
            raise ValueError("size must be >= 1")
        return Grid(rows=tuple(tuple(Tile() for _ in range(size)) for _ in range(size)))

    @property
    def size(self) -> int:
        return len(self.rows)

    def _check(self, position: Position) -> tuple[int, int]:
        row, col = position
        if not (0 <= row < self.size and 0 <= col < self.size):
            raise IndexError(f"position {position} outside {self.size}x{self.size} grid")
        return row, col

    def tile(self, position: Position) -> Tile:
        row, col = self._check(position)
        return self.rows[row][col]

    def with_tile(self, position: Position, tile: Tile) -> "Grid":
        """Return a new grid with one tile replaced."""
        row, col = self._check(position)
        new_row = self.rows[row][:col] + (tile,) + self.rows[row][col + 1 :]
        return Grid(rows=self.rows[:row] + (new_row,) + self.rows[row + 1 :])

    def positions(self) -> Iterator[Position]:
        for row in range(self.size):
            for col in range(self.size):
                yield (row, col)

    def tiles(self) -> Iterator[tuple[Position, Tile]]:
        for row, tiles in enumerate(self.rows):
            for col, tile in enumerate(tiles):
                yield (row, col), tile

    def crops(self) -> Iterator[tuple[Position, Crop]]:
        for position, tile in self.tiles():
            if tile.crop is not None:
                yield position, tile.crop

    def map_crops(self, fn: Callable[[Crop], Crop]) -> "Grid":
        """Return a new grid with fn applied to every crop; crop-less tiles are reused."""
        return Grid(
            rows=tuple(
                tuple(tile if tile.crop is None else replace(tile, crop=fn(tile.crop)) for tile in row)
                for row in self.rows
            )
        )

    def count(self, predicate: Callable[[Tile], bool]) -> int:
        return sum(1 for _, tile in self.tiles() if predicate(tile))
