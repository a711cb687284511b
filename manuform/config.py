import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Tuple

from .errors import ConfigurationError

class LastRow(Enum):
    NONE = "none"       # no keys in the last row
    PARTIAL = "partial" # columns 2 and 3 only
    FULL = "full"       # every column but 0 and 1

class ThumbStyle(Enum):
    DEFAULT = "default"
    MINIDOX = "minidox"

class ColumnStyle(Enum):
    STANDARD = "standard"
    ORTHOGRAPHIC = "orthographic"
    FIXED = "fixed"

Vec3 = Tuple[float, float, float]

# Stagger per column, [x, y, z] in mm. Columns past the end reuse the last entry.
# 0 = inner index, 1 = index, 2 = middle, 3 = ring, 4 = pinky, 5 = outer pinky
TILTED_COLUMN_OFFSETS = (
    (0, -7, 0),
    (0, -5, 0),
    (0, 2.82, -6.5),
    (0, -5, 0),
    (0, -15, 6),
    (0, -17, 6),
    (0, 0, 0),
)
ORTHO_COLUMN_OFFSETS = (
    (0, 0, 0),
    (0, 0, 0),
    (0, 0, -6.5),
    (0, 0, 0),
    (0, 0, 6),
)

# Maltron-like lookup for ColumnStyle.FIXED, relative to the middle finger
FIXED_ANGLES = tuple(math.radians(a) for a in (10, 10, 0, 0, 0, -15, -15))
FIXED_X = (-41.5, -22.5, 0, 20.3, 41.4, 65.5, 89.6)
FIXED_Z = (12.1, 8.3, 0, 5, 10.7, 14.5, 17.5)

@dataclass(frozen=True)
class Configuration:
    nrows: int = 4
    ncols: int = 5
    alpha: float = math.pi / 12 # curvature of the columns
    beta: float = math.pi / 36  # curvature of the rows
    centercol: int = 4
    tenting_angle: float = math.pi / 9
    keyboard_z_offset: float = 4
    column_style: ColumnStyle = ColumnStyle.STANDARD

    ortho: bool = False
    use_inner_column: bool = False
    use_wide_pinky: bool = False
    thumb_style: ThumbStyle = ThumbStyle.DEFAULT
    last_row: LastRow = LastRow.PARTIAL

    create_side_nub: bool = False
    show_caps: bool = False
    use_screw_inserts: bool = True
    use_wire_post: bool = False
    use_trrs: bool = False
    use_promicro_usb_hole: bool = False

    wall_z_offset: float = -15 # length of the first downward-sloping part of the wall
    wall_xy_offset: float = 5
    wall_thickness: float = 2
    left_wall_x_offset: float = 10
    left_wall_z_offset: float = 3

    # the higher x is, the closer to the pinky; the higher y, the closer to the alphas
    thumb_offsets: Vec3 = (6, -3, 7)

    column_offsets: Tuple[Vec3, ...] = field(default=TILTED_COLUMN_OFFSETS)
    ortho_column_offsets: Tuple[Vec3, ...] = field(default=ORTHO_COLUMN_OFFSETS)
    fixed_angles: Tuple[float, ...] = field(default=FIXED_ANGLES)
    fixed_x: Tuple[float, ...] = field(default=FIXED_X)
    fixed_z: Tuple[float, ...] = field(default=FIXED_Z)

    @property
    def lastrow(self):
        return self.nrows - 1

    @property
    def cornerrow(self):
        return self.nrows - 2

    @property
    def middlerow(self):
        return self.nrows - 3

    @property
    def centerrow(self):
        # bottom of the row curve, the home row
        return self.nrows - 3

    @property
    def lastcol(self):
        return self.ncols - 1

    @property
    def first_column(self):
        return -1 if self.use_inner_column else 0

    def validate(self):
        if self.nrows < 3:
            raise ConfigurationError("nrows must be at least 3, got {}".format(self.nrows))
        if self.ncols < 5:
            # the thumb cluster and the front wall are attached to columns 0 to 4
            raise ConfigurationError("ncols must be at least 5, got {}".format(self.ncols))
        if not self.first_column <= self.centercol < self.ncols:
            raise ConfigurationError("centercol {} is outside of columns [{}, {})".format(
                self.centercol, self.first_column, self.ncols))
        for name in ("alpha", "beta", "tenting_angle", "keyboard_z_offset"):
            if not math.isfinite(getattr(self, name)):
                raise ConfigurationError("{} must be finite".format(name))
        if self.alpha == 0 or self.beta == 0:
            raise ConfigurationError("alpha and beta must be non-zero, the curvature radius is undefined")
        if len(self.thumb_offsets) != 3:
            raise ConfigurationError("thumb_offsets must be an [x, y, z] vector")
        if self.column_style == ColumnStyle.FIXED:
            covered = min(len(self.fixed_angles), len(self.fixed_x), len(self.fixed_z))
            if self.use_inner_column:
                raise ConfigurationError("the fixed column style has no entry for the inner column")
            if self.ncols > covered:
                raise ConfigurationError("the fixed column style covers {} columns, {} requested".format(
                    covered, self.ncols))
        return self
