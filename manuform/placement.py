import math

from .config import ColumnStyle
from .geometry import mount_width, mount_height, extra_width, extra_height, cap_top_height
from .transform import Transform

def row_radius(alpha):
    return (mount_height + extra_height) / 2 / math.sin(alpha / 2) + cap_top_height

def column_radius(beta):
    return (mount_width + extra_width) / 2 / math.sin(beta / 2) + cap_top_height

def column_x_delta(beta):
    return -1 - column_radius(beta) * math.sin(beta)

def column_z_delta(beta):
    return column_radius(beta) * (1 - math.cos(beta))

def offset_for_column(config, column, row):
    # extra room for the 1.5u outer pinky keys
    if config.use_wide_pinky and row != config.lastrow and column == config.lastcol:
        return 5.5
    return 0

def column_index(config, column):
    # accessories sit between or past the columns: nearest column, halves round up,
    # clamped to the columns of the board
    index = math.floor(column + 0.5)
    return min(max(index, config.first_column), config.lastcol)

def column_offset(config, column):
    table = config.ortho_column_offsets if config.ortho else config.column_offsets
    if column < 0:
        return (0, 0, 0)
    return table[min(column_index(config, column), len(table) - 1)]

def column_angle(config, column):
    return config.beta * (config.centercol - column)

def bend_row(config, transform, row, radius):
    return (transform
            .translate([0, 0, -radius])
            .rotate_x(config.alpha * (config.centerrow - row))
            .translate([0, 0, radius]))

def standard_curvature(config, transform, column, row):
    radius = column_radius(config.beta)
    return (bend_row(config, transform, row, row_radius(config.alpha))
            .translate([0, 0, -radius])
            .rotate_y(column_angle(config, column))
            .translate([0, 0, radius]))

def orthographic_curvature(config, transform, column, row):
    return (bend_row(config, transform, row, row_radius(config.alpha))
            .rotate_y(column_angle(config, column))
            .translate([-(column - config.centercol) * column_x_delta(config.beta),
                        0,
                        column_z_delta(config.beta)]))

def fixed_curvature(config, transform, column, row):
    i = column_index(config, column)
    z = config.fixed_z[i]
    return bend_row(config,
                    transform
                        .rotate_y(config.fixed_angles[i])
                        .translate([config.fixed_x[i], 0, z]),
                    row,
                    row_radius(config.alpha) + z)

COLUMN_STYLES = {
    ColumnStyle.STANDARD: standard_curvature,
    ColumnStyle.ORTHOGRAPHIC: orthographic_curvature,
    ColumnStyle.FIXED: fixed_curvature,
}

def key_transform(config, column, row):
    curvature = COLUMN_STYLES[config.column_style]
    t = Transform().translate([offset_for_column(config, column, row), 0, 0])
    t = curvature(config, t, column, row)
    t = t.translate(column_offset(config, column))
    return (t
            .rotate_y(config.tenting_angle)
            .translate([0, 0, config.keyboard_z_offset]))

def key_place(config, column, row, shape):
    return key_transform(config, column, row).place(shape)

def key_position(config, column, row, point):
    return key_transform(config, column, row).apply(point)
