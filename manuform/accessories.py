import math

from solid import *
import numpy as np

from .geometry import mount_width, mount_height, sum_coords, diff_coords, to_list
from .placement import key_position
from .thumb import thumb_transform
from .walls import wall_locate2, wall_locate3

def screw_positions(plan):
    config = plan.config
    lastloc = config.lastcol + (0.5 if config.use_wide_pinky else 0.1)
    return [
        (plan.left_column, 0),
        (plan.left_column, config.lastrow - 0.8),
        (2, config.lastrow + 0.2),
        (3, 0),
        (lastloc, 1),
    ]

def screw_insert_position(plan, column, row):
    config = plan.config
    shift_right = column == config.lastcol
    shift_left = column == plan.left_column
    shift_up = not (shift_right or shift_left) and row == 0
    shift_down = not (shift_right or shift_left) and row >= config.lastrow
    if shift_up:
        return to_list(key_position(config, column, row, sum_coords(wall_locate2(config, 0, 1), [0, mount_height / 2, 0])))
    if shift_down:
        return to_list(key_position(config, column, row, diff_coords(wall_locate2(config, 0, -1), [0, mount_height / 2, 0])))
    if shift_left:
        left = (key_position(config, column, row, [mount_width * -0.5, 0, 0])
                - np.array([config.left_wall_x_offset, 0, config.left_wall_z_offset]))
        return to_list(left + np.array(wall_locate3(config, -1, 0)))
    return to_list(key_position(config, column, row, sum_coords(wall_locate2(config, 1, 0), [mount_width / 2, 0, 0])))

def usb_holder_position(config):
    return to_list(key_position(config, 1, 0, sum_coords(wall_locate2(config, 0, 1), [0, mount_height / 2, 0])))

def trrs_usb_holder_position(config):
    ref = key_position(config, 0, 0, diff_coords(wall_locate2(config, 0, -1), [0, mount_height / 2, 0]))
    return to_list([ref[0] + 17, ref[1] + 19.3, 2])

def trrs_holder_position(config):
    return sum_coords(trrs_usb_holder_position(config), [-13.6, 0, 0])

def rj9_start(config):
    ref = key_position(config, 0, 0, sum_coords(wall_locate3(config, 0, 1), [0, mount_height / 2, 0]))
    return to_list(sum_coords(ref, [0, -3, 0]))

def pro_micro_position(config):
    return to_list(sum_coords(key_position(config, 0, 0.15, wall_locate3(config, -1, 0)), [-2, 2, -30]))

class ScrewInsert:
    height = 3.8
    bottom_radius = 5.31 / 2
    top_radius = 5.1 / 2

    wall_width = 1.6   # around the insert
    wall_height = 1.5  # above the insert
    screw_radius = 1.7
    screw_hole_height = 350

    def __init__(self, xy_pos):
        self.xy_pos = [xy_pos[0], xy_pos[1]]

    def make_shape(self, bottom_radius, top_radius, height):
        shape = cylinder(r1=bottom_radius, r2=top_radius, h=height, center=True, segments=30)
        shape += translate([0, 0, height / 2])(sphere(r=top_radius, segments=30))
        return translate(self.xy_pos + [height / 2])(shape)

    def make_outer(self):
        return self.make_shape(
            self.bottom_radius + self.wall_width,
            self.top_radius + self.wall_width,
            self.height + self.wall_height)

    def make_hole(self):
        return self.make_shape(self.bottom_radius, self.top_radius, self.height)

    def make_screw_hole(self):
        return self.make_shape(self.screw_radius, self.screw_radius, self.screw_hole_height)

class UsbHolder:
    size = [6.5, 10.0, 13.6]
    thickness = 4

    def __init__(self, pos):
        self.pos = pos

    def move_into_place(self, obj):
        return translate([self.pos[0], self.pos[1], (self.size[2] + self.thickness) / 2])(obj)

    def make_shape(self):
        return self.move_into_place(cube([
            self.size[0] + self.thickness,
            self.size[1],
            self.size[2] + self.thickness,
        ], center=True))

    def make_hole(self):
        return self.move_into_place(cube(self.size, center=True))

class TrrsUsbHolder:
    """Holder for a combined TRRS/USB breakout, used with the pro-micro USB hole."""

    holder_size = [19, 12, 4]
    space_size = [15, 12, 2]
    jack_size = [8.1, 20, 3.1]

    def __init__(self, pos, wall_thickness):
        self.pos = pos
        self.wall_thickness = wall_thickness

    def make_shape(self):
        return translate(self.pos)(cube(self.holder_size, center=True))

    def make_hole(self):
        space = translate(sum_coords(self.pos, [0, -self.wall_thickness, 1]))(cube(self.space_size, center=True))
        jack = translate(sum_coords(self.pos, [0, 10, 3]))(cube(self.jack_size, center=True))
        return space + jack

class TrrsHolder:
    size = [6.2, 10, 2] # PJ-320A
    hole_size = [6.2, 10, 6]
    thickness = 2
    jack_radius = 2.55 # 5mm jack

    def __init__(self, pos):
        self.pos = pos

    def make_shape(self):
        return translate([self.pos[0], self.pos[1], (self.size[2] + self.thickness) / 2])(
            cube([
                self.size[0] + 2 * self.thickness,
                self.size[1] + self.thickness,
                self.size[2] + self.thickness,
            ], center=True))

    def make_hole(self):
        jack = rotate(a=90, v=[1, 0, 0])(cylinder(r=self.jack_radius, h=20, center=True, segments=30))
        jack = translate([
            self.pos[0],
            self.pos[1] + (self.size[1] + self.thickness) / 2,
            3 + (self.size[2] + self.thickness) / 2, # 1.5 padding
        ])(jack)
        box = translate([
            self.pos[0],
            self.pos[1] - self.thickness / 2,
            self.hole_size[2] / 2 + self.thickness,
        ])(cube(self.hole_size, center=True))
        return jack + box

class Rj9Holder:
    size = [14.78, 13, 22.38]
    elevation = 11

    def __init__(self, start):
        self.pos = [start[0], start[1], self.elevation]

    def make_shape(self):
        inside = translate([0, 2, 0])(cube([10.78, 9, 18.38], center=True))
        inside += translate([0, 0, 5])(cube([10.78, 13, 5], center=True))
        return translate(self.pos)(cube(self.size, center=True) - inside)

    def make_hole(self):
        return translate(self.pos)(cube(self.size, center=True))

class ProMicroHolder:
    space_size = [4, 10, 12] # no wall on z
    wall_thickness = 2

    def __init__(self, pos):
        self.pos = pos

    def make_shape(self):
        holder_size = [
            self.space_size[0] + self.wall_thickness,
            self.space_size[1] + self.wall_thickness,
            self.space_size[2],
        ]
        holder = translate(self.pos)(cube(holder_size, center=True))
        space = translate([
            self.pos[0] - self.wall_thickness / 2,
            self.pos[1] - self.wall_thickness / 2,
            self.pos[2],
        ])(cube(self.space_size, center=True))
        return holder - space

def screw_inserts(plan):
    return [ScrewInsert(screw_insert_position(plan, c, r)) for c, r in screw_positions(plan)]

def usb_holder(config):
    if config.use_promicro_usb_hole:
        return TrrsUsbHolder(trrs_usb_holder_position(config), config.wall_thickness)
    return UsbHolder(usb_holder_position(config))

def rj9_holder(config):
    # the RJ9 jack is the default connection between the halves
    if config.use_trrs:
        return None
    return Rj9Holder(rj9_start(config))

def make_accessories(plan):
    """
    Returns (things, holes): solids added to the case walls and solids cut
    out of them. The RJ9 holder is hollow, it is added after the cut, see
    rj9_holder.
    """
    config = plan.config
    things = []
    holes = []

    if config.use_screw_inserts:
        for insert in screw_inserts(plan):
            things.append(insert.make_outer())
            holes.append(insert.make_hole())

    things.append(ProMicroHolder(pro_micro_position(config)).make_shape())
    holder = usb_holder(config)
    things.append(holder.make_shape())
    holes.append(holder.make_hole())

    if config.use_trrs:
        trrs = TrrsHolder(trrs_holder_position(config))
        things.append(trrs.make_shape())
        holes.append(trrs.make_hole())
    else:
        holes.append(rj9_holder(config).make_hole())

    return things, holes

def plate_accessories(plan):
    """Solids whose footprint is part of the bottom plate outline."""
    config = plan.config
    parts = []
    if config.use_screw_inserts:
        parts += [insert.make_outer() for insert in screw_inserts(plan)]
    parts.append(usb_holder(config).make_shape())
    rj9 = rj9_holder(config)
    if rj9 is not None:
        parts.append(rj9.make_shape())
    return parts

wire_post_height = 7
wire_post_overhang = 3.5
wire_post_diameter = 2.6

def wire_post(config, direction, offset):
    d = wire_post_diameter
    post = translate([0, d * -0.5 * direction, 0])(cube([d, d, wire_post_height], center=True))
    post += translate([0, wire_post_overhang * -0.5 * direction, wire_post_height / -2])(
        cube([d, wire_post_overhang, d], center=True))
    post = translate([0, -offset, wire_post_height / -2 + 3])(post)
    post = rotate(a=math.degrees(config.alpha / -2), v=[1, 0, 0])(post)
    return translate([3, mount_height / -2, 0])(post)

# (x offset, z offset, direction, offset) of the three posts under a key
WIRE_POSTS = ((-5, 0, 1, 0), (0, 0, -1, 6), (5, 0, 1, 0))
THUMB_WIRE_POSTS = ((-5, -2, 1, 0), (0, -2.5, -1, 6), (5, -2, 1, 0))

def wire_posts(plan):
    """Posts under the keys to tie the wiring down, a list of placed solids."""
    config = plan.config
    res = []
    ml = thumb_transform(config, "ml", plan.thumb)
    for x, z, direction, offset in THUMB_WIRE_POSTS:
        res.append(ml.place(translate([x, 0, z])(wire_post(config, direction, offset))))
    for column in range(0, config.lastcol):
        for row in range(0, config.cornerrow):
            place = plan.key_transform(column, row)
            for x, z, direction, offset in WIRE_POSTS:
                res.append(place.place(translate([x, 0, z])(wire_post(config, direction, offset))))
    return res
