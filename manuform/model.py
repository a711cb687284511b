import logging

from solid import *

from .accessories import make_accessories, plate_accessories, rj9_holder, screw_inserts, wire_posts
from .connectors import build_connectors
from .geometry import (keyswitch_width, keyswitch_height, mount_width, mount_height, plate_thickness,
                       web_thickness, sa_length, sa_double_length)
from .thumb import thumb_connector_webs, thumb_transform
from .walls import build_case_walls

logger = logging.getLogger(__name__)

def single_plate(config):
    top_wall = translate([0, 1.5 / 2 + keyswitch_height / 2, plate_thickness / 2])(
        cube([keyswitch_width + 3, 1.5, plate_thickness], center=True))
    left_wall = translate([1.5 / 2 + keyswitch_width / 2, 0, plate_thickness / 2])(
        cube([1.5, keyswitch_height + 3, plate_thickness], center=True))
    plate_half = top_wall + left_wall
    if config.create_side_nub:
        side_nub = hull()(
            translate([keyswitch_width / 2, 0, 1])(
                rotate(a=90, v=[1, 0, 0])(cylinder(r=1, h=2.75, center=True, segments=30))),
            translate([1.5 / 2 + keyswitch_width / 2, 0, plate_thickness / 2])(
                cube([1.5, 2.75, plate_thickness], center=True)))
        plate_half += side_nub
    return plate_half + mirror([1, 0, 0])(mirror([0, 1, 0])(plate_half))

def larger_plate():
    # fills the long side of a 1.5u plate, up to the thumb posts
    plate_height = (sa_double_length - mount_height) / 3
    top_plate = translate([0, (plate_height + mount_height) / 2, plate_thickness - web_thickness / 2])(
        cube([mount_width, plate_height, web_thickness], center=True))
    return top_plate + mirror([0, 1, 0])(top_plate)

def sa_cap(units=1):
    if units == 1:
        bottom = [sa_length, sa_length]
        middle = [sa_length - 1.25, sa_length - 1.25]
    else:
        bottom = [sa_double_length - 9.5, sa_length]
        middle = [sa_double_length - 11, sa_length - 1.25]

    def slab(size, z):
        return translate([0, 0, z])(cube(size + [0.1], center=True))

    cap = hull()(slab(bottom, 0.05), slab(middle, 6), slab([12, 12], 12))
    return translate([0, 0, 5 + plate_thickness])(cap)

def cap_units(config, column, row):
    if config.use_wide_pinky and column == config.lastcol and row != config.lastrow:
        return 1.5
    return 1

def key_holes(plan):
    plate = single_plate(plan.config)
    res = cube(0)
    for column, row in sorted(plan.cells):
        res += plan.key_transform(column, row).place(plate)
    return res

def caps(plan):
    res = cube(0)
    for column, row in sorted(plan.cells):
        cap = sa_cap(cap_units(plan.config, column, row))
        res += plan.key_transform(column, row).place(cap)
    return res

def thumb_plates(plan):
    config = plan.config
    plate = single_plate(config)
    res = cube(0)
    for name, key in plan.thumb.keys.items():
        place = thumb_transform(config, name, plan.thumb)
        if key.units > 1:
            res += place.place(rotate(a=90, v=[0, 0, 1])(plate) + larger_plate())
        else:
            res += place.place(plate)
    return res

def thumbcaps(plan):
    config = plan.config
    res = cube(0)
    for name, key in plan.thumb.keys.items():
        cap = sa_cap(key.units)
        if key.units > 1:
            cap = rotate(a=90, v=[0, 0, 1])(cap)
        res += thumb_transform(config, name, plan.thumb).place(cap)
    return res

def build_thumb_connectors(plan):
    return union()(*[web.solid() for web in thumb_connector_webs(plan)])

def model_right(plan):
    config = plan.config
    things, holes = make_accessories(plan)

    body = cube(0)
    body += key_holes(plan)
    body += thumb_plates(plan)
    body += build_connectors(plan)
    body += build_thumb_connectors(plan)
    body += difference()(
        union()(build_case_walls(plan), *things),
        *holes)
    rj9 = rj9_holder(config)
    if rj9 is not None:
        body += rj9.make_shape()
    if config.use_wire_post:
        body += union()(*wire_posts(plan))
    body -= translate([0, 0, -60])(cube([350, 350, 120], center=True))

    if config.show_caps:
        body += (caps(plan) + thumbcaps(plan)).set_modifier('%')

    logger.debug("right model: %d keys, %d thumb keys, %d accessories",
                 len(plan.cells), len(plan.thumb.keys), len(things))
    return body

def model_left(plan):
    return mirror([-1, 0, 0])(model_right(plan))

def plate_right(plan):
    """Outline of the bottom plate, the case walls cut just above the floor."""
    inserts = screw_inserts(plan) if plan.config.use_screw_inserts else []
    shape = build_case_walls(plan)
    for part in plate_accessories(plan):
        shape += part
    for insert in inserts:
        shape -= translate([0, 0, -10])(insert.make_screw_hole())
    return projection(cut=True)(translate([0, 0, -0.1])(shape))

def plate_left(plan):
    return mirror([-1, 0, 0])(plate_right(plan))
