import logging

import numpy as np
from solid import union

from .geometry import (PostRef, Web, hull_posts, bottom_hull, flatten, center_post_offset,
                       mount_width, mount_height)
from .placement import key_position
from .thumb import thumb_post
from .transform import Transform

logger = logging.getLogger(__name__)

def wall_locate1(config, dx, dy):
    return [dx * config.wall_thickness, dy * config.wall_thickness, -1]

def wall_locate2(config, dx, dy):
    return [dx * config.wall_xy_offset, dy * config.wall_xy_offset, config.wall_z_offset]

def wall_locate3(config, dx, dy):
    return [dx * (config.wall_xy_offset + config.wall_thickness),
            dy * (config.wall_xy_offset + config.wall_thickness),
            config.wall_z_offset]

class WallAnchor:
    """
    One end of a wall panel: a post on a mount and the outward direction
    (dx, dy) the wall drops towards, in the mount's own frame.
    """

    def __init__(self, post, dx, dy, label=None):
        self.post = post
        self.dx = dx
        self.dy = dy
        self.label = label

    def posts(self, config):
        # a: on the mount, b: wall thickness, c and d: dropped below the mount
        return [
            self.post,
            self.post.moved(wall_locate1(config, self.dx, self.dy)),
            self.post.moved(wall_locate2(config, self.dx, self.dy)),
            self.post.moved(wall_locate3(config, self.dx, self.dy)),
        ]

    def points(self, config):
        return np.array([p.point for p in self.posts(config)])

    def __repr__(self):
        return "WallAnchor({}, {}, {})".format(self.label, self.dx, self.dy)

class WallSegment:
    def __init__(self, start, end, section):
        self.start = start
        self.end = end
        self.section = section

    def floor_posts(self, config):
        return self.start.posts(config)[2:] + self.end.posts(config)[2:]

    def footprint(self, config):
        return np.array([flatten(p.point) for p in self.floor_posts(config)])

    def solid(self, config):
        label = "{} wall {} -> {}".format(self.section, self.start.label, self.end.label)
        return union()(
            hull_posts(self.start.posts(config) + self.end.posts(config), label),
            bottom_hull(self.floor_posts(config), label),
        )

    def __repr__(self):
        return "WallSegment({}: {} -> {})".format(self.section, self.start, self.end)

def wall_brace(config, place1, dx1, dy1, post1, place2, dx2, dy2, post2):
    """
    Wall panel between two mounts. place1/place2 are the mount transforms,
    post1/post2 the corner post offsets in those frames.

        a ==\\ b
             \\
            c \\ d
              | |
            e | | f

    a: the post, b: wall-locate1, c: wall-locate2, d: wall-locate3,
    e and f: c and d flattened to the floor
    """
    return WallSegment(
        WallAnchor(PostRef(place1, post1), dx1, dy1),
        WallAnchor(PostRef(place2, post2), dx2, dy2),
        "brace",
    ).solid(config)

def key_anchor(plan, column, row, corner, dx, dy, wide=False):
    return WallAnchor(plan.key_post(column, row, corner, wide), dx, dy,
                      "key({}, {}).{}{}".format(column, row, "wide-" if wide else "", corner))

def thumb_anchor(plan, step):
    return WallAnchor(thumb_post(plan.config, step.key, step.corner, plan.thumb), step.dx, step.dy,
                      "thumb.{}.{}".format(step.key, step.corner))

def left_key_position(plan, row, direction):
    config = plan.config
    column = plan.left_column
    plan.require(column, row)
    return (key_position(config, column, row, [mount_width * -0.5, direction * mount_height * 0.5, 0])
            - np.array([config.left_wall_x_offset, 0, config.left_wall_z_offset]))

def left_post(plan, row, direction):
    return PostRef(Transform().translate(left_key_position(plan, row, direction)), center_post_offset())

def left_anchor(plan, row, direction, dx, dy):
    return WallAnchor(left_post(plan, row, direction), dx, dy,
                      "left({}, {})".format(row, "top" if direction > 0 else "bottom"))

def perimeter_anchors(plan):
    """
    The outline of the case as (anchor, section) pairs in traversal order:
    back edge left to right, right edge top to bottom, front edge right to
    left, around the thumb cluster, then up the left edge. Each anchor opens
    the wall panel that ends at the next one; the last closes onto the first.
    """
    config = plan.config
    lastcol = config.lastcol
    wide = config.use_wide_pinky
    anchors = []

    def add(anchor, section):
        anchors.append((anchor, section))

    for x in plan.columns:
        add(key_anchor(plan, x, 0, "tl", 0, 1), "back")
        add(key_anchor(plan, x, 0, "tr", 0, 1), "back" if x != lastcol or wide else "right")
    if wide:
        add(key_anchor(plan, lastcol, 0, "tr", 0, 1, wide=True), "right")

    right_rows = [r for r in plan.rows if plan.is_populated(lastcol, r)]
    for r in right_rows:
        add(key_anchor(plan, lastcol, r, "tr", 1, 0, wide), "right")
        add(key_anchor(plan, lastcol, r, "br", 1, 0, wide), "right")

    add(key_anchor(plan, lastcol, right_rows[-1], "br", 0, -1, wide), "front")
    if wide:
        add(key_anchor(plan, lastcol, right_rows[-1], "br", 0, -1), "front")
    for x in range(lastcol, 3, -1):
        if x != lastcol:
            add(key_anchor(plan, x, plan.front_row(x), "br", 0, -1), "front")
        add(key_anchor(plan, x, plan.front_row(x), "bl", 0, -1), "front")
    add(key_anchor(plan, 3, plan.front_row(3), "br", 0.5, -1), "front")
    add(key_anchor(plan, 3, plan.front_row(3), "bl", 0, -1), "thumb-body")

    steps = plan.thumb.perimeter
    for step in steps[:-1]:
        add(thumb_anchor(plan, step), "thumb")
    add(thumb_anchor(plan, steps[-1]), "thumb-body")

    for r in reversed(plan.left_rows):
        add(left_anchor(plan, r, -1, -1, 0), "left")
        add(left_anchor(plan, r, 1, -1, 0), "left")
    add(left_anchor(plan, 0, 1, 0, 1), "left")
    return anchors

def case_wall_segments(plan):
    anchors = perimeter_anchors(plan)
    segments = []
    for i, (anchor, section) in enumerate(anchors):
        following = anchors[(i + 1) % len(anchors)][0]
        segments.append(WallSegment(anchor, following, section))
    logger.debug("%d wall segments around the perimeter", len(segments))
    return segments

def left_wall_webs(plan):
    # fills between the left column's mounts and the synthetic left keys
    column = plan.left_column
    webs = []
    for r in plan.left_rows:
        webs.append(Web(("left", r), [
            plan.key_post(column, r, "tl"),
            plan.key_post(column, r, "bl"),
            left_post(plan, r, 1),
            left_post(plan, r, -1),
        ], triangulate=False))
    for r in plan.left_rows[1:]:
        webs.append(Web(("left", r - 1, r), [
            plan.key_post(column, r, "tl"),
            plan.key_post(column, r - 1, "bl"),
            left_post(plan, r, 1),
            left_post(plan, r - 1, -1),
        ], triangulate=False))
    return webs

def thumb_body_webs(plan):
    """Fills the gap between the left wall, the upper left thumb key and the main body."""
    config = plan.config
    column = plan.left_column
    bottom = plan.left_rows[-1]
    thumb_corner = thumb_post(config, "tl", "tl", plan.thumb)
    left = left_anchor(plan, bottom, -1, -1, 0).posts(config)
    last = thumb_anchor(plan, plan.thumb.perimeter[-1]).posts(config)
    key_bl = plan.key_post(column, bottom, "bl")

    webs = [
        Web(("thumb-body", "wall"), left[2:] + last[2:] + [thumb_corner], triangulate=False),
        Web(("thumb-body", "left"), left + [thumb_corner], triangulate=False),
        Web(("thumb-body", "key"), left[:2] + [
            key_bl,
            key_bl.moved(wall_locate1(config, -1, 0)),
            thumb_corner,
        ], triangulate=False),
        Web(("thumb-body", "thumb"), last + [thumb_corner], triangulate=False),
    ]
    if config.use_inner_column:
        webs.append(Web(("thumb-body", "inner-column"), [
            thumb_corner,
            plan.key_post(0, config.cornerrow, "bl"),
            plan.key_post(-1, config.middlerow, "bl"),
            plan.key_post(-1, config.middlerow, "br"),
        ]))
    return webs

def pinky_webs(plan):
    config = plan.config
    if not config.use_wide_pinky:
        return []
    lastcol = config.lastcol
    rows = [r for r in plan.rows if plan.is_populated(lastcol, r)]
    webs = []
    for r in rows:
        webs.append(Web(("pinky", r), [
            plan.key_post(lastcol, r, "tr"),
            plan.key_post(lastcol, r, "tr", wide=True),
            plan.key_post(lastcol, r, "br"),
            plan.key_post(lastcol, r, "br", wide=True),
        ]))
    for r in rows[:-1]:
        webs.append(Web(("pinky", r, r + 1), [
            plan.key_post(lastcol, r, "br"),
            plan.key_post(lastcol, r, "br", wide=True),
            plan.key_post(lastcol, r + 1, "tr"),
            plan.key_post(lastcol, r + 1, "tr", wide=True),
        ]))
    return webs

def wall_fillers(plan):
    return left_wall_webs(plan) + thumb_body_webs(plan) + pinky_webs(plan)

def build_case_walls(plan):
    config = plan.config
    segments = case_wall_segments(plan)
    return union()(
        *([s.solid(config) for s in segments] + [web.solid() for web in wall_fillers(plan)]))
