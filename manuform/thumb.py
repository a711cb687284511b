import logging
import math
from collections import namedtuple

import numpy as np

from .config import ThumbStyle
from .errors import ConfigurationError
from .geometry import PostRef, Web, mount_width, mount_height, web_post_offset, thumb_post_offset
from .placement import key_position
from .transform import Transform

logger = logging.getLogger(__name__)

# rotation in degrees about x, then y, then z; offset relative to the thumb origin
ThumbKey = namedtuple("ThumbKey", ["rotation", "offset", "units"])

# (key, corner, dx, dy) along the outer edge of the cluster, from the
# front wall of the main body around to the key that faces the left wall
PerimeterStep = namedtuple("PerimeterStep", ["key", "corner", "dx", "dy"])

class ThumbLayout:
    def __init__(self, style, keys, webs, perimeter):
        self.style = style
        self.keys = dict(keys)
        self.webs = tuple(webs)
        self.perimeter = tuple(PerimeterStep(*step) for step in perimeter)

    def __contains__(self, name):
        return name in self.keys

    def key(self, name):
        try:
            return self.keys[name]
        except KeyError:
            raise ConfigurationError("thumb key {!r} is not part of the {} thumb cluster".format(
                name, self.style.value)) from None

# top two, both layouts start from these
_TOP_PAIR = (("tl", "tr"), ("tl", "br"), ("tr", "tl"), ("tr", "bl"))

THUMB_LAYOUTS = {
    ThumbStyle.DEFAULT: ThumbLayout(
        ThumbStyle.DEFAULT,
        keys=[
            ("tr", ThumbKey((10, -53, 10), (-12, -16, 9), 1.5)),
            ("tl", ThumbKey((5, -64, 12), (-32, -15, -2), 1.5)),
            ("ml", ThumbKey((-2, -73, 25), (-51, -25, -12), 1)),
            ("mr", ThumbKey((-6, -34, 48), (-29, -40, -13), 1)),
            ("br", ThumbKey((-16, -33, 54), (-37.8, -55.3, -25.3), 1)),
            ("bl", ThumbKey((-4, -35, 52), (-56.3, -43.3, -23.5), 1)),
        ],
        webs=[
            _TOP_PAIR,
            # bottom two on the right
            (("br", "tr"), ("br", "br"), ("mr", "tl"), ("mr", "bl")),
            # bottom two on the left
            (("bl", "tr"), ("bl", "br"), ("ml", "tl"), ("ml", "bl")),
            # centers of the bottom four
            (("br", "tl"), ("bl", "bl"), ("br", "tr"), ("bl", "br"),
             ("mr", "tl"), ("ml", "bl"), ("mr", "tr"), ("ml", "br")),
            # top two to the middle two, starting on the left
            (("tl", "tl"), ("ml", "tr"), ("tl", "bl"), ("ml", "br"), ("tl", "br"),
             ("mr", "tr"), ("tr", "bl"), ("mr", "br"), ("tr", "br")),
        ],
        perimeter=[
            ("tr", "br", 0, -1),
            ("mr", "br", 0, -1),
            ("mr", "bl", 0, -1),
            ("br", "br", 0, -1),
            ("br", "bl", 0, -1),
            ("br", "bl", -1, 0),
            ("br", "tl", -1, 0),
            ("bl", "bl", -1, 0),
            ("bl", "tl", -1, 0),
            ("bl", "tl", 0, 1),
            ("bl", "tr", 0, 1),
            ("ml", "tl", 0, 1),
            ("ml", "tr", -0.3, 1),
        ],
    ),
    ThumbStyle.MINIDOX: ThumbLayout(
        ThumbStyle.MINIDOX,
        keys=[
            ("tr", ThumbKey((10, -53, 10), (-12, -16, 9), 1.5)),
            ("tl", ThumbKey((5, -64, 18), (-22, -18, -8), 1.5)),
            ("ml", ThumbKey((-2, -73, 25), (-28, -21, -26), 1.5)),
        ],
        webs=[
            # the 1.5u pair closes back onto the left key's bottom edge
            _TOP_PAIR + (("tl", "br"), ("tl", "bl")),
            (("tl", "tl"), ("ml", "tr"), ("tl", "bl"), ("ml", "br")),
            (("tl", "bl"), ("ml", "br"), ("ml", "bl")),
        ],
        perimeter=[
            ("tr", "br", 0, -1),
            ("tr", "bl", 0, -2),
            ("tl", "bl", 0, -2),
            ("ml", "bl", -1, -1),
            ("ml", "bl", -1, 0),
            ("ml", "tl", -1, 0),
            ("ml", "tl", 0, 1),
            ("ml", "tr", 0, 1),
        ],
    ),
}

def thumb_layout(config):
    return THUMB_LAYOUTS[config.thumb_style]

def thumb_origin(config):
    # derived from the bottom right corner of the 'm' key
    corner = key_position(config, 1, config.cornerrow, [mount_width / 2, -mount_height / 2, 0])
    return corner + np.asarray(config.thumb_offsets, dtype=float)

def thumb_transform(config, name, layout=None):
    layout = layout or thumb_layout(config)
    key = layout.key(name)
    rx, ry, rz = (math.radians(a) for a in key.rotation)
    return (Transform()
            .rotate_x(rx)
            .rotate_y(ry)
            .rotate_z(rz)
            .translate(thumb_origin(config))
            .translate(key.offset))

def thumb_place(config, name, shape):
    return thumb_transform(config, name).place(shape)

def thumb_post(config, name, corner, layout=None):
    layout = layout or thumb_layout(config)
    if layout.key(name).units > 1:
        offset = thumb_post_offset(corner)
    else:
        offset = web_post_offset(corner)
    return PostRef(thumb_transform(config, name, layout), offset)

def thumb_webs(plan):
    config, layout = plan.config, plan.thumb
    webs = []
    for i, seq in enumerate(layout.webs):
        posts = [thumb_post(config, name, corner, layout) for name, corner in seq]
        webs.append(Web(("thumb", i), posts))
    return webs

def thumb_to_body_web(plan):
    """Strip joining the two upper thumb keys to the bottom of columns 0 to 3."""
    config, layout = plan.config, plan.thumb
    cornerrow = config.cornerrow

    def tp(name, corner):
        return thumb_post(config, name, corner, layout)

    front2 = plan.front_row(2)
    posts = [
        tp("tl", "tl"), plan.key_post(0, cornerrow, "bl"),
        tp("tl", "tr"), plan.key_post(0, cornerrow, "br"),
        tp("tr", "tl"), plan.key_post(1, cornerrow, "bl"),
        tp("tr", "tr"), plan.key_post(1, cornerrow, "br"),
        tp("tr", "br"), plan.key_post(2, cornerrow, "bl"),
    ]
    if front2 != cornerrow:
        posts.append(plan.key_post(2, front2, "bl"))
    posts += [
        plan.key_post(2, front2, "br"),
        tp("tr", "br"),
        plan.key_post(3, plan.front_row(3), "bl"),
    ]
    return Web(("thumb", "body"), posts)

def thumb_connector_webs(plan):
    webs = thumb_webs(plan) + [thumb_to_body_web(plan)]
    logger.debug("%d thumb connector webs for the %s cluster", len(webs), plan.thumb.style.value)
    return webs
