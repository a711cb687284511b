from solid import *
import numpy as np

from .errors import DegenerateHullError

eps = 0.001

keyswitch_height = 14.15
keyswitch_width = 14.15
plate_thickness = 5
sa_profile_key_height = 12.7
sa_length = 18.25
sa_double_length = 37.5

mount_width = keyswitch_width + 3
mount_height = keyswitch_height + 3

extra_width = 2.5 # extra space between the base of keys
extra_height = 1.0
cap_top_height = plate_thickness + sa_profile_key_height

web_thickness = 5
post_size = 0.1
post_adj = post_size / 2
post_z = plate_thickness - web_thickness / 2 # center of a web post in the mount frame

floor_z = -10 # bottom hulls are flattened to this height, the model is cut at z = 0

CORNERS = ("tl", "tr", "bl", "br")

def sum_coords(*args):
    res = [0 for i in range(0, len(args[0]))]
    for a in args:
        for i in range(0, len(res)):
            res[i] += a[i]
    return res

def diff_coords(*args):
    res = [args[0][i] for i in range(0, len(args[0]))]
    for a in range(1, len(args)):
        arg = args[a]
        for i in range(0, len(res)):
            res[i] -= arg[i]
    return res

def _corner_signs(corner):
    if corner not in CORNERS:
        raise ValueError("unknown corner post {!r}".format(corner))
    sx = -1 if corner[1] == "l" else 1
    sy = 1 if corner[0] == "t" else -1
    return sx, sy

def corner_post(corner, half_width=mount_width / 2, half_height=mount_height / 2):
    sx, sy = _corner_signs(corner)
    return np.array([sx * (half_width - post_adj), sy * (half_height - post_adj), post_z])

def web_post_offset(corner):
    return corner_post(corner)

def wide_post_offset(corner):
    # 1.5u outer pinky keys
    return corner_post(corner, half_width=mount_width / 1.2)

def thumb_post_offset(corner):
    # 1.5u thumb keys, rotated so the long side runs along y
    return corner_post(corner, half_height=mount_height / 1.15)

def center_post_offset():
    return np.array([0, 0, post_z])

def web_post():
    return cube([post_size, post_size, web_thickness], center=True)

class PostRef:
    """A web post: a small upright cube at `offset` in the frame of `transform`."""

    __slots__ = ("transform", "offset")

    def __init__(self, transform, offset):
        self.transform = transform
        self.offset = np.asarray(offset, dtype=float)

    def moved(self, delta):
        return PostRef(self.transform, self.offset + np.asarray(delta, dtype=float))

    @property
    def point(self):
        return self.transform.apply(self.offset)

    def solid(self):
        return self.transform.place(translate(self.offset.tolist())(web_post()))

def check_hull(points, label=""):
    pts = np.asarray(points, dtype=float)
    if len(pts) < 3:
        raise DegenerateHullError("hull {} has {} points, at least 3 needed".format(label, len(pts)))
    spread = pts - pts[0]
    scale = max(np.abs(spread).max(), 1.0)
    if np.linalg.matrix_rank(spread, tol=1e-9 * scale) < 2:
        raise DegenerateHullError("hull {} has only collinear points".format(label))

def hull_posts(posts, label=""):
    check_hull([p.point for p in posts], label)
    return hull()(*[p.solid() for p in posts])

def triangles(posts):
    return [posts[i:i + 3] for i in range(0, len(posts) - 2)]

def triangle_hulls(posts, label=""):
    if len(posts) < 3:
        raise DegenerateHullError("triangle hull {} has {} posts, at least 3 needed".format(label, len(posts)))
    return union()(*[hull_posts(tri, label) for tri in triangles(posts)])

def flatten(point):
    return np.array([point[0], point[1], floor_z])

def bottom(post):
    return translate([0, 0, floor_z])(linear_extrude(height=eps)(projection()(post.solid())))

def bottom_hull(posts, label=""):
    check_hull([p.point for p in posts] + [flatten(p.point) for p in posts], label)
    return hull()(*([p.solid() for p in posts] + [bottom(p) for p in posts]))

class Web:
    """
    A group of posts joined into one solid, either as a single hull or as a
    triangle hull along the post order. `key` names what the web covers.
    """

    def __init__(self, key, posts, triangulate=True):
        self.key = key
        self.posts = tuple(posts)
        self.triangulate = triangulate

    @property
    def points(self):
        return np.array([p.point for p in self.posts])

    def solid(self):
        label = str(self.key)
        if self.triangulate:
            return triangle_hulls(self.posts, label)
        return hull_posts(self.posts, label)

    def __repr__(self):
        return "Web({!r}, {} posts)".format(self.key, len(self.posts))

def to_list(point):
    return [float(v) for v in point]
