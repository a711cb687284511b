import math

import numpy as np
from solid import multmatrix

def rotation_x(angle):
    c, s = math.cos(angle), math.sin(angle)
    return np.array([[1, 0, 0], [0, c, -s], [0, s, c]])

def rotation_y(angle):
    c, s = math.cos(angle), math.sin(angle)
    return np.array([[c, 0, s], [0, 1, 0], [-s, 0, c]])

def rotation_z(angle):
    c, s = math.cos(angle), math.sin(angle)
    return np.array([[c, -s, 0], [s, c, 0], [0, 0, 1]])

class Transform:
    """
    Rigid transform, rotation followed by translation.

    Every operation returns a new Transform which applies the operation
    *after* this one, so a chain reads in the same order the shape is moved:
    Transform().translate(a).rotate_x(b) first moves by a, then rotates.
    """

    __slots__ = ("rotation", "translation")

    def __init__(self, rotation=None, translation=None):
        self.rotation = np.eye(3) if rotation is None else np.asarray(rotation, dtype=float)
        self.translation = np.zeros(3) if translation is None else np.asarray(translation, dtype=float)

    def then(self, rotation, translation):
        return Transform(rotation @ self.rotation, rotation @ self.translation + translation)

    def translate(self, vec):
        return self.then(np.eye(3), np.asarray(vec, dtype=float))

    def rotate_x(self, angle):
        return self.then(rotation_x(angle), np.zeros(3))

    def rotate_y(self, angle):
        return self.then(rotation_y(angle), np.zeros(3))

    def rotate_z(self, angle):
        return self.then(rotation_z(angle), np.zeros(3))

    def apply(self, point):
        return self.rotation @ np.asarray(point, dtype=float) + self.translation

    @property
    def matrix(self):
        m = np.eye(4)
        m[:3, :3] = self.rotation
        m[:3, 3] = self.translation
        return m

    def place(self, shape):
        return multmatrix(m=self.matrix.tolist())(shape)

    def __repr__(self):
        return "Transform(rotation={}, translation={})".format(
            self.rotation.tolist(), self.translation.tolist())

def mirror_points(points, normal=(1, 0, 0)):
    # same convention as OpenSCAD's mirror(v): reflect through the plane normal to v
    n = np.asarray(normal, dtype=float)
    n = n / np.linalg.norm(n)
    pts = np.asarray(points, dtype=float)
    return pts - 2 * np.outer(pts @ n, n)
