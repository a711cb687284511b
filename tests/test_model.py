"""
Tests for hull building and the assembled model.
"""

import numpy as np
import pytest
from solid import scad_render

from manuform.accessories import (screw_positions, screw_inserts, make_accessories, pro_micro_position,
                                  rj9_holder, rj9_start, Rj9Holder, plate_accessories, wire_posts)
from manuform.config import Configuration, ThumbStyle
from manuform.errors import DegenerateHullError
from manuform.geometry import PostRef, Web, check_hull, hull_posts, triangle_hulls, triangles
from manuform.layout import resolve_layout
from manuform.model import model_right, model_left, plate_right, single_plate, sa_cap
from manuform.transform import Transform, mirror_points
from manuform.walls import case_wall_segments


def posts_at(*points):
    identity = Transform()
    return [PostRef(identity, p) for p in points]


# ============== Hull Tests ==============

class TestHulls:
    """Degenerate hulls are errors, not empty solids."""

    def test_collinear_points(self):
        with pytest.raises(DegenerateHullError):
            hull_posts(posts_at([0, 0, 0], [1, 1, 1], [2, 2, 2]))

    def test_too_few_points(self):
        with pytest.raises(DegenerateHullError):
            check_hull([[0, 0, 0], [1, 0, 0]])

    def test_repeated_point(self):
        with pytest.raises(DegenerateHullError):
            check_hull([[1, 2, 3]] * 4)

    def test_triangle_hull_needs_three_posts(self):
        with pytest.raises(DegenerateHullError):
            triangle_hulls(posts_at([0, 0, 0], [1, 0, 0]))

    def test_valid_triangle(self):
        text = scad_render(hull_posts(posts_at([0, 0, 0], [1, 0, 0], [0, 1, 0])))
        assert "hull" in text

    def test_triangles_slide_along_the_sequence(self):
        assert triangles([1, 2, 3, 4]) == [[1, 2, 3], [2, 3, 4]]

    def test_error_names_the_web(self):
        web = Web(("row", 0, 0), posts_at([0, 0, 0], [1, 0, 0], [2, 0, 0]), triangulate=False)
        with pytest.raises(DegenerateHullError, match="row"):
            web.solid()

    def test_moved_post(self):
        post = posts_at([1, 2, 3])[0].moved([1, 0, -1])
        assert np.allclose(post.point, [2, 2, 2])


# ============== Mirror Tests ==============

class TestMirror:
    """The left half is the right half mirrored on x."""

    def test_footprint_round_trip(self, any_plan):
        config = any_plan.config
        points = np.concatenate([s.footprint(config) for s in case_wall_segments(any_plan)])
        mirrored = mirror_points(points)
        assert np.allclose(mirrored[:, 0], -points[:, 0])
        assert np.allclose(mirror_points(mirrored), points)

    def test_left_model_is_mirrored(self, default_plan):
        text = scad_render(model_left(default_plan))
        assert "mirror(v = [-1, 0, 0])" in text


# ============== Accessory Tests ==============

class TestAccessories:
    """Accessories are placed through the key placement model."""

    def test_five_screw_inserts(self, default_plan):
        assert len(screw_positions(default_plan)) == 5
        assert len(screw_inserts(default_plan)) == 5

    def test_screw_inserts_can_be_disabled(self):
        plan = resolve_layout(Configuration(use_screw_inserts=False))
        things, holes = make_accessories(plan)
        with_screws, _ = make_accessories(resolve_layout(Configuration()))
        assert len(with_screws) - len(things) == 5

    def test_trrs_replaces_the_rj9_jack(self, default_plan):
        things, holes = make_accessories(default_plan)
        with_trrs, trrs_holes = make_accessories(resolve_layout(Configuration(use_trrs=True)))
        assert len(with_trrs) == len(things) + 1
        # the TRRS hole takes the place of the RJ9 space
        assert len(trrs_holes) == len(holes)

    def test_default_holes(self, default_plan):
        _, holes = make_accessories(default_plan)
        # 5 screw inserts, the USB holder and the RJ9 space
        assert len(holes) == 7

    def test_positions_are_plain_lists(self, default_config):
        pos = pro_micro_position(default_config)
        assert isinstance(pos, list)
        assert len(pos) == 3

    def test_inner_column_moves_the_left_screws(self):
        plan = resolve_layout(Configuration(use_inner_column=True))
        assert screw_positions(plan)[0] == (-1, 0)


# ============== Jack and Wire Post Tests ==============

class TestRj9Holder:
    """The RJ9 jack mount is used unless a TRRS jack is asked for."""

    def test_default_has_an_rj9_holder(self, default_config):
        holder = rj9_holder(default_config)
        assert isinstance(holder, Rj9Holder)

    def test_holder_sits_behind_the_first_key(self, default_config):
        start = rj9_start(default_config)
        holder = rj9_holder(default_config)
        assert holder.pos[:2] == start[:2]
        assert holder.pos[2] == 11

    def test_trrs_has_no_rj9_holder(self):
        assert rj9_holder(Configuration(use_trrs=True)) is None

    def test_holder_is_hollow(self, default_config):
        holder = rj9_holder(default_config)
        assert "difference" in scad_render(holder.make_shape())
        assert "difference" not in scad_render(holder.make_hole())

    def test_model_carries_the_holder(self, default_plan):
        assert "22.38" in scad_render(model_right(default_plan))

    def test_trrs_model_has_no_rj9(self):
        plan = resolve_layout(Configuration(use_trrs=True))
        assert "22.38" not in scad_render(model_right(plan))


class TestPlateAccessories:
    """Holders and screw bosses reach down into the bottom plate."""

    def test_default(self, default_plan):
        # 5 screw bosses, the USB holder and the RJ9 holder
        assert len(plate_accessories(default_plan)) == 7

    def test_trrs(self):
        assert len(plate_accessories(resolve_layout(Configuration(use_trrs=True)))) == 6

    def test_without_screws(self):
        plan = resolve_layout(Configuration(use_screw_inserts=False))
        assert len(plate_accessories(plan)) == 2

    def test_plate_includes_the_rj9_holder(self, default_plan):
        assert "22.38" in scad_render(plate_right(default_plan))


class TestWirePosts:
    """Three posts under each upper key and under the middle left thumb key."""

    @pytest.mark.parametrize("thumb_style", list(ThumbStyle))
    def test_count(self, thumb_style):
        plan = resolve_layout(Configuration(thumb_style=thumb_style))
        config = plan.config
        assert len(wire_posts(plan)) == 3 + 3 * config.lastcol * config.cornerrow

    def test_model_adds_every_post(self, default_plan):
        with_posts = resolve_layout(Configuration(use_wire_post=True))
        plain = scad_render(model_right(default_plan)).count("multmatrix")
        posts = scad_render(model_right(with_posts)).count("multmatrix")
        assert posts - plain == len(wire_posts(with_posts))


# ============== Assembly Tests ==============

class TestAssembly:
    """Whole model, rendered to OpenSCAD source."""

    def test_right_model(self, default_plan):
        text = scad_render(model_right(default_plan))
        assert "multmatrix" in text
        assert "hull" in text
        assert "difference" in text

    def test_caps_are_ghosts(self):
        plan = resolve_layout(Configuration(show_caps=True))
        assert "%" in scad_render(model_right(plan))

    def test_plate_is_a_cut_projection(self, default_plan):
        text = scad_render(plate_right(default_plan))
        assert "projection(cut = true)" in text

    @pytest.mark.parametrize("nub", [False, True])
    def test_single_plate(self, nub):
        text = scad_render(single_plate(Configuration(create_side_nub=nub)))
        assert "mirror" in text
        assert ("cylinder" in text) == nub

    def test_wide_cap(self):
        assert scad_render(sa_cap(1)) != scad_render(sa_cap(1.5))
