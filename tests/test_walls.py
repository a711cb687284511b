"""
Tests for the case walls.

Tests cover:
- Closure of the perimeter for every flag combination, and that consecutive
  anchors sit on neighbouring mounts
- The flat footprint
- The sections along the outline
- The single wall panel primitive
"""

import re

import numpy as np
import pytest
from solid import scad_render

from manuform.config import Configuration, ThumbStyle
from manuform.geometry import floor_z, web_post_offset
from manuform.layout import resolve_layout
from manuform.placement import key_transform
from manuform.walls import (case_wall_segments, perimeter_anchors, wall_fillers, build_case_walls,
                            wall_brace, left_post, wall_locate1, wall_locate2, wall_locate3)


MAX_PANEL_SPAN = 30
MAX_THUMB_PANEL_SPAN = 60

KEY_LABEL = re.compile(r"key\((-?\d+), (-?\d+)\)")


def key_address(anchor):
    match = KEY_LABEL.match(anchor.label)
    if match is None:
        return None
    return int(match.group(1)), int(match.group(2))


def section_footprints(plan, sections):
    config = plan.config
    return [
        (s.section, s.footprint(config))
        for s in case_wall_segments(plan)
        if s.section in sections
    ]


# ============== Closure Tests ==============

class TestClosure:
    """The panels form one closed loop."""

    def test_each_panel_ends_where_the_next_starts(self, any_plan):
        config = any_plan.config
        segments = case_wall_segments(any_plan)
        for i, segment in enumerate(segments):
            following = segments[(i + 1) % len(segments)]
            assert np.allclose(segment.end.points(config), following.start.points(config), atol=1e-6)

    def test_consecutive_keys_are_neighbours(self, any_plan):
        anchors = [a for a, _ in perimeter_anchors(any_plan)]
        for a, b in zip(anchors, anchors[1:] + anchors[:1]):
            ka, kb = key_address(a), key_address(b)
            if ka is None or kb is None:
                continue
            assert abs(ka[0] - kb[0]) <= 1 and abs(ka[1] - kb[1]) <= 1, (a, b)

    def test_consecutive_anchors_are_close(self, any_plan):
        # off the thumb cluster, a panel spans at most one mount
        anchors = [a for a, _ in perimeter_anchors(any_plan)]
        for a, b in zip(anchors, anchors[1:] + anchors[:1]):
            if a.label.startswith("thumb") or b.label.startswith("thumb"):
                continue
            assert np.linalg.norm(a.post.point - b.post.point) < MAX_PANEL_SPAN, (a, b)

    def test_thumb_panels_are_close(self, any_plan):
        anchors = [a for a, section in perimeter_anchors(any_plan) if section in ("thumb", "thumb-body")]
        for a, b in zip(anchors, anchors[1:]):
            assert np.linalg.norm(a.post.point - b.post.point) < MAX_THUMB_PANEL_SPAN, (a, b)

    def test_one_panel_per_anchor(self, any_plan):
        assert len(case_wall_segments(any_plan)) == len(perimeter_anchors(any_plan))

    def test_no_zero_length_panels(self, any_plan):
        config = any_plan.config
        for segment in case_wall_segments(any_plan):
            start = segment.start.points(config)
            end = segment.end.points(config)
            assert not np.allclose(start, end), segment

    def test_walls_build(self, any_plan):
        # every panel and filler goes through the collinearity check
        assert build_case_walls(any_plan) is not None

    def test_fillers_have_unique_keys(self, any_plan):
        keys = [web.key for web in wall_fillers(any_plan)]
        assert len(keys) == len(set(keys))


# ============== Footprint Tests ==============

class TestFootprint:
    """The bottom of every panel lies on the floor plane."""

    def test_footprint_is_flat(self, any_plan):
        config = any_plan.config
        for segment in case_wall_segments(any_plan):
            assert np.allclose(segment.footprint(config)[:, 2], floor_z)

    def test_dropped_posts_are_below_the_mounts(self, default_plan):
        config = default_plan.config
        for segment in case_wall_segments(default_plan):
            points = segment.start.points(config)
            assert points[2][2] < points[0][2]


# ============== Section Tests ==============

class TestSections:
    """The outline visits the back, the right side, the front, the thumb and the left side."""

    def test_section_order(self, any_plan):
        order = []
        for _, section in perimeter_anchors(any_plan):
            if not order or order[-1] != section:
                order.append(section)
        assert order == ["back", "right", "front", "thumb-body", "thumb", "thumb-body", "left"]

    def test_back_wall_visits_every_column(self, any_plan):
        labels = [a.label for a, section in perimeter_anchors(any_plan) if section == "back"]
        for column in any_plan.columns:
            assert "key({}, 0).tl".format(column) in labels

    def test_right_wall_visits_every_outer_key(self, any_plan):
        lastcol = any_plan.config.lastcol
        rows = [r for r in any_plan.rows if any_plan.is_populated(lastcol, r)]
        labels = [a.label for a, _ in perimeter_anchors(any_plan)]
        for r in rows:
            assert any(label.startswith("key({}, {})".format(lastcol, r)) for label in labels)

    def test_outer_walls_ignore_the_thumb_cluster(self):
        default = resolve_layout(Configuration(thumb_style=ThumbStyle.DEFAULT))
        minidox = resolve_layout(Configuration(thumb_style=ThumbStyle.MINIDOX))
        sections = ("back", "right", "front")
        a = section_footprints(default, sections)
        b = section_footprints(minidox, sections)
        assert len(a) == len(b)
        for (section_a, points_a), (section_b, points_b) in zip(a, b):
            assert section_a == section_b
            assert np.array_equal(points_a, points_b)

    def test_thumb_section_follows_the_cluster(self):
        default = resolve_layout(Configuration(thumb_style=ThumbStyle.DEFAULT))
        minidox = resolve_layout(Configuration(thumb_style=ThumbStyle.MINIDOX))
        count = lambda plan: sum(1 for _, s in perimeter_anchors(plan) if s in ("thumb", "thumb-body"))
        assert count(default) == len(default.thumb.perimeter) + 1
        assert count(minidox) == len(minidox.thumb.perimeter) + 1


class TestInnerColumnWalls:
    """With the inner column the left wall hangs from column -1."""

    def test_left_wall_moves_out(self):
        without = resolve_layout(Configuration())
        inner = resolve_layout(Configuration(use_inner_column=True))
        assert left_post(inner, 0, 1).point[0] < left_post(without, 0, 1).point[0]

    def test_left_wall_follows_the_inner_rows(self):
        inner = resolve_layout(Configuration(use_inner_column=True))
        left = [a for a, section in perimeter_anchors(inner) if section == "left"]
        # two per row, then the top left corner
        assert len(left) == 2 * len(inner.left_rows) + 1

    def test_fillers_reference_the_inner_column(self):
        inner = resolve_layout(Configuration(use_inner_column=True))
        keys = {web.key for web in wall_fillers(inner)}
        assert ("thumb-body", "inner-column") in keys
        assert ("left", 0) in keys and ("left", 1) in keys
        assert ("left", 2) not in keys


# ============== Panel Tests ==============

class TestWallBrace:
    """A single panel between two mounts."""

    def test_renders_hulls(self, default_config):
        place = key_transform(default_config, 1, 0)
        other = key_transform(default_config, 2, 0)
        solid = wall_brace(default_config,
                           place, 0, 1, web_post_offset("tl"),
                           other, 0, 1, web_post_offset("tr"))
        text = scad_render(solid)
        assert "hull" in text
        assert "projection" in text

    def test_wall_locate_offsets(self, default_config):
        assert wall_locate1(default_config, 0, 1) == [0, 2, -1]
        assert wall_locate2(default_config, -1, 0) == [-5, 0, -15]
        assert wall_locate3(default_config, 1, 0) == [7, 0, -15]

    @pytest.mark.parametrize("thickness", [1, 3])
    def test_thickness_moves_the_outer_skin(self, thickness):
        config = Configuration(wall_thickness=thickness)
        assert wall_locate3(config, 1, 0)[0] == config.wall_xy_offset + thickness
