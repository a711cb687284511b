import itertools

import pytest

from manuform.config import Configuration, LastRow, ThumbStyle
from manuform.layout import resolve_layout

FLAG_COMBINATIONS = [
    dict(last_row=last_row, use_inner_column=inner, use_wide_pinky=wide, thumb_style=thumb)
    for last_row, inner, wide, thumb in itertools.product(
        list(LastRow), [False, True], [False, True], list(ThumbStyle))
]

def combination_id(flags):
    return "{}-{}-{}-{}".format(
        flags["last_row"].value,
        "inner" if flags["use_inner_column"] else "no-inner",
        "wide" if flags["use_wide_pinky"] else "narrow",
        flags["thumb_style"].value)


# ============== Fixtures ==============

@pytest.fixture
def default_config():
    """4x5 grid, partial last row, default thumb cluster."""
    return Configuration()


@pytest.fixture
def default_plan(default_config):
    return resolve_layout(default_config)


@pytest.fixture
def flat_config():
    """No tenting and no lift, so the home key sits on its stagger offset."""
    return Configuration(tenting_angle=0, keyboard_z_offset=0)


@pytest.fixture(params=FLAG_COMBINATIONS, ids=combination_id)
def any_plan(request):
    """Every last-row mode x inner column x wide pinky x thumb cluster."""
    return resolve_layout(Configuration(**request.param))
