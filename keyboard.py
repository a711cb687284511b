#!/bin/python

from solid import *
import sys
import os
import logging
import math

from manuform import (Configuration, LastRow, ThumbStyle, ColumnStyle, ConfigurationError,
                      resolve_layout, model_right, model_left, plate_right)

logger = logging.getLogger("keyboard")

def main() -> int:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")

    config = Configuration(
        nrows = 4,
        ncols = 5,
        alpha = math.pi / 12,
        beta = math.pi / 36,
        centercol = 4,
        tenting_angle = math.pi / 9,
        keyboard_z_offset = 4,
        column_style = ColumnStyle.STANDARD,

        ortho = False,
        use_inner_column = False,
        use_wide_pinky = False,
        thumb_style = ThumbStyle.DEFAULT,
        last_row = LastRow.PARTIAL,

        create_side_nub = False,
        show_caps = False,
        use_screw_inserts = True,
        use_trrs = False,
        use_promicro_usb_hole = False,
    )

    try:
        plan = resolve_layout(config)
    except ConfigurationError as e:
        logger.error("invalid configuration: %s", e)
        return 1

    os.makedirs("things", exist_ok=True)
    for shape, filename in [
        (model_right(plan), "things/right.scad"),
        (model_left(plan), "things/left.scad"),
        (plate_right(plan), "things/right-plate.scad"),
    ]:
        scad_render_to_file(shape, filename)
        logger.info("wrote %s", filename)

    return 0

if __name__ == '__main__':
    sys.exit(main())
