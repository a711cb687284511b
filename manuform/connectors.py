import logging

from solid import union

from .config import LastRow
from .geometry import Web

logger = logging.getLogger(__name__)

def row_web(plan, column, row):
    # between (column, row) and the key on its right
    return Web(("row", column, row), [
        plan.key_post(column + 1, row, "tl"),
        plan.key_post(column, row, "tr"),
        plan.key_post(column + 1, row, "bl"),
        plan.key_post(column, row, "br"),
    ])

def column_web(plan, column, row):
    # between (column, row) and the key below it
    return Web(("column", column, row), [
        plan.key_post(column, row, "br"),
        plan.key_post(column, row, "bl"),
        plan.key_post(column, row + 1, "tr"),
        plan.key_post(column, row + 1, "tl"),
    ])

def diagonal_web(plan, column, row, present):
    corners = (
        (column, row, "br"),
        (column, row + 1, "tr"),
        (column + 1, row, "bl"),
        (column + 1, row + 1, "tl"),
    )
    posts = [plan.key_post(c, r, corner) for (c, r, corner), here in zip(corners, present) if here]
    return Web(("diagonal", column, row), posts)

def partial_row_patches(plan):
    config = plan.config
    if config.last_row != LastRow.PARTIAL:
        return []
    # right side of the short last row, down to the next column's bottom key
    return [Web(("patch", "partial-row"), [
        plan.key_post(3, config.lastrow, "tr"),
        plan.key_post(3, config.lastrow, "br"),
        plan.key_post(4, config.cornerrow, "bl"),
    ])]

def inner_column_patches(plan):
    config = plan.config
    if not config.use_inner_column:
        return []
    # the inner column ends a row early, close the side of column 0's bottom key
    return [Web(("patch", "inner-column"), [
        plan.key_post(0, config.cornerrow, "tl"),
        plan.key_post(-1, config.middlerow, "br"),
        plan.key_post(0, config.cornerrow, "bl"),
    ])]

def connector_webs(plan):
    webs = []
    webs += [row_web(plan, c, r) for (c, r), _ in plan.row_edges]
    webs += [column_web(plan, c, r) for (c, r), _ in plan.column_edges]
    webs += [diagonal_web(plan, c, r, present) for c, r, present in plan.diagonal_blocks]
    webs += partial_row_patches(plan)
    webs += inner_column_patches(plan)
    logger.debug("%d connector webs", len(webs))
    return webs

def build_connectors(plan):
    return union()(*[web.solid() for web in connector_webs(plan)])
