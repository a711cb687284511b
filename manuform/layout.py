import logging

from .config import LastRow
from .errors import InvalidGridReference
from .geometry import PostRef, web_post_offset, wide_post_offset
from .placement import key_transform
from .thumb import thumb_layout

logger = logging.getLogger(__name__)

def populated(config, column, row):
    """Whether a key mount exists at (column, row)."""
    if not config.first_column <= column < config.ncols:
        return False
    if not 0 <= row < config.nrows:
        return False
    if column == -1 and row >= config.cornerrow:
        # the inner column stops one row above the rest
        return False
    if row == config.lastrow:
        if config.last_row == LastRow.NONE:
            return False
        if config.last_row == LastRow.PARTIAL:
            return column in (2, 3)
        return column not in (-1, 0, 1)
    return True

class LayoutPlan:
    """
    Everything the connectors and walls need to know about which keys exist,
    resolved once from a Configuration.
    """

    def __init__(self, config):
        config.validate()
        self.config = config
        self.thumb = thumb_layout(config)
        self.columns = tuple(range(config.first_column, config.ncols))
        self.rows = tuple(range(0, config.nrows))
        self.cells = frozenset(
            (c, r) for c in self.columns for r in self.rows if populated(config, c, r))

        self.row_edges = tuple(
            ((c, r), (c + 1, r))
            for r in self.rows for c in self.columns
            if (c, r) in self.cells and (c + 1, r) in self.cells)
        self.column_edges = tuple(
            ((c, r), (c, r + 1))
            for c in self.columns for r in self.rows
            if (c, r) in self.cells and (c, r + 1) in self.cells)

        blocks = []
        for r in self.rows[:-1]:
            for c in self.columns[:-1]:
                # order matches the diagonal web: br, tr, bl, tl
                present = tuple(cell in self.cells for cell in ((c, r), (c, r + 1), (c + 1, r), (c + 1, r + 1)))
                if sum(present) >= 3:
                    blocks.append((c, r, present))
        self.diagonal_blocks = tuple(blocks)

        self.left_column = config.first_column
        self.left_rows = tuple(r for r in self.rows if (self.left_column, r) in self.cells)

        logger.debug("layout: %d keys, %d row edges, %d column edges, %d diagonal blocks",
                     len(self.cells), len(self.row_edges), len(self.column_edges), len(self.diagonal_blocks))

    def is_populated(self, column, row):
        return (column, row) in self.cells

    def require(self, column, row):
        if (column, row) not in self.cells:
            raise InvalidGridReference(column, row)

    def key_transform(self, column, row):
        self.require(column, row)
        return key_transform(self.config, column, row)

    def key_post(self, column, row, corner, wide=False):
        offset = wide_post_offset(corner) if wide else web_post_offset(corner)
        return PostRef(self.key_transform(column, row), offset)

    def front_row(self, column):
        """Lowest populated row of a column, the one the front wall hangs from."""
        if (column, self.config.lastrow) in self.cells:
            return self.config.lastrow
        row = self.config.cornerrow
        self.require(column, row)
        return row

def resolve_layout(config):
    return LayoutPlan(config)
