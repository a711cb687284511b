from .config import Configuration, LastRow, ThumbStyle, ColumnStyle
from .errors import ConfigurationError, InvalidGridReference, DegenerateHullError
from .layout import LayoutPlan, resolve_layout
from .model import model_right, model_left, plate_right, plate_left
