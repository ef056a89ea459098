# lineup_substitution/__init__.py

__version__ = "0.1.0"

from .columns import TAB_WIDTH, visual_column
from .driver import lineup_file, transform
from .errors import (
    AlignmentInvariantViolation,
    DecodeError,
    InvalidArgumentError,
    LineupError,
    PositionError,
    SubstitutionError,
)
from .realign import Substitution, SubstitutionReport
from .search import Match, find_next, iter_matches
from .text_file import TextFile
from .text_model import Mark, Position, TextModel

__all__ = [
    'TAB_WIDTH',
    'visual_column',
    'transform',
    'lineup_file',
    'Substitution',
    'SubstitutionReport',
    'Match',
    'find_next',
    'iter_matches',
    'TextFile',
    'TextModel',
    'Position',
    'Mark',
    'LineupError',
    'InvalidArgumentError',
    'PositionError',
    'AlignmentInvariantViolation',
    'SubstitutionError',
    'DecodeError',
]
