from .constant_fold import ConstantFoldPass
from .canonicalize import CanonicalizePass
from .fold import FoldPass

__all__ = ["ConstantFoldPass", "CanonicalizePass", "FoldPass"]
