from typing import Dict, List, Type

from .tree import AbstractSyntaxTree
from .utils.logger import log_pass


class BasePass:
    """Base class for all tree normalization passes."""

    def __init__(self, name=None):
        self.name = name or self.__class__.__name__

    @log_pass
    def transform(self, tree: AbstractSyntaxTree) -> AbstractSyntaxTree:
        """
        Applies the pass to ``tree`` and returns a new tree.

        The input is never modified. Subclasses implement ``rewrite`` for a
        single recursive walk; passes that iterate override ``transform``.

        Raises:
            AstError: when the tree cannot be rewritten.
        """
        return AbstractSyntaxTree(self.rewrite(tree.root))

    def rewrite(self, node):
        raise NotImplementedError()


class PassRegistry:
    """Registry for managing normalization passes."""

    _registered_passes: Dict[str, Type[BasePass]] = {}

    @classmethod
    def register(cls, name):
        """Decorator to register a pass class under ``name``."""

        def decorator(pass_cls):
            cls._registered_passes[name] = pass_cls
            return pass_cls

        return decorator

    @classmethod
    def get_pass(cls, name, *args, **kwargs) -> BasePass:
        """Creates an instance of the pass by its registered name."""
        if name not in cls._registered_passes:
            raise ValueError(f"Unknown pass: {name}")
        return cls._registered_passes[name](*args, **kwargs)

    @classmethod
    def list_available_passes(cls) -> List[str]:
        """Returns a list of all registered pass names."""
        return list(cls._registered_passes.keys())
