from .lister import Lister

__all__ = ["Lister"]
