from .adapter import CursorAdapter
from .converter import CursorConfig, CursorConverter
from .parser import CursorParser

__all__ = ['CursorAdapter', 'CursorConfig', 'CursorConverter', 'CursorParser']
