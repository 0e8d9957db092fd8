from .adapter import KiroAdapter
from .converter import INCLUSION_MODES, KiroConfig, KiroConverter
from .parser import KiroParser

__all__ = ['INCLUSION_MODES', 'KiroAdapter', 'KiroConfig', 'KiroConverter', 'KiroParser']
