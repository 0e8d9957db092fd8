from .adapter import AgentsMdAdapter
from .converter import AgentsMdConverter
from .parser import AgentsMdParser

__all__ = ['AgentsMdAdapter', 'AgentsMdConverter', 'AgentsMdParser']
