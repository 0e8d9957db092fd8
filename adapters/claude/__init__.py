from .adapter import ClaudeAdapter
from .converter import ClaudeConfig, ClaudeConverter
from .parser import ClaudeAgentParser

__all__ = ['ClaudeAdapter', 'ClaudeAgentParser', 'ClaudeConfig', 'ClaudeConverter']
