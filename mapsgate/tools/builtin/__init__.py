"""Auto-import builtin tool modules to trigger @register_tool decorators."""
from . import route
from . import compare
from . import traffic
from . import costs
