"""workspace-tasks: Google Tasks operations for tool-calling agents."""

__version__ = "0.1.0"
