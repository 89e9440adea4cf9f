"""
CLI command implementations.
"""

from .ddl import cmd_ddl
from .describe import cmd_describe
from .functions import cmd_functions
from .tables import cmd_tables

__all__ = ["cmd_ddl", "cmd_describe", "cmd_functions", "cmd_tables"]
