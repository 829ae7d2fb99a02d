"""
task_tracker: personal task tracking over a SQLite table, driven from a text REPL.
"""

__version__ = "0.1.0"
