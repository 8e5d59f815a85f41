"""
CodeCrafter - generate UI components from natural language and preview them.
"""

__version__ = "0.1.0"
