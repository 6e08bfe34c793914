"""
confloader - configuration file resolution with recursive imports

Resolves a named YAML/JSON/Python configuration file beneath a base directory,
expands its ``imports`` directives and merges the imported documents beneath it.
"""

__version__ = "1.0.0"
__all__ = ["__version__"]
