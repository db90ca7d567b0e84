"""Static analyses of naming, searchability, dead code, duplication, import graphs, layering and anti-patterns."""

__version__ = "0.3.0"