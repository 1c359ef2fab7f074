"""truthgen — content credibility analysis with two-tier result caching."""

from truthgen.version import __version__

__all__ = ["__version__"]
