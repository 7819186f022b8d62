"""agents-lint: detect stale references and context rot in agent context documents."""

__version__ = "0.2.0"
