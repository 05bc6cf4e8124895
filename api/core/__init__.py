"""
Pieces used by both the `/usuarios` and `/productos` resources.

Settings, the pooled database gateway, the UPDATE builder and the error
envelope live here; table-specific queries and field rules do not.
"""
