"""Progressive snapshot hydration.

This package rebuilds scene, node, edge, and context entities from
(possibly migrated) snapshot payloads in dependency order.
"""
