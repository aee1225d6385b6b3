"""Core constants used across scene snapshot modules.

This module centralizes schema versions and entity defaults.
Normalizers and migrations read defaults from here only.
"""

from __future__ import annotations

DEFAULT_TARGET_SCHEMA_VERSION = "1.0.0"
LEGACY_SCHEMA_VERSION = "0.9.0"
MIGRATION_KEY_SEPARATOR = "->"
SUPPORTED_STEP_KINDS = ("transform", "add", "remove", "rename", "custom")
DEFAULT_HYDRATION_TIMEOUT_MS = 30000
DEFAULT_SNAPSHOT_CACHE_TTL_SECONDS = 86400
PROGRESSIVE_STAGES = ("scene", "nodes", "edges", "contexts", "validation")
DEFAULT_SCENE_NAME = "Unnamed Scene"
DEFAULT_SCENE_TYPE = "custom"
DEFAULT_SCENE_META_VERSION = "1.0.0"
DEFAULT_SCENE_THEME = "default"
DEFAULT_SCENE_COLOR_SCHEME = "light"
DEFAULT_SCENE_LAYOUT_TYPE = "force"
DEFAULT_NODE_TYPE = "default"
DEFAULT_NODE_STATUS = "active"
DEFAULT_NODE_WIDTH = 100.0
DEFAULT_NODE_HEIGHT = 100.0
DEFAULT_NODE_BACKGROUND_COLOR = "#ffffff"
DEFAULT_NODE_BORDER_COLOR = "#cccccc"
DEFAULT_NODE_BORDER_WIDTH = 1.0
DEFAULT_NODE_BORDER_RADIUS = 4.0
DEFAULT_NODE_TEXT_COLOR = "#000000"
DEFAULT_NODE_FONT_SIZE = 14.0
DEFAULT_EDGE_TYPE = "default"
DEFAULT_EDGE_PATH_TYPE = "straight"
DEFAULT_EDGE_WEIGHT = 1.0
DEFAULT_EDGE_DIRECTION = "forward"
DEFAULT_EDGE_COLOR = "#666666"
DEFAULT_EDGE_WIDTH = 2.0
DEFAULT_EDGE_LINE_STYLE = "solid"
DEFAULT_EDGE_OPACITY = 1.0
DEFAULT_CONTEXT_TYPE = "scene"
SNAPSHOT_JSON_EXTENSIONS = (".json",)
SNAPSHOT_YAML_EXTENSIONS = (".yaml", ".yml")
