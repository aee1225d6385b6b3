"""Five-stage progressive hydration.

Stages run in dependency order: scene, nodes, edges, contexts, and
validation. Each stage consumes the previous stage's output. A fatal
stage failure stops the run while keeping the output of completed
stages for diagnostics.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field, replace
from typing import Callable, Mapping, cast

from core.errors import EntityHydrationError, FinalValidationError, HydrationError
from core.logging_config import get_logger
from core.scene_types import Scene, SceneContext, SceneEdge, SceneNode
from core.types import SnapshotHydrationOptions
from hydration.entity_builders import build_context, build_edge, build_node, build_scene
from hydration.raw_snapshot import (
    RawEdge,
    SnapshotEnvelope,
    parse_raw_context,
    parse_raw_edge,
    parse_raw_node,
    parse_raw_scene,
)

_LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class PipelineOutcome:
    """Output of one progressive hydration run.

    Attributes:
        success: Whether every stage completed.
        scene: Hydrated scene, linked only when validation completed.
        nodes: Nodes from the node stage.
        edges: Edges from the edge stage.
        contexts: Contexts from the context stage.
        warnings: Non-fatal notes.
        errors: Skipped-entity and fatal error messages.
        stage_times: Milliseconds spent per executed stage.
        completed_stages: Stage names that finished, in order.
        failed_stage: Stage that aborted the run, if any.
    """

    success: bool
    scene: Scene | None
    nodes: tuple[SceneNode, ...]
    edges: tuple[SceneEdge, ...]
    contexts: tuple[SceneContext, ...]
    warnings: tuple[str, ...]
    errors: tuple[str, ...]
    stage_times: Mapping[str, float] = field(default_factory=dict)
    completed_stages: tuple[str, ...] = ()
    failed_stage: str | None = None


class ProgressiveHydrationRunner:
    """Single-use runner for one snapshot envelope."""

    def __init__(self, envelope: SnapshotEnvelope, options: SnapshotHydrationOptions) -> None:
        self._envelope = envelope
        self._options = options
        self._scene: Scene | None = None
        self._nodes: tuple[SceneNode, ...] = ()
        self._edges: tuple[SceneEdge, ...] = ()
        self._contexts: tuple[SceneContext, ...] = ()
        self._warnings: list[str] = []
        self._errors: list[str] = []
        self._stage_times: dict[str, float] = {}
        self._completed: list[str] = []

    def run(self) -> PipelineOutcome:
        """Execute every stage in order, stopping at the first fatal error."""
        stages: tuple[tuple[str, Callable[[], None]], ...] = (
            ("scene", self._hydrate_scene),
            ("nodes", self._hydrate_nodes),
            ("edges", self._hydrate_edges),
            ("contexts", self._hydrate_contexts),
            ("validation", self._validate_and_link),
        )
        for stage_name, stage_fn in stages:
            started_at = time.perf_counter()
            try:
                stage_fn()
            except HydrationError as error:
                self._stage_times[stage_name] = _elapsed_ms(started_at)
                return self._failed_outcome(stage_name, error)
            self._stage_times[stage_name] = _elapsed_ms(started_at)
            self._completed.append(stage_name)
        return self._outcome(success=True, failed_stage=None)

    def _hydrate_scene(self) -> None:
        self._scene = build_scene(parse_raw_scene(self._envelope.scene))

    def _hydrate_nodes(self) -> None:
        nodes: list[SceneNode] = []
        seen_guids: set[str] = set()
        for index, entry in enumerate(self._envelope.node_entries):
            try:
                raw_node = parse_raw_node(entry, index)
                if raw_node.guid in seen_guids:
                    raise EntityHydrationError(
                        f"Node {raw_node.guid} duplicates an earlier node id."
                    )
                node = build_node(raw_node)
            except EntityHydrationError as error:
                self._skip_or_raise("node", index, error)
                continue
            seen_guids.add(node.guid)
            nodes.append(node)
        self._nodes = tuple(nodes)

    def _hydrate_edges(self) -> None:
        node_guids = {node.guid for node in self._nodes}
        edges: list[SceneEdge] = []
        for index, entry in enumerate(self._envelope.edge_entries):
            try:
                raw_edge = parse_raw_edge(entry, index)
                source_guid, target_guid = _resolve_endpoints(raw_edge, node_guids)
                edge = build_edge(raw_edge, source_guid, target_guid)
            except EntityHydrationError as error:
                self._skip_or_raise("edge", index, error)
                continue
            edges.append(edge)
        self._edges = tuple(edges)

    def _hydrate_contexts(self) -> None:
        contexts: list[SceneContext] = []
        for index, entry in enumerate(self._envelope.context_entries):
            try:
                context = build_context(parse_raw_context(entry, index))
            except EntityHydrationError as error:
                self._skip_or_raise("context", index, error)
                continue
            contexts.append(context)
        self._contexts = tuple(contexts)

    def _validate_and_link(self) -> None:
        scene = cast(Scene, self._scene)
        if self._options.validate:
            self._validate_entities(scene)
        self._scene = replace(
            scene,
            nodes=self._nodes,
            edges=self._edges,
            contexts=self._contexts,
        )

    def _validate_entities(self, scene: Scene) -> None:
        if not scene.name:
            raise FinalValidationError("Scene validation failed: missing required field 'name'.")
        if not scene.guid:
            self._warnings.append(
                "Scene has no guid; the persistence layer must assign an identifier."
            )
        node_guids = set()
        for node in self._nodes:
            if not node.guid or not node.node_type:
                raise FinalValidationError(
                    f"Node validation failed: missing required fields for node '{node.guid}'."
                )
            node_guids.add(node.guid)
        for edge in self._edges:
            if not edge.guid or not edge.edge_type:
                raise FinalValidationError(
                    f"Edge validation failed: missing required fields for edge '{edge.guid}'."
                )
            if edge.source_node_guid not in node_guids or edge.target_node_guid not in node_guids:
                raise FinalValidationError(
                    f"Edge validation failed: edge '{edge.guid}' is linked to a node "
                    "outside the hydrated node set."
                )

    def _skip_or_raise(self, entity_kind: str, index: int, error: EntityHydrationError) -> None:
        if self._options.strict:
            raise error
        self._errors.append(str(error))
        _LOGGER.warning(
            "hydration_entity_skipped",
            entity_kind=entity_kind,
            entry_index=index,
            reason=str(error),
        )

    def _failed_outcome(self, stage_name: str, error: HydrationError) -> PipelineOutcome:
        self._errors.append(str(error))
        _LOGGER.error(
            "hydration_stage_failed",
            stage=stage_name,
            error_type=type(error).__name__,
            error=str(error),
            strict=self._options.strict,
        )
        return self._outcome(success=False, failed_stage=stage_name)

    def _outcome(self, success: bool, failed_stage: str | None) -> PipelineOutcome:
        return PipelineOutcome(
            success=success,
            scene=self._scene,
            nodes=self._nodes,
            edges=self._edges,
            contexts=self._contexts,
            warnings=tuple(self._warnings),
            errors=tuple(self._errors),
            stage_times=dict(self._stage_times),
            completed_stages=tuple(self._completed),
            failed_stage=failed_stage,
        )


def hydrate_progressively(
    envelope: SnapshotEnvelope,
    options: SnapshotHydrationOptions,
) -> PipelineOutcome:
    """Run the five hydration stages over a parsed snapshot envelope.

    Args:
        envelope: Parsed snapshot envelope.
        options: Hydration options; ``strict`` and ``validate`` apply.

    Returns:
        Stage outcome with entities from every completed stage.
    """
    return ProgressiveHydrationRunner(envelope, options).run()


def _resolve_endpoints(raw_edge: RawEdge, node_guids: set[str]) -> tuple[str, str]:
    if raw_edge.source in node_guids and raw_edge.target in node_guids:
        return cast(str, raw_edge.source), cast(str, raw_edge.target)
    raise EntityHydrationError(
        f"Edge {raw_edge.guid} references non-existent nodes "
        f"(source='{raw_edge.source}', target='{raw_edge.target}')."
    )


def _elapsed_ms(started_at: float) -> float:
    return (time.perf_counter() - started_at) * 1000.0
