from __future__ import annotations

import math
from pathlib import Path
from typing import Callable

from direct.actor.Actor import Actor
from panda3d.core import (
    AmbientLight,
    CardMaker,
    DirectionalLight,
    Geom,
    GeomNode,
    GeomTriangles,
    GeomVertexData,
    GeomVertexFormat,
    GeomVertexWriter,
    LVector4,
    NodePath,
    Texture,
)

from runfolio.common.diagnostics import DiagnosticLog
from runfolio.game.obstacles import Obstacle
from runfolio.game.run_loop import FrameReport
from runfolio.settings import RunTuning

ROAD_WIDTH = 10.0
ROAD_LENGTH = 10000.0
ROAD_TILES = 10


def make_cylinder(*, name: str, radius: float, height: float, segments: int = 32) -> GeomNode:
    """Closed vertical cylinder standing on z=0."""

    fmt = GeomVertexFormat.getV3n3()
    vdata = GeomVertexData(name, fmt, Geom.UHStatic)
    vertex = GeomVertexWriter(vdata, "vertex")
    normal = GeomVertexWriter(vdata, "normal")
    tris = GeomTriangles(Geom.UHStatic)

    for i in range(segments):
        a = (math.tau * float(i)) / float(segments)
        cx = math.cos(a)
        cy = math.sin(a)
        vertex.addData3(cx * radius, cy * radius, 0.0)
        normal.addData3(cx, cy, 0.0)
        vertex.addData3(cx * radius, cy * radius, height)
        normal.addData3(cx, cy, 0.0)
    for i in range(segments):
        j = (i + 1) % segments
        b0, t0, b1, t1 = 2 * i, 2 * i + 1, 2 * j, 2 * j + 1
        tris.addVertices(b0, b1, t1)
        tris.addVertices(b0, t1, t0)

    top_center = vdata.getNumRows()
    vertex.addData3(0.0, 0.0, height)
    normal.addData3(0.0, 0.0, 1.0)
    for i in range(segments):
        a = (math.tau * float(i)) / float(segments)
        vertex.addData3(math.cos(a) * radius, math.sin(a) * radius, height)
        normal.addData3(0.0, 0.0, 1.0)
    for i in range(segments):
        tris.addVertices(top_center, top_center + 1 + i, top_center + 1 + ((i + 1) % segments))

    geom = Geom(vdata)
    geom.addPrimitive(tris)
    node = GeomNode(name)
    node.addGeom(geom)
    return node


class RunnerScene:
    """
    Visual side of the run: road, sky, lights, character and one node per obstacle.

    Holds no gameplay state; `apply()` mirrors a `FrameReport` from the run loop.
    """

    def __init__(self, *, tuning: RunTuning, diagnostics: DiagnosticLog) -> None:
        self.tuning = tuning
        self.diagnostics = diagnostics
        self.root: NodePath | None = None
        self.camera: NodePath | None = None
        self.character_np: NodePath | None = None
        self.road_np: NodePath | None = None
        self._obstacle_nodes: dict[int, NodePath] = {}
        self._obstacle_proto: NodePath | None = None
        self._actor: Actor | None = None

    def build(self, *, loader, render: NodePath, camera: NodePath, assets: Path, model_name: str, road_name: str, sky_name: str) -> None:
        self.root = render.attachNewNode("runner-scene")
        self.camera = camera
        self._setup_lights()
        self._setup_sky(loader=loader, path=assets / sky_name)
        self._setup_road(loader=loader, path=assets / road_name)
        self._obstacle_proto = NodePath(
            make_cylinder(
                name="obstacle",
                radius=float(self.tuning.obstacle_radius),
                height=float(self.tuning.obstacle_height),
            )
        )
        self._obstacle_proto.setColor(1.0, 0.0, 0.0, 1.0)
        self.camera.setPos(0.0, -float(self.tuning.camera_back), float(self.tuning.camera_height))

    def _setup_lights(self) -> None:
        assert self.root is not None
        ambient = AmbientLight("ambient")
        ambient.setColor(LVector4(1.0, 1.0, 1.0, 1.0))
        self.root.setLight(self.root.attachNewNode(ambient))

        sun = DirectionalLight("sun")
        sun.setColor(LVector4(1.0, 1.0, 1.0, 1.0))
        sun_np = self.root.attachNewNode(sun)
        sun_np.setPos(5.0, 7.5, 10.0)
        sun_np.lookAt(0.0, 0.0, 0.0)
        self.root.setLight(sun_np)

    def _load_texture(self, *, loader, path: Path, context: str) -> Texture | None:
        if not path.is_file():
            self.diagnostics.error(context=context, message=f"Missing texture: {path}")
            return None
        try:
            tex = loader.loadTexture(str(path))
        except Exception as e:
            self.diagnostics.exception(context=context, exc=e)
            return None
        self.diagnostics.info(context=context, message=f"Loaded {path.name}")
        return tex

    def _setup_sky(self, *, loader, path: Path) -> None:
        assert self.camera is not None
        tex = self._load_texture(loader=loader, path=path, context="assets.sky")
        if tex is None:
            return
        cm = CardMaker("sky")
        cm.setFrame(-1.0, 1.0, -1.0, 1.0)
        sky = self.camera.attachNewNode(cm.generate())
        sky.setTexture(tex)
        sky.setPos(0.0, 900.0, 0.0)
        sky.setScale(900.0 * 16.0 / 9.0, 1.0, 900.0)
        sky.setBin("background", 0)
        sky.setDepthWrite(False)
        sky.setLightOff(1)

    def _setup_road(self, *, loader, path: Path) -> None:
        assert self.root is not None
        cm = CardMaker("road")
        half_w = ROAD_WIDTH * 0.5
        half_l = ROAD_LENGTH * 0.5
        cm.setFrame(-half_w, half_w, -half_l, half_l)
        cm.setUvRange((0.0, 0.0), (1.0, float(ROAD_TILES)))
        self.road_np = self.root.attachNewNode(cm.generate())
        # Card is built in the XZ plane; lay it flat along +Y.
        self.road_np.setP(-90.0)
        tex = self._load_texture(loader=loader, path=path, context="assets.road")
        if tex is None:
            self.road_np.setColor(0.25, 0.25, 0.27, 1.0)
            return
        tex.setWrapU(Texture.WM_repeat)
        tex.setWrapV(Texture.WM_repeat)
        self.road_np.setTexture(tex)

    def load_character(
        self,
        *,
        loader,
        path: Path,
        placeholder: bool,
        on_ready: Callable[[bool], None],
    ) -> None:
        """Start loading the character in the background; `on_ready` reports whether one is in the scene."""

        if not path.is_file():
            self.diagnostics.error(context="assets.character", message=f"Missing model: {path}")
            on_ready(self._use_placeholder(loader=loader) if placeholder else False)
            return

        def _loaded(model) -> None:  # type: ignore[no-untyped-def]
            if model is None or model.isEmpty():
                self.diagnostics.error(context="assets.character", message=f"Cannot load model: {path}")
                on_ready(self._use_placeholder(loader=loader) if placeholder else False)
                return
            try:
                self._attach_actor(model)
            except Exception as e:
                self.diagnostics.exception(context="assets.character", exc=e)
                on_ready(self._use_placeholder(loader=loader) if placeholder else False)
                return
            self.diagnostics.info(context="assets.character", message=f"Loaded {path.name}")
            on_ready(True)

        self.diagnostics.info(context="assets.character", message=f"Loading {path.name}")
        loader.loadModel(str(path), callback=_loaded, okMissing=True)

    def _attach_actor(self, model: NodePath) -> None:
        assert self.root is not None
        actor = Actor(model)
        actor.reparentTo(self.root)
        for anim in actor.getAnimNames():
            actor.loop(anim)
        self._actor = actor
        self.character_np = actor

    def _use_placeholder(self, *, loader) -> bool:
        assert self.root is not None
        try:
            box = loader.loadModel("models/box")
        except Exception as e:
            self.diagnostics.exception(context="assets.placeholder", exc=e)
            return False
        t = self.tuning
        holder = self.root.attachNewNode("character-placeholder")
        box.reparentTo(holder)
        # models/box spans 0..1 on every axis.
        box.setScale(t.character_half_lateral * 2.0, t.character_half_forward * 2.0, t.character_height)
        box.setPos(-t.character_half_lateral, -t.character_half_forward, 0.0)
        holder.setColor(0.2, 0.55, 0.95, 1.0)
        self.character_np = holder
        self.diagnostics.info(context="assets.placeholder", message="Using placeholder character")
        return True

    def _spawn_node(self, obstacle: Obstacle) -> None:
        if self.root is None or self._obstacle_proto is None:
            return
        np = self._obstacle_proto.copyTo(self.root)
        np.setName(f"obstacle-{obstacle.id}")
        np.setPos(obstacle.lateral, obstacle.forward, 0.0)
        self._obstacle_nodes[obstacle.id] = np

    def _release_node(self, obstacle_id: int) -> None:
        np = self._obstacle_nodes.pop(obstacle_id, None)
        if np is not None:
            np.removeNode()

    def apply(self, report: FrameReport) -> None:
        for obstacle_id in report.changes.removed:
            self._release_node(obstacle_id)
        for obstacle in report.changes.added:
            self._spawn_node(obstacle)

        if self.character_np is not None:
            self.character_np.setPos(report.character_pos)
        if self.road_np is not None:
            # Keep the road under the runner; snapping to whole texture tiles keeps the pattern still.
            tile = ROAD_LENGTH / float(ROAD_TILES)
            self.road_np.setY(math.floor(report.character_pos.y / tile) * tile)
        if self.camera is not None:
            self.camera.setPos(report.camera_pos)
            self.camera.lookAt(report.camera_target)

    def destroy(self) -> None:
        for obstacle_id in list(self._obstacle_nodes):
            self._release_node(obstacle_id)
        if self._actor is not None:
            self._actor.cleanup()
            self._actor = None
        if self.root is not None:
            self.root.removeNode()
            self.root = None
