"""
main.py — Application entry point.

Clean pipeline, no globals, no mixed concerns:

    CameraWorker (thread) → LandmarkSlot
    frame loop: Simulation.step → OpenCVUI.render

Each component is independently testable and replaceable.
"""
from __future__ import annotations
import argparse
import logging
import sys
import time
from pathlib import Path
from typing import Optional

import pandas as pd
from PyQt6.QtCore import QCoreApplication

from app.camera_worker import CameraWorker
from app.config import AppConfig, default_config
from app.ui import OpenCVUI
from core.embedding import run_embedding_async
from core.gesture_classifier import GestureClassifier
from core.hand_pipeline import HandPipeline
from core.landmark_slot import LandmarkSlot
from core.one_euro import OneEuroFilter3D
from core.scene import SceneState
from core.simulation import Simulation
from core.topology import TopologyController
from domain.enums import TopologyMode
from domain.particles import ParticleSet
from domain.table import DataTable

logger = logging.getLogger(__name__)

_TOPOLOGY_KEYS = {
    ord("1"): TopologyMode.CENTRALIZED,
    ord("2"): TopologyMode.DECENTRALIZED,
    ord("3"): TopologyMode.DISTRIBUTED,
}


def build_simulation(config: AppConfig, slot: Optional[LandmarkSlot] = None) -> Simulation:
    particles = ParticleSet()
    scene = SceneState(
        particles=particles,
        topology=TopologyController(particles, config.topology_transition, config.knn_k),
        repel_radius=config.repel_radius,
        repel_strength=config.repel_strength,
        select_distance=config.select_distance,
    )
    pipeline = HandPipeline(
        classifier=GestureClassifier(
            debounce_frames=config.debounce_frames,
            pinch_distance=config.pinch_distance,
            curl_threshold=config.curl_threshold,
            extend_threshold=config.extend_threshold,
            swipe_threshold=config.swipe_threshold,
            swipe_cooldown=config.swipe_cooldown,
        ),
        smoother=OneEuroFilter3D(
            config.fps_limit, config.filter_min_cutoff, config.filter_beta, config.filter_d_cutoff
        ),
    )
    return Simulation(scene=scene, pipeline=pipeline, slot=slot, damp_rate=config.damp_lambda)


def load_table(sim: Simulation, table: DataTable) -> None:
    future = run_embedding_async(
        table.numeric_matrix(),
        on_progress=lambda f: logger.debug("embedding %.0f%%", f * 100),
    )
    sim.load_table(table, future.result())


def run(config: AppConfig = default_config, csv_path: Optional[Path] = None,
        category_column: str = "group", label_column: str = "name") -> None:
    print("=" * 55)
    print("  PARTICLE TOPOLOGY — gesture explorer")
    print("=" * 55)
    print(f"  Model   : {config.model_path}")
    print(f"  FPS cap : {config.fps_limit}")
    print("  Keys    : 1/2/3 topology, ESC quit")
    print("=" * 55 + "\n")

    qt_app = QCoreApplication.instance() or QCoreApplication(sys.argv)
    slot = LandmarkSlot()
    sim = build_simulation(config, slot)

    if csv_path is not None:
        frame = pd.read_csv(csv_path)
        load_table(sim, DataTable(frame, category_column=category_column, label_column=label_column))
    else:
        # uniform placeholder cloud until a data set is supplied
        placeholder = ParticleSet()
        placeholder.initialize_random(config.placeholder_particles)
        sim.load(placeholder.base_positions)

    worker = CameraWorker(config, slot)
    worker.error.connect(lambda msg: print(f"[WARN] {msg} — continuing without hand tracking"))
    worker.start()

    ui = OpenCVUI()
    last = time.monotonic()
    try:
        while True:
            qt_app.processEvents()
            now = time.monotonic()
            sim.step(now - last, now)
            last = now

            ui.render(sim)
            key = ui.poll_key()
            if key == 27:
                break
            if key in _TOPOLOGY_KEYS:
                sim.set_topology(_TOPOLOGY_KEYS[key], now)
    finally:
        worker.stop()
        sim.stop_tracking()
        ui.close()
        print("\n✓ Application closed cleanly")


def main(argv=None) -> None:
    parser = argparse.ArgumentParser(description="Gesture-driven particle topology explorer")
    parser.add_argument("--csv", type=Path, help="CSV file to explore (default: random placeholder cloud)")
    parser.add_argument("--category", default="group", help="category column")
    parser.add_argument("--label", default="name", help="label column")
    parser.add_argument("--model", type=Path, default=default_config.model_path,
                        help="MediaPipe hand_landmarker.task path")
    parser.add_argument("--camera", type=int, default=default_config.camera_device)
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="[%(levelname)s] %(name)s: %(message)s",
    )
    config = AppConfig(model_path=args.model, camera_device=args.camera)
    run(config, args.csv, args.category, args.label)


if __name__ == "__main__":
    main()
