"""Command line entry point: render the random sphere scene as a PPM image."""

from __future__ import annotations

import argparse
import os
import random
import sys
import threading
import time
from collections import Counter, defaultdict
from typing import TextIO

from tqdm import tqdm

from .camera import Camera
from .geometry import Color, Point3, Vec3, random_vec3
from .hittable import Hittable, HittableList, Sphere
from .material import Dielectric, Diffusion, DiffusionType, Material, Metal

DEFAULT_WIDTH = 2560
DEFAULT_HEIGHT = 1440
DEFAULT_SAMPLES = 500
DEFAULT_DEPTH = 50
DEFAULT_JOBS = 4 * (os.cpu_count() or 1)


def random_scene(simple_diffusion: bool = False) -> HittableList:
    """The ground, three large spheres and a field of small random spheres."""
    diffusion = DiffusionType.SIMPLE if simple_diffusion else DiffusionType.LAMBERTIAN
    world = HittableList()

    world.add(Sphere(Point3(0, -1000, 0), 1000, Diffusion(Color(0.5, 0.5, 0.5), diffusion)))

    big = [
        Sphere(Point3(0, 1, 0), 1, Dielectric(Color(1, 1, 1), 1.5)),
        Sphere(Point3(-4, 1, 0), 1, Diffusion(Color(0.4, 0.2, 0.1), diffusion)),
        Sphere(Point3(4, 1, 0), 1, Metal(Color(0.7, 0.6, 0.5), 0.0)),
    ]
    world.add(*big)

    for a in range(-11, 11):
        for b in range(-11, 11):
            center = Point3(a + 0.8 * random.random(), 0.2, b + 0.8 * random.random())
            if not all((center - s.center).length() > 1.2 for s in big):
                continue
            choose = random.random()
            material: Material
            if choose < 0.8:
                material = Diffusion(random_vec3(0, 1) * random_vec3(0, 1), diffusion)
            elif choose < 0.95:
                albedo = random_vec3(0.5, 1)
                material = Metal(albedo, random.random() * 0.5)
            else:
                material = Dielectric(Color(1, 1, 1), 1.5)
            world.add(Sphere(center, 0.2, material))

    return world


def new_camera(
    width: int = DEFAULT_WIDTH,
    height: int = DEFAULT_HEIGHT,
    samples: int = DEFAULT_SAMPLES,
    depth: int = DEFAULT_DEPTH,
    jobs: int = DEFAULT_JOBS,
) -> Camera:
    """The camera framing the random scene."""
    return Camera(
        width,
        height,
        samples,
        depth,
        jobs,
        Point3(13, 2, 3),
        Point3(0, 0, 0),
        Vec3(0, 1, 0),
        20.0,
        0.1,
        10.0,
    )


def write_ppm(camera: Camera, world: Hittable, output: TextIO, progress: bool = True) -> None:
    """Render ``world`` and write it to ``output`` as a plain-text PPM image."""
    output.write("P3\n")
    output.write(f"{camera.width} {camera.height}\n")
    output.write("255\n")
    with tqdm(total=camera.image_size(), disable=not progress, unit="px") as bar:
        for pixel in camera.render(world):
            output.write(f"{pixel.r} {pixel.g} {pixel.b}\n")
            bar.update(1)


class _CallProfiler:
    """Records call counts and cumulative wall time per function, across threads."""

    def __init__(self) -> None:
        self._totals: defaultdict[str, float] = defaultdict(float)
        self._calls: Counter[str] = Counter()
        self._local = threading.local()
        self._lock = threading.Lock()

    def _stack(self) -> list[tuple[str, float]]:
        stack = getattr(self._local, "stack", None)
        if stack is None:
            stack = self._local.stack = []
        return stack

    def _hook(self, frame, event, arg) -> None:
        if event == "call":
            code = frame.f_code
            key = f"{code.co_filename}:{code.co_firstlineno}({code.co_name})"
            self._stack().append((key, time.perf_counter()))
        elif event == "c_call":
            key = f"<built-in {getattr(arg, '__qualname__', repr(arg))}>"
            self._stack().append((key, time.perf_counter()))
        elif event in ("return", "c_return", "c_exception"):
            stack = self._stack()
            if not stack:
                return
            key, started = stack.pop()
            elapsed = time.perf_counter() - started
            with self._lock:
                self._totals[key] += elapsed
                self._calls[key] += 1

    def start(self) -> None:
        threading.setprofile(self._hook)
        sys.setprofile(self._hook)

    def stop(self) -> None:
        sys.setprofile(None)
        threading.setprofile(None)

    def dump(self, path: str) -> None:
        with self._lock:
            rows = sorted(self._totals.items(), key=lambda item: item[1], reverse=True)
            calls = dict(self._calls)
        with open(path, "w", encoding="utf-8") as fh:
            fh.write(f"{'calls':>12} {'cumtime':>12}  function\n")
            for key, total in rows:
                fh.write(f"{calls.get(key, 0):>12} {total:>12.6f}  {key}\n")


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="raytrace", description="Render a random sphere scene as a PPM image."
    )
    parser.add_argument("-width", "--width", type=int, default=DEFAULT_WIDTH,
                        help="output image width")
    parser.add_argument("-height", "--height", type=int, default=DEFAULT_HEIGHT,
                        help="output image height")
    parser.add_argument("-samples", "--samples", type=int, default=DEFAULT_SAMPLES,
                        help="number of samples per pixel")
    parser.add_argument("-depth", "--depth", type=int, default=DEFAULT_DEPTH,
                        help="number of ray bounces to calculate")
    parser.add_argument("-jobs", "--jobs", type=int, default=DEFAULT_JOBS,
                        help="number of jobs for rendering")
    parser.add_argument("-simple", "--simple", action="store_true",
                        help="use simple diffusion calculation")
    parser.add_argument("-cpuprofile", "--cpuprofile", default="",
                        help="create a CPU profile and save to file")
    parser.add_argument("-output", "--output", default="",
                        help="output file, defaults to stdout")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = _parser().parse_args(argv)

    profiler = None
    if args.cpuprofile:
        try:
            open(args.cpuprofile, "w", encoding="utf-8").close()
        except OSError as exc:
            print(f"could not create CPU profile: {exc}", file=sys.stderr)
            return 1
        profiler = _CallProfiler()
        profiler.start()

    try:
        camera = new_camera(args.width, args.height, args.samples, args.depth, args.jobs)
        world = random_scene(args.simple)
        if args.output:
            try:
                out = open(args.output, "w", encoding="ascii")
            except OSError as exc:
                print(f"could not create output file: {exc}", file=sys.stderr)
                return 1
            with out:
                write_ppm(camera, world, out)
        else:
            write_ppm(camera, world, sys.stdout)
    finally:
        if profiler is not None:
            profiler.stop()
            try:
                profiler.dump(args.cpuprofile)
            except OSError as exc:
                print(f"could not write CPU profile: {exc}", file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())