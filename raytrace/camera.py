"""A positionable thin-lens camera that renders a scene pixel by pixel."""

from __future__ import annotations

import math
import random
import sys
from typing import Iterator, NamedTuple

from .geometry import RGB, Color, Point3, Ray, Vec3, random_in_unit_sphere
from .hittable import Hittable
from .parallel import parallel_map

_WHITE = Color(1.0, 1.0, 1.0)
_SKY_BLUE = Color(0.5, 0.7, 1.0)
_BLACK = Color(0.0, 0.0, 0.0)
_T_MIN = 1e-3


class Coords(NamedTuple):
    """Pixel coordinates: ``i`` counts columns from the left, ``j`` rows from the bottom."""

    i: int
    j: int


class Camera:
    """A camera with field of view, orientation, defocus blur and render settings."""

    def __init__(
        self,
        width: int,
        height: int,
        samples: int,
        depth: int,
        jobs: int,
        lookfrom: Point3,
        lookat: Point3,
        vup: Vec3,
        vfov: float,
        aperture: float,
        focus_dist: float,
    ) -> None:
        theta = math.radians(vfov)
        view_height = 2.0 * math.tan(theta / 2)
        view_width = (width / height) * view_height

        w = (lookfrom - lookat).unit()
        u = vup.cross(w).unit()
        v = w.cross(u)

        self.width = width
        self.height = height
        self.samples = samples
        self.depth = depth
        self.jobs = jobs
        self.lens_radius = aperture / 2
        self.u, self.v, self.w = u, v, w
        self.origin = lookfrom
        self.horizontal = u * view_width * focus_dist
        self.vertical = v * view_height * focus_dist
        self.lower_left_corner = (
            self.origin - self.horizontal / 2 - self.vertical / 2 - w * focus_dist
        )

    def image_size(self) -> int:
        """Number of pixels in the image."""
        return self.width * self.height

    def ray(self, s: float, t: float) -> Ray:
        """The ray through the viewport at fractions ``s`` across and ``t`` up."""
        rd = random_in_unit_sphere() * self.lens_radius
        offset = self.u * rd.x + self.v * rd.y
        origin = self.origin + offset
        direction = (
            self.lower_left_corner
            + self.horizontal * s
            + self.vertical * t
            - self.origin
            - offset
        )
        return Ray(origin, direction)

    def ray_color(self, ray: Ray, world: Hittable) -> Color:
        """Trace ``ray`` through ``world`` for at most ``depth`` bounces."""
        multiplier = Vec3(1.0, 1.0, 1.0)
        for _ in range(self.depth):
            record = world.hit(ray, _T_MIN, sys.float_info.max)
            if record is None:
                t = 0.5 * (ray.direction.unit().y + 1.0)
                return (_WHITE * (1 - t) + _SKY_BLUE * t) * multiplier
            scattered = record.material.scatter(ray, record)
            if scattered is None:
                break
            attenuation, ray = scattered
            multiplier = multiplier * attenuation
        return _BLACK

    def coords(self) -> Iterator[Coords]:
        """Pixel coordinates in output order: top row first, left to right."""
        for j in range(self.height - 1, -1, -1):
            for i in range(self.width):
                yield Coords(i, j)

    def render_pixel(self, world: Hittable, coords: Coords) -> RGB:
        """Average ``samples`` jittered rays through one pixel."""
        pixel = _BLACK
        for _ in range(self.samples):
            s = (coords.i + random.random()) / (self.width - 1)
            t = (coords.j + random.random()) / (self.height - 1)
            pixel = pixel + self.ray_color(self.ray(s, t), world)
        return pixel.to_rgb(float(self.samples))

    def render(self, world: Hittable) -> Iterator[RGB]:
        """Render every pixel, in the order given by :meth:`coords`."""
        yield from parallel_map(
            self.coords(), lambda c: self.render_pixel(world, c), self.jobs
        )