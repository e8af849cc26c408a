"""Objects a ray can hit, and the record of a hit."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterator

from .geometry import Ray, Vec3

if TYPE_CHECKING:
    from .material import Material


@dataclass(frozen=True)
class HitRecord:
    """Where and how a ray met a surface."""

    point: Vec3
    normal: Vec3
    t: float
    front_face: bool = True
    material: Material | None = None

    @classmethod
    def from_ray(
        cls,
        point: Vec3,
        normal: Vec3,
        t: float,
        material: Material | None,
        ray: Ray,
    ) -> HitRecord:
        """Build a record whose normal always faces against the incoming ray."""
        front = ray.direction.dot(normal) < 0
        return cls(point, normal if front else -normal, t, front, material)


class Hittable(ABC):
    """Anything a ray can intersect."""

    @abstractmethod
    def hit(self, ray: Ray, t_min: float, t_max: float) -> HitRecord | None:
        """Return the nearest hit with t in [t_min, t_max], or None."""


@dataclass(frozen=True)
class Sphere(Hittable):
    center: Vec3
    radius: float
    material: Material | None = None

    def hit(self, ray: Ray, t_min: float, t_max: float) -> HitRecord | None:
        oc = ray.origin - self.center
        a = ray.direction.length_squared()
        half_b = oc.dot(ray.direction)
        c = oc.length_squared() - self.radius * self.radius
        discriminant = half_b * half_b - a * c
        if discriminant < 0:
            return None

        sqrtd = math.sqrt(discriminant)
        root = (-half_b - sqrtd) / a
        if root < t_min or t_max < root:
            root = (-half_b + sqrtd) / a
            if root < t_min or t_max < root:
                return None

        point = ray.at(root)
        normal = (point - self.center) / self.radius
        return HitRecord.from_ray(point, normal, root, self.material, ray)


class HittableList(Hittable):
    """A collection of objects, hit as one."""

    def __init__(self, *objects: Hittable) -> None:
        self._objects: list[Hittable] = list(objects)

    def add(self, *objects: Hittable) -> None:
        self._objects.extend(objects)

    def clear(self) -> None:
        self._objects.clear()

    def hit(self, ray: Ray, t_min: float, t_max: float) -> HitRecord | None:
        closest = t_max
        result = None
        for obj in self._objects:
            record = obj.hit(ray, t_min, closest)
            if record is not None:
                closest = record.t
                result = record
        return result

    def __len__(self) -> int:
        return len(self._objects)

    def __iter__(self) -> Iterator[Hittable]:
        return iter(self._objects)