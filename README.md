# raytrace

A small path tracer. It renders a scene of randomly placed spheres (diffuse,
metal and glass) resting on a large ground sphere. The result is written as a
plain-text PPM (P3) image.

## Installation

```
pip install .
```

## Command line

```
raytrace --width 400 --height 225 --samples 50 --output image.ppm
```

Options. Each one can also be written with a single dash, for example `-width 400`.

| Option         | Default             | Meaning                                     |
|----------------|---------------------|---------------------------------------------|
| `--width`      | 2560                | output image width                          |
| `--height`     | 1440                | output image height                         |
| `--samples`    | 500                 | number of samples per pixel                 |
| `--depth`      | 50                  | number of ray bounces to calculate          |
| `--jobs`       | 4 × CPU count       | number of pixels rendered concurrently      |
| `--simple`     | off                 | use simple diffusion instead of Lambertian  |
| `--cpuprofile` | none                | write a call profile to this file           |
| `--output`     | standard output     | file to write the PPM image to              |

The image goes to standard output unless `--output` is given. While the
renderer runs, it shows a progress bar on standard error. The default settings
produce a large, high-quality image and take a long time. Lower the size and
the sample count for a quick preview.

The `--cpuprofile` file is a text table with one row per function. Each row
gives the function's call count and its cumulative wall time, and the rows are
sorted by time.

If the output file or the profile file cannot be created, the command prints
an error and exits with status 1.

## Library use

```python
import sys

from raytrace.camera import Camera
from raytrace.cli import random_scene, write_ppm
from raytrace.geometry import Vec3

camera = Camera(
    200, 100, 10, 10, 4,
    Vec3(13, 2, 3), Vec3(0, 0, 0), Vec3(0, 1, 0),
    20.0, 0.1, 10.0,
)
world = random_scene(False)
write_ppm(camera, world, sys.stdout, False)
```

`Camera.render(world)` yields `RGB` pixels in PPM order: the top row first,
each row from left to right.

The building blocks live in separate modules:

- `raytrace.geometry`: `Vec3`, an immutable vector with arithmetic operators, `dot`, `cross`, `unit` and `to_rgb`. It also has `Ray`, `RGB` and the helpers `random_vec3`, `random_in_unit_sphere` and `random_unit_vector`.
- `raytrace.hittable`: `HitRecord`, the abstract `Hittable`, `Sphere` and `HittableList`. `hit` returns a `HitRecord`, or `None` when nothing is hit.
- `raytrace.material`: `Metal`, `Dielectric` and `Diffusion` (with `DiffusionType`), together with `reflect`, `refract` and `schlick_reflectance`. `scatter` returns `(attenuation, scattered_ray)`, or `None` when the ray is absorbed.
- `raytrace.camera`: `Camera` and `Coords`.
- `raytrace.parallel`: `parallel_map`, a bounded, order-preserving concurrent map that runs on threads.
- `raytrace.cli`: `random_scene`, `new_camera`, `write_ppm` and the `main` entry point.

## Limits

The only output format is plain-text PPM. The only scene is the random sphere
scene, and spheres are the only shape.

## Tests

```
pip install .[test]
pytest
```