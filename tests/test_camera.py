import pytest

from raytrace.camera import Camera, Coords
from raytrace.geometry import RGB, Point3, Ray, Vec3
from raytrace.hittable import HittableList, Sphere
from raytrace.material import Diffusion


def make_camera(width=4, height=3, samples=1, depth=1, jobs=1):
    return Camera(
        width,
        height,
        samples,
        depth,
        jobs,
        Point3(0, 0, 0),
        Point3(0, 0, -1),
        Vec3(0, 1, 0),
        90,
        0,
        1,
    )


def test_coords_coverage_and_bounds():
    cam = make_camera()
    coords = list(cam.coords())
    assert len(coords) == cam.image_size() == 12
    assert len(set(coords)) == len(coords)
    for c in coords:
        assert 0 <= c.i < cam.width
        assert 0 <= c.j < cam.height
    js = [c.j for c in coords]
    assert js == sorted(js, reverse=True)
    assert coords[0] == Coords(0, 2)
    assert coords[-1] == Coords(3, 0)


def test_coords_order_small():
    cam = make_camera(width=2, height=2)
    assert list(cam.coords()) == [Coords(0, 1), Coords(1, 1), Coords(0, 0), Coords(1, 0)]


def test_ray_through_centre_without_aperture():
    cam = make_camera()
    ray = cam.ray(0.5, 0.5)
    assert ray.origin == Point3(0, 0, 0)
    assert ray.direction.x == pytest.approx(0.0, abs=1e-9)
    assert ray.direction.y == pytest.approx(0.0, abs=1e-9)
    assert ray.direction.z == pytest.approx(-1.0)


def test_ray_lower_left_corner():
    cam = make_camera()
    ray = cam.ray(0, 0)
    assert ray.direction.x == pytest.approx(-4 / 3)
    assert ray.direction.y == pytest.approx(-1.0)
    assert ray.direction.z == pytest.approx(-1.0)


def test_ray_color_background_up_is_blue():
    cam = make_camera()
    colour = cam.ray_color(Ray(Point3(0, 0, 0), Vec3(0, 1, 0)), HittableList())
    assert colour.x == pytest.approx(0.5)
    assert colour.y == pytest.approx(0.7)
    assert colour.z == pytest.approx(1.0)


def test_ray_color_background_down_is_white():
    cam = make_camera()
    colour = cam.ray_color(Ray(Point3(0, 0, 0), Vec3(0, -1, 0)), HittableList())
    assert colour == Vec3(1.0, 1.0, 1.0)


def test_ray_color_zero_depth_is_black():
    cam = make_camera(depth=0)
    colour = cam.ray_color(Ray(Point3(0, 0, 0), Vec3(0, 1, 0)), HittableList())
    assert colour == Vec3(0, 0, 0)


def test_ray_color_black_absorber_is_black():
    cam = make_camera(depth=5)
    world = HittableList(Sphere(Point3(0, 0, 0), 10, Diffusion(Vec3(0, 0, 0))))
    colour = cam.ray_color(Ray(Point3(0, 0, 0), Vec3(0, 0, -1)), world)
    assert colour == Vec3(0, 0, 0)


def test_render_pixel_in_range():
    cam = make_camera(samples=4, depth=3)
    rgb = cam.render_pixel(HittableList(), Coords(1, 1))
    assert all(0 <= c <= 255 for c in rgb)
    assert rgb.b >= rgb.r


def test_render_pixel_zero_depth():
    cam = make_camera(samples=3, depth=0)
    assert cam.render_pixel(HittableList(), Coords(0, 0)) == RGB(0, 0, 0)


def test_render_yields_every_pixel():
    cam = make_camera(samples=1, depth=0, jobs=3)
    pixels = list(cam.render(HittableList()))
    assert pixels == [RGB(0, 0, 0)] * cam.image_size()


def test_render_sky_pixels_in_range():
    cam = make_camera(samples=2, depth=2, jobs=2)
    pixels = list(cam.render(HittableList()))
    assert len(pixels) == 12
    for p in pixels:
        assert all(0 <= c <= 255 for c in p)
        assert p.b == 255