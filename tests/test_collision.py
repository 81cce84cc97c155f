from camerakit.actor import Actor
from camerakit.collision import CircleComponent, intersect
from camerakit.scene import Scene
from camerakit.vector import Vector3


def make_circle(scene, position, radius, scale=1.0):
    actor = Actor(scene)
    actor.position = position
    actor.radius = radius
    actor.scale = scale
    return CircleComponent(actor)


def test_circle_reads_owner():
    scene = Scene()
    circle = make_circle(scene, Vector3(1.0, 2.0, 3.0), 4.0)
    assert circle.center == circle.owner.position
    assert circle.radius == circle.owner.radius
    assert circle in circle.owner.components


def test_overlapping_spheres_intersect():
    scene = Scene()
    a = make_circle(scene, Vector3.ZERO, 1.0)
    b = make_circle(scene, Vector3(1.5, 0.0, 0.0), 1.0)
    assert intersect(a, b)
    assert intersect(b, a)


def test_touching_spheres_intersect():
    scene = Scene()
    a = make_circle(scene, Vector3.ZERO, 1.0)
    b = make_circle(scene, Vector3(2.0, 0.0, 0.0), 1.0)
    assert intersect(a, b)


def test_separated_spheres_do_not_intersect():
    scene = Scene()
    a = make_circle(scene, Vector3.ZERO, 1.0)
    b = make_circle(scene, Vector3(0.0, 3.0, 0.0), 1.0)
    assert not intersect(a, b)


def test_scale_enlarges_sphere():
    scene = Scene()
    a = make_circle(scene, Vector3.ZERO, 1.0)
    b = make_circle(scene, Vector3(0.0, 0.0, 3.0), 1.0)
    assert not intersect(a, b)
    b.owner.scale = 2.0
    assert intersect(a, b)