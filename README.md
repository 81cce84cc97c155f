# camerakit

A small scene toolkit for 3D games: vector, quaternion and matrix math,
an actor/component model, a scene that updates actors frame by frame,
mesh and texture loading, and camera components — first-person, follow
(with a spring), follow-and-orbit, orbit, and a Catmull-Rom spline
camera.

## Installing

```
pip install camerakit
```

For running the tests:

```
pip install camerakit[test]
pytest
```

## Math

`camerakit.mathutil` has scalar helpers (`to_radians`, `to_degrees`,
`near_zero`, `clamp`, `lerp`, `cot`) and the constant `PI`.
`camerakit.vector` has the immutable `Vector2`, `Vector3` and
`Quaternion`; `camerakit.matrix` has `Matrix3` and `Matrix4`.

```python
from camerakit.vector import Vector3, Quaternion
from camerakit.matrix import Matrix4
from camerakit.mathutil import to_radians

q = Quaternion.from_axis_angle(Vector3.UNIT_Z, to_radians(90.0))
turned = Vector3.rotate(Vector3.UNIT_X, q)   # about (0, 1, 0)

view = Matrix4.create_look_at(Vector3.ZERO, Vector3.UNIT_X, Vector3.UNIT_Z)
camera_pos = view.inverted().translation()

world = (
    Matrix4.create_uniform_scale(2.0)
    @ Matrix4.create_from_quaternion(q)
    @ Matrix4.create_translation(Vector3(1.0, 2.0, 3.0))
)
```

Coordinates follow the convention +x forward, +y right, +z up.
Matrices use row vectors, so transforms compose left to right with
`@`: scale, then rotation, then translation. Normalizing a zero-length
vector or quaternion, and inverting a singular matrix, raise
`ValueError`.

`camerakit.randomness.RandomSource` is a seedable generator of floats,
ints (inclusive range) and random `Vector2`/`Vector3` values inside a box.

## Actors, components and scenes

```python
from camerakit.scene import Scene, frame_delta
from camerakit.actor import Actor, InputState
from camerakit.movement import MoveComponent

scene = Scene()
actor = Actor(scene)
mover = MoveComponent(actor)
mover.set_forward_speed(400.0)

scene.process_input(InputState(keys={"w"}))
scene.update(frame_delta(16))
print(actor.position)
```

An `Actor` has a position, uniform scale, rotation and radius, and
rebuilds its world transform when any of them change. Components run
in ascending update order. Actors only receive input while
`ActorState.ACTIVE`, and are updated while active or paused. Actors
created while the scene is updating wait until the end of that frame;
actors whose state is `ActorState.DEAD` are destroyed after it.
`frame_delta` turns elapsed milliseconds into a time step in seconds,
capped at 0.05.

`InputState` is one frame of input: a set of held keys, relative mouse
motion (`mouse_dx`, `mouse_dy`) and a set of held mouse buttons.

`MoveComponent` moves its owner from velocity and angular velocity and
integrates them from forces, torque, mass and resistance.
`InputComponent` turns configured keys into forward, strafe and turning
forces. `camerakit.collision` has `CircleComponent` and `intersect`,
which is true when two bounding spheres overlap or touch.

## Rendering state

`camerakit.renderer.Renderer` keeps the view and perspective projection
matrices, the ambient and directional light, cached textures and
meshes, and the registered `MeshComponent` and `SpriteComponent`
objects. `visible_meshes()` and `visible_sprites()` list what should be
drawn (sprites in draw order), `unproject` maps a screen point into
world space, and `camera_position()` reads the camera position from the
view matrix. Mesh and sprite components need a scene built with a
renderer: `Scene(renderer=Renderer())`.

## Cameras

`FPSCamera`, `FollowCamera`, `FollowOrbitCamera` and `OrbitCamera` (in
`camerakit.cameras`) and `SplineCamera` (in `camerakit.spline`) are
components. Each update computes a view matrix, stores it on the
camera's `view` and, when the scene has a renderer, hands it to the
renderer. `Spline.compute(start_idx, t)` evaluates a Catmull-Rom
segment.

`camerakit.actors` provides ready-made actors for each rig
(`FPSActor`, `FollowActor`, `OrbitActor`, `SplineActor`) and
`PlaneActor` for floor and wall tiles. They read the keys `"w"`, `"a"`,
`"s"`, `"d"` and the mouse button `"right"` from `InputState`.
`CameraRig.change_camera` switches between them by `CameraMode`
(`"1"` to `"4"`; anything else selects first-person), and
`build_level(scene)` fills a scene that has a renderer with a cube, a
sphere, a floor, walls, lighting, sprites and the camera actors, and
returns the rig.

## Meshes

`Mesh.load` reads the JSON `.gpmesh` format (version 1: shader,
textures, specular power, eight-float vertices, triangle indices) and
raises `MeshError` when the file is missing or malformed. A texture a
mesh names that cannot be found is replaced by `Assets/Default.png`.
`Texture.load` reads an image's size and channel count with Pillow.
`Renderer.get_mesh` and `Renderer.get_texture` cache what they load and
return `None` instead of raising.

## What it does not do

camerakit draws nothing: it opens no window, compiles no shaders and
uploads no vertex or texture data to a graphics card. It plays no sound
and has no audio listener. It has no command and no main loop — the
caller feeds `InputState` values to `Scene.process_input` and calls
`Scene.update` each frame, with its own timing.