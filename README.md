# emerald

emerald is a small framework for 2D applications. It provides the parts an
interactive program is built from: events, layers, a frame loop, cameras,
batched quad rendering, a small entity/component scene, and profiling. It is
not tied to any window system or graphics interface. Windows are fed events,
and rendering goes to a backend object that you can replace.

## Modules

- `emerald.events`: window, application, keyboard and mouse events. Each one
  has an `EventType` and `EventCategory` flags (`event.is_in_category(...)`).
  `EventDispatcher(event).dispatch(EventClass, handler)` calls `handler` when
  the event is of that class. The handler's return value becomes
  `event.handled`.
- `emerald.layers`: `Layer` provides the hooks `on_attach`, `on_detach`,
  `on_update`, `on_event` and `on_imgui_render`. The default hooks only keep
  simple counters (`attached`, `elapsed`, `events_seen`, `frames_rendered`).
  `LayerStack` always keeps ordinary layers below overlays. Iterating a stack
  goes bottom to top, and `reversed(stack)` goes top to bottom.
  `pop_layer`/`pop_overlay` detach the layer and remove it. `close()` detaches
  all layers.
- `emerald.timestep`: `Timestep` is the time between frames in seconds. It
  also has `.milliseconds`, and it acts as a number in arithmetic.
- `emerald.codes`: `KeyCode` and `MouseCode` integer enums, using the usual
  keyboard and mouse button numbering.
- `emerald.camera`: `orthographic(...)` builds a projection matrix (numpy,
  4x4). `Camera` holds only a projection. `OrthographicCamera` has a
  `position` and a `rotation` (in degrees) and provides the projection, view
  and view-projection matrices.
- `emerald.camera_controller`: `OrthographicCameraController` moves its
  camera with W/A/S/D and rotates it with Q/E (when `rotation=True`). It zooms
  on `MouseScrolledEvent` (when `variable_zoom=True`, clamped to 0.25–10), and
  it follows the aspect ratio of `WindowResizeEvent`. You pass in an
  `is_key_pressed(KeyCode) -> bool` callable to say which keys are held. If
  you pass none, no key counts as held.
- `emerald.buffer_layout`: `ShaderDataType`, `shader_data_type_size`,
  `BufferElement` (size, offset, `component_count()`), and `BufferLayout`
  (offsets and `stride`).
- `emerald.shader`: `preprocess_shader_source` splits a source file at its
  `#type vertex` / `#type fragment` (or `pixel`) lines into a dict keyed by
  `ShaderType`. `Shader.from_file` takes the shader's name from the file name.
  `Shader.set_uniform` records uniform values. `ShaderLibrary` stores shaders
  by unique name. Problems raise `ShaderError`, and `get` raises `KeyError`
  for a name it does not know.
- `emerald.subtexture`: `Texture2D` is a sized texture. `set_data` checks that
  the data covers the whole texture. `SubTexture2D.from_coords` cuts a cell
  out of a sprite sheet.
- `emerald.renderer2d`: `Renderer2D` collects quads into batches of
  `QuadVertex` records. It gives textures slots (slot 0 is a white texture)
  and starts a new batch when either the quad limit or the slot limit is
  reached. It passes each batch to a `RenderBackend` and counts draw calls and
  quads in `Statistics`. The default `RenderBackend` keeps in memory a record
  of uploads, bound textures, draw calls, the viewport and the clear colour.
- `emerald.scene`: `Scene.create_entity(name)` returns an `Entity` that
  already has a `TagComponent` and a `TransformComponent`. Entities add, get,
  check and remove components by type. `Scene.on_update(timestep, renderer)`
  draws every `SpriteRendererComponent` through the first primary
  `CameraComponent`.
- `emerald.application`: a `Window` queues events with `post_event` and
  delivers them on `on_update`. `Application` owns a window, a `Renderer2D`
  and a layer stack. It runs the frame loop with `run(clock=None)`, stops on
  `WindowCloseEvent` or `close()`, and skips layer updates while minimised
  (that is, after a resize to zero width or height). Only one application can
  exist at a time. `shutdown()` (also called on leaving a `with` block)
  releases it. `run_application(factory)` sets up logging, creates the
  application, runs it, and shuts it down.
- `emerald.instrumentor`: `Instrumentor.get()` writes one session at a time
  to a file in the Chrome tracing JSON format. `InstrumentationTimer` times a
  scope. `cleanup_output_string` tidies up scope names.
- `emerald.log`: `init_logging(log_file="Emerald.log")` sends the
  `core_logger()` ("Emerald") and the `client_logger()` ("APP") to standard
  output and to the log file.

## Requirements

Python 3.10 or later and numpy.

## Layers and events

```python
from emerald.codes import KeyCode
from emerald.events import EventDispatcher, KeyPressedEvent, WindowResizeEvent
from emerald.layers import Layer


class Sandbox(Layer):
    def on_event(self, event):
        dispatcher = EventDispatcher(event)
        dispatcher.dispatch(WindowResizeEvent, lambda e: False)
        dispatcher.dispatch(KeyPressedEvent, lambda e: e.key_code == KeyCode.ESCAPE)
```

When a handler returns `True`, the event is marked as handled, and layers
further down the stack do not receive it.

## Running an application

```python
from emerald.application import Application
from emerald.events import WindowCloseEvent
from emerald.layers import Layer


class QuitAfterOneFrame(Layer):
    def on_update(self, timestep):
        super().on_update(timestep)
        Application.instance().window.post_event(WindowCloseEvent())


with Application("Demo") as app:
    app.push_layer(QuitAfterOneFrame("quit"))
    app.run()
```

## Drawing quads and scenes

```python
from emerald.camera import OrthographicCamera, orthographic
from emerald.renderer2d import Renderer2D
from emerald.scene import CameraComponent, Scene, SpriteRendererComponent

renderer = Renderer2D()
renderer.begin_scene(OrthographicCamera(-1.6, 1.6, -0.9, 0.9))
renderer.draw_quad_at((0.0, 0.0), (1.0, 1.0), (0.2, 0.8, 0.3, 1.0))
renderer.end_scene()
print(renderer.stats.draw_calls, renderer.backend.draw_calls)  # 1 [6]

scene = Scene()
square = scene.create_entity("Square")
square.add_component(SpriteRendererComponent((0.0, 1.0, 0.0, 1.0)))
camera = scene.create_entity("Camera")
camera.add_component(CameraComponent.from_projection(orthographic(-16, 16, -9, 9)))
scene.on_update(0.016, renderer)
```

## Profiling

```python
from emerald.instrumentor import InstrumentationTimer, Instrumentor

profiler = Instrumentor.get()
profiler.begin_session("Startup", "profile-startup.json")
with InstrumentationTimer("load assets"):
    ...
profiler.end_session()
```

## What it does not do

emerald does not open operating-system windows, and it does not read the
keyboard or mouse. You feed events in through `Window.post_event` and supply
key state to the camera controller. It does not compile shaders, load image
files, or draw on a GPU. `Renderer2D` builds vertex batches and passes them to
a `RenderBackend`, and the default backend only records what it receives. To
draw on screen, subclass `RenderBackend` and `Window` and connect them to a
graphics library of your choice. There is no user-interface toolkit, and no
command-line program.

## Running the tests

The tests use pytest, which is included in the `test` extra:

```
pip install -e ".[test]"
pytest
```