# plantgrow

An interactive 3D viewer in which a plant grows over time. Twigs, branches
and leaves are built from cones. Their size, angle and colour follow a growth
curve. A state tree records the parameters of each part the first time it
appears, so the plant keeps its shape from frame to frame. You can save a
frame as a 24-bit BMP image, record a frame on every redraw for a movie, and
save or reload the view and the state tree.

## Installation

```
pip install .
```

To install the test dependencies as well:

```
pip install ".[test]"
```

## Running

```
plant-grow
```

To start from a state file saved earlier:

```
plant-grow out.state
```

The window opens at 500x500 and uses pyglet for OpenGL. If the state file
cannot be read, the command prints an error and exits with status 1. If the
state tree runs out of room (`PlantConfig.state_size` nodes), the viewer
closes and the command exits with status 1.

## Controls

| Action                | Keys / mouse                                  |
|-----------------------|-----------------------------------------------|
| Forward               | `f`, `8`, left mouse click                    |
| Backward              | `b`, `2`, right mouse click                   |
| Spin right / left     | `r`, `6` / `l`, `4`                           |
| Spin up / down        | `u`, `-` / `d`, `+`                           |
| Forward & left/right  | `7` / `9`                                     |
| Backward & left/right | `1` / `3`                                     |
| Free look             | drag with the middle mouse button held        |
| Brake                 | `k`, `5`                                      |
| Back to start view    | `s`                                           |
| Speed up / slow growth| `g` / `G`                                     |
| Stop growth           | `h`                                           |
| Capture frame         | `c` (writes `frameNNNNN.bmp`)                 |
| Toggle movie capture  | `m`                                           |
| Save / load state     | `S` / `L` (file `out.state`)                  |
| Quit                  | `q`                                           |

Spin and motion keep going from frame to frame until you brake. Time never
moves below zero: a negative growth step only takes effect while the current
time is positive.

## Library use

The parts also work on their own:

- `plantgrow.bitmap.read_bmp(path)` returns `(width, height, data)` for an
  uncompressed 24-bit BMP. `data` holds packed RGB triples, with the
  scanlines in the order the file stores them. `write_bmp(path, width,
  height, data)` writes such data back out, padding each row to four bytes.
  Bad input raises `BitmapError`.
- `plantgrow.geometry.cone(rad, rad2, height, with_caps, slices)` returns a
  list of `Primitive` objects. Each has a `PrimitiveKind` (`QUAD_STRIP` or
  `POLYGON`), vertices and normals.
- `plantgrow.transform` provides 4x4 matrix helpers (`identity`, `rotation`,
  `translation`, `frustum`) and a `MatrixStack` with `push`/`pop` and a
  `saved()` context manager.
- `plantgrow.growth` provides the growth curve `growth(mytime, sigmoid)`, the
  random helpers `uniform` and `gaussian`, the frozen `PlantConfig` with all
  tunable parameters, and `StateTree`, whose nodes are `GrowthState` records.
  When the tree is full it raises `StateTreeFull`.
- `plantgrow.plant.PlantBuilder(tree).build(time_cur, base_matrix)` walks
  the state tree and returns a list of `ColoredMesh` objects (`part`,
  `color`, `matrix`, `primitives`). `world_vertices()` gives the transformed
  points.
- `plantgrow.persistence.save_state(path, view, time_cur, tree)` and
  `load_state(path)` store and restore the view matrix, the current time and
  the state tree. `load_state` returns a `SavedState`.
- `plantgrow.camera.Navigator` applies key presses, mouse buttons and mouse
  motion to the view and the growth clock.
- `plantgrow.app.PlantWindow` ties these together in a pyglet window.
  `plantgrow.app.main` is the `plant-grow` command.

```python
from plantgrow.bitmap import read_bmp, write_bmp

write_bmp("tiny.bmp", 2, 1, bytes([255, 0, 0, 0, 255, 0]))
width, height, data = read_bmp("tiny.bmp")
```

```python
from plantgrow.growth import PlantConfig
from plantgrow.plant import PlantBuilder

builder = PlantBuilder(config=PlantConfig(stochastic=True, tree_depth=2))
meshes = builder.build(3.0)
```

## Tests

```
pytest
```