# polytrack

Building blocks for colour-based object tracking in video frames. Frames
and images are `numpy` arrays of shape `(height, width, 3)` with 8-bit
values.

## Modules

- `polytrack.imageview`: `ImageHolder` keeps an image with its zoom ratio,
  pan offset and window size. It converts between screen and image
  coordinates (`screen_to_image`, `image_to_screen`), zooms about the
  window centre (`zoom_in`, `zoom_out`), works out the visible part of the
  image (`compute_view`, which also stores it as a `Rect` in
  `image_raw_view`) and passes `MouseEvent`s on to callbacks you register.
  `MouseTool.PAN` makes left-button drags pan the view.
- `polytrack.drawing`: image views that describe their overlays as `Circle`
  and `Line` shapes, each with a `Pen`, in paint order.
  `SeedImageHolder.overlay()` marks picked sample points.
  `TrackImageHolder.overlay()` draws the bounding boxes of `TrackedObject`s,
  up to 20 points of each trajectory (lists of `TrajectoryPoint`) and, when
  track selection is enabled, a line to the trajectory nearest the pointer
  within 150 pixels. A left click selects that trajectory.
- `polytrack.topomap`: `projection_maps(frame)` returns a `ProjectionMaps`
  tuple of three 256x256 RGB images, `rg`, `rb` and `gb`. Each pixel's
  colour is plotted at its pair of channel values.
- `polytrack.follow`: `FollowMe.step(point, width, height)` returns a
  `CameraMove` (pan or tilt, with a relative amount) that steers toward a
  target, or `None`. The target must be more than 40 pixels off centre, and
  pan and tilt take turns on a seven-frame cycle. `trajectory_centroid`
  averages the newest point of each trajectory. `FpsCounter.tick()` keeps a
  frames-per-second estimate.
- `polytrack.sampling`: `PatternSampler` collects colour `Sample`s from an
  odd `n x n` neighbourhood (n from 1 to 9) around each clicked point.
  Samples can be selected, removed and cleared, and `pattern()` returns
  them as arrays (`PatternData`). `OddSizeSpinner` keeps a grid size odd as
  it is stepped up or down.

## Example

```python
import numpy as np
from polytrack.topomap import projection_maps
from polytrack.sampling import PatternSampler
from polytrack.follow import FollowMe

frame = np.zeros((480, 640, 3), dtype=np.uint8)
frame[100:110, 200:210] = (200, 30, 60)

maps = projection_maps(frame)
print(maps.rg[200, 30])             # [200  30  60]

sampler = PatternSampler(grid_size=3)
sampler.add_sampling(frame, 205, 105)
print(sampler.pattern().data.shape)  # (9, 3)

follow = FollowMe()
print(follow.step((500, 240), 640, 480))  # a pan move to the left
```

## What the package does not do

polytrack has no window, menus or dialogs, and it does not capture video
from cameras or files. It does not drive camera hardware: `FollowMe` only
returns the moves to make. It does not train or evaluate a colour
classifier, and it does not find objects or link them into trajectories.
The tracked objects and trajectories shown by `TrackImageHolder` have to
come from your own code.

## Installation

```
pip install .
```

## Tests

```
pip install .[test]
pytest
```