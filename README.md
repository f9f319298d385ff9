# stereomap

Building blocks for a stereo visual SLAM pipeline, written on top of NumPy.

## What it provides

- `stereomap.rostime.Time`: a seconds/nanoseconds time stamp held in the
  unsigned 32-bit range. It supports `+`, `-` and ordering, and converts with
  `Time.from_sec`, `to_sec` and `to_nsec`. Subtracting a later time raises
  `ValueError`; leaving the 32-bit range raises `OverflowError`.
- `stereomap.hash2d.Hash2D`: a grid of buckets over an image. `insert` puts an
  element in the cell holding a pixel, and `neighborhood` returns the elements
  stored within a radius of cells around a pixel. `rows` and `cols` give the
  grid size.
- `stereomap.camera_parameters`: `CameraParameters` validates an intrinsic
  matrix and frustum distances and works out the horizontal and vertical field
  of view in degrees (`compute_fov`). `RectifiedCameraParameters` holds the
  baseline, the focal lengths and the principal point.
- `stereomap.descriptor_matcher`: `BruteForceMatcher` matches descriptors under
  a `NormType` (`L1`, `L2`, `HAMMING`, `HAMMING2`), with an optional mask, and
  returns `DMatch` records (`query_idx`, `train_idx`, `distance`).
- `stereomap.row_matcher`: stereo matching that only considers keypoints within
  a band of rows around the query row (`RowMatcher`, `match_rows`), dropping
  matches whose distance exceeds a threshold.
- `stereomap.image_features`: `KeyPoint` and `ImageFeatures`. `find_matches`
  matches predicted projections to nearby, not yet matched features;
  `set_matched` marks a feature as used; `unmatched_keypoints` lists the
  features still free, with their descriptors and indexes.
- `stereomap.measurement`: `Measurement`, built with `Measurement.monocular` or
  `Measurement.stereo`, tagged with a `MeasurementType` (`STEREO`, `LEFT`,
  `RIGHT`) and a `MeasurementSource` (`TRIANGULATION`, `TRACKER`, `REFIND`).
- `stereomap.motion_model.MotionModel`: a constant-velocity pose predictor with
  `predict_pose`, `update_pose`, `current_pose` and `apply_correction`.
  Orientations are quaternions `(w, x, y, z)`.
- `stereomap.frustum.FrustumCulling`: a viewing frustum bounded by six planes.
  `contains` tests whether a point lies inside, and `far_plane_corners` returns
  the corners of the far plane.
- `stereomap.covariance_ellipsoid`: `compute_covariance_ellipse` and
  `compute_covariance_ellipsoid` give the axes and semi-axis lengths of the
  confidence region of a 2x2 or 3x3 covariance at a chosen `Probability`
  (`PROB_95` or `PROB_99`), smallest axis first.

## Example

```python
import numpy as np
from stereomap.descriptor_matcher import BruteForceMatcher, NormType
from stereomap.image_features import ImageFeatures, KeyPoint

keypoints = [KeyPoint(10.0, 12.0), KeyPoint(40.0, 30.0)]
descriptors = np.array([[0, 255], [255, 0]], dtype=np.uint8)
features = ImageFeatures((64, 48), keypoints, descriptors, 16)

matcher = BruteForceMatcher(NormType.HAMMING)
matches = features.find_matches(
    [(11.0, 12.0)], [descriptors[0]], matcher, 10.0, 1
)
# matches == [(0, 0)]
```

## What it does not do

This is a library of parts, not a running SLAM system. It has no landmark or
map storage, no keyframes, no triangulation of new points, no bundle
adjustment, no feature detection from images and no command-line program.

## Installing

```
pip install .
```

To install the test dependencies as well:

```
pip install .[test]
```