"""Stereo visual SLAM parts: time stamps, feature matching, measurements, motion and culling."""

__version__ = "0.1.0"