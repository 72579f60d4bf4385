"""
touchmath - Deterministic touch-to-cursor math engine.

Turns a raw, noisy stream of 2D touch samples into smoothed cursor motion,
recognized gestures and post-release inertial/attraction motion.

Pipeline:
- Low-pass filter and simplified Kalman estimator for noise suppression
- Finite state machine for press / move / release interpretation
- $1-style unistroke gesture matcher with tap/swipe fast paths
- Spring-damper, momentum and attractor-field dynamics

Scope:
- Pure numeric core, single-threaded and synchronous
- No OS pointer injection, no capture, no persistence
- Callers feed samples and ticks, and consume CursorUpdate events
"""

__version__ = "0.1.0"
__author__ = "touchmath Team"
__license__ = "MIT"
