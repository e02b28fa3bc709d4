"""
Ken Burns Motion Engine

Pan-and-zoom animation for still images:
- Transition generators (random crops, full-to-random, four corners)
- Keyframe tracks with playback modes
- Easing and parametric curve library
"""

__version__ = "0.1.0"
