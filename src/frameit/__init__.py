"""
FrameIt - A desktop tool for framing objects in images with bounding boxes.

Built with PyQt6. Walks a tree of images, lets the user draw primary and
secondary rectangles on each one and tracks how much of the tree is done.
"""

__version__ = "1.0.0"
__author__ = "FrameIt Team"
