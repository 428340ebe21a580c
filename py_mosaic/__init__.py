"""
py-mosaic: check-in mosaic boards for daily habit tracking.

A board is a rectangle split into one irregular region per task. Completing
a task uncovers its region and reveals the quote background underneath.
"""

__version__ = "0.1.0"
