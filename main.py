#!/usr/bin/env python3
"""
main.py — Quick-start entry point.

Build a collage from a folder of images:

    python main.py make Rectangle 3 1200 800 images/ -o output/collage.png

Or use the installed CLI:

    image-collager make --help
    image-collager layout Circle 2 800 600 images/
"""

from image_collager.cli import app

if __name__ == "__main__":
    app()
