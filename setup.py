#!/usr/bin/env python3
"""Setup script for PlaceNotes."""

from setuptools import setup, find_packages

setup(
    name="placenotes",
    version="1.0.0",
    description="Sticky notes on an endless, pannable canvas with a live JSON document",
    author="PlaceNotes Project",
    license="MIT",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.10",
    install_requires=[
        "PyGObject>=3.46.0",
        "pycairo>=1.25.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "placenotes=placenotes.launcher:main",
            "placenotes-doc=placenotes.cli:main",
        ],
        "gui_scripts": [
            "placenotes-gui=placenotes.launcher:main",
        ],
    },
    classifiers=[
        "Development Status :: 5 - Production/Stable",
        "Environment :: X11 Applications :: GTK",
        "Intended Audience :: End Users/Desktop",
        "License :: OSI Approved :: MIT License",
        "Operating System :: POSIX :: Linux",
        "Programming Language :: Python :: 3",
        "Topic :: Office/Business",
    ],
)
