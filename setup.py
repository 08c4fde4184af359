"""
Setup script for modring.

To install:
    pip install .

To install in development mode:
    pip install -e ".[dev]"

To build wheel:
    pip wheel . --no-deps
"""

import os

from setuptools import setup, find_packages

setup(
    name="modring",
    version="0.1.0",
    author="VesterlundCoder",
    author_email="",
    description="modring: exact modular integer arithmetic and CRT over numpy fixed-width integers",
    long_description=open("README.md").read() if os.path.exists("README.md") else "",
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["*.tests"]),
    python_requires=">=3.8",
    install_requires=[
        "numpy>=1.20",
    ],
    extras_require={
        "dev": [
            "pytest>=6.0",
            "sympy>=1.9",
        ],
        "sympy": [
            "sympy>=1.9",
        ],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Science/Research",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Topic :: Scientific/Engineering :: Mathematics",
    ],
    keywords="modular-arithmetic residue-number-system crt chinese-remainder-theorem",
)
