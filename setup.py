#!/usr/bin/env python3
"""Setup script for Ripes"""

from setuptools import setup, find_packages

setup(
    name="ripes",
    version="1.0.0",
    author="Joshua Karns",
    description="Prints moving pipes in the terminal",
    long_description=open("README.md", encoding="utf-8").read(),
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Console :: Curses",
        "Intended Audience :: End Users/Desktop",
        "Topic :: Terminals",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    python_requires=">=3.9",
    install_requires=[
        "windows-curses>=2.3; sys_platform == 'win32'",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        'console_scripts': [
            'ripes=ripes.app:main',
        ],
    },
)
