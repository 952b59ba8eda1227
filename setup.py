#!/usr/bin/env python
from setuptools import setup, find_packages

setup(
    name="probderive",
    version="0.1.0",
    description="Secondary statistics, broadcasting and batch sampling derived from distribution primitives",
    long_description=open("README.md", encoding="utf-8").read(),
    long_description_content_type="text/markdown",
    author="Yongho Lim",
    author_email="ylim2@bu.edu",

    # finds probderive/ and its subpackages,
    # but excludes tests, docs, examples.
    packages=find_packages(exclude=["tests*", "docs*", "examples*"]),

    python_requires=">=3.10",
    install_requires=[
        "numpy>=1.20",
        "scipy>=1.7",
    ],
    extras_require={
        "dev": [
            "pytest",
            "black",
            "flake8",
        ],
    },

    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],

    include_package_data=False,
)
