# setup.py - uniformity package
from setuptools import find_packages, setup

setup(
    name="uniformity",
    version="0.1.0",
    description="Uniform spaces, filters and the completion extension theorem",
    packages=find_packages(exclude=["tests", "tests.*", "examples"]),
    python_requires=">=3.8",
    install_requires=[
        "numpy",
        "structlog",
    ],
    extras_require={
        "test": ["pytest"],
    },
)
