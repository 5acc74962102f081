"""
StormImpact - setup.py
----------------------
Installs all StormImpact packages and provides CLI entry point.

Usage:
    pip install -e .
    stormimpact run --help
"""
from setuptools import setup, find_packages

setup(
    name="stormimpact",
    version="0.1.0",
    description="Storm Event Classification and Impact Aggregation Pipeline",
    author="StormImpact",
    packages=find_packages(include=["stormimpact", "normalization", "taxonomy", "analytics"]),
    python_requires=">=3.10",
    install_requires=[
        "pandas",
        "numpy",
        "pyarrow",
        "duckdb",
        "python-dotenv",
    ],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    entry_points={
        "console_scripts": [
            "stormimpact=stormimpact.cli:main",
        ],
    },
)
