"""
PromptEditor setup.py — Package configuration and CLI entry point.
"""

from setuptools import find_packages, setup

setup(
    name="prompteditor",
    version="1.0.0",
    description="PromptEditor — single-document editor with bounded version history",
    packages=find_packages(include=["prompteditor", "prompteditor.*"]),
    python_requires=">=3.11",
    entry_points={
        "console_scripts": [
            "prompteditor=prompteditor.cli:main",
        ],
    },
    install_requires=[
        "pydantic>=2.5",
        "sqlalchemy>=2.0",
        "redis>=5.0",
        "pyyaml>=6.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
        ],
    },
)
