# pylint: disable=missing-module-docstring
# ruff: noqa

from pathlib import Path

from setuptools import find_packages, setup


def read_long_description() -> str:
    """Return README contents for PyPI description."""
    readme_path = Path(__file__).with_name("README.md")
    return readme_path.read_text(encoding="utf-8") if readme_path.exists() else "Topic Awareness Engine"


setup(
    name="topic-awareness-engine",
    version="0.1.0",
    description="Trending-topic and awareness-phase analytics for social and review text",
    long_description=read_long_description(),
    long_description_content_type="text/markdown",
    python_requires=">=3.11",
    packages=find_packages(include=["awareness_engine", "awareness_engine.*"]),
    include_package_data=True,
    install_requires=[
        "pandas>=2.0",
        "numpy>=1.24",
        "pydantic>=2.5",
        "python-dotenv>=1.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "awareness-analyze = awareness_engine.cli:main",
        ]
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
)
