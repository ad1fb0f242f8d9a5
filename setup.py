"""Setup script for repoadmin."""
from setuptools import setup, find_packages

setup(
    name="repoadmin",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "GitPython",
        "pydantic",
        "python-dotenv",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "repoadmin=repoadmin.cli:main",
        ],
    },
    python_requires=">=3.10",
)
