"""
Setup script for the query parameter encoder.
"""
from setuptools import setup, find_namespace_packages

setup(
    name="query-encoder",
    version="1.0.0",
    description="Encode dataclasses, mappings and sequences into URL query parameters",
    author="Your Name",
    packages=find_namespace_packages(include=["query", "utils"]),
    py_modules=["config", "main"],
    install_requires=[
        "requests>=2.31.0",
        "python-dotenv>=1.0.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "query-encode=main:main",
        ],
    },
    python_requires=">=3.8",
)
