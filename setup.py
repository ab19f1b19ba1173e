"""
Setup script for the zips-catalog project.

Allows development installation with `pip install -e .`
"""

from setuptools import setup, find_packages

setup(
    name="zips-catalog",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*", "frontend.tests", "frontend.tests.*"]),
    py_modules=["version"],
    python_requires=">=3.11",
    install_requires=[
        "flask>=3.0",
        "pymongo>=4.6",
        "pydantic>=2.5",
        "python-dotenv>=1.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
        ],
    },
)
