#!/usr/bin/env python3
"""
Setup script for Quire.
"""

from setuptools import setup, find_packages
from pathlib import Path

# Read README
readme_file = Path(__file__).parent / "README.md"
long_description = readme_file.read_text() if readme_file.exists() else ""

setup(
    name="quire",
    version="0.1.0",
    description="Server-side document composition from views, layouts and partials on Jinja2",
    long_description=long_description,
    long_description_content_type="text/markdown",
    author="Quire Contributors",
    packages=find_packages(exclude=["tests", "tests.*"]),
    include_package_data=True,
    python_requires=">=3.10",
    install_requires=[
        "jinja2>=3.1.0",
        "markupsafe>=2.1.0",
        "click>=8.0.0",
        "pyyaml>=6.0",
        "python-dotenv>=1.0.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.4.0",
            "pytest-asyncio>=0.21.0",
            "pytest-cov>=4.1.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "quire=quire.cli:main",
        ],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Text Processing :: Markup :: HTML",
        "Topic :: Software Development :: Libraries",
    ],
    keywords="templates jinja2 layouts partials rendering",
)
