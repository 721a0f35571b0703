#!/usr/bin/env python3
"""
Setup script for the Dynamic REST API mock server

Install with:
    pip install -e .

Or with test tooling:
    pip install -e ".[dev]"
"""

from setuptools import setup, find_namespace_packages
from pathlib import Path

# Read README
readme_path = Path(__file__).parent / "README.md"
long_description = ""
if readme_path.exists():
    long_description = readme_path.read_text(encoding="utf-8")

# Server dependencies
server_requirements = [
    "fastapi>=0.109.0",
    "uvicorn[standard]>=0.27.0",
    "pydantic>=2.5.0",
    "pydantic-settings>=2.1.0",
    "sqlalchemy[asyncio]>=2.0.25",
    "aiosqlite>=0.19.0",
    "asyncpg>=0.29.0",
    "slowapi>=0.1.9",
    "Faker>=22.0.0",
    "rich>=13.7.0",
]

setup(
    name="dynamic-rest-api",
    version="1.0.0",
    description="Dynamic REST API - configurable mock endpoints with generated JSON responses",
    long_description=long_description,
    long_description_content_type="text/markdown",
    license="MIT",
    package_dir={"": "backend"},
    packages=find_namespace_packages(where="backend", include=["app", "app.*"]),
    python_requires=">=3.9",
    install_requires=server_requirements,
    extras_require={
        "dev": [
            "pytest>=7.4.0",
            "pytest-asyncio>=0.23.0",
            "httpx>=0.26.0",
            "black>=24.1.0",
            "isort>=5.13.0",
            "mypy>=1.8.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "dynamic-rest-api=app.cli:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Framework :: FastAPI",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Software Development :: Testing :: Mocking",
    ],
    keywords="mock api rest faker fastapi developer-tools",
)
