# setup.py
from setuptools import setup, find_packages

install_requires = [
    # --- STATE & VALIDATION ---
    "pydantic>=2.0.0",

    # --- DATABASE ---
    "duckdb>=0.10.0",

    # --- CONFIG ---
    "python-dotenv>=1.0.0",
    "pyyaml>=6.0.0",

    # --- TESTS---
    "pytest-asyncio==1.3.0",
    "pytest"
]

setup(
    name="PulseBoard",
    version="0.1.0",
    description="PulseBoard|Dashboard state layer",
    packages=find_packages(exclude=["tests", "tests.*"]),
    include_package_data=True,
    install_requires=install_requires,
    python_requires=">=3.11",
)
