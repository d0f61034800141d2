# setup.py
from setuptools import setup, find_packages

install_requires = [
    # --- REACTIVE UI BRIDGE ---
    # RxHost mirrors controller state into FletXr reactive primitives.
    # FletXr is published as a pre-release:
    # uv pip install FletXr --pre
    "FletXr",

    # --- CONFIGURATION ---
    "pydantic>=2.0.0",
    "python-dotenv>=1.0.0",
    "pyyaml>=6.0.0",
]

extras_require = {
    # --- TESTS---
    "test": [
        "pytest-asyncio==1.3.0",
        "pytest",
    ],
}

setup(
    name="asyncctl",
    version="0.3.0",
    description="Explicit lifecycle control over asynchronous operations",
    packages=find_packages(exclude=["tests", "tests.*"]),
    include_package_data=True,
    install_requires=install_requires,
    extras_require=extras_require,
    python_requires=">=3.11",
)
