"""Setup configuration for storefront-client project."""

from setuptools import setup, find_packages

setup(
    name="storefront-client",
    version="1.0.0",
    description="Storefront client core: debounced catalog queries and cart aggregation",
    author="Your Name",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.11",
    install_requires=[
        "httpx>=0.27",
        "pydantic>=2.5,<3",
        "pydantic-settings>=2.1",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
            "pytest-asyncio>=0.23",
        ],
    },
)
