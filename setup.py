"""Setup file for the Wiki Search package."""

from setuptools import setup, find_packages

setup(
    name="wiki-search",
    version="1.0.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "click",
        "httpx",
        "prometheus-client",
        "pydantic>=2",
        "python-dotenv",
        "pyyaml",
        "rapidfuzz",
        "rich",
    ],
    extras_require={
        "test": [
            "pytest",
            "pytest-asyncio",
        ],
    },
    entry_points={
        "console_scripts": [
            "wiki-search=wiki_search.__main__:main",
        ],
    },
    author="Pimentel",
    author_email="pimentel@example.com",
    description="A typo-tolerant search client for Wikipedia articles",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    url="https://github.com/pimentel/wiki-search",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
    ],
    python_requires=">=3.8",
)
