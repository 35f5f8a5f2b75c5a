"""Package setup for Search Radar."""

from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

with open("requirements.txt", "r", encoding="utf-8") as fh:
    requirements = [
        line.strip()
        for line in fh
        if line.strip() and not line.startswith("#")
    ]

# Separate test dependencies
test_requirements = [
    "pytest>=8.0.0,<9.0",
    "pytest-asyncio>=0.23.0,<1.0",
    "pytest-cov>=4.1.0,<6.0",
]

setup(
    name="search-radar",
    version="1.0.0",
    author="ATX Apps",
    author_email="radar@austin-texas.net",
    description=(
        "Keyword opportunity intelligence for Austin content: geo filtering, "
        "intent, difficulty, scoring, coverage, and autocomplete discovery."
    ),
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*", "docs", "scripts"]),
    python_requires=">=3.10",
    install_requires=[r for r in requirements if "pytest" not in r],
    extras_require={
        "test": test_requirements,
        "dev": test_requirements + [
            "black",
            "flake8",
            "isort",
            "mypy",
        ],
    },
    entry_points={
        "console_scripts": [
            "radar=radar.cli:main",
        ],
    },
    include_package_data=True,
    package_data={
        "": ["*.yaml", "*.yml"],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Topic :: Internet :: WWW/HTTP :: Indexing/Search",
        "Topic :: Internet :: WWW/HTTP :: Site Management",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
        "Framework :: Pytest",
    ],
    keywords=[
        "seo", "keyword-research", "local-seo", "autocomplete",
        "content-strategy", "austin",
    ],
)
